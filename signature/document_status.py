"""
Statuts de signature communs aux devis et contrats.
"""

from django.db import models


class SignatureOutcome(models.TextChoices):
    """Issue d'une signature réussie (éventuellement dégradée)"""

    SIGNED = "signed", "Signé sur place"
    MIGRATED = "migrated", "Devis signé et transformé en contrat"
    DEGRADED = "degraded", "Devis signé sans transformation en contrat"
    ORPHANED = "orphaned", "Contrat créé, devis d'origine non supprimé"
