"""
Types de documents signables par lien client
"""

from django.db import models

from devis_contrats.constants import CONTRAT_PREFIX, DEVIS_PREFIX


class DocumentKind(models.TextChoices):
    """
    Nature d'un document signable.

    Un même document métier est un devis avant signature puis un contrat.
    La nature n'est pas stockée : elle est attribuée à la lecture selon la
    table d'origine (`devis` ou `contrats`) et sert aussi à exprimer le rôle
    dans lequel un token est résolu.

    Utilisé pour :
    - Étiqueter les enregistrements lus depuis le store
    - Choisir le drapeau de signature (`devis_signe` / `contrat_signe`)
    - Renseigner `document_type` des notifications
    """

    DEVIS = "devis", "Devis"
    CONTRAT = "contrat", "Contrat"

    @property
    def prefix(self) -> str:
        """Préfixe des références de ce type (ex: "D-")"""
        return DEVIS_PREFIX if self is DocumentKind.DEVIS else CONTRAT_PREFIX
