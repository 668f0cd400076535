"""
Constantes partagées par les devis et les contrats
"""

from django.db import models


class DocumentEtat(models.TextChoices):
    """
    États connus du cycle de vie d'un devis / contrat.

    L'ensemble reste ouvert : le champ `etat` accepte d'autres valeurs
    saisies depuis le tableau de bord. Le parcours de signature ne
    distingue que SIGNE du reste.
    """

    CONTACT = "Contact", "Contact"
    ENVOYE = "Envoyé", "Envoyé"
    VALIDE = "Validé", "Validé"
    SIGNE = "Signé", "Signé"
    ANNULE = "Annulé", "Annulé"
    REFUSE = "Refusé", "Refusé"


# Préfixes des identifiants (références) selon la table
DEVIS_PREFIX = "D-"
CONTRAT_PREFIX = "C-"

# Clés du payload `data` manipulées par le parcours de signature
ACCESS_TOKEN_DEVIS = "access_token_devis"
ACCESS_TOKEN_CONTRAT = "access_token_contrat"
ACCESS_TOKEN = "access_token"

DEVIS_SIGNE = "devis_signe"
CONTRAT_SIGNE = "contrat_signe"
SIGNATURE_IMAGE = "signature_client_base64"
DATE_SIGNATURE_CLIENT = "date_signature_client"
DATE_SIGNATURE_DEVIS = "date_signature_devis"
DATE_SIGNATURE_CONTRAT = "date_signature_contrat"
REFERENCE = "reference"
