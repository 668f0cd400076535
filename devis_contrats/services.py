"""
Services des devis et contrats : émission des liens de signature et
paramètres société servis avec les documents.
"""

import logging
import uuid

from django.db import transaction

from core.url_builders import get_signing_url
from signature.document_types import DocumentKind

from .constants import ACCESS_TOKEN_CONTRAT, ACCESS_TOKEN_DEVIS
from .models import Contrat, Devis, Parametres

logger = logging.getLogger(__name__)

TOKEN_FIELDS = {
    DocumentKind.DEVIS: ACCESS_TOKEN_DEVIS,
    DocumentKind.CONTRAT: ACCESS_TOKEN_CONTRAT,
}

MODELS = {
    DocumentKind.DEVIS: Devis,
    DocumentKind.CONTRAT: Contrat,
}


def issue_access_token(kind: DocumentKind, record_id: str) -> str:
    """
    Retourne le token de signature d'un document, en le créant si besoin.

    Le token est stocké dans le champ propre au type de document
    (`access_token_devis` ou `access_token_contrat`). Un token déjà émis est
    conservé pour ne pas invalider un lien envoyé au client.

    Raises:
        Devis.DoesNotExist / Contrat.DoesNotExist: document inconnu
    """
    kind = DocumentKind(kind)
    field = TOKEN_FIELDS[kind]

    with transaction.atomic():
        document = MODELS[kind].objects.select_for_update().get(pk=record_id)
        token = document.data.get(field)
        if token:
            return token

        token = str(uuid.uuid4())
        document.data = {**document.data, field: token}
        document.save(update_fields=["data", "updated_at"])

    logger.info(f"🔗 Lien de signature émis pour {kind} {record_id}")
    return token


def get_signing_link(kind: DocumentKind, record_id: str) -> str:
    """URL client de signature d'un document (token créé si besoin)."""
    return get_signing_url(issue_access_token(kind, record_id))


def get_parametres() -> dict | None:
    """Paramètres société (nom, logo, ...) ou None si non configurés."""
    parametres = Parametres.objects.order_by("id").first()
    return parametres.data if parametres else None
