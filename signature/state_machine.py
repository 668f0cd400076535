"""
Transition de signature : non signé -> Signé (terminal).
"""

import logging
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from devis_contrats.constants import (
    ACCESS_TOKEN,
    DATE_SIGNATURE_CLIENT,
    DATE_SIGNATURE_CONTRAT,
    DATE_SIGNATURE_DEVIS,
    SIGNATURE_IMAGE,
    DocumentEtat,
)

from .document_types import DocumentKind
from .exceptions import AlreadySigned, EmptySignature
from .records import SIGNED_FLAGS, DocumentRecord, ResolvedDocument
from .repository import DocumentRepository, record_patch

logger = logging.getLogger(__name__)

ROLE_SIGNATURE_DATES = {
    DocumentKind.DEVIS: DATE_SIGNATURE_DEVIS,
    DocumentKind.CONTRAT: DATE_SIGNATURE_CONTRAT,
}


class SignatureStateMachine:
    """
    Valide et applique la signature d'un document résolu.

    La persistance passe par une écriture conditionnelle (le document doit
    encore être non signé au moment de l'écriture) : de deux requêtes
    concurrentes sur le même token, une seule signe, l'autre reçoit
    AlreadySigned.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.repository = repository
        self.clock = clock

    @staticmethod
    def check_can_sign(resolved: ResolvedDocument) -> None:
        record = resolved.record
        # Un contrat déjà signé reste signé même atteint via un token de devis
        if (
            record.is_signed
            or record.is_signed_as(record.kind)
            or record.is_signed_as(resolved.role)
        ):
            raise AlreadySigned()

    def prepare(
        self, resolved: ResolvedDocument, signature_image: str
    ) -> DocumentRecord:
        """
        Construit la version signée du document, sans l'écrire.

        Raises:
            EmptySignature: image de signature vide
            AlreadySigned: document déjà signé
        """
        if not signature_image or not signature_image.strip():
            raise EmptySignature()
        self.check_can_sign(resolved)

        signed_at = self.clock().isoformat()
        signed = resolved.record.with_data(
            **{
                SIGNED_FLAGS[resolved.role]: True,
                SIGNATURE_IMAGE: signature_image,
                DATE_SIGNATURE_CLIENT: signed_at,
                ROLE_SIGNATURE_DATES[resolved.role]: signed_at,
                # Token conservé tel quel pour que les relectures le retrouvent
                # quel que soit le champ d'origine
                ACCESS_TOKEN: resolved.token,
            }
        )
        signed.etat = DocumentEtat.SIGNE
        return signed

    def sign(self, resolved: ResolvedDocument, signature_image: str) -> DocumentRecord:
        """
        Signe le document et l'écrit dans sa table d'origine.

        Raises:
            EmptySignature, AlreadySigned, StoreUnavailable
        """
        signed = self.prepare(resolved, signature_image)

        written = self.repository.update_if_unsigned(
            signed.kind, signed.id, record_patch(signed)
        )
        if not written:
            logger.warning(
                f"Signature concurrente perdue pour {signed.kind} {signed.id}"
            )
            raise AlreadySigned()

        logger.info(
            f"✅ {signed.kind} {signed.id} signé (rôle {resolved.role}, "
            f"champ {resolved.matched_field})"
        )
        return signed
