"""
Services partagés pour la signature de documents par lien client
"""

import logging
from dataclasses import dataclass

from notifications.emitter import DjangoNotificationSink, NotificationEmitter

from .document_status import SignatureOutcome
from .document_types import DocumentKind
from .migration_engine import MigrationEngine, should_migrate
from .records import DocumentRecord, ResolvedDocument, document_payload
from .repository import DjangoDocumentRepository, DocumentRepository
from .resolver import TokenResolver
from .state_machine import SignatureStateMachine

logger = logging.getLogger(__name__)


@dataclass
class SignatureResult:
    """
    Issue d'une signature réussie.

    `degraded` signale un succès avec avertissement : la signature est
    acquise mais le devis n'a pas pu être transformé en contrat.
    """

    outcome: SignatureOutcome
    document: DocumentRecord
    original_id: str
    role: DocumentKind
    warning: str | None = None
    notified: bool = False

    @property
    def degraded(self) -> bool:
        return self.outcome == SignatureOutcome.DEGRADED

    def to_payload(self) -> dict:
        return document_payload(self.document, self.role)


class SignatureService:
    """
    Enchaîne strictement : résolution -> signature -> (transformation) -> notification.

    Usage:
        service = get_signature_service()
        resolved = service.resolve(token)
        result = service.sign(token, signature_data_url)
    """

    def __init__(
        self,
        repository: DocumentRepository,
        emitter: NotificationEmitter,
    ):
        self.resolver = TokenResolver(repository)
        self.state_machine = SignatureStateMachine(repository)
        self.migration_engine = MigrationEngine(repository)
        self.emitter = emitter

    def resolve(self, token: str) -> ResolvedDocument:
        return self.resolver.resolve(token)

    def sign(self, token: str, signature_image: str) -> SignatureResult:
        """
        Signe le document désigné par `token`.

        Raises:
            InvalidToken, DocumentNotFound, EmptySignature, AlreadySigned,
            StoreUnavailable
        """
        resolved = self.resolver.resolve(token)
        signed = self.state_machine.sign(resolved, signature_image)

        result = SignatureResult(
            outcome=SignatureOutcome.SIGNED,
            document=signed,
            original_id=resolved.record.id,
            role=resolved.role,
        )

        migrated_from_devis = should_migrate(resolved)
        if migrated_from_devis:
            migration = self.migration_engine.migrate_to_contract(signed)
            result.outcome = migration.outcome
            result.document = migration.document
            result.warning = migration.warning

        # La notification référence le document d'origine
        result.notified = self.emitter.emit(
            resolved.record.id,
            DocumentKind.DEVIS if migrated_from_devis else DocumentKind.CONTRAT,
            resolved.record.nom_client,
        )

        logger.info(
            f"Signature terminée pour {resolved.record.id}: {result.outcome}"
            + (f" ({result.warning})" if result.warning else "")
        )
        return result


def get_signature_service() -> SignatureService:
    """Service branché sur l'ORM Django et la table `notifications`."""
    return SignatureService(
        repository=DjangoDocumentRepository(),
        emitter=NotificationEmitter(DjangoNotificationSink()),
    )
