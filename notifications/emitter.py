"""
Émission best-effort des notifications de signature.

Le document est déjà signé durablement quand on notifie : aucune erreur
d'ici ne doit faire échouer la signature côté client.
"""

import logging
from abc import ABC, abstractmethod

from django.conf import settings
from django.db import transaction

from signature.document_types import DocumentKind
from signature.exceptions import NotificationFailure

from .models import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationSink(ABC):
    """Destination des notifications (append-only)."""

    @abstractmethod
    def append(self, notification: dict) -> None:
        pass


class DjangoNotificationSink(NotificationSink):
    def append(self, notification):
        with transaction.atomic():
            Notification.objects.create(**notification)


def build_signature_message(
    document_id: str, document_kind: DocumentKind, client_name: str | None
) -> str:
    label = "un Devis" if document_kind == DocumentKind.DEVIS else "un Contrat"
    return f"Le client {client_name or 'Inconnu'} a signé {label} ({document_id})"


class NotificationEmitter:
    def __init__(self, sink: NotificationSink, enabled: bool | None = None):
        self.sink = sink
        self.enabled = (
            settings.SIGNATURE_NOTIFICATIONS_ENABLED if enabled is None else enabled
        )

    def emit(
        self,
        document_id: str,
        document_kind: DocumentKind,
        client_name: str | None,
    ) -> bool:
        """
        Ajoute une notification "signature" pour les opérateurs.

        Returns:
            bool: True si la notification a été enregistrée. Ne lève jamais.
        """
        if not self.enabled:
            logger.info(f"Notifications désactivées, rien à émettre pour {document_id}")
            return False

        notification = {
            "message": build_signature_message(document_id, document_kind, client_name),
            "type": NotificationType.SIGNATURE,
            "document_id": document_id,
            "document_type": DocumentKind(document_kind).value,
        }
        try:
            self.sink.append(notification)
        except Exception as e:
            failure = NotificationFailure(f"{NotificationFailure.default_message}: {e}")
            logger.exception(f"🔔 {failure} ({document_id})")
            return False

        logger.info(f"🔔 Notification créée: {notification['message']}")
        return True
