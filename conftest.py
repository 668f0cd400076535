"""
Configuration pytest partagée.

Ce fichier définit des fixtures réutilisables pour tous les tests :
store en mémoire, service de signature, documents Django et client API.
"""

from datetime import date
from decimal import Decimal

import pytest
from django.conf import settings
from rest_framework.test import APIClient

from devis_contrats.constants import DocumentEtat
from devis_contrats.factories import ContratFactory, DevisFactory
from notifications.emitter import NotificationEmitter
from signature.document_types import DocumentKind
from signature.records import DocumentRecord
from signature.services import SignatureService
from tests.fakes import InMemoryDocumentRepository, RecordingNotificationSink


# ==============================
# CONFIGURATION DJANGO POUR TESTS
# ==============================


@pytest.fixture(scope="session", autouse=True)
def configure_django_for_tests():
    """Configure Django settings pour les tests."""
    if "testserver" not in settings.ALLOWED_HOSTS:
        settings.ALLOWED_HOSTS.append("testserver")
    yield


# ==============================
# FIXTURES API CLIENT
# ==============================


@pytest.fixture
def api_client():
    """Client API REST Framework pour les tests."""
    return APIClient()


# ==============================
# FIXTURES STORE EN MÉMOIRE
# ==============================


@pytest.fixture
def make_record():
    """
    Factory function pour créer des DocumentRecord en mémoire.

    Usage dans un test:
        def test_something(make_record):
            devis = make_record("D-20240115-JD", access_token_devis="tok-123")
    """

    def _make(record_id, kind=None, etat=DocumentEtat.ENVOYE, nom_client="Jean Dupont", **data):
        if kind is None:
            kind = DocumentKind.CONTRAT if record_id.startswith("C") else DocumentKind.DEVIS
        return DocumentRecord(
            id=record_id,
            kind=kind,
            etat=etat,
            data={"reference": record_id, **data},
            nom_client=nom_client,
            prix_total=Decimal("1250.00"),
            date_debut=date(2024, 1, 15),
        )

    return _make


@pytest.fixture
def memory_store():
    """Store vide ; alimenter via InMemoryDocumentRepository([...]) si besoin."""
    return InMemoryDocumentRepository()


@pytest.fixture
def notification_sink():
    return RecordingNotificationSink()


@pytest.fixture
def make_service(notification_sink):
    """Construit un SignatureService sur un store en mémoire donné."""

    def _make(store, sink=None):
        emitter = NotificationEmitter(sink or notification_sink, enabled=True)
        return SignatureService(repository=store, emitter=emitter)

    return _make


# ==============================
# FIXTURES DOCUMENTS DJANGO
# ==============================


@pytest.fixture
def devis_envoye(db):
    """Scénario de référence : devis envoyé avec un token de devis."""
    return DevisFactory(
        id="D-20240115-JD",
        nom_client="Jean Dupont",
        date_debut=date(2024, 1, 15),
        etat=DocumentEtat.ENVOYE,
        data={"access_token_devis": "tok-123", "lieu": "Lyon"},
    )


@pytest.fixture
def contrat_signe(db):
    """Contrat C-9 déjà signé, atteint par un token de contrat."""
    return ContratFactory.signe(
        id="C-9",
        nom_client="Marie Curie",
        data={"access_token_contrat": "tok-c9"},
    )


# ==============================
# MARKERS PYTEST
# ==============================


def pytest_configure(config):
    """Configure les markers pytest personnalisés."""
    config.addinivalue_line(
        "markers", "e2e: Tests end-to-end complets"
    )
    config.addinivalue_line(
        "markers", "unit: Tests unitaires"
    )
    config.addinivalue_line(
        "markers", "integration: Tests d'intégration"
    )
    config.addinivalue_line(
        "markers", "slow: Tests lents"
    )
