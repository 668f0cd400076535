"""
Tests unitaires pour la transformation devis signé -> contrat.

Usage:
    pytest tests/test_migration_engine.py -v
"""

import pytest

from devis_contrats.constants import DocumentEtat
from devis_contrats.references import contract_id_for
from signature.document_status import SignatureOutcome
from signature.document_types import DocumentKind
from signature.exceptions import MigrationFailed, StoreUnavailable
from signature.migration_engine import MigrationEngine, build_contract, should_migrate
from signature.records import ResolvedDocument
from tests.fakes import InMemoryDocumentRepository


@pytest.fixture
def signed_quote(make_record):
    """Devis tel qu'écrit par la machine à états (signé sur place)."""
    return make_record(
        "D-20240115-JD",
        etat=DocumentEtat.SIGNE,
        access_token_devis="tok-123",
        access_token="tok-123",
        devis_signe=True,
        signature_client_base64="<png-data>",
        lieu="Lyon",
    )


@pytest.mark.unit
class TestContractId:
    @pytest.mark.parametrize(
        "quote_id,expected",
        [
            ("D-20240115-JD", "C-20240115-JD"),
            ("D-00000000-XX", "C-00000000-XX"),
            ("20240115-JD", "C-20240115-JD"),
            ("DEVIS-42", "C-DEVIS-42"),
        ],
    )
    def test_prefix_rewrite(self, quote_id, expected):
        assert contract_id_for(quote_id) == expected


@pytest.mark.unit
class TestShouldMigrate:
    @pytest.mark.parametrize(
        "home,role,expected",
        [
            (DocumentKind.DEVIS, DocumentKind.DEVIS, True),
            (DocumentKind.DEVIS, DocumentKind.CONTRAT, False),
            (DocumentKind.CONTRAT, DocumentKind.DEVIS, False),
            (DocumentKind.CONTRAT, DocumentKind.CONTRAT, False),
        ],
    )
    def test_only_devis_role_in_devis_table(self, make_record, home, role, expected):
        record = make_record("X-1", kind=home)
        resolved = ResolvedDocument(
            record=record, role=role, matched_field="access_token", token="t"
        )
        assert should_migrate(resolved) is expected


@pytest.mark.unit
class TestBuildContract:
    def test_contract_carries_all_fields(self, signed_quote):
        contract = build_contract(signed_quote)

        assert contract.id == "C-20240115-JD"
        assert contract.kind == DocumentKind.CONTRAT
        assert contract.etat == DocumentEtat.SIGNE
        assert contract.data["reference"] == contract.id
        assert contract.data["contrat_signe"] is True
        assert contract.data["devis_signe"] is True
        assert contract.data["access_token"] == "tok-123"
        assert contract.data["lieu"] == "Lyon"
        assert contract.nom_client == signed_quote.nom_client
        assert contract.prix_total == signed_quote.prix_total
        assert contract.date_debut == signed_quote.date_debut
        # Le devis source reste intact
        assert signed_quote.data["reference"] == "D-20240115-JD"


@pytest.mark.unit
class TestMigrateToContract:
    def test_success_moves_record(self, signed_quote):
        store = InMemoryDocumentRepository([signed_quote])

        result = MigrationEngine(store).migrate_to_contract(signed_quote)

        assert result.outcome == SignatureOutcome.MIGRATED
        assert result.warning is None
        assert store.get(DocumentKind.DEVIS, "D-20240115-JD") is None
        contract = store.get(DocumentKind.CONTRAT, "C-20240115-JD")
        assert contract.etat == DocumentEtat.SIGNE
        assert contract.data["reference"] == "C-20240115-JD"
        # Insertion avant suppression
        operations = [call[0] for call in store.calls]
        assert operations == ["insert", "delete"]

    def test_insert_failure_keeps_signed_quote(self, signed_quote):
        store = InMemoryDocumentRepository([signed_quote])
        store.fail_on("insert")

        result = MigrationEngine(store).migrate_to_contract(signed_quote)

        assert result.outcome == SignatureOutcome.DEGRADED
        assert isinstance(result.error, MigrationFailed)
        assert result.warning
        assert result.document.id == "D-20240115-JD"
        assert store.get(DocumentKind.DEVIS, "D-20240115-JD").etat == DocumentEtat.SIGNE
        assert store.all(DocumentKind.CONTRAT) == []
        assert store.count("delete") == 0

    def test_existing_contract_reference_is_degraded(self, signed_quote, make_record):
        """Un contrat créé directement porte déjà la référence visée."""
        existing = make_record("C-20240115-JD", etat=DocumentEtat.VALIDE)
        store = InMemoryDocumentRepository([signed_quote, existing])

        result = MigrationEngine(store).migrate_to_contract(signed_quote)

        assert result.outcome == SignatureOutcome.DEGRADED
        assert store.get(DocumentKind.CONTRAT, "C-20240115-JD").etat == DocumentEtat.VALIDE
        assert store.get(DocumentKind.DEVIS, "D-20240115-JD") is not None

    def test_delete_failure_leaves_orphan(self, signed_quote):
        store = InMemoryDocumentRepository([signed_quote])
        store.fail_on("delete", StoreUnavailable("timeout"))

        result = MigrationEngine(store).migrate_to_contract(signed_quote)

        assert result.outcome == SignatureOutcome.ORPHANED
        assert "C-20240115-JD" in result.warning
        assert result.document.id == "C-20240115-JD"
        # Deux représentations, même état signé
        assert store.get(DocumentKind.DEVIS, "D-20240115-JD").etat == DocumentEtat.SIGNE
        assert store.get(DocumentKind.CONTRAT, "C-20240115-JD").etat == DocumentEtat.SIGNE

    def test_refuses_unsigned_quote(self, make_record):
        quote = make_record("D-20240115-JD")
        with pytest.raises(ValueError):
            MigrationEngine(InMemoryDocumentRepository([quote])).migrate_to_contract(quote)
