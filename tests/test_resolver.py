"""
Tests unitaires pour la résolution des tokens de signature.

Usage:
    pytest tests/test_resolver.py -v
"""

from itertools import combinations

import pytest

from devis_contrats.constants import (
    ACCESS_TOKEN,
    ACCESS_TOKEN_CONTRAT,
    ACCESS_TOKEN_DEVIS,
)
from signature.document_types import DocumentKind
from signature.exceptions import DocumentNotFound, InvalidToken, StoreUnavailable
from signature.resolver import PROBE_ORDER, TokenResolver, role_for_match
from tests.fakes import InMemoryDocumentRepository

TOKEN = "tok-123"


def _record_for_probe(make_record, position):
    """Document qui ne correspond qu'à la sonde `position`."""
    kind, field = PROBE_ORDER[position]
    prefix = "C" if kind == DocumentKind.CONTRAT else "D"
    return make_record(f"{prefix}-2024011{position}-P{position}", kind=kind, **{field: TOKEN})


@pytest.mark.unit
class TestProbeOrder:
    """L'ordre canonique des sondes est figé."""

    def test_canonical_order(self):
        assert PROBE_ORDER == (
            (DocumentKind.CONTRAT, ACCESS_TOKEN_CONTRAT),
            (DocumentKind.CONTRAT, ACCESS_TOKEN_DEVIS),
            (DocumentKind.CONTRAT, ACCESS_TOKEN),
            (DocumentKind.DEVIS, ACCESS_TOKEN_CONTRAT),
            (DocumentKind.DEVIS, ACCESS_TOKEN_DEVIS),
            (DocumentKind.DEVIS, ACCESS_TOKEN),
        )

    @pytest.mark.parametrize("position", range(len(PROBE_ORDER)))
    def test_single_match_stops_probing(self, make_record, position):
        """Une seule correspondance : retournée, aucune sonde au-delà."""
        record = _record_for_probe(make_record, position)
        store = InMemoryDocumentRepository([record])

        resolved = TokenResolver(store).resolve(TOKEN)

        assert resolved.record.id == record.id
        assert resolved.matched_field == PROBE_ORDER[position][1]
        assert store.probes() == list(PROBE_ORDER[: position + 1])

    @pytest.mark.parametrize(
        "first,second", list(combinations(range(len(PROBE_ORDER)), 2))
    )
    def test_collision_resolves_to_highest_priority(self, make_record, first, second):
        """Token présent sur deux sondes : la plus prioritaire l'emporte."""
        winner = _record_for_probe(make_record, first)
        loser = _record_for_probe(make_record, second)
        store = InMemoryDocumentRepository([loser, winner])

        resolved = TokenResolver(store).resolve(TOKEN)

        assert resolved.record.id == winner.id
        assert resolved.home_kind == PROBE_ORDER[first][0]
        assert store.count("find_one") == first + 1


@pytest.mark.unit
class TestResolvedRole:
    def test_devis_token_in_contract_table_keeps_devis_role(self, make_record):
        """Cas historique : token de devis porté par un contrat."""
        record = make_record("C-20240115-JD", access_token_devis=TOKEN)
        resolved = TokenResolver(InMemoryDocumentRepository([record])).resolve(TOKEN)

        assert resolved.home_kind == DocumentKind.CONTRAT
        assert resolved.role == DocumentKind.DEVIS

    def test_contract_token_in_devis_table_has_contract_role(self, make_record):
        record = make_record("D-20240115-JD", access_token_contrat=TOKEN)
        resolved = TokenResolver(InMemoryDocumentRepository([record])).resolve(TOKEN)

        assert resolved.home_kind == DocumentKind.DEVIS
        assert resolved.role == DocumentKind.CONTRAT

    @pytest.mark.parametrize(
        "record_id,expected",
        [
            ("C-20240115-JD", DocumentKind.CONTRAT),
            ("D-20240115-JD", DocumentKind.DEVIS),
            ("20240115-JD", DocumentKind.DEVIS),
        ],
    )
    def test_legacy_field_infers_role_from_prefix(self, make_record, record_id, expected):
        record = make_record(record_id, kind=DocumentKind.DEVIS)
        assert role_for_match(ACCESS_TOKEN, record) == expected

    def test_payload_merges_columns_data_and_role(self, make_record):
        record = make_record("D-20240115-JD", access_token_devis=TOKEN, lieu="Lyon")
        resolved = TokenResolver(InMemoryDocumentRepository([record])).resolve(TOKEN)

        payload = resolved.to_payload()

        assert payload["id"] == "D-20240115-JD"
        assert payload["lieu"] == "Lyon"
        assert payload["nom_client"] == "Jean Dupont"
        assert payload["prix_total"] == "1250.00"
        assert payload["date_debut"] == "2024-01-15"
        assert payload["resolved_role"] == "devis"
        assert payload["display_reference"] == "D-20240115-JD"
        assert payload["document_kind"] == "devis"


@pytest.mark.unit
class TestResolverErrors:
    @pytest.mark.parametrize("token", ["", "   ", None])
    def test_empty_token_fails_fast(self, memory_store, token):
        with pytest.raises(InvalidToken):
            TokenResolver(memory_store).resolve(token)
        assert memory_store.calls == []

    def test_unknown_token_exhausts_search_space(self, memory_store):
        with pytest.raises(DocumentNotFound):
            TokenResolver(memory_store).resolve("inconnu")
        assert memory_store.probes() == list(PROBE_ORDER)

    def test_store_failure_propagates(self, memory_store):
        memory_store.fail_on("find_one")
        with pytest.raises(StoreUnavailable):
            TokenResolver(memory_store).resolve(TOKEN)
