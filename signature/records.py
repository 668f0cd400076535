"""
Représentation en mémoire des documents signables.

Les enregistrements lus depuis le store portent explicitement leur nature
(`kind`), attribuée à la lecture selon la table d'origine. Toute la logique
de signature s'appuie sur ce tag plutôt que de le redéduire.
"""

import copy
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Any, TypeAlias, Union

from devis_contrats.constants import CONTRAT_SIGNE, DEVIS_SIGNE, DocumentEtat
from devis_contrats.references import display_reference

from .document_types import DocumentKind

# Valeurs admises dans le payload `data` (JSON)
DataValue: TypeAlias = Union[
    str, int, float, bool, None, list["DataValue"], dict[str, "DataValue"]
]

SIGNED_FLAGS = {
    DocumentKind.DEVIS: DEVIS_SIGNE,
    DocumentKind.CONTRAT: CONTRAT_SIGNE,
}


@dataclass
class DocumentRecord:
    """Devis ou contrat tel que lu depuis le store."""

    id: str
    kind: DocumentKind
    etat: str = DocumentEtat.CONTACT
    data: dict[str, DataValue] = field(default_factory=dict)
    nom_client: str = ""
    prix_total: Decimal | None = None
    date_debut: date | None = None

    @property
    def is_signed(self) -> bool:
        return self.etat == DocumentEtat.SIGNE

    def is_signed_as(self, kind: DocumentKind) -> bool:
        """Le document porte-t-il le drapeau de signature de ce rôle ?"""
        return bool(self.data.get(SIGNED_FLAGS[kind]))

    def with_data(self, **patch: DataValue) -> "DocumentRecord":
        """Copie du document avec `data` complété (clés inconnues conservées)."""
        return replace(self, data={**copy.deepcopy(self.data), **patch})

    def columns(self) -> dict[str, Any]:
        """Colonnes indexées (hors `data`), au format JSON."""
        return {
            "id": self.id,
            "nom_client": self.nom_client,
            "prix_total": str(self.prix_total) if self.prix_total is not None else None,
            "date_debut": self.date_debut.isoformat() if self.date_debut else None,
            "etat": self.etat,
        }


@dataclass
class ResolvedDocument:
    """
    Résultat de la résolution d'un token.

    `role` est le rôle sémantique du token (devis ou contrat), indépendant
    de la table qui stocke le document.
    """

    record: DocumentRecord
    role: DocumentKind
    matched_field: str
    token: str

    @property
    def home_kind(self) -> DocumentKind:
        return self.record.kind

    def to_payload(self) -> dict[str, Any]:
        return document_payload(self.record, self.role)


def document_payload(record: DocumentRecord, role: DocumentKind) -> dict[str, Any]:
    """
    Vue fusionnée consommée par le rendu client : colonnes + `data`
    + rôle résolu. Les colonnes priment sur les clés homonymes de `data`.
    """
    # Inverse du merge historique (data prioritaire) : après signature,
    # `etat` à jour est en colonne, pas dans `data`
    payload = {**record.data, **record.columns()}
    payload["display_reference"] = display_reference(
        record.id, record.kind, record.nom_client, record.date_debut
    )
    payload["document_kind"] = record.kind.value
    payload["resolved_role"] = role.value
    return payload
