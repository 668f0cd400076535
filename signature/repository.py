"""
Accès au store des devis et contrats.

Le parcours de signature ne manipule jamais les modèles Django directement :
il reçoit un DocumentRepository injecté. Chaque primitive est atomique
individuellement, mais aucune transaction ne couvre plusieurs appels.
"""

import logging
from abc import ABC, abstractmethod

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from devis_contrats.constants import DocumentEtat
from devis_contrats.models import Contrat, Devis

from .document_types import DocumentKind
from .exceptions import DuplicateDocument, StoreUnavailable
from .records import DataValue, DocumentRecord

logger = logging.getLogger(__name__)

# Colonnes modifiables via update() en plus de `data`
UPDATABLE_COLUMNS = {"etat", "data", "nom_client", "prix_total", "date_debut"}


class DocumentRepository(ABC):
    """Interface du store (une collection par nature de document)."""

    @abstractmethod
    def find_one(
        self, kind: DocumentKind, field: str, value: str
    ) -> DocumentRecord | None:
        """Premier document de `kind` dont `data[field] == value`."""

    @abstractmethod
    def insert(self, kind: DocumentKind, record: DocumentRecord) -> None:
        """Insère un document. DuplicateDocument si la référence existe déjà."""

    @abstractmethod
    def update(self, kind: DocumentKind, record_id: str, patch: dict) -> bool:
        """Met à jour sans condition. Retourne False si le document n'existe pas."""

    @abstractmethod
    def update_if_unsigned(
        self, kind: DocumentKind, record_id: str, patch: dict
    ) -> bool:
        """
        Écriture conditionnelle : n'applique `patch` que si le document existe
        et n'est pas encore signé au moment de l'écriture.

        Returns:
            bool: True si l'écriture a eu lieu, False si la condition a échoué
        """

    @abstractmethod
    def delete(self, kind: DocumentKind, record_id: str) -> bool:
        """Supprime un document. Retourne False s'il n'existait pas."""


def _check_patch(patch: dict) -> None:
    unknown = set(patch) - UPDATABLE_COLUMNS
    if unknown:
        raise ValueError(f"Colonnes non modifiables: {sorted(unknown)}")


class DjangoDocumentRepository(DocumentRepository):
    """Implémentation ORM : tables `devis` et `contrats`."""

    MODELS = {
        DocumentKind.DEVIS: Devis,
        DocumentKind.CONTRAT: Contrat,
    }

    def _model(self, kind: DocumentKind):
        return self.MODELS[DocumentKind(kind)]

    @staticmethod
    def _to_record(instance, kind: DocumentKind) -> DocumentRecord:
        return DocumentRecord(
            id=instance.id,
            kind=DocumentKind(kind),
            etat=instance.etat,
            data=dict(instance.data or {}),
            nom_client=instance.nom_client,
            prix_total=instance.prix_total,
            date_debut=instance.date_debut,
        )

    def find_one(self, kind, field, value):
        model = self._model(kind)
        lookup = {f"data__{field}": value}
        try:
            instance = model.objects.filter(**lookup).order_by("created_at").first()
        except DatabaseError as e:
            logger.error(f"Erreur store lors de la recherche {kind}.{field}: {e}")
            raise StoreUnavailable() from e
        if instance is None:
            return None
        return self._to_record(instance, kind)

    def insert(self, kind, record):
        model = self._model(kind)
        try:
            # Savepoint : un conflit de clé ne doit pas invalider la transaction appelante
            with transaction.atomic():
                model.objects.create(
                    id=record.id,
                    nom_client=record.nom_client,
                    prix_total=record.prix_total,
                    date_debut=record.date_debut,
                    etat=record.etat,
                    data=record.data,
                )
        except IntegrityError as e:
            raise DuplicateDocument(f"{kind} {record.id} existe déjà") from e
        except DatabaseError as e:
            logger.error(f"Erreur store lors de l'insertion {kind} {record.id}: {e}")
            raise StoreUnavailable() from e

    def update(self, kind, record_id, patch):
        _check_patch(patch)
        try:
            updated = (
                self._model(kind)
                .objects.filter(pk=record_id)
                .update(**patch, updated_at=timezone.now())
            )
        except DatabaseError as e:
            logger.error(f"Erreur store lors de la mise à jour {kind} {record_id}: {e}")
            raise StoreUnavailable() from e
        return updated == 1

    def update_if_unsigned(self, kind, record_id, patch):
        _check_patch(patch)
        try:
            # Un seul UPDATE ... WHERE etat <> 'Signé' : la base arbitre les
            # requêtes concurrentes
            updated = (
                self._model(kind)
                .objects.filter(pk=record_id)
                .exclude(etat=DocumentEtat.SIGNE)
                .update(**patch, updated_at=timezone.now())
            )
        except DatabaseError as e:
            logger.error(
                f"Erreur store lors de l'écriture conditionnelle {kind} {record_id}: {e}"
            )
            raise StoreUnavailable() from e
        return updated == 1

    def delete(self, kind, record_id):
        try:
            deleted, _ = self._model(kind).objects.filter(pk=record_id).delete()
        except DatabaseError as e:
            logger.error(f"Erreur store lors de la suppression {kind} {record_id}: {e}")
            raise StoreUnavailable() from e
        return deleted > 0


def record_patch(record: DocumentRecord) -> dict[str, DataValue]:
    """Patch complet (état + payload) à écrire pour un document."""
    return {"etat": record.etat, "data": record.data}
