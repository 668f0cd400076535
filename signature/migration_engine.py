"""
Transformation d'un devis signé en contrat.

Le store n'offre pas de transaction entre les tables `devis` et `contrats` :
le déplacement est une opération en deux temps (insertion du contrat puis
suppression du devis) avec deux états partiels documentés.

Quand le moteur intervient, le devis a déjà été écrit signé dans sa table
par la machine à états. Un échec d'insertion laisse donc le devis signé sur
place (succès dégradé) ; un échec de suppression laisse un devis orphelin à
côté du nouveau contrat (incohérence journalisée, nettoyage opérateur).
"""

import logging
from dataclasses import dataclass

from devis_contrats.constants import CONTRAT_SIGNE, REFERENCE, DocumentEtat
from devis_contrats.references import contract_id_for

from .document_status import SignatureOutcome
from .document_types import DocumentKind
from .exceptions import MigrationFailed, SignatureError
from .records import DocumentRecord, ResolvedDocument
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    outcome: SignatureOutcome
    document: DocumentRecord
    error: SignatureError | None = None

    @property
    def warning(self) -> str | None:
        if self.outcome == SignatureOutcome.DEGRADED:
            return MigrationFailed.default_message
        if self.outcome == SignatureOutcome.ORPHANED:
            return (
                f"Contrat {self.document.id} créé mais le devis d'origine "
                "n'a pas pu être supprimé"
            )
        return None


def should_migrate(resolved: ResolvedDocument) -> bool:
    """Seul un token de devis atteint dans la table `devis` déclenche le passage en contrat."""
    return (
        resolved.role == DocumentKind.DEVIS
        and resolved.home_kind == DocumentKind.DEVIS
    )


def build_contract(signed_quote: DocumentRecord) -> DocumentRecord:
    """Contrat équivalent au devis signé, sous sa nouvelle référence."""
    contract_id = contract_id_for(signed_quote.id)
    contract = signed_quote.with_data(
        **{
            REFERENCE: contract_id,
            # Signer le devis vaut signature du contrat
            CONTRAT_SIGNE: True,
        }
    )
    contract.id = contract_id
    contract.kind = DocumentKind.CONTRAT
    contract.etat = DocumentEtat.SIGNE
    return contract


class MigrationEngine:
    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    def migrate_to_contract(self, signed_quote: DocumentRecord) -> MigrationResult:
        """
        Déplace un devis déjà signé vers la table `contrats`.

        Ne lève jamais d'erreur de store : les échecs deviennent les issues
        DEGRADED ou ORPHANED du résultat.
        """
        if signed_quote.kind != DocumentKind.DEVIS or not signed_quote.is_signed:
            raise ValueError(
                f"Seul un devis signé peut être transformé en contrat ({signed_quote.id})"
            )

        contract = build_contract(signed_quote)

        try:
            self.repository.insert(DocumentKind.CONTRAT, contract)
        except SignatureError as e:
            logger.warning(
                f"⚠️ Transformation devis {signed_quote.id} -> contrat "
                f"{contract.id} impossible, devis conservé signé: {e}"
            )
            return MigrationResult(
                outcome=SignatureOutcome.DEGRADED,
                document=signed_quote,
                error=MigrationFailed(str(e)),
            )

        try:
            deleted = self.repository.delete(DocumentKind.DEVIS, signed_quote.id)
        except SignatureError as e:
            logger.warning(
                f"⚠️ Contrat {contract.id} créé mais devis {signed_quote.id} "
                f"non supprimé (orphelin à nettoyer): {e}"
            )
            return MigrationResult(
                outcome=SignatureOutcome.ORPHANED, document=contract, error=e
            )

        if not deleted:
            logger.info(f"Devis {signed_quote.id} déjà supprimé")

        logger.info(f"📄 Devis {signed_quote.id} transformé en contrat {contract.id}")
        return MigrationResult(outcome=SignatureOutcome.MIGRATED, document=contract)
