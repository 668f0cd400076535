"""
Résolution d'un token de lien de signature vers le document qui le porte.

Les tokens ont été émis sous plusieurs schémas au fil du temps (champ
spécifique au devis, au contrat, ou champ générique historique) : l'espace
de recherche n'est donc pas partitionné à l'avance. On sonde séquentiellement
le produit {contrats, devis} × {champs de token}, dans un ordre fixe, et on
s'arrête à la première correspondance.
"""

import logging

from devis_contrats.constants import (
    ACCESS_TOKEN,
    ACCESS_TOKEN_CONTRAT,
    ACCESS_TOKEN_DEVIS,
    CONTRAT_PREFIX,
)

from .document_types import DocumentKind
from .exceptions import DocumentNotFound, InvalidToken
from .records import DocumentRecord, ResolvedDocument
from .repository import DocumentRepository

logger = logging.getLogger(__name__)

# Ordre canonique des sondes. Le modifier change le document auquel un token
# en collision est résolu : c'est une rupture de compatibilité.
PROBE_ORDER: tuple[tuple[DocumentKind, str], ...] = (
    (DocumentKind.CONTRAT, ACCESS_TOKEN_CONTRAT),
    (DocumentKind.CONTRAT, ACCESS_TOKEN_DEVIS),
    (DocumentKind.CONTRAT, ACCESS_TOKEN),
    (DocumentKind.DEVIS, ACCESS_TOKEN_CONTRAT),
    (DocumentKind.DEVIS, ACCESS_TOKEN_DEVIS),
    (DocumentKind.DEVIS, ACCESS_TOKEN),
)


def role_for_match(field: str, record: DocumentRecord) -> DocumentKind:
    """
    Rôle du token selon le champ qui a correspondu.
    Le champ générique ne dit rien : on se rabat sur le préfixe de la référence.
    """
    if field == ACCESS_TOKEN_DEVIS:
        return DocumentKind.DEVIS
    if field == ACCESS_TOKEN_CONTRAT:
        return DocumentKind.CONTRAT
    if record.id.startswith(CONTRAT_PREFIX[0]):
        return DocumentKind.CONTRAT
    return DocumentKind.DEVIS


class TokenResolver:
    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    def resolve(self, token: str) -> ResolvedDocument:
        """
        Retourne le document portant `token` et le rôle dans lequel il est atteint.

        Raises:
            InvalidToken: token vide
            DocumentNotFound: aucune correspondance après toutes les sondes
            StoreUnavailable: erreur du store pendant une sonde
        """
        if not token or not token.strip():
            raise InvalidToken()

        for kind, field in PROBE_ORDER:
            record = self.repository.find_one(kind, field, token)
            if record is None:
                continue

            role = role_for_match(field, record)
            logger.info(
                f"🔍 Token résolu: {kind}.{field} -> {record.id} (rôle {role})"
            )
            return ResolvedDocument(
                record=record, role=role, matched_field=field, token=token
            )

        logger.info("Token introuvable dans devis / contrats")
        raise DocumentNotFound()
