"""
Génération et réécriture des références de documents.

Format : {préfixe}-{AAAAMMJJ}-{INITIALES}
- préfixe : D (devis) ou C (contrat)
- date : date de début de l'évènement (00000000 si inconnue)
- initiales : premières lettres du nom du client (XX si inconnu)
"""

import re
from datetime import date, datetime

from signature.document_types import DocumentKind

REFERENCE_PATTERN = re.compile(r"^[DCAF]-[0-9]{8}-[A-Z0-9]+$")


def client_initials(nom_client: str | None) -> str:
    if not nom_client or not nom_client.strip():
        return "XX"
    return "".join(part[0] for part in nom_client.split()).upper()


def generate_reference(
    kind: DocumentKind, nom_client: str | None, date_debut: date | str | None
) -> str:
    """
    Construit la référence d'un nouveau document.

    Args:
        kind: DocumentKind.DEVIS ou DocumentKind.CONTRAT
        nom_client: Nom complet du client ("Jean Dupont" -> "JD")
        date_debut: Date de début (date ou chaîne ISO)

    Returns:
        str: ex "D-20240115-JD"
    """
    if isinstance(date_debut, str):
        date_debut = datetime.fromisoformat(date_debut).date()
    date_part = date_debut.strftime("%Y%m%d") if date_debut else "00000000"
    return f"{kind.prefix}{date_part}-{client_initials(nom_client)}"


def contract_id_for(quote_id: str) -> str:
    """
    Référence du contrat issu d'un devis : D- devient C-.
    Sans préfixe reconnu, C- est ajouté devant l'identifiant.
    """
    if quote_id.startswith(DocumentKind.DEVIS.prefix):
        return DocumentKind.CONTRAT.prefix + quote_id[len(DocumentKind.DEVIS.prefix):]
    return f"{DocumentKind.CONTRAT.prefix}{quote_id}"


def display_reference(
    record_id: str | None,
    kind: DocumentKind,
    nom_client: str | None = None,
    date_debut: date | str | None = None,
) -> str:
    """
    Référence affichée pour un document selon son type courant.
    Une référence bien formée est simplement repréfixée (D-... -> C-...),
    sinon elle est recalculée depuis le client et la date de début.
    """
    if record_id and REFERENCE_PATTERN.match(record_id):
        return f"{kind.prefix[0]}{record_id[1:]}"
    return generate_reference(kind, nom_client, date_debut)
