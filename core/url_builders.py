"""
Utilitaires pour construire les URLs frontend.

La page de signature client est servie par le frontend :
- Signature d'un devis ou d'un contrat : /sign/{token}
"""

from urllib.parse import quote

from django.conf import settings

SIGNING_PATH = "/sign"


def get_frontend_base_url() -> str:
    """URL du frontend sans slash final."""
    return settings.FRONTEND_URL.rstrip("/")


def get_signing_url(token: str) -> str:
    """
    Construit le lien de signature envoyé au client.

    Args:
        token: Token d'accès du document (access_token_devis / access_token_contrat)

    Returns:
        URL complète vers la page de signature
    """
    return f"{get_frontend_base_url()}{SIGNING_PATH}/{quote(token, safe='')}"
