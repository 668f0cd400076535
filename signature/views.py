"""
Vues de signature de documents par lien client
"""

import logging

from rest_framework import permissions, status
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
)
from rest_framework.response import Response

from devis_contrats.services import get_parametres

from .exceptions import (
    AlreadySigned,
    DocumentNotFound,
    EmptySignature,
    InvalidToken,
    SignatureError,
    StoreUnavailable,
)
from .serializers import SignatureSubmissionSerializer
from .services import get_signature_service

logger = logging.getLogger(__name__)

ERROR_STATUSES = {
    InvalidToken: status.HTTP_400_BAD_REQUEST,
    EmptySignature: status.HTTP_400_BAD_REQUEST,
    DocumentNotFound: status.HTTP_404_NOT_FOUND,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}

INVALID_LINK_MESSAGE = DocumentNotFound.default_message


def _error_response(error: SignatureError) -> Response:
    http_status = ERROR_STATUSES.get(type(error), status.HTTP_400_BAD_REQUEST)
    # Lien vide ou inconnu : même message côté client
    message = (
        INVALID_LINK_MESSAGE
        if isinstance(error, (InvalidToken, DocumentNotFound))
        else error.message
    )
    return Response(
        {"success": False, "error": message, "code": error.code},
        status=http_status,
    )


@api_view(["GET", "POST"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])  # L'accès est porté par le token
def sign_document(request, token):
    """
    GET  /api/sign/<token>/ : document résolu + paramètres société
    POST /api/sign/<token>/ : signature du document
    """
    if request.method == "POST":
        return confirm_signature(request, token)
    return get_signed_document(request, token)


def get_signed_document(request, token):
    """
    Retourne le document fusionné avec son payload et son rôle résolu.

    {
        "success": true,
        "document": {"id": "D-20240115-JD", ..., "resolved_role": "devis"},
        "settings": {"nom_societe": "..."} | null
    }
    """
    service = get_signature_service()
    try:
        resolved = service.resolve(token)
        parametres = get_parametres()
    except SignatureError as e:
        return _error_response(e)
    except Exception:
        logger.exception("Erreur lors de la récupération du document à signer")
        return Response(
            {"success": False, "error": "Erreur serveur"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(
        {
            "success": True,
            "document": resolved.to_payload(),
            "settings": parametres,
        }
    )


def confirm_signature(request, token):
    """
    Signe le document désigné par le token.

    Un document déjà signé n'est pas une erreur pour le client (réouverture
    du lien) : la réponse est un succès marqué `already_signed`.
    """
    serializer = SignatureSubmissionSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {
                "success": False,
                "error": EmptySignature.default_message,
                "code": EmptySignature.code,
                "errors": serializer.errors,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    service = get_signature_service()
    try:
        result = service.sign(token, serializer.validated_data["signatureImage"])
    except AlreadySigned:
        logger.info("Signature refusée : document déjà signé")
        try:
            document = service.resolve(token).to_payload()
        except SignatureError:
            document = None
        return Response(
            {
                "success": True,
                "already_signed": True,
                "message": AlreadySigned.default_message,
                "document": document,
            }
        )
    except SignatureError as e:
        return _error_response(e)
    except Exception:
        logger.exception("Erreur lors de la signature du document")
        return Response(
            {"success": False, "error": SignatureError.default_message},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response_data = {
        "success": True,
        "message": "Document signé avec succès",
        "outcome": result.outcome.value,
        "degraded": result.degraded,
        "document": result.to_payload(),
    }
    if result.warning:
        response_data["warning"] = result.warning

    return Response(response_data)
