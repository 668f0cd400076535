"""
Erreurs du parcours de signature par lien.

Chaque erreur porte un `code` stable (consommé par le frontend) et un
message utilisateur en français.
"""


class SignatureError(Exception):
    """Erreur de base du parcours de signature."""

    code = "signature_error"
    default_message = "Erreur lors de la signature. Veuillez réessayer."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidToken(SignatureError):
    """Token absent ou vide : rejeté avant toute lecture du store."""

    code = "invalid_token"
    default_message = "Token ou signature manquant"


class DocumentNotFound(SignatureError):
    """Aucun document ne porte ce token (lien invalide ou expiré)."""

    code = "not_found"
    default_message = "Ce lien est invalide ou a expiré."


class EmptySignature(SignatureError):
    code = "empty_signature"
    default_message = "Image de signature manuscrite requise"


class AlreadySigned(SignatureError):
    """
    Le document est déjà signé, ou une requête concurrente vient de le signer.
    """

    code = "already_signed"
    default_message = "Ce document a déjà été signé"


class StoreUnavailable(SignatureError):
    """Erreur de transport / I-O sur le store : l'appelant peut réessayer."""

    code = "store_unavailable"
    default_message = "Service temporairement indisponible. Veuillez réessayer."


class DuplicateDocument(SignatureError):
    """Insertion refusée : un document existe déjà avec cette référence."""

    code = "duplicate_document"
    default_message = "Un document existe déjà avec cette référence"


class MigrationFailed(SignatureError):
    """
    Le devis signé n'a pas pu être transformé en contrat.
    Jamais remonté à l'utilisateur : la signature reste acquise.
    """

    code = "migration_failed"
    default_message = "Le devis est signé mais n'a pas pu être transformé en contrat"


class NotificationFailure(SignatureError):
    """Échec de création de notification : toujours journalisé puis ignoré."""

    code = "notification_failure"
    default_message = "Impossible de créer la notification"
