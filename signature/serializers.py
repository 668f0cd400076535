from rest_framework import serializers

from .exceptions import EmptySignature


class SignatureSubmissionSerializer(serializers.Serializer):
    """
    Payload de signature envoyé par la page client.

    POST /api/sign/<token>/
    {
        "signatureImage": "data:image/png;base64,iVBORw0..."
    }
    """

    signatureImage = serializers.CharField(
        trim_whitespace=True,
        help_text="Image de la signature manuscrite (data URL), contenu opaque",
        error_messages={
            "required": EmptySignature.default_message,
            "blank": EmptySignature.default_message,
            "null": EmptySignature.default_message,
        },
    )
