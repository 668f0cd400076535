import uuid

from django.db import models


class NotificationType(models.TextChoices):
    INFO = "info", "Information"
    SIGNATURE = "signature", "Signature client"


class Notification(models.Model):
    """
    Notification destinée aux opérateurs (cloche du tableau de bord).

    Le parcours de signature ne fait qu'insérer ; la lecture et le marquage
    "lu" appartiennent au centre de notifications.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    message = models.TextField()
    type = models.CharField(
        max_length=20, choices=NotificationType.choices, default=NotificationType.INFO
    )
    is_read = models.BooleanField(default=False, help_text="Lue par un opérateur")
    document_id = models.CharField(
        max_length=64, blank=True, default="", help_text="Référence du document"
    )
    document_type = models.CharField(
        max_length=20, blank=True, default="", help_text="devis ou contrat"
    )

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at"]

    def __str__(self):
        return f"[{self.type}] {self.message}"
