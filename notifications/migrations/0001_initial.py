import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("message", models.TextField()),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("info", "Information"),
                            ("signature", "Signature client"),
                        ],
                        default="info",
                        max_length=20,
                    ),
                ),
                (
                    "is_read",
                    models.BooleanField(default=False, help_text="Lue par un opérateur"),
                ),
                (
                    "document_id",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Référence du document",
                        max_length=64,
                    ),
                ),
                (
                    "document_type",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="devis ou contrat",
                        max_length=20,
                    ),
                ),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-created_at"],
            },
        ),
    ]
