from django.db import migrations, models


def _document_fields():
    return [
        ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
        ("nom_client", models.CharField(blank=True, default="", max_length=255)),
        (
            "prix_total",
            models.DecimalField(
                blank=True, decimal_places=2, max_digits=10, null=True
            ),
        ),
        ("date_debut", models.DateField(blank=True, null=True)),
        (
            "etat",
            models.CharField(
                default="Contact",
                help_text="État du document (Contact, Envoyé, Signé, ...)",
                max_length=32,
                verbose_name="État",
            ),
        ),
        (
            "data",
            models.JSONField(
                blank=True,
                default=dict,
                help_text="Champs libres du document (client, évènement, tarifs, tokens)",
            ),
        ),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Contrat",
            fields=_document_fields(),
            options={
                "verbose_name": "Contrat",
                "verbose_name_plural": "Contrats",
                "db_table": "contrats",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Devis",
            fields=_document_fields(),
            options={
                "verbose_name": "Devis",
                "verbose_name_plural": "Devis",
                "db_table": "devis",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Parametres",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("data", models.JSONField(blank=True, default=dict)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Paramètres société",
                "verbose_name_plural": "Paramètres société",
                "db_table": "parametres",
            },
        ),
    ]
