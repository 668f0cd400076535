from django.apps import AppConfig


class DevisContratsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "devis_contrats"
    verbose_name = "Devis et contrats"
