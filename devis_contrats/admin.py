from django.contrib import admin

from signature.document_types import DocumentKind

from .models import Contrat, Devis, Parametres
from .references import display_reference


class DocumentRecordAdmin(admin.ModelAdmin):
    document_kind = DocumentKind.DEVIS

    list_display = [
        "id",
        "reference_affichee",
        "nom_client",
        "date_debut",
        "prix_total",
        "etat",
        "created_at",
    ]
    list_filter = ["etat", "date_debut"]
    search_fields = ["id", "nom_client"]
    readonly_fields = ["created_at", "updated_at"]
    list_per_page = 50

    fieldsets = (
        ("Référence", {"fields": ("id", "etat")}),
        ("Client", {"fields": ("nom_client", "date_debut", "prix_total")}),
        ("Données du document", {"fields": ("data",)}),
        (
            "Horodatage",
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )

    @admin.display(description="Référence")
    def reference_affichee(self, obj):
        return display_reference(
            obj.id, self.document_kind, obj.nom_client, obj.date_debut
        )


@admin.register(Devis)
class DevisAdmin(DocumentRecordAdmin):
    pass


@admin.register(Contrat)
class ContratAdmin(DocumentRecordAdmin):
    document_kind = DocumentKind.CONTRAT


@admin.register(Parametres)
class ParametresAdmin(admin.ModelAdmin):
    list_display = ["__str__", "updated_at"]
