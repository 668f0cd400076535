"""
Modèles des devis et contrats

Un devis et un contrat représentent le même objet métier à deux étapes de
son cycle de vie. Les deux tables partagent donc exactement la même forme :
quelques colonnes indexées et un payload JSON ouvert (`data`).
"""

from django.db import models

from .constants import DocumentEtat


class AbstractDocumentRecord(models.Model):
    """
    Forme commune d'un document signable (devis ou contrat).

    Fournit :
    - Référence lisible comme clé primaire (D-20240115-JD, C-20240115-JD)
    - Colonnes indexées utilisées par le tableau de bord (client, total, date)
    - État du cycle de vie (ensemble ouvert, voir DocumentEtat)
    - Payload `data` libre : les clés inconnues sont conservées telles quelles
    """

    id = models.CharField(primary_key=True, max_length=64)
    nom_client = models.CharField(max_length=255, blank=True, default="")
    prix_total = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    date_debut = models.DateField(null=True, blank=True)
    etat = models.CharField(
        max_length=32,
        default=DocumentEtat.CONTACT,
        verbose_name="État",
        help_text="État du document (Contact, Envoyé, Signé, ...)",
    )
    data = models.JSONField(
        default=dict,
        blank=True,
        help_text="Champs libres du document (client, évènement, tarifs, tokens)",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.id} - {self.nom_client or 'Inconnu'} ({self.etat})"

    @property
    def est_signe(self) -> bool:
        return self.etat == DocumentEtat.SIGNE


class Devis(AbstractDocumentRecord):
    class Meta(AbstractDocumentRecord.Meta):
        db_table = "devis"
        verbose_name = "Devis"
        verbose_name_plural = "Devis"


class Contrat(AbstractDocumentRecord):
    class Meta(AbstractDocumentRecord.Meta):
        db_table = "contrats"
        verbose_name = "Contrat"
        verbose_name_plural = "Contrats"


class Parametres(models.Model):
    """
    Paramètres de la société (nom, logo, CGV, ...) servis avec le document
    résolu pour que le rendu client soit complet.
    """

    data = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "parametres"
        verbose_name = "Paramètres société"
        verbose_name_plural = "Paramètres société"

    def __str__(self):
        return self.data.get("nom_societe") or "Paramètres"
