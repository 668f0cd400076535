"""
Factories pour les tests - Crée des devis et contrats complets.

Usage dans les tests:
    from devis_contrats.factories import DevisFactory, ContratFactory

    # Devis envoyé au client, avec un token de signature
    devis = DevisFactory(etat="Envoyé", data__access_token_devis="tok-123")

    # Contrat déjà signé
    contrat = ContratFactory.signe()
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import factory
from django.utils import timezone
from factory.django import DjangoModelFactory

from signature.document_types import DocumentKind

from .constants import CONTRAT_SIGNE, DocumentEtat
from .models import Contrat, Devis, Parametres
from .references import generate_reference


class DocumentDataFactory(factory.DictFactory):
    """Payload `data` typique d'un devis de location de matériel."""

    email_client = factory.Faker("email", locale="fr_FR")
    telephone_client = factory.Faker("phone_number", locale="fr_FR")
    lieu = factory.Faker("city", locale="fr_FR")
    type_evenement = factory.Iterator(["Mariage", "Anniversaire", "Séminaire"])
    acompte = "150.00"


class AbstractDocumentFactory(DjangoModelFactory):
    class Meta:
        abstract = True

    nom_client = factory.Faker("name", locale="fr_FR")
    date_debut = factory.LazyFunction(
        lambda: (timezone.now() + timedelta(days=60)).date()
    )
    prix_total = factory.LazyFunction(lambda: Decimal("1250.00"))
    etat = DocumentEtat.ENVOYE
    data = factory.SubFactory(DocumentDataFactory)

    @factory.lazy_attribute
    def id(self):
        # Suffixe aléatoire : deux clients peuvent avoir mêmes initiales et date
        reference = generate_reference(
            self.document_kind, self.nom_client, self.date_debut
        )
        return f"{reference}{uuid.uuid4().hex[:4].upper()}"

    @factory.post_generation
    def reference(obj, create, extracted, **kwargs):
        obj.data.setdefault("reference", extracted or obj.id)
        if create:
            obj.save(update_fields=["data"])


class DevisFactory(AbstractDocumentFactory):
    """Factory pour créer un devis (table `devis`)."""

    class Meta:
        model = Devis
        skip_postgeneration_save = True

    class Params:
        document_kind = DocumentKind.DEVIS


class ContratFactory(AbstractDocumentFactory):
    """Factory pour créer un contrat (table `contrats`)."""

    class Meta:
        model = Contrat
        skip_postgeneration_save = True

    class Params:
        document_kind = DocumentKind.CONTRAT

    @classmethod
    def signe(cls, **kwargs):
        """Contrat déjà signé par le client."""
        data = kwargs.pop("data", {})
        return cls(
            etat=DocumentEtat.SIGNE,
            data={**data, CONTRAT_SIGNE: True},
            **kwargs,
        )


class ParametresFactory(DjangoModelFactory):
    class Meta:
        model = Parametres

    data = factory.Dict(
        {
            "nom_societe": "Location Réception",
            "logo_url": "",
            "logo_width": 100,
        }
    )
