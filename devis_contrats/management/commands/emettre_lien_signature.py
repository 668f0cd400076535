"""
Management command pour émettre le lien de signature d'un devis ou contrat.
Usage: python manage.py emettre_lien_signature D-20240115-JD
"""
from django.core.exceptions import ObjectDoesNotExist
from django.core.management.base import BaseCommand, CommandError

from devis_contrats.services import get_signing_link
from signature.document_types import DocumentKind


class Command(BaseCommand):
    help = 'Affiche le lien de signature client d\'un devis ou contrat (token créé si besoin)'

    def add_arguments(self, parser):
        parser.add_argument('reference', type=str, help='Référence du document (D-... ou C-...)')
        parser.add_argument(
            '--type',
            type=str,
            choices=DocumentKind.values,
            default=None,
            help='Type de document (défaut: déduit du préfixe de la référence)'
        )

    def handle(self, *args, **options):
        reference = options['reference']
        kind = options['type'] or (
            DocumentKind.CONTRAT
            if reference.startswith(DocumentKind.CONTRAT.prefix)
            else DocumentKind.DEVIS
        )

        try:
            url = get_signing_link(kind, reference)
        except ObjectDoesNotExist as e:
            raise CommandError(f'❌ {kind} {reference} introuvable') from e

        self.stdout.write(self.style.SUCCESS(f'🔗 {url}'))
