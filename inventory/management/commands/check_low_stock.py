from django.core.management.base import BaseCommand

from inventory.services import build_inventory_service


class Command(BaseCommand):
    help = "Evalúa todo el catálogo y envía las alertas de stock bajo pendientes."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reconcile",
            action="store_true",
            help="Antes del barrido, descarta alertas de productos que ya no están bajos.",
        )

    def handle(self, *args, **options):
        service = build_inventory_service()
        if options["reconcile"]:
            removed = service.reconcile_alerts()
            self.stdout.write(f"Alertas removidas: {removed}")

        count = service.check_all_for_low_stock()
        self.stdout.write(self.style.SUCCESS(f"Productos con stock bajo: {count}"))
