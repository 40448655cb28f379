from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from printing.receipt import ReceiptData, ReceiptItem
from printing.registry import get_printer


class Command(BaseCommand):
    help = "Print a sample receipt through the configured printer transport"

    def add_arguments(self, parser):
        parser.add_argument(
            "--cashier",
            default="Kasir Default",
            help="Cashier name printed on the sample receipt",
        )

    def handle(self, *args, **options):
        printer = get_printer()

        if not printer.available:
            raise CommandError("No receipt printer configured (PRINTER_TRANSPORT=null).")

        receipt = ReceiptData.build(
            transaction_id="TRX-TEST",
            timestamp=timezone.now(),
            items=[
                ReceiptItem.of(name="Es Kopi Susu", qty=2, price=Decimal("10000")),
                ReceiptItem.of(name="Es Teh", qty=1, price=Decimal("2500")),
            ],
            payment_method="Tunai",
            employee_name=options["cashier"],
        )

        self.stdout.write(self.style.WARNING("Printing sample receipt..."))

        if not printer.print_receipt(receipt):
            raise CommandError("Printing failed. Check that the printer is on and in range.")

        self.stdout.write(self.style.SUCCESS("Sample receipt printed."))
