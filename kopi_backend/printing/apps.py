# printing/apps.py

"""
PRINTING APP CONFIG

Owns the receipt printer transport for the lifetime of the process.
The transport is chosen once at start-up (see printing.registry) and
released at interpreter exit.
"""

import atexit

from django.apps import AppConfig


class PrintingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "printing"
    verbose_name = "Receipt Printing"

    printer = None

    def ready(self):
        from printing.registry import build_printer

        self.printer = build_printer()
        atexit.register(self.printer.close)
