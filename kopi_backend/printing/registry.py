# printing/registry.py

"""
PRINTER REGISTRY

- build_printer(): choose the transport from settings.PRINTER once, at app start-up.
- get_printer(): the transport owned by the printing app config.

PRINTER["TRANSPORT"]:
- "bluetooth"  BLE thermal printer (bleak)
- "null"       no printer; checkout reports print_status="unavailable"
"""

from __future__ import annotations

import logging

from django.apps import apps
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from printing.transport import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SCAN_TIMEOUT,
    PRINTER_CHARACTERISTIC_UUID,
    PRINTER_NAME_PREFIXES,
    PRINTER_SERVICE_UUID,
    BluetoothPrinterTransport,
    NullPrinterTransport,
    PrinterTransport,
)

logger = logging.getLogger(__name__)

TRANSPORT_BLUETOOTH = "bluetooth"
TRANSPORT_NULL = "null"


def build_printer(conf: dict | None = None) -> PrinterTransport:
    conf = conf if conf is not None else (getattr(settings, "PRINTER", {}) or {})
    kind = str(conf.get("TRANSPORT") or TRANSPORT_NULL).strip().lower()

    if kind == TRANSPORT_NULL:
        return NullPrinterTransport()

    if kind == TRANSPORT_BLUETOOTH:
        printer = BluetoothPrinterTransport(
            service_uuid=conf.get("SERVICE_UUID") or PRINTER_SERVICE_UUID,
            characteristic_uuid=conf.get("CHARACTERISTIC_UUID") or PRINTER_CHARACTERISTIC_UUID,
            name_prefixes=conf.get("NAME_PREFIXES") or PRINTER_NAME_PREFIXES,
            device_address=conf.get("DEVICE_ADDRESS") or None,
            scan_timeout=float(conf.get("SCAN_TIMEOUT") or DEFAULT_SCAN_TIMEOUT),
            chunk_size=int(conf.get("CHUNK_SIZE") or DEFAULT_CHUNK_SIZE),
        )
        logger.info(
            "Bluetooth receipt printer configured",
            extra={"device_address": printer.device_address, "chunk_size": printer.chunk_size},
        )
        return printer

    raise ImproperlyConfigured(f"Unknown PRINTER TRANSPORT: {kind!r}")


def get_printer() -> PrinterTransport:
    printer = apps.get_app_config("printing").printer
    if printer is None:
        return NullPrinterTransport()
    return printer
