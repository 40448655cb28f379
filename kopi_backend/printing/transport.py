# printing/transport.py

"""
RECEIPT PRINTER TRANSPORTS

PrinterTransport is the capability handed to checkout: either a real
Bluetooth LE thermal printer or a null object when the host has no
printer configured. Callers never check the runtime for Bluetooth support.

BluetoothPrinterTransport state machine:

    DISCONNECTED -> CONNECTING -> CONNECTED -> STREAMING -> CONNECTED
    CONNECTING -> DISCONNECTED (discovery/connect failure)

Rules:
- One transport instance owns one BLE client and one private event loop.
- connect(), print_receipt() and close() are serialised by a lock;
  a second print waits for the first instead of racing on the
  characteristic.
- Bytes are written in fixed-size chunks (20 by default), each write
  awaited before the next. Thermal printer characteristics commonly
  reject writes above a small MTU.
- print_receipt() returns False on printer failure; it never raises
  PrinterError to the caller.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import threading
from typing import Callable, Iterable, Iterator, Optional

from bleak import BleakClient, BleakScanner
from bleak.exc import BleakError

from printing.exceptions import ConnectError, PrintError, PrinterError
from printing.receipt import ReceiptData
from printing.receipt_encoder import encode_receipt

logger = logging.getLogger(__name__)

PRINTER_SERVICE_UUID = "000018f0-0000-1000-8000-00805f9b34fb"
PRINTER_CHARACTERISTIC_UUID = "00002af1-0000-1000-8000-00805f9b34fb"
PRINTER_NAME_PREFIXES = ("InnerPrinter", "MPT", "BT printer")
DEFAULT_CHUNK_SIZE = 20
DEFAULT_SCAN_TIMEOUT = 10.0

_BLE_FAILURES = (BleakError, OSError, asyncio.TimeoutError)


class PrinterState(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    STREAMING = "streaming"


def iter_chunks(data: bytes, size: int) -> Iterator[bytes]:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(data), size):
        yield data[start:start + size]


def matches_printer(device, advertisement, *, service_uuid: str, name_prefixes: Iterable[str]) -> bool:
    advertised = {str(u).lower() for u in (getattr(advertisement, "service_uuids", None) or [])}
    if service_uuid.lower() in advertised:
        return True

    name = getattr(device, "name", None) or getattr(advertisement, "local_name", None) or ""
    return name.startswith(tuple(name_prefixes))


class PrinterTransport:
    """Base transport. Subclasses implement the actual byte delivery."""

    available = False

    def connect(self) -> None:
        raise ConnectError("No receipt printer is configured")

    def print_receipt(self, receipt: ReceiptData) -> bool:
        return False

    def close(self) -> None:
        return None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class NullPrinterTransport(PrinterTransport):
    """Used when printing is disabled; every print reports not-printed."""


class BluetoothPrinterTransport(PrinterTransport):
    available = True

    def __init__(
        self,
        *,
        service_uuid: str = PRINTER_SERVICE_UUID,
        characteristic_uuid: str = PRINTER_CHARACTERISTIC_UUID,
        name_prefixes: Iterable[str] = PRINTER_NAME_PREFIXES,
        device_address: Optional[str] = None,
        scan_timeout: float = DEFAULT_SCAN_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        scanner=BleakScanner,
        client_factory: Callable = BleakClient,
        encoder: Callable[[ReceiptData], bytes] = encode_receipt,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.service_uuid = service_uuid
        self.characteristic_uuid = characteristic_uuid
        self.name_prefixes = tuple(name_prefixes)
        self.device_address = (device_address or "").strip() or None
        self.scan_timeout = float(scan_timeout)
        self.chunk_size = int(chunk_size)

        self._scanner = scanner
        self._client_factory = client_factory
        self._encoder = encoder

        self._lock = threading.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._client = None
        self._characteristic = None
        self.state = PrinterState.DISCONNECTED

    # --------------------------------------------------
    # Public (sync) API
    # --------------------------------------------------

    def connect(self) -> None:
        with self._lock:
            self._run(self._ensure_connected())

    def print_receipt(self, receipt: ReceiptData) -> bool:
        with self._lock:
            try:
                self._run(self._print(receipt))
            except PrinterError as exc:
                logger.warning(
                    "Receipt printing failed",
                    extra={"transaction_id": receipt.transaction_id, "error": str(exc)},
                )
                return False

        logger.info("Receipt printed", extra={"transaction_id": receipt.transaction_id})
        return True

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                try:
                    self._run(self._client.disconnect())
                except _BLE_FAILURES as exc:
                    logger.warning("Printer disconnect failed", extra={"error": str(exc)})
            self._reset()

            if self._loop is not None and not self._loop.is_closed():
                self._loop.close()
            self._loop = None

    # --------------------------------------------------
    # Internals
    # --------------------------------------------------

    def _run(self, coro):
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()
        return self._loop.run_until_complete(coro)

    def _reset(self) -> None:
        self._client = None
        self._characteristic = None
        self.state = PrinterState.DISCONNECTED

    def _is_connected(self) -> bool:
        return (
            self._client is not None
            and self._characteristic is not None
            and bool(getattr(self._client, "is_connected", False))
        )

    async def _discover(self):
        if self.device_address:
            return await self._scanner.find_device_by_address(
                self.device_address, timeout=self.scan_timeout
            )

        def _filter(device, advertisement):
            return matches_printer(
                device,
                advertisement,
                service_uuid=self.service_uuid,
                name_prefixes=self.name_prefixes,
            )

        return await self._scanner.find_device_by_filter(_filter, timeout=self.scan_timeout)

    def _resolve_characteristic(self, client):
        service = client.services.get_service(self.service_uuid)
        if service is None:
            return None

        characteristic = service.get_characteristic(self.characteristic_uuid)
        if characteristic is not None:
            return characteristic

        for candidate in getattr(service, "characteristics", []) or []:
            props = set(getattr(candidate, "properties", []) or [])
            if props & {"write", "write-without-response"}:
                return candidate
        return None

    async def _ensure_connected(self) -> None:
        if self._is_connected():
            return

        self.state = PrinterState.CONNECTING
        client = None
        try:
            device = await self._discover()
            if device is None:
                raise ConnectError("No compatible printer found")

            client = self._client_factory(device)
            await client.connect()

            characteristic = self._resolve_characteristic(client)
            if characteristic is None:
                raise ConnectError("Printer characteristic could not be resolved")
        except ConnectError:
            await self._abandon(client)
            raise
        except _BLE_FAILURES as exc:
            await self._abandon(client)
            raise ConnectError(f"Printer connection failed: {exc}") from exc

        self._client = client
        self._characteristic = characteristic
        self.state = PrinterState.CONNECTED
        logger.info(
            "Printer connected",
            extra={"device": getattr(device, "name", None) or getattr(device, "address", None)},
        )

    async def _abandon(self, client) -> None:
        self._reset()
        if client is None:
            return
        try:
            await client.disconnect()
        except _BLE_FAILURES:
            logger.debug("Ignoring disconnect failure after aborted connect")

    async def _print(self, receipt: ReceiptData) -> None:
        await self._ensure_connected()

        payload = self._encoder(receipt)
        props = set(getattr(self._characteristic, "properties", []) or [])
        with_response = "write" in props or not props

        self.state = PrinterState.STREAMING
        try:
            for chunk in iter_chunks(payload, self.chunk_size):
                await self._client.write_gatt_char(self._characteristic, chunk, response=with_response)
        except _BLE_FAILURES as exc:
            if self._client is not None and getattr(self._client, "is_connected", False):
                self.state = PrinterState.CONNECTED
            else:
                self._reset()
            raise PrintError(f"Writing receipt to printer failed: {exc}") from exc

        self.state = PrinterState.CONNECTED
