# printing/exceptions.py

"""
PRINTER ERRORS

Printer failures are never fatal to a sale: the sale is already
financially committed by the time a receipt is printed.
"""


class PrinterError(Exception):
    """Base exception for all receipt printer failures."""


class ConnectError(PrinterError):
    """No compatible printer was found, or it could not be connected."""


class PrintError(PrinterError):
    """Connected, but the encoded receipt could not be fully written."""
