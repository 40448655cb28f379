# printing/escpos.py

"""
ESC/POS COMMAND ENCODER

A small, chainable builder over the subset of the ESC/POS command set
used by 58mm thermal receipt printers:

    ESC @       initialize
    ESC t n     select character code table
    ESC a n     justification (0 left, 1 center, 2 right)
    ESC E n     emphasized (bold) on/off
    GS V n      cut paper (0 full, 1 partial)

Text is encoded with the currently selected code page; characters the
code page cannot represent are replaced with "?".
"""

from __future__ import annotations

ESC = 0x1B
GS = 0x1D
LF = 0x0A
CR = 0x0D

CODEPAGES = {
    "cp437": 0,
    "cp850": 2,
    "cp860": 3,
    "cp863": 4,
    "cp865": 5,
    "cp1252": 16,
    "cp866": 17,
    "cp852": 18,
    "cp858": 19,
}

ALIGNMENTS = {
    "left": 0,
    "center": 1,
    "right": 2,
}

CUTS = {
    "full": 0,
    "partial": 1,
}


class EscPosEncoder:
    def __init__(self):
        self._buffer = bytearray()
        self._codepage = "cp437"

    def _raw(self, *values: int) -> "EscPosEncoder":
        self._buffer.extend(values)
        return self

    def initialize(self) -> "EscPosEncoder":
        self._codepage = "cp437"
        return self._raw(ESC, 0x40)

    def codepage(self, name: str) -> "EscPosEncoder":
        key = (name or "").strip().lower()
        if key not in CODEPAGES:
            raise ValueError(f"Unsupported code page: {name}")
        self._codepage = key
        return self._raw(ESC, 0x74, CODEPAGES[key])

    def align(self, value: str) -> "EscPosEncoder":
        key = (value or "").strip().lower()
        if key not in ALIGNMENTS:
            raise ValueError(f"Unsupported alignment: {value}")
        return self._raw(ESC, 0x61, ALIGNMENTS[key])

    def bold(self, enabled: bool = True) -> "EscPosEncoder":
        return self._raw(ESC, 0x45, 1 if enabled else 0)

    def text(self, value: str) -> "EscPosEncoder":
        self._buffer.extend(str(value).encode(self._codepage, errors="replace"))
        return self

    def newline(self) -> "EscPosEncoder":
        return self._raw(LF, CR)

    def line(self, value: str) -> "EscPosEncoder":
        return self.text(value).newline()

    def cut(self, value: str = "full") -> "EscPosEncoder":
        key = (value or "").strip().lower()
        if key not in CUTS:
            raise ValueError(f"Unsupported cut: {value}")
        return self._raw(GS, 0x56, CUTS[key])

    def encode(self) -> bytes:
        return bytes(self._buffer)
