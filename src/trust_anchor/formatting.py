r"""
Byte-array formatting for diagnostic output.

Renders binary blobs (DER encodings, mostly) as a classic hex dump: one line
per 16 bytes, a 4-digit hex offset, the bytes in hex, and a printable-text
column where control characters are shown as '.'.

    >>> print(format_bytes(b"\x30\x03abc"), end="")
    0000 30 03 61 62 63                                    0.abc
"""

from __future__ import annotations

_BYTES_PER_LINE = 16


def _printable(byte: int) -> str:
    """Latin-1 character for `byte`, or '.' for C0/C1 control characters and DEL."""
    if byte < 0x20 or 0x7F <= byte < 0xA0:
        return "."
    return chr(byte)


def format_bytes(data: bytes | bytearray | memoryview, prefix: str = "") -> str:
    """
    Format `data` as a hex dump, each line starting with `prefix`.

    Every line, including the last, is terminated by a newline.
    Empty input produces an empty string.
    """
    raw = bytes(data)
    lines: list[str] = []
    for offset in range(0, len(raw), _BYTES_PER_LINE):
        chunk = raw[offset : offset + _BYTES_PER_LINE]
        hex_part = " ".join(f"{b:02x}" for b in chunk)
        padding = "   " * (_BYTES_PER_LINE - len(chunk))
        text = "".join(_printable(b) for b in chunk)
        lines.append(f"{prefix}{offset:04x} {hex_part}{padding}   {text}\n")
    return "".join(lines)
