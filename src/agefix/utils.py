from __future__ import annotations

import os
import time
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


@dataclass(frozen=True)
class UuidV7:
    value: str

    def __str__(self) -> str:
        return self.value


def uuidv7() -> UuidV7:
    ts_ms = int(time.time() * 1000)
    time_bytes = ts_ms.to_bytes(6, "big")
    rand = int.from_bytes(os.urandom(10), "big")
    rand_a = (rand >> 68) & 0x0FFF
    rand_b = (rand >> 6) & ((1 << 62) - 1)

    byte6 = 0x70 | ((rand_a >> 8) & 0x0F)
    byte7 = rand_a & 0xFF
    byte8 = 0x80 | ((rand_b >> 56) & 0x3F)
    bytes9_15 = (rand_b & ((1 << 56) - 1)).to_bytes(7, "big")

    raw = bytearray()
    raw.extend(time_bytes)
    raw.append(byte6)
    raw.append(byte7)
    raw.append(byte8)
    raw.extend(bytes9_15)
    hexed = raw.hex()
    uuid = f"{hexed[0:8]}-{hexed[8:12]}-{hexed[12:16]}-{hexed[16:20]}-{hexed[20:32]}"
    return UuidV7(uuid)


def decimal_string(value: Any) -> str:
    """Render an amount as a canonical decimal string.

    Accepts int, Decimal and decimal strings. Floats are rejected:
    amounts never pass through binary floating point.
    """
    if isinstance(value, bool):
        raise TypeError("Amount must not be a boolean")
    if isinstance(value, float):
        raise TypeError(f"Amount must not be a float: {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        dec = value
    elif isinstance(value, str):
        try:
            dec = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Not a decimal amount: {value!r}") from None
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not dec.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    # int() and format("f") are exact; quantize/normalize round to context precision
    if dec == dec.to_integral_value():
        return str(int(dec))
    return format(dec, "f").rstrip("0").rstrip(".")
