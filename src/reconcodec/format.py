from __future__ import annotations

import math

from .base64_codec import Base64
from .data import DATA_SENTINEL
from .numeric import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER, Uint32, Uint64


def format_number(value: int | float) -> str:
    """Write `value` as a Recon number literal that parses back to itself."""
    if isinstance(value, bool):
        raise TypeError("booleans are not number literals")
    if isinstance(value, Uint32):
        return f"0x{int(value):08X}"
    if isinstance(value, Uint64):
        return f"0x{int(value):016X}"
    if isinstance(value, int):
        if not MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
            raise ValueError(f"integer out of safe range: {value}")
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"no literal for non-finite number: {value!r}")
        out = repr(value)
        if "e" not in out and abs(value) >= MAX_SAFE_INTEGER:
            # The integer part would overflow the safe accumulator.
            out = f"{value:.16e}"
        return out
    raise TypeError(f"not a number: {type(value)!r}")


def format_data(data: bytes, *, base64: Base64 | None = None) -> str:
    return DATA_SENTINEL + (base64 or Base64.standard()).encode(data)
