"""Minimal printf-style formatting and integer parsing."""

from __future__ import annotations

import operator
from typing import Any, Iterator

_DIGITS = "0123456789ABCDEF"
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

# conversion -> (base, signed)
_INTEGER_CONVERSIONS = {
    "d": (10, True),
    "ld": (10, True),
    "lld": (10, True),
    "u": (10, False),
    "lu": (10, False),
    "llu": (10, False),
    "x": (16, False),
    "lx": (16, False),
    "llx": (16, False),
}


def _format_int(value: Any, base: int, signed: bool) -> str:
    """Render value as a 32-bit integer, as the printer's int parameter holds it."""
    raw = operator.index(value) & _MASK32
    negative = signed and raw & 0x80000000
    magnitude = (-(raw - (1 << 32))) & _MASK32 if negative else raw
    digits = []
    while True:
        digits.append(_DIGITS[magnitude % base])
        magnitude //= base
        if magnitude == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _format_pointer(value: Any) -> str:
    return "0x" + format(operator.index(value) & _MASK64, "016X")


def _take(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def format_message(fmt: str, *args: Any) -> str:
    """Format args by fmt, understanding only %d %u %x (with l/ll), %p, %s, %%.

    Integers are shown as 32-bit values; unknown conversions are echoed.
    """
    values = iter(args)
    out: list[str] = []
    i = 0
    length = len(fmt)
    while i < length:
        char = fmt[i]
        if char != "%":
            out.append(char)
            i += 1
            continue
        if i + 1 >= length:
            break
        conversion = next(
            (
                fmt[i + 1 : i + 1 + size]
                for size in (1, 2, 3)
                if fmt[i + 1 : i + 1 + size] in _INTEGER_CONVERSIONS
            ),
            None,
        )
        if conversion is not None:
            base, signed = _INTEGER_CONVERSIONS[conversion]
            out.append(_format_int(_take(values), base, signed))
            i += 1 + len(conversion)
            continue
        spec = fmt[i + 1]
        if spec == "p":
            out.append(_format_pointer(_take(values)))
        elif spec == "s":
            text = _take(values)
            out.append("(null)" if text is None else str(text))
        elif spec == "%":
            out.append("%")
        else:
            out.append("%" + spec)
        i += 2
    return "".join(out)


def atoi(text: str) -> int:
    """Parse the leading decimal digits of text; no sign or spaces allowed."""
    value = 0
    for char in text:
        if not "0" <= char <= "9":
            break
        value = value * 10 + (ord(char) - ord("0"))
    return value