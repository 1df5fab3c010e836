"""Formatted output in the style of the kernel's small printf family.

The directive syntax is ``%[-][0][width|*][.precision|*]conv``.  These are
the conversions:

* ``c``: a character, given as a one-character string or an int.
* ``s``: a string; ``None`` prints as ``(null)``.
* ``d``: a signed decimal.
* ``u``: an unsigned decimal.
* ``o``: octal.
* ``x`` and ``X``: hexadecimal.
* ``b``: binary.
* ``h`` and ``H``: two words in hexadecimal.

Numbers are treated as 32-bit values.  A width or precision above 80, or
below zero, is ignored.  An unknown conversion character is printed as it
is.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from itertools import takewhile
from typing import Any

MAXSTR = 80
_MASK32 = 0xFFFFFFFF
_DIGITS = "0123456789"
_RADIX_SPECS = {"o": "o", "x": "x", "X": "X", "b": "b"}


def _signed32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _next_arg(values: Iterator[Any]) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _int_arg(values: Iterator[Any]) -> int:
    value = _next_arg(values)
    if not isinstance(value, int):
        raise TypeError(f"expected an int argument, not {type(value).__name__}")
    return _signed32(value)


def _char_arg(values: Iterator[Any]) -> str:
    value = _next_arg(values)
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c expects a single character")
        char = value
    elif isinstance(value, int):
        char = chr(value & 0xFF)
    else:
        raise TypeError(f"%c expects a character or an int, not {type(value).__name__}")
    return "" if char == "\0" else char


def _str_arg(values: Iterator[Any]) -> str:
    value = _next_arg(values)
    if value is None:
        return "(null)"
    if not isinstance(value, str):
        raise TypeError(f"%s expects a string, not {type(value).__name__}")
    return value.split("\0", 1)[0]


def _field(fmt: str, pos: int, values: Iterator[Any]) -> tuple[int, int]:
    """Parse a width or precision at ``pos``; return it and the new position."""
    if fmt.startswith("*", pos):
        return _int_arg(values), pos + 1
    digits = "".join(takewhile(_DIGITS.__contains__, fmt[pos:]))
    return (int(digits) if digits else 0), pos + len(digits)


def _render(fmt: str, args: Iterable[Any]) -> Iterator[str]:
    fmt = fmt.split("\0", 1)[0]
    values = iter(args)
    pos = 0
    while True:
        pct = fmt.find("%", pos)
        if pct < 0:
            yield from fmt[pos:]
            return
        yield from fmt[pos:pct]
        pos = pct + 1

        if fmt.startswith("%", pos):
            yield "%"
            pos += 1
            continue

        leftjust = fmt.startswith("-", pos)
        if leftjust:
            pos += 1
        fill = "0" if fmt.startswith("0", pos) else " "
        if fill == "0":
            pos += 1
        fmin, pos = _field(fmt, pos, values)
        fmax = 0
        if fmt.startswith(".", pos):
            fmax, pos = _field(fmt, pos + 1, values)

        if pos >= len(fmt):
            yield "%"
            return
        conv = fmt[pos]
        pos += 1

        sign = ""
        text = ""
        if conv == "c":
            text = _char_arg(values)
            fmax = 0
            fill = " "
        elif conv == "s":
            text = _str_arg(values)
            fill = " "
        elif conv == "d":
            number = _int_arg(values)
            if number < 0:
                sign = "-"
                number = -number
            text = str(number)
        elif conv == "u":
            text = str(_int_arg(values) & _MASK32)
            fmax = 0
        elif conv in _RADIX_SPECS:
            text = format(_int_arg(values) & _MASK32, _RADIX_SPECS[conv])
            fmax = 0
        elif conv in ("H", "h"):
            spec = "X" if conv == "H" else "x"
            high = format(_int_arg(values) & _MASK32, spec)
            low = format(_int_arg(values) & _MASK32, spec)
            # The low word lands at a fixed offset of eight characters, so it
            # only shows when the high word fills all eight digits.
            text = high + low if len(high) == 8 else high
            fmax = 0
        else:
            yield conv

        if not 0 <= fmin <= MAXSTR:
            fmin = 0
        if not 0 <= fmax <= MAXSTR:
            fmax = 0

        length = len(text)
        leading = 0
        if fmax or fmin:
            if fmax and length > fmax:
                length = fmax
            if fmin:
                leading = fmin - length
            if sign:
                leading -= 1
        padding = fill * max(leading, 0)

        if sign and fill == "0":
            yield sign
        if not leftjust:
            yield from padding
        if sign and fill == " ":
            yield sign
        yield from text[:length]
        if leftjust:
            yield from padding


def doprnt(fmt: str, args: Iterable[Any], emit: Callable[[str], Any]) -> None:
    """Format ``args`` by ``fmt``, passing each output character to ``emit``."""
    for char in _render(fmt, args):
        emit(char)


def iter_format(fmt: str, *args: Any) -> Iterator[str]:
    """Yield the formatted output one character at a time."""
    return _render(fmt, args)


def sprintf(fmt: str, *args: Any) -> str:
    """Return the formatted output as a string."""
    return "".join(_render(fmt, args))