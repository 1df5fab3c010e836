"""Formatted input in the style of the kernel's small scanf family.

The directive syntax is ``%[*][width][l|h]conv``.  These are the
conversions:

* ``d``, ``u`` and any other unknown letter: a decimal integer.
* ``o``: an octal integer.
* ``x``: a hexadecimal integer, without a ``0x`` prefix.
* ``c``: ``width`` characters (one by default), with no blank skipping.
* ``s``: a word, after skipping blanks.
* ``[set]`` and ``[^set]``: a run of characters in (or not in) the set.

Only space, tab and newline count as blanks.  A capital conversion letter
means "long".  A ``*`` suppresses the assignment.  Integers are returned
as 32-bit values, or 16-bit values with ``h``.

Instead of storing through pointers, the scanners return the list of
converted values.  Where the C routine returns -1 because input ran out,
``EOFError`` is raised.  A format that ends inside a directive raises
``ValueError``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from xinukit.ctype import isdigit, isupper

_BLANKS = frozenset(" \t\n")
_HEX_LETTERS = frozenset("abcdefABCDEF")
_DEFAULT_WIDTH = 30000

Value = Union[int, str]


class _Source(Protocol):
    def getch(self) -> str: ...

    def ungetch(self) -> None: ...


class StringSource:
    """Character source over a string; input ends at the first NUL."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.position = 0

    def getch(self) -> str:
        """Return the next character, or ``""`` at the end of input."""
        if self.position >= len(self.text) or self.text[self.position] == "\0":
            return ""
        ch = self.text[self.position]
        self.position += 1
        return ch

    def ungetch(self) -> None:
        """Push back the character read last."""
        if self.position == 0:
            raise ValueError("no character to push back")
        self.position -= 1


class _Size(enum.Enum):
    SHORT = 16
    REGULAR = 32
    LONG = 32


@dataclass(frozen=True)
class _CharSet:
    members: frozenset
    negated: bool

    def accepts(self, ch: str) -> bool:
        return (ch in self.members) != self.negated


@dataclass(frozen=True)
class _Directive:
    conv: str
    width: int
    size: _Size
    assign: bool
    charset: Optional[_CharSet] = None


def _parse_class(fmt: str, pos: int) -> tuple[_CharSet, int]:
    negated = fmt.startswith("^", pos)
    if negated:
        pos += 1
    end = fmt.find("]", pos)
    if end < 0:
        raise ValueError("unterminated character class in format")
    return _CharSet(frozenset(fmt[pos:end]), negated), end + 1


def _parse_directive(fmt: str, pos: int) -> tuple[_Directive, int]:
    """Parse the directive after a ``%``; return it and the new position."""

    def take() -> str:
        nonlocal pos
        ch = fmt[pos] if pos < len(fmt) else ""
        pos += 1
        return ch

    ch = take()
    assign = ch != "*"
    if not assign:
        ch = take()
    width = 0
    while ch and isdigit(ch):
        width = width * 10 + int(ch)
        ch = take()
    if width == 0:
        width = _DEFAULT_WIDTH
    size = _Size.REGULAR
    if ch == "l":
        ch = take()
        size = _Size.LONG
    elif ch == "h":
        size = _Size.SHORT
        ch = take()
    charset = None
    if ch == "[":
        charset, pos = _parse_class(fmt, pos)
    if ch and isupper(ch):
        ch = ch.lower()
        size = _Size.LONG
    if not ch:
        raise ValueError("format ends inside a conversion")
    return _Directive(ch, width, size, assign, charset), pos


def _skip_blanks(source: _Source) -> None:
    while (ch := source.getch()) in _BLANKS:
        pass
    if ch:
        source.ungetch()


def _is_digit(ch: str, base: int) -> bool:
    return ch != "" and (isdigit(ch) or (base == 16 and ch in _HEX_LETTERS))


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def _scan_text(d: _Directive, source: _Source) -> tuple[Optional[str], bool]:
    width = 1 if d.conv == "c" and d.width == _DEFAULT_WIDTH else d.width
    ch = source.getch()
    if d.conv == "s":
        while ch in _BLANKS:
            ch = source.getch()

    def stops(c: str) -> bool:
        if d.conv == "c":
            return False
        if d.conv == "s":
            return c in _BLANKS
        return not d.charset.accepts(c)

    chars = []
    while ch and not stops(ch):
        chars.append(ch)
        width -= 1
        if width <= 0:
            break
        ch = source.getch()
    ended = not ch
    if ch and width > 0:
        source.ungetch()
    if d.assign and chars:
        return "".join(chars), ended
    return None, ended


def _scan_number(d: _Directive, source: _Source) -> tuple[Optional[int], bool]:
    base = {"o": 8, "x": 16}.get(d.conv, 10)
    width = d.width
    ch = source.getch()
    while ch in _BLANKS:
        ch = source.getch()
    negative = False
    consumed = False
    if ch == "-":
        negative = consumed = True
        ch = source.getch()
        width -= 1
    elif ch == "+":
        width -= 1
        ch = source.getch()

    value = 0
    while True:
        width -= 1
        if width < 0 or not _is_digit(ch, base):
            break
        value = value * base + int(ch, 16)
        consumed = True
        ch = source.getch()

    ended = not ch
    if ch:
        source.ungetch()
    if not d.assign or not consumed:
        return None, ended
    return _wrap(-value if negative else value, d.size.value), ended


def _convert(d: _Directive, source: _Source) -> tuple[Optional[Value], bool]:
    if d.conv in ("c", "s", "["):
        return _scan_text(d, source)
    return _scan_number(d, source)


def doscan(fmt: str, source: _Source) -> list[Value]:
    """Scan ``source`` according to ``fmt`` and return the converted values.

    ``source`` provides ``getch()``, returning the next character or ``""``
    at the end of input, and ``ungetch()``, pushing back the last one.
    Scanning stops at the first literal that does not match.
    """
    fmt = fmt.split("\0", 1)[0]
    values: list[Value] = []
    pos = 0
    while pos < len(fmt):
        ch = fmt[pos]
        pos += 1
        if ch == "%" and fmt.startswith("%", pos):
            pos += 1
        elif ch == "%":
            directive, pos = _parse_directive(fmt, pos)
            value, ended = _convert(directive, source)
            if value is not None:
                values.append(value)
            if ended:
                if not values:
                    raise EOFError("input ended before any conversion")
                return values
            continue
        elif ch in _BLANKS:
            _skip_blanks(source)
            continue

        got = source.getch()
        if got != ch:
            if not got:
                raise EOFError(f"input ended before literal {ch!r}")
            source.ungetch()
            return values
    return values


def sscanf(text: str, fmt: str) -> list[Value]:
    """Scan ``text`` according to ``fmt`` and return the converted values."""
    return doscan(fmt, StringSource(text))