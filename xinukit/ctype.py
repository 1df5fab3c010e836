"""Character classification over the 7-bit ASCII table."""

from __future__ import annotations

import enum


class CharClass(enum.IntFlag):
    """Classification bits for one character."""

    UPPER = 0x01
    LOWER = 0x02
    DIGIT = 0x04
    SPACE = 0x08
    PUNCT = 0x10
    CONTROL = 0x20
    HEX = 0x40


def _build_table() -> tuple[CharClass, ...]:
    ctl, spc, pun = CharClass.CONTROL, CharClass.SPACE, CharClass.PUNCT
    upper, lower, hexdigit = CharClass.UPPER, CharClass.LOWER, CharClass.HEX
    table = [ctl] * 32
    table[9:14] = [spc] * 5  # tab, newline, vertical tab, form feed, return
    table += [spc] + [pun] * 15  # space and ! through /
    table += [CharClass.DIGIT] * 10 + [pun] * 7  # 0-9 and : through @
    table += [upper | hexdigit] * 6 + [upper] * 20 + [pun] * 6  # A-Z and [ through `
    table += [lower | hexdigit] * 6 + [lower] * 20 + [pun] * 4 + [ctl]  # a-z, { through ~, DEL
    return tuple(table)


_TABLE = _build_table()


def classify(ch) -> CharClass:
    """Return the class bits of a character or character code.

    Codes outside 0..127 (including EOF) have no class.
    """
    if isinstance(ch, (str, bytes)):
        if len(ch) != 1:
            raise ValueError("expected a single character")
        code = ord(ch)
    elif isinstance(ch, int):
        code = ch
    else:
        raise TypeError(f"expected a character or an int, not {type(ch).__name__}")
    if 0 <= code < len(_TABLE):
        return _TABLE[code]
    return CharClass(0)


def _has(ch, bits: CharClass) -> bool:
    return bool(classify(ch) & bits)


def isdigit(ch) -> bool:
    """True for 0-9."""
    return _has(ch, CharClass.DIGIT)


def isupper(ch) -> bool:
    """True for A-Z."""
    return _has(ch, CharClass.UPPER)


def islower(ch) -> bool:
    """True for a-z."""
    return _has(ch, CharClass.LOWER)


def isalpha(ch) -> bool:
    """True for ASCII letters."""
    return _has(ch, CharClass.UPPER | CharClass.LOWER)


def isxdigit(ch) -> bool:
    """True for hexadecimal digits."""
    return _has(ch, CharClass.DIGIT | CharClass.HEX)


def isspace(ch) -> bool:
    """True for space, tab, newline, vertical tab, form feed and return."""
    return _has(ch, CharClass.SPACE)


def ispunct(ch) -> bool:
    """True for printable non-alphanumeric, non-space characters."""
    return _has(ch, CharClass.PUNCT)


def iscntrl(ch) -> bool:
    """True for control characters other than the whitespace controls."""
    return _has(ch, CharClass.CONTROL)