"""String and memory helpers with C library semantics.

Strings are Python ``str`` objects; a NUL character ends a string just as
the terminator does in C, so anything after the first ``"\\0"`` is ignored.
Memory helpers work on ``bytes``/``bytearray`` objects.  Functions that
return a position in C return an index here, or ``None`` when nothing is
found.
"""

from __future__ import annotations

from itertools import takewhile, zip_longest

_NUL = "\0"
_DIGITS = frozenset("0123456789")
_BLANKS = " \t"


def _terminated(text: str) -> str:
    """Return ``text`` up to (not including) its first NUL character."""
    end = text.find(_NUL)
    return text if end < 0 else text[:end]


def _code(ch) -> int:
    """Return the character code of a one-character string, bytes or int."""
    if isinstance(ch, (str, bytes, bytearray)):
        if len(ch) != 1:
            raise ValueError("expected a single character")
        return ord(ch)
    if isinstance(ch, int):
        return ch
    raise TypeError(f"expected a character or an int, not {type(ch).__name__}")


def _wrap32(value: int) -> int:
    """Reduce ``value`` to a signed 32-bit integer."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _parse_decimal(text: str) -> int:
    text = _terminated(text).lstrip(_BLANKS)
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    digits = "".join(takewhile(_DIGITS.__contains__, text))
    value = int(digits) if digits else 0
    return _wrap32(-value if negative else value)


def atoi(text: str) -> int:
    """Convert leading decimal digits to a 32-bit int.

    Leading spaces and tabs are skipped; one sign may follow, and the digits
    must come straight after it.  Parsing stops at the first non-digit.
    """
    return _parse_decimal(text)


def atol(text: str) -> int:
    """Convert leading decimal digits to a 32-bit long (same rules as atoi)."""
    return _parse_decimal(text)


def strlen(text: str) -> int:
    """Length of ``text`` up to its first NUL."""
    return len(_terminated(text))


def strcmp(first: str, second: str) -> int:
    """Compare two strings, returning -1, 0 or 1."""
    a, b = _terminated(first), _terminated(second)
    if a == b:
        return 0
    return -1 if a < b else 1


def strncmp(first: str, second: str, n: int) -> int:
    """Compare at most ``n`` characters; return the difference of the first mismatch."""
    if n <= 0:
        return 0
    a, b = _terminated(first)[:n], _terminated(second)[:n]
    for x, y in zip_longest(a, b, fillvalue=_NUL):
        if x != y:
            return ord(x) - ord(y)
    return 0


def strchr(text: str, ch) -> int | None:
    """Index of the first ``ch`` in ``text``; searching for NUL finds the end."""
    text = _terminated(text)
    code = _code(ch)
    if code == 0:
        return len(text)
    index = text.find(chr(code))
    return None if index < 0 else index


def strrchr(text: str, ch) -> int | None:
    """Index of the last ``ch`` in ``text``; searching for NUL finds the end."""
    text = _terminated(text)
    code = _code(ch)
    if code == 0:
        return len(text)
    index = text.rfind(chr(code))
    return None if index < 0 else index


def strstr(haystack: str, needle: str) -> int | None:
    """Index of the first occurrence of ``needle``.

    An empty needle is never found.
    """
    haystack, needle = _terminated(haystack), _terminated(needle)
    if not needle:
        return None
    index = haystack.find(needle)
    return None if index < 0 else index


def strnlen(text: str, maxlen: int) -> int:
    """Length of ``text`` up to its first NUL, but at most ``maxlen``."""
    if maxlen < 0:
        raise ValueError("maxlen must not be negative")
    return min(len(_terminated(text)), maxlen)


def strncat(first: str, second: str, n: int) -> str:
    """Return ``first`` followed by at most ``n`` characters of ``second``."""
    return _terminated(first) + _terminated(second)[: max(n, 0)]


def strncpy(source: str, n: int) -> str:
    """Return exactly ``n`` characters: ``source`` truncated or NUL padded."""
    if n <= 0:
        return ""
    return _terminated(source)[:n].ljust(n, _NUL)


def _check_span(n: int, *buffers) -> None:
    for buffer in buffers:
        if n > len(buffer):
            raise ValueError(f"length {n} exceeds buffer of {len(buffer)} bytes")


def memcmp(first, second, n: int) -> int:
    """Compare ``n`` bytes; return the unsigned difference of the first mismatch."""
    if n <= 0:
        return 0
    _check_span(n, first, second)
    for x, y in zip(bytes(first[:n]), bytes(second[:n])):
        if x != y:
            return x - y
    return 0


def memchr(data, ch, n: int) -> int | None:
    """Index of byte ``ch`` within the first ``n`` bytes of ``data``.

    The search stops at a zero byte, and bytes of 0x80 and above never
    match, as they compare as negative characters.
    """
    target = _code(ch) & 0xFF
    for index, byte in enumerate(bytes(data[: max(n, 0)])):
        if byte == 0:
            break
        if byte < 0x80 and byte == target:
            return index
    return None


def memcpy(dest: bytearray, source, n: int) -> bytearray:
    """Copy ``n`` bytes of ``source`` into the start of ``dest``; return ``dest``."""
    if n <= 0:
        return dest
    _check_span(n, dest, source)
    dest[:n] = bytes(source[:n])
    return dest


def memset(buffer: bytearray, value, n: int) -> bytearray:
    """Fill the first ``n`` bytes of ``buffer`` with ``value``; return ``buffer``."""
    if n <= 0:
        return buffer
    _check_span(n, buffer)
    buffer[:n] = bytes((_code(value) & 0xFF,)) * n
    return buffer


def bzero(buffer: bytearray, n: int) -> None:
    """Zero the first ``n`` bytes of ``buffer``."""
    memset(buffer, 0, n)