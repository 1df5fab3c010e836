import pytest

from xinukit.cstring import (
    atoi,
    atol,
    bzero,
    memchr,
    memcmp,
    memcpy,
    memset,
    strchr,
    strcmp,
    strlen,
    strncat,
    strncmp,
    strncpy,
    strnlen,
    strrchr,
    strstr,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123", 123),
        ("  -42", -42),
        ("\t+7x", 7),
        ("12\x0034", 12),
        ("99 bottles", 99),
    ],
)
def test_atoi_parses_leading_number(text, expected):
    assert atoi(text) == expected


@pytest.mark.parametrize("text", ["abc", "", "- 5", "+"])
def test_atoi_without_digits_is_zero(text):
    assert atoi(text) == 0


@pytest.mark.parametrize("text", ["123", "  -42", "\t+7x", "abc", "-2147483648"])
def test_atol_agrees_with_atoi(text):
    assert atol(text) == atoi(text)


def test_atoi_wraps_to_32_bits():
    assert atoi("-2147483648") == -2147483648
    assert atoi("2147483648") == -2147483648


def test_strlen_stops_at_nul():
    assert strlen("abc\x00def") == len("abc")
    assert strlen("") == 0


def test_strcmp_orders_strings():
    assert strcmp("abc", "abc") == 0
    assert strcmp("abc", "abd") < 0
    assert strcmp("abd", "abc") > 0
    assert strcmp("ab", "abc") < 0
    assert strcmp("abc", "abc\x00zz") == 0
    assert {strcmp("a", "z"), strcmp("z", "a")} == {-1, 1}


def test_strncmp_limits_comparison():
    assert strncmp("abcX", "abcY", 3) == 0
    assert strncmp("abcX", "abcY", 4) == ord("X") - ord("Y")
    assert strncmp("a", "b", 0) == 0
    assert strncmp("same", "same", 10) == 0
    assert strncmp("ab", "abc", 3) == -ord("c")


def test_strchr_finds_first_occurrence():
    text = "hello world"
    index = strchr(text, "o")
    assert text[index] == "o"
    assert "o" not in text[:index]
    assert strchr(text, "z") is None
    assert strchr(text, ord("w")) == text.index("w")


def test_strchr_nul_finds_terminator():
    assert strchr("abc\x00def", "\0") == strlen("abc\x00def")
    assert strrchr("abc", 0) == len("abc")


def test_strrchr_finds_last_occurrence():
    text = "hello world"
    assert strrchr(text, "o") == text.rindex("o")
    assert strrchr(text, "q") is None
    assert strrchr("ab\x00b", "b") == 1


@pytest.mark.parametrize(
    "haystack, needle",
    [("hello world", "world"), ("aaab", "ab"), ("abc", "abcd"), ("abc", "x")],
)
def test_strstr_matches_find(haystack, needle):
    found = haystack.find(needle)
    assert strstr(haystack, needle) == (None if found < 0 else found)


def test_strstr_empty_needle_is_not_found():
    assert strstr("abc", "") is None
    assert strstr("", "a") is None


def test_strnlen_caps_length():
    assert strnlen("hello", 3) == 3
    assert strnlen("hi", 10) == len("hi")
    with pytest.raises(ValueError):
        strnlen("hi", -1)


def test_strncat_appends_at_most_n():
    assert strncat("ab", "cdef", 2) == "abcd"
    assert strncat("ab", "cdef", 0) == "ab"
    assert strncat("ab\x00zz", "cd", 10) == "abcd"


def test_strncpy_pads_and_truncates():
    assert strncpy("hello", 3) == "hel"
    padded = strncpy("hi", 5)
    assert len(padded) == 5
    assert padded == "hi\0\0\0"
    assert strncpy("hi", 0) == ""


def test_memcmp_unsigned_difference():
    assert memcmp(b"\x80", b"\x00", 1) == 0x80
    assert memcmp(b"abc", b"abd", 2) == 0
    assert memcmp(b"abc", b"abd", 3) < 0
    assert memcmp(b"x", b"y", 0) == 0
    with pytest.raises(ValueError):
        memcmp(b"ab", b"abc", 3)


def test_memchr_search_rules():
    data = b"abcabc"
    assert memchr(data, "c", len(data)) == data.index(b"c")
    assert memchr(b"ab\x00c", "c", 4) is None
    assert memchr(b"\x90a", 0x90, 2) is None
    assert memchr(data, "c", 2) is None


def test_memcpy_copies_prefix():
    dest = bytearray(b"xxxxx")
    result = memcpy(dest, b"abc", 3)
    assert result is dest
    assert dest == bytearray(b"abcxx")
    with pytest.raises(ValueError):
        memcpy(bytearray(2), b"abc", 3)


def test_memset_and_bzero():
    buffer = bytearray(b"abcdef")
    assert memset(buffer, "z", 3) == bytearray(b"zzzdef")
    bzero(buffer, 4)
    assert buffer == bytearray(b"\x00\x00\x00\x00ef")
    bzero(buffer, 0)
    assert buffer[4:] == bytearray(b"ef")
    with pytest.raises(ValueError):
        memset(bytearray(1), 0, 2)