import pytest

from xinukit.printf import doprnt, iter_format, sprintf


def test_plain_text_passes_through():
    assert sprintf("hello world") == "hello world"


def test_double_percent_prints_one():
    assert sprintf("100%%") == "100%"


def test_nul_ends_format():
    assert sprintf("ab\0cd") == "ab"


@pytest.mark.parametrize("value", [0, 7, -42, 2147483647, -2147483647])
def test_decimal_round_trip(value):
    assert int(sprintf("%d", value)) == value


def test_decimal_wraps_to_32_bits():
    assert int(sprintf("%d", 2**32 + 5)) == 5


@pytest.mark.parametrize("value", [0, 1, -1, 123456, -2147483648])
def test_unsigned_round_trip(value):
    assert int(sprintf("%u", value)) == value & 0xFFFFFFFF


@pytest.mark.parametrize("value", [0, 255, -1, 0x1234ABCD, 3000000000])
def test_hex_round_trip_and_case(value):
    lower = sprintf("%x", value)
    upper = sprintf("%X", value)
    assert int(lower, 16) == value & 0xFFFFFFFF
    assert lower == upper.lower()
    assert lower == lower.lower()


@pytest.mark.parametrize("value", [0, 8, 511, -1])
def test_octal_round_trip(value):
    assert int(sprintf("%o", value), 8) == value & 0xFFFFFFFF


@pytest.mark.parametrize("value", [0, 1, 6, -1, 0x80000000])
def test_binary_round_trip(value):
    text = sprintf("%b", value)
    assert set(text) <= {"0", "1"}
    assert int(text, 2) == value & 0xFFFFFFFF


def test_right_justified_width():
    text = sprintf("%8d", 5)
    assert len(text) == 8
    assert text.strip() == "5"
    assert text.endswith("5")


def test_left_justified_width():
    assert sprintf("%-8d|", 5) == "5".ljust(8) + "|"


def test_zero_fill_negative_puts_sign_first():
    assert sprintf("%05d", -42) == "-0042"


def test_space_fill_negative_puts_sign_last():
    assert sprintf("%5d", -42) == "  -42"


def test_left_justified_zero_fill_pads_with_zeros():
    assert sprintf("%-05d", 7) == "70000"


def test_string_precision_truncates():
    assert sprintf("%.3s", "abcdef") == "abc"
    assert sprintf("%-6.2s|", "hello") == "he    |"


def test_decimal_precision_truncates_digits():
    assert sprintf("%.2d", 12345) == "12"


def test_string_zero_flag_still_pads_with_spaces():
    assert sprintf("%06s", "ab") == "ab".rjust(6)


def test_null_string():
    assert sprintf("%s", None) == "(null)"


def test_characters_from_int_and_str():
    assert sprintf("%c%c", 72, "i") == "Hi"


def test_star_width_matches_literal_width():
    assert sprintf("%*d", 6, 1) == sprintf("%6d", 1)
    assert sprintf("%.*s", 2, "xyz") == sprintf("%.2s", "xyz")


def test_width_beyond_limit_is_ignored():
    assert sprintf("%81d", 3) == "3"
    assert len(sprintf("%80d", 3)) == 80


def test_trailing_percent_is_printed():
    assert sprintf("abc%") == "abc%"


def test_unknown_conversion_is_echoed():
    assert sprintf("%q") == "q"


def test_two_word_hex_with_full_high_word():
    assert sprintf("%H", 0x12345678, 0xAB) == sprintf("%X%X", 0x12345678, 0xAB)
    assert sprintf("%h", 0xDEADBEEF, 0x1F) == sprintf("%x%x", 0xDEADBEEF, 0x1F)


def test_two_word_hex_with_short_high_word_shows_high_only():
    assert sprintf("%H", 0x1F, 0xAB) == sprintf("%X", 0x1F)


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        sprintf("%d %d", 1)


def test_wrong_argument_type_raises():
    with pytest.raises(TypeError):
        sprintf("%d", "nope")
    with pytest.raises(TypeError):
        sprintf("%s", 12)


def test_doprnt_emits_each_character():
    collected = []
    result = doprnt("x=%d, s=%s", [10, "ok"], collected.append)
    assert result is None
    assert collected == list(iter_format("x=%d, s=%s", 10, "ok"))
    assert "".join(collected) == sprintf("x=%d, s=%s", 10, "ok")
    assert all(len(ch) == 1 for ch in collected)


def test_iter_format_is_lazy_generator():
    chars = iter_format("ab%d", 3)
    assert next(chars) == "a"
    assert "".join(chars) == "b3"


def test_extra_arguments_are_ignored():
    assert sprintf("%d", 1, 2, 3) == sprintf("%d", 1)