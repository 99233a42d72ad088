"""Unit tests for codewalk.stepper."""

import pytest

from codewalk.exceptions import AddressOutOfRange, ErrorKind, InvalidPattern, NoMatch, UnsupportedDirection
from codewalk.stepper import Direction, Range, search, step

THREE_LINES = b"line1\nline2\nline3\n"
# A three-byte euro sign followed by ASCII text
EURO_ABC = "€abc".encode()

# ---------------------------------------------------------------------------
# Line stepping
# ---------------------------------------------------------------------------


class TestForwardLines:
    def test_no_direction_is_absolute(self):
        assert step(THREE_LINES, 10, 12, Direction.NONE, 2) == Range(6, 12)

    def test_from_start(self):
        assert step(THREE_LINES, 0, 0, Direction.FORWARD, 1) == Range(0, 6)
        assert step(THREE_LINES, 0, 0, Direction.FORWARD, 2) == Range(6, 12)

    def test_from_line_boundary(self):
        assert step(THREE_LINES, 0, 6, Direction.FORWARD, 1) == Range(6, 12)

    def test_snaps_to_next_line(self):
        assert step(THREE_LINES, 0, 3, Direction.FORWARD, 1) == Range(6, 12)

    def test_zero_count_returns_snapped_position(self):
        assert step(THREE_LINES, 0, 3, Direction.FORWARD, 0) == Range(6, 6)

    def test_selects_only_the_last_line(self):
        assert step(THREE_LINES, 0, 0, Direction.FORWARD, 3) == Range(12, 18)

    def test_past_end(self):
        with pytest.raises(AddressOutOfRange) as exc_info:
            step(THREE_LINES, 0, 0, Direction.FORWARD, 4)
        assert exc_info.value.kind is ErrorKind.ADDRESS_OUT_OF_RANGE

    def test_from_end(self):
        with pytest.raises(AddressOutOfRange):
            step(THREE_LINES, 18, 18, Direction.FORWARD, 1)

    def test_unterminated_last_line(self):
        assert step(b"a\nb", 0, 0, Direction.FORWARD, 2) == Range(2, 3)
        assert step(b"abc", 0, 0, Direction.FORWARD, 1) == Range(0, 3)
        with pytest.raises(AddressOutOfRange):
            step(b"a\nb", 0, 0, Direction.FORWARD, 3)


class TestBackwardLines:
    def test_one_is_start_of_current_line(self):
        assert step(THREE_LINES, 14, 16, Direction.BACKWARD, 1) == Range(12, 12)

    def test_previous_lines(self):
        assert step(THREE_LINES, 12, 18, Direction.BACKWARD, 2) == Range(6, 12)
        assert step(THREE_LINES, 12, 18, Direction.BACKWARD, 3) == Range(0, 6)

    def test_zero_count_returns_snapped_position(self):
        assert step(THREE_LINES, 14, 16, Direction.BACKWARD, 0) == Range(12, 12)

    def test_buffer_start_counts_as_line_start(self):
        assert step(THREE_LINES, 3, 3, Direction.BACKWARD, 1) == Range(0, 0)

    def test_past_start(self):
        with pytest.raises(AddressOutOfRange):
            step(THREE_LINES, 12, 18, Direction.BACKWARD, 4)
        with pytest.raises(AddressOutOfRange):
            step(THREE_LINES, 0, 0, Direction.BACKWARD, 2)

    def test_from_end_of_buffer(self):
        assert step(THREE_LINES, 18, 18, Direction.BACKWARD, 2) == Range(12, 18)


# ---------------------------------------------------------------------------
# Rune stepping
# ---------------------------------------------------------------------------


class TestForwardRunes:
    def test_skips_whole_multibyte_rune(self):
        assert step(EURO_ABC, 0, 0, Direction.FORWARD, 1, char_offset=True) == Range(3, 3)
        assert step(EURO_ABC, 0, 0, Direction.FORWARD, 2, char_offset=True) == Range(4, 4)

    def test_up_to_end(self):
        assert step(EURO_ABC, 0, 0, Direction.FORWARD, 4, char_offset=True) == Range(6, 6)

    def test_past_end(self):
        with pytest.raises(AddressOutOfRange):
            step(EURO_ABC, 0, 0, Direction.FORWARD, 5, char_offset=True)

    def test_no_direction_counts_from_start(self):
        assert step(EURO_ABC, 4, 5, Direction.NONE, 1, char_offset=True) == Range(3, 3)

    def test_invalid_bytes_are_single_runes(self):
        assert step(b"\xffab", 0, 0, Direction.FORWARD, 1, char_offset=True) == Range(1, 1)
        assert step(b"\xe2\x82", 0, 0, Direction.FORWARD, 1, char_offset=True) == Range(1, 1)
        assert step(b"\xe2\x82", 0, 0, Direction.FORWARD, 2, char_offset=True) == Range(2, 2)


class TestBackwardRunes:
    def test_ascii(self):
        assert step(EURO_ABC, 6, 6, Direction.BACKWARD, 3, char_offset=True) == Range(3, 3)

    def test_lands_on_rune_start(self):
        assert step(EURO_ABC, 3, 3, Direction.BACKWARD, 1, char_offset=True) == Range(0, 0)
        assert step(EURO_ABC, 6, 6, Direction.BACKWARD, 4, char_offset=True) == Range(0, 0)

    def test_past_start(self):
        with pytest.raises(AddressOutOfRange):
            step(EURO_ABC, 6, 6, Direction.BACKWARD, 5, char_offset=True)
        with pytest.raises(AddressOutOfRange):
            step(EURO_ABC, 0, 0, Direction.BACKWARD, 1, char_offset=True)

    def test_zero_count(self):
        assert step(EURO_ABC, 4, 6, Direction.BACKWARD, 0, char_offset=True) == Range(4, 4)


# ---------------------------------------------------------------------------
# Pattern search
# ---------------------------------------------------------------------------


class TestSearch:
    def test_match_after_origin(self):
        assert search(b"abcXabc", 4, "abc") == Range(4, 7)

    def test_wraps_around(self):
        assert search(b"abcXabc", 7, "abc") == Range(0, 3)
        assert search(b"abcXabc", 5, "abc") == Range(0, 3)

    def test_match_at_start_without_wrapping(self):
        assert search(b"abcXabc", 0, "abc") == Range(0, 3)

    def test_no_match(self):
        with pytest.raises(NoMatch, match="no match for /zzz/"):
            search(b"abcXabc", 0, "zzz")
        with pytest.raises(NoMatch):
            search(b"abcXabc", 3, "zzz")

    def test_invalid_pattern(self):
        with pytest.raises(InvalidPattern) as exc_info:
            search(b"abc", 0, "a(")
        assert exc_info.value.kind is ErrorKind.INVALID_PATTERN

    def test_backward_is_unsupported(self):
        with pytest.raises(UnsupportedDirection):
            search(b"abc", 0, "abc", Direction.BACKWARD)
        # Checked before the pattern is even compiled
        with pytest.raises(UnsupportedDirection):
            search(b"", 0, "(", Direction.BACKWARD)

    def test_none_direction_searches_forward(self):
        assert search(b"abcXabc", 1, "abc", Direction.NONE) == Range(4, 7)

    def test_offsets_are_bytes(self):
        assert search("café au lait".encode(), 0, "é") == Range(3, 5)
        assert search("café au lait".encode(), 0, "au") == Range(6, 8)

    def test_dot_matches_whole_character(self):
        assert search("€abc".encode(), 0, ".") == Range(0, 3)
        assert search("€abc".encode(), 3, ".") == Range(3, 4)

    def test_character_class_compares_characters(self):
        # "ã" and "é" share their UTF-8 lead byte
        with pytest.raises(NoMatch):
            search("ã\n".encode(), 0, "[é]")

    def test_invalid_utf8_byte_is_one_character(self):
        assert search(b"a\xffb", 0, "a.b") == Range(0, 3)
        assert search(b"a\xffb", 1, "b") == Range(2, 3)

    def test_origin_is_start_of_text(self):
        """The search starts afresh at the origin, so ``^`` matches there."""
        assert search(b"xab", 1, "^ab") == Range(1, 3)
