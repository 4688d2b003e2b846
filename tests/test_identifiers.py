"""
Unit Tests for Identifier Sanitization
"""

import re

import pytest

from flow_compiler.services.compiler.identifiers import is_valid_id, sanitize_id


SAMPLES = [
    "",
    "SCREEN_1",
    "id_1234_abc",
    "already_valid",
    "order#1",
    "order1",
    "with space-and.dots",
    "ünïcode_名前_9",
    "1234567890",
    "!!!",
    "trailing\n",
]


# =============================================================================
# Digit Mapping Tests
# =============================================================================


class TestDigitMapping:
    """Digits are spelled as letters, 0 -> A through 9 -> J."""

    def test_screen_ids(self):
        assert sanitize_id("SCREEN_0") == "SCREEN_A"
        assert sanitize_id("SCREEN_1") == "SCREEN_B"
        assert sanitize_id("SCREEN_2") == "SCREEN_C"

    def test_mixed_identifier(self):
        assert sanitize_id("id_1234_abc") == "id_BCDE_abc"

    def test_all_digits(self):
        assert sanitize_id("0123456789") == "ABCDEFGHIJ"


# =============================================================================
# Character Policy Tests
# =============================================================================


class TestCharacterPolicy:
    """Tests for characters outside the platform charset."""

    def test_valid_identifier_returned_unchanged(self):
        assert sanitize_id("Already_Valid_id") == "Already_Valid_id"

    def test_punctuation_and_whitespace_dropped(self):
        assert sanitize_id("first name-2.x") == "firstnameCx"

    def test_unicode_dropped(self):
        assert sanitize_id("café_1") == "caf_B"

    def test_may_return_empty(self):
        assert sanitize_id("#!?") == ""
        assert sanitize_id("") == ""

    def test_dropped_characters_can_collide(self):
        assert sanitize_id("order#1") == sanitize_id("order1") == "orderB"

    def test_trailing_newline_is_not_valid(self):
        assert is_valid_id("abc\n") is False
        assert sanitize_id("abc\n") == "abc"


# =============================================================================
# Property Tests
# =============================================================================


class TestSanitizeProperties:
    """Idempotence and charset invariants."""

    @pytest.mark.parametrize("value", SAMPLES)
    def test_idempotent(self, value):
        once = sanitize_id(value)
        assert sanitize_id(once) == once

    @pytest.mark.parametrize("value", SAMPLES)
    def test_output_charset(self, value):
        assert re.fullmatch(r"[A-Za-z_]*", sanitize_id(value))
        assert is_valid_id(sanitize_id(value))
