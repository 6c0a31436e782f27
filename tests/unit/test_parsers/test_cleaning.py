"""Tests for vendor cleanup passes."""

import pytest

from samvid.parsers.cleaning import (
    clean_vendor,
    collapse_whitespace,
    correct_vendor,
    is_blacklisted,
    strip_boilerplate,
    strip_digit_runs,
    trim,
)


class TestCleaningPasses:
    """Each pass on its own."""

    def test_strip_boilerplate_tokens(self):
        result = strip_boilerplate("A/c POS AMAZON PVT LTD")
        assert "A/c" not in result
        assert "POS" not in result
        assert "PVT" not in result
        assert "LTD" not in result
        assert "AMAZON" in result

    def test_strip_boilerplate_keeps_words_containing_tokens(self):
        # "ref" inside "Refund", "pos" inside "Posh", "bank" inside "Bankura"
        result = strip_boilerplate("Refund Posh Bankura")
        assert collapse_whitespace(result).strip() == "Refund Posh Bankura"

    def test_strip_boilerplate_masks(self):
        result = strip_boilerplate("XX1234 **5678 Swiggy")
        assert "XX" not in result
        assert "*" not in result
        assert "Swiggy" in result

    def test_strip_boilerplate_keeps_x_inside_words(self):
        assert "EXXON" in strip_boilerplate("EXXON MOBIL")

    def test_strip_boilerplate_custom_tokens(self):
        assert strip_boilerplate("ZOMATO LIMITED", tokens=["limited"]).strip() == "ZOMATO"

    def test_strip_digit_runs(self):
        assert strip_digit_runs("Swiggy 123456 order 42").split() == ["Swiggy", "order", "42"]

    def test_strip_digit_runs_keeps_short_numbers(self):
        assert strip_digit_runs("Shop 123") == "Shop 123"

    def test_collapse_whitespace(self):
        assert collapse_whitespace("a   b\t\nc") == "a b c"

    def test_trim(self):
        assert trim("  x  ") == "x"


class TestCleanVendor:
    """All passes in sequence."""

    def test_clean_vendor_removes_masked_numbers_and_jargon(self):
        assert clean_vendor("A/c XX1234 card ending 5678 Amazon Pvt Ltd") == "Amazon"

    def test_clean_vendor_no_double_spaces(self):
        cleaned = clean_vendor("Big   Bazaar  REF 99887766   NEFT  Store")
        assert "  " not in cleaned
        assert cleaned == "Big Bazaar Store"

    def test_clean_vendor_empty(self):
        assert clean_vendor("") == ""


class TestCorrectVendor:
    """Blacklist correction."""

    @pytest.mark.parametrize("stub", ["at", "to", "via", "from", "unknown", "AT", "Unknown"])
    def test_stub_replaced_debit(self, stub):
        assert correct_vendor(stub, is_credit=False) == "Transfer to Account"

    @pytest.mark.parametrize("stub", ["at", "to", "via", "from", "unknown"])
    def test_stub_replaced_credit(self, stub):
        assert correct_vendor(stub, is_credit=True) == "Incoming Transfer"

    def test_short_vendor_replaced(self):
        assert correct_vendor("X", is_credit=False) == "Transfer to Account"
        assert correct_vendor("", is_credit=True) == "Incoming Transfer"

    def test_real_vendor_kept(self):
        assert correct_vendor("Starbucks", is_credit=False) == "Starbucks"

    def test_two_letter_vendor_kept(self):
        assert not is_blacklisted("HP")
        assert correct_vendor("HP", is_credit=False) == "HP"
