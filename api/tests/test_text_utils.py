"""
Unit tests for the text normalizer and the obfuscated email decoder.
"""

import pytest

from utils.text import clean_text, decode_cf_email


class TestCleanText:
    """Test suite for clean_text."""

    @pytest.mark.parametrize("raw,expected", [
        (None, ""),
        ("", ""),
        ("   ", ""),
        ("  ABC\n\t TRUCKING  ", "ABC TRUCKING"),
        ("ABC  TRUCKING", "ABC TRUCKING"),
        ("Legal Name:", "Legal Name:"),
    ])
    def test_clean_text(self, raw, expected):
        assert clean_text(raw) == expected


class TestDecodeCfEmail:
    """Test suite for decode_cf_email."""

    def test_decodes_xor_obfuscated_email(self):
        assert decode_cf_email("422b2c242d022320216c212d2f") == "info@abc.com"

    def test_key_only_yields_empty_string(self):
        assert decode_cf_email("42") == ""

    @pytest.mark.parametrize("encoded", [None, "", "zz1234", "42zz"])
    def test_malformed_values_yield_empty_string(self, encoded):
        assert decode_cf_email(encoded) == ""

    def test_result_is_not_validated_as_email(self):
        # 0x00 key leaves the bytes unchanged: "hi"
        assert decode_cf_email("006869") == "hi"
