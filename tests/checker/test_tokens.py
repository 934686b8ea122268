"""Tests for token extraction."""

import pytest
from crccheck.checker.tokens import (
    TokenMatch, extract_hash, find_token, format_token, is_token_text,
)


class TestExtractHash:
    """Tests for extract_hash."""
    
    @pytest.mark.parametrize("name,expected", [
        ("[11111111]", 0x11111111),
        ("[aabbccdd]", 0xAABBCCDD),
        ("[11111111]aa[bbb].txt", 0x11111111),
        ("[11111111][22222222]", 0x22222222),
        ("[build][A1B2C3D4].txt", 0xA1B2C3D4),
        ("Show - 01 [1080p][DEADBEEF].mkv", 0xDEADBEEF),
        ("[00000000].bin", 0),
    ])
    def test_valid_tokens(self, name, expected):
        """Test names that carry a valid token."""
        assert extract_hash(name) == expected
    
    @pytest.mark.parametrize("name", [
        "[111]",
        "[1111111122]",
        "[aabbccdd",
        "aabbccdd]",
        "aabbccdd",
        "[gggggggg].txt",
        "[1111 111].txt",
        "][11111111",
        "",
    ])
    def test_rejected_names(self, name):
        """Test names without a valid token."""
        assert extract_hash(name) is None
    
    def test_nested_brackets_use_innermost_pair(self):
        """Test that the nearest '[' before the last ']' is used."""
        assert extract_hash("[x[12345678]].txt") is None
        assert extract_hash("[x[12345678].txt") == 0x12345678


class TestFindToken:
    """Tests for find_token span reporting."""
    
    def test_span_covers_brackets(self):
        """Test that start/end cover the bracketed token."""
        name = "archive[A1B2C3D4].zip"
        match = find_token(name)
        
        assert match == TokenMatch(value=0xA1B2C3D4, start=7, end=17)
        assert name[match.start:match.end] == "[A1B2C3D4]"
    
    def test_span_of_fallback_token(self):
        """Test the span when an invalid trailing pair is skipped."""
        name = "x[0000ABCD]y[zz].txt"
        match = find_token(name)
        
        assert name[match.start:match.end] == "[0000ABCD]"


class TestFormatting:
    """Tests for token formatting helpers."""
    
    def test_format_token_uppercase_zero_padded(self):
        """Test that tokens render as 8 uppercase hex digits."""
        assert format_token(0xabc) == "[00000ABC]"
        assert format_token(0xFFFFFFFF) == "[FFFFFFFF]"
    
    def test_is_token_text(self):
        """Test the 8-hex-digit check."""
        assert is_token_text("DeadBeef")
        assert not is_token_text("DeadBee")
        assert not is_token_text("DeadBeefs")
        assert not is_token_text("+1234567")
