"""Tests for the reconciliation policy."""

import pytest
from crccheck.checker.errors import NoExtensionAnchor
from crccheck.checker.policy import Decision, Outcome, decide
from crccheck.checker.tokens import find_token


class TestDecide:
    """Tests for decide."""
    
    def test_no_token_without_add_is_skipped(self):
        """Test that untagged files are skipped when add is off."""
        decision = decide("a.txt", None, 0x1234, update=True, add=False)
        
        assert decision == Decision(Outcome.SKIPPED)
        assert not decision.requires_rename
    
    def test_no_token_with_add_inserts_before_extension(self):
        """Test that add places the token before the final extension."""
        decision = decide("archive.tar.gz", None, 0xA1B2C3D4, update=False, add=True)
        
        assert decision.outcome is Outcome.ADDED
        assert decision.new_name == "archive.tar[A1B2C3D4].gz"
    
    def test_add_without_extension_raises(self):
        """Test that a name without extension cannot get a token."""
        with pytest.raises(NoExtensionAnchor):
            decide("README", None, 1, update=False, add=True)
    
    def test_matching_token_is_ok(self):
        """Test that a matching token is OK regardless of flags."""
        name = "a[0000ABCD].txt"
        for update in (False, True):
            for add in (False, True):
                assert decide(name, find_token(name), 0xABCD, update, add) == Decision(Outcome.OK)
    
    def test_lowercase_token_matches(self):
        """Test that token comparison is numeric, not textual."""
        name = "a[deadbeef].txt"
        assert decide(name, find_token(name), 0xDEADBEEF, True, True).outcome is Outcome.OK
    
    def test_mismatch_without_update(self):
        """Test that a differing token is reported when update is off."""
        name = "a[00000000].txt"
        decision = decide(name, find_token(name), 0x1234, update=False, add=True)
        
        assert decision == Decision(Outcome.MISMATCH)
    
    def test_mismatch_with_update_replaces_token(self):
        """Test that update rewrites only the token span."""
        name = "show [1080p][00000000] v2.mkv"
        decision = decide(name, find_token(name), 0xCAFEBABE, update=True, add=False)
        
        assert decision.outcome is Outcome.UPDATED
        assert decision.new_name == "show [1080p][CAFEBABE] v2.mkv"
    
    def test_update_leaves_lookalike_text_alone(self):
        """Test that an earlier identical bracket sequence is not touched."""
        name = "[00000000] copy [00000000].bin"
        decision = decide(name, find_token(name), 0x11, update=True, add=False)
        
        assert decision.new_name == "[00000000] copy [00000011].bin"
    
    def test_update_lowercase_token_is_uppercased(self):
        """Test that a lowercase token is replaced by the canonical form."""
        name = "a[abcdef00].txt"
        decision = decide(name, find_token(name), 0xABCDEF01, update=True, add=False)
        
        assert decision.new_name == "a[ABCDEF01].txt"
