"""Tests for name rewriting and renaming."""

import errno
import os
from unittest.mock import patch

import pytest
from crccheck.checker.errors import NoExtensionAnchor, RenameFailed
from crccheck.checker.renamer import (
    apply_rename, name_with_added_token, name_with_replaced_token,
)
from crccheck.checker.tokens import TokenMatch, find_token


class TestNameWithAddedToken:
    """Tests for name_with_added_token."""
    
    @pytest.mark.parametrize("name,expected", [
        ("a.txt", "a[0000000F].txt"),
        ("a.b.c", "a.b[0000000F].c"),
        ("[tag] a.mkv", "[tag] a[0000000F].mkv"),
        (".hidden.txt", ".hidden[0000000F].txt"),
    ])
    def test_insert_before_final_extension(self, name, expected):
        """Test insertion point is the final extension separator."""
        assert name_with_added_token(name, 0xF) == expected
    
    @pytest.mark.parametrize("name", ["README", ".bashrc", ""])
    def test_no_extension(self, name):
        """Test names without an extension raise NoExtensionAnchor."""
        with pytest.raises(NoExtensionAnchor) as exc_info:
            name_with_added_token(name, 0xF)
        assert exc_info.value.context["name"] == name


class TestNameWithReplacedToken:
    """Tests for name_with_replaced_token."""
    
    def test_replaces_span(self):
        """Test that only the matched span changes."""
        name = "a[00000001].txt"
        assert name_with_replaced_token(name, find_token(name), 2) == "a[00000002].txt"
    
    def test_identical_result_falls_back_to_insertion(self):
        """Test the fallback when the replacement would not change the name."""
        name = "a[00000001].txt"
        match = TokenMatch(value=0, start=1, end=11)
        
        assert name_with_replaced_token(name, match, 1) == "a[00000001][00000001].txt"


class TestApplyRename:
    """Tests for apply_rename."""
    
    def test_rename_in_same_directory(self, tmp_path):
        """Test a successful rename."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"data")
        
        target = apply_rename(source, "a[12345678].txt")
        
        assert target == tmp_path / "a[12345678].txt"
        assert target.read_bytes() == b"data"
        assert not source.exists()
    
    def test_existing_target_is_not_overwritten(self, tmp_path):
        """Test that an existing different file blocks the rename."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"source")
        existing = tmp_path / "b.txt"
        existing.write_bytes(b"existing")
        
        with pytest.raises(RenameFailed, match="already exists"):
            apply_rename(source, "b.txt")
        
        assert source.read_bytes() == b"source"
        assert existing.read_bytes() == b"existing"
    
    @pytest.mark.parametrize("name", ["", "sub/a.txt"])
    def test_invalid_target_name(self, tmp_path, name):
        """Test that empty names and names with separators are rejected."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"data")
        
        with pytest.raises(RenameFailed, match="Invalid target name"):
            apply_rename(source, name)
    
    def test_os_error_becomes_rename_failed(self, tmp_path):
        """Test that an OS-level failure is wrapped."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"data")
        
        with patch("crccheck.checker.renamer.os.link", side_effect=PermissionError(errno.EACCES, "Permission denied")):
            with pytest.raises(RenameFailed) as exc_info:
                apply_rename(source, "b.txt")
        
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert exc_info.value.context["new_name"] == "b.txt"
    
    def test_missing_source(self, tmp_path):
        """Test that renaming a vanished file fails cleanly."""
        with pytest.raises(RenameFailed):
            apply_rename(tmp_path / "gone.txt", "still-gone.txt")
    
    def test_existing_symlink_target_is_not_replaced(self, tmp_path):
        """Test that even a dangling symlink at the target name blocks the rename."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"data")
        (tmp_path / "b.txt").symlink_to(tmp_path / "nowhere")
        
        with pytest.raises(RenameFailed, match="already exists"):
            apply_rename(source, "b.txt")
        
        assert source.read_bytes() == b"data"
    
    def test_renamed_file_keeps_single_name(self, tmp_path):
        """Test that the old name is gone and the new one is the only link."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"data")
        
        target = apply_rename(source, "b.txt")
        
        assert sorted(p.name for p in tmp_path.iterdir()) == ["b.txt"]
        assert os.stat(target).st_nlink == 1
    
    def test_unlink_failure_restores_directory(self, tmp_path):
        """Test that a failed removal of the old name undoes the new link."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"data")
        real_unlink = os.unlink
        calls = []
        
        def failing_once(path, *args, **kwargs):
            calls.append(path)
            if len(calls) == 1:
                raise PermissionError(errno.EACCES, "Permission denied")
            return real_unlink(path, *args, **kwargs)
        
        with patch("crccheck.checker.renamer.os.unlink", side_effect=failing_once):
            with pytest.raises(RenameFailed):
                apply_rename(source, "b.txt")
        
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.txt"]


class TestApplyRenameWithoutHardLinks:
    """Tests for filesystems that cannot create hard links."""
    
    @pytest.fixture(autouse=True)
    def no_hard_links(self):
        with patch("crccheck.checker.renamer.os.link",
                   side_effect=OSError(errno.EOPNOTSUPP, "Operation not supported")):
            yield
    
    def test_rename_falls_back(self, tmp_path):
        """Test that the rename still happens."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"data")
        
        target = apply_rename(source, "b.txt")
        
        assert target.read_bytes() == b"data"
        assert not source.exists()
    
    def test_existing_target_still_blocks(self, tmp_path):
        """Test that the fallback never overwrites an existing file."""
        source = tmp_path / "a.txt"
        source.write_bytes(b"source")
        existing = tmp_path / "b.txt"
        existing.write_bytes(b"existing")
        
        with pytest.raises(RenameFailed, match="already exists"):
            apply_rename(source, "b.txt")
        
        assert existing.read_bytes() == b"existing"
        assert source.read_bytes() == b"source"
