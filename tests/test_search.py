"""
Tests for the recursive name search.
"""

import inspect
import os
import pytest
import tempfile
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from modules.file_explorer.search import search


@pytest.fixture
def tree():
    """
    Create a small directory tree:

        root/
          notes.txt
          src/
            main.py
            notes_old.txt
            deep/
              notes.md
          empty/
    """
    with tempfile.TemporaryDirectory() as root:
        base = Path(root)
        (base / "src" / "deep").mkdir(parents=True)
        (base / "empty").mkdir()
        (base / "notes.txt").write_text("a")
        (base / "src" / "main.py").write_text("b")
        (base / "src" / "notes_old.txt").write_text("c")
        (base / "src" / "deep" / "notes.md").write_text("d")
        yield root


class TestSearch:
    """Test search()."""

    def test_finds_matches_at_every_depth(self, tree):
        results = search(tree, "notes")

        assert set(results) == {
            f"{tree}/notes.txt",
            f"{tree}/src/notes_old.txt",
            f"{tree}/src/deep/notes.md",
        }

    def test_empty_pattern_matches_everything(self, tree):
        """Test that '' returns every descendant."""
        results = search(tree, "")

        assert set(results) == {
            f"{tree}/notes.txt",
            f"{tree}/src",
            f"{tree}/src/main.py",
            f"{tree}/src/notes_old.txt",
            f"{tree}/src/deep",
            f"{tree}/src/deep/notes.md",
            f"{tree}/empty",
        }
        assert len(results) == 7

    def test_case_sensitive(self, tree):
        assert search(tree, "NOTES") == []

    def test_no_matches(self, tree):
        assert search(tree, "missing") == []

    def test_depth_first_order(self, tree):
        """Test a directory is reported before its contents, and its subtree is contiguous."""
        results = search(tree, "")

        for directory in (f"{tree}/src", f"{tree}/src/deep"):
            start = results.index(directory)
            subtree = {p for p in results if p.startswith(directory + "/")}
            assert set(results[start + 1:start + 1 + len(subtree)]) == subtree

    def test_missing_root_returns_nothing(self, tree):
        assert search(os.path.join(tree, "gone"), "") == []

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read any directory")
    def test_unreadable_directory_is_skipped(self, tree):
        locked = Path(tree) / "src" / "deep"
        locked.chmod(0o000)
        try:
            results = search(tree, "notes")
        finally:
            locked.chmod(0o755)

        assert set(results) == {f"{tree}/notes.txt", f"{tree}/src/notes_old.txt"}

    def test_symlinked_directory_not_followed_by_default(self, tree):
        os.symlink(os.path.join(tree, "src"), os.path.join(tree, "link"))

        results = search(tree, "main")

        assert results == [f"{tree}/src/main.py"]

    def test_symlinked_directory_followed_when_enabled(self, tree):
        os.symlink(os.path.join(tree, "src"), os.path.join(tree, "link"))

        results = search(tree, "main", follow_symlinks=True)

        assert set(results) == {f"{tree}/src/main.py", f"{tree}/link/main.py"}

    def test_siblings_follow_directory_order(self, tree):
        """Test entries come back in the order the OS lists them, not sorted."""
        flat = Path(tree, "empty")
        for name in ["m", "b", "z", "a", "q", "c", "y", "d", "x", "e"]:
            (flat / f"{name}.txt").write_text(name)
        with os.scandir(flat) as entries:
            listed = [os.path.join(str(flat), e.name) for e in entries]

        assert search(str(flat), "") == listed

    def test_nested_siblings_follow_directory_order(self, tree):
        results = search(tree, "")

        for directory in (tree, f"{tree}/src", f"{tree}/src/deep"):
            with os.scandir(directory) as entries:
                listed = [os.path.join(directory, e.name) for e in entries]
            children = [p for p in results if os.path.dirname(p) == directory]
            assert children == listed

    def test_deep_tree_beyond_recursion_limit(self, tree):
        depth = 150
        bottom = Path(tree, *["d"] * depth)
        bottom.mkdir(parents=True)
        (bottom / "leaf.txt").write_text("x")

        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(len(inspect.stack()) + 50)
        try:
            results = search(tree, "leaf")
            everything = search(tree, "")
        finally:
            sys.setrecursionlimit(limit)

        assert results == [str(bottom / "leaf.txt")]
        assert sum(1 for p in everything if os.path.basename(p) == "d") == depth


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
