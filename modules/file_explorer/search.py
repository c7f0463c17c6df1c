"""
Recursive name search for the File Explorer.
"""

import os
from typing import Iterator, List, Tuple

from .paths import join


def search(root: str, substring: str, follow_symlinks: bool = False) -> List[str]:
    """
    Find every path under root whose name contains substring.

    The walk is depth-first: a matching directory is reported before its
    own contents, and each subdirectory is finished before its next sibling.
    Children are visited in the order the OS lists them. Directories that
    cannot be read are skipped without error. Depth is bounded only by the
    filesystem, not by the interpreter's recursion limit.

    Args:
        root: Directory to start from
        substring: Case-sensitive literal to look for; "" matches everything
        follow_symlinks: Descend into symbolic links that point to directories

    Returns:
        Matching paths in traversal order
    """
    results: List[str] = []
    pending: List[Iterator[Tuple[str, str, bool]]] = [iter(_children(root, follow_symlinks))]

    while pending:
        for name, full_path, is_dir in pending[-1]:
            if substring in name:
                results.append(full_path)
            if is_dir:
                # Finish this subtree before resuming the parent's siblings
                pending.append(iter(_children(full_path, follow_symlinks)))
                break
        else:
            pending.pop()

    return results


def _children(path: str, follow_symlinks: bool) -> List[Tuple[str, str, bool]]:
    """Read (name, path, is_dir) for each entry of a directory, [] if unreadable."""
    children = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
                except OSError:
                    is_dir = False
                children.append((entry.name, join(path, entry.name), is_dir))
    except OSError:
        # Unreadable or vanished directory
        return []
    return children
