"""
Session state for the File Explorer.
"""

import os
from dataclasses import dataclass


@dataclass
class Session:
    """
    The explorer's current working directory.

    Only a successful change_directory() on FileExplorer updates it. The
    process working directory is never changed.
    """
    current_path: str = "/"

    @classmethod
    def from_cwd(cls) -> "Session":
        """Start from the process working directory, or ``/`` if it is gone."""
        try:
            return cls(current_path=os.getcwd())
        except OSError:
            return cls(current_path="/")
