"""
File Explorer module.

Provides filesystem navigation and file operations for the interactive shell.
"""

from .file_ops import FileExplorer, DirectoryEntry, DirectoryListing
from .results import ErrorKind, OperationResult
from .session import Session
from .shell import ExplorerShell

__all__ = [
    'FileExplorer',
    'DirectoryEntry',
    'DirectoryListing',
    'ErrorKind',
    'OperationResult',
    'Session',
    'ExplorerShell',
]
