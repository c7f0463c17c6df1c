# File Explorer - Core Module
"""
Core infrastructure for the File Explorer.
This module provides the foundational components that all other modules depend on.
"""

from .config import ExplorerConfig, load_config
from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus

__all__ = [
    "ExplorerConfig",
    "load_config",
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
]

__version__ = "0.1.0"
