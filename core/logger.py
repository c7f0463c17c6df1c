"""
Audit Logger for the File Explorer.

Provides append-only logging of every filesystem operation with timestamps,
targets and outcomes for auditing and debugging.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Dict, Any
from enum import Enum


class ActionType(Enum):
    """Types of actions that can be logged."""
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    NAVIGATE = "navigate"
    PERMISSION = "permission"


class ActionStatus(Enum):
    """Status of an action execution."""
    EXECUTED = "executed"
    FAILED = "failed"


@dataclass
class AuditEntry:
    """Represents a single audit log entry."""
    timestamp: str
    action_type: str
    action_description: str
    target: Optional[str]
    status: str
    result: Optional[str]
    metadata: Dict[str, Any]

    @classmethod
    def create(
        cls,
        action_type: ActionType,
        action_description: str,
        target: Optional[str] = None,
        status: ActionStatus = ActionStatus.EXECUTED,
        result: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "AuditEntry":
        """Factory method to create an audit entry with current timestamp."""
        return cls(
            timestamp=datetime.now().isoformat(),
            action_type=action_type.value,
            action_description=action_description,
            target=target,
            status=status.value,
            result=result,
            metadata=metadata or {}
        )

    def to_json(self) -> str:
        """Convert entry to JSON string."""
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "AuditEntry":
        """Create entry from JSON string."""
        data = json.loads(json_str)
        return cls(**data)


class AuditLogger:
    """
    Append-only audit logger for the File Explorer.

    Every operation is logged to a JSONL file. When disabled, entries are
    still built and returned but nothing touches the disk.
    """

    def __init__(self, log_path: str = "data/audit_log.jsonl", enabled: bool = True):
        """
        Initialize the audit logger.

        Args:
            log_path: Path to the JSONL log file
            enabled: Whether entries are written to the log file
        """
        self.log_path = Path(log_path)
        self.enabled = enabled
        if self.enabled:
            self._ensure_log_directory()

    def _ensure_log_directory(self) -> None:
        """Create the log directory if it doesn't exist."""
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.log_path.exists():
            self.log_path.touch()

    def log(self, entry: AuditEntry) -> None:
        """
        Append an audit entry to the log.

        Args:
            entry: The AuditEntry to log
        """
        if not self.enabled:
            return
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(entry.to_json() + "\n")

    def log_action(
        self,
        action_type: ActionType,
        description: str,
        target: Optional[str] = None,
        status: ActionStatus = ActionStatus.EXECUTED,
        result: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> AuditEntry:
        """
        Convenience method to create and log an entry in one call.

        Returns the created AuditEntry.
        """
        entry = AuditEntry.create(
            action_type=action_type,
            action_description=description,
            target=target,
            status=status,
            result=result,
            metadata=metadata
        )
        self.log(entry)
        return entry

    def _read_entries(self) -> List[AuditEntry]:
        entries = []

        if not self.log_path.exists():
            return entries

        with open(self.log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    try:
                        entries.append(AuditEntry.from_json(line))
                    except (json.JSONDecodeError, TypeError):
                        continue

        return entries

    def get_recent(self, limit: int = 100) -> List[AuditEntry]:
        """
        Get the most recent audit entries.

        Args:
            limit: Maximum number of entries to return

        Returns:
            List of AuditEntry objects, most recent first
        """
        if limit <= 0:
            return []
        return list(reversed(self._read_entries()[-limit:]))

    def get_by_action_type(self, action_type: ActionType, limit: int = 100) -> List[AuditEntry]:
        """
        Get audit entries filtered by action type.

        Args:
            action_type: The ActionType to filter by
            limit: Maximum number of entries to return

        Returns:
            List of matching AuditEntry objects, oldest first
        """
        matches = [e for e in self._read_entries() if e.action_type == action_type.value]
        return matches[:limit]

    def get_failed_actions(self, limit: int = 50) -> List[AuditEntry]:
        """
        Get the most recent actions that failed, most recent first.

        Useful for reviewing what went wrong during a session.
        """
        if limit <= 0:
            return []
        failed = [e for e in self._read_entries() if e.status == ActionStatus.FAILED.value]
        return list(reversed(failed[-limit:]))
