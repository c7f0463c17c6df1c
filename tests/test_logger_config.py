"""
Tests for the audit logger and configuration loading.
"""

import pytest
import tempfile
import os
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import ExplorerConfig, load_config
from core.logger import AuditLogger, AuditEntry, ActionType, ActionStatus


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            yield f.name
        os.unlink(f.name)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger with temp file."""
        return AuditLogger(log_path=temp_log)

    def test_log_action(self, logger):
        """Test logging an action."""
        entry = logger.log_action(
            action_type=ActionType.WRITE,
            description="Create file: a.txt",
            target="/tmp/a.txt",
            status=ActionStatus.EXECUTED
        )

        assert entry.action_description == "Create file: a.txt"
        assert entry.target == "/tmp/a.txt"
        assert entry.status == "executed"

    def test_entry_round_trip(self):
        """Test that an entry survives JSON serialization."""
        entry = AuditEntry.create(ActionType.DELETE, "Delete: x", target="/x", metadata={"status": "OK"})

        assert AuditEntry.from_json(entry.to_json()) == entry

    def test_get_recent(self, logger):
        """Test getting recent entries, most recent first."""
        for i in range(5):
            logger.log_action(
                action_type=ActionType.READ,
                description=f"Action {i}"
            )

        entries = logger.get_recent(limit=3)

        assert [e.action_description for e in entries] == ["Action 4", "Action 3", "Action 2"]

    def test_get_by_action_type(self, logger):
        logger.log_action(ActionType.READ, "List directory")
        logger.log_action(ActionType.NAVIGATE, "Change directory: ..")
        logger.log_action(ActionType.READ, "Search for: x")

        entries = logger.get_by_action_type(ActionType.READ)

        assert [e.action_description for e in entries] == ["List directory", "Search for: x"]

    def test_get_failed_actions(self, logger):
        """Test getting failed actions."""
        logger.log_action(ActionType.WRITE, "Create file: ok")
        logger.log_action(
            action_type=ActionType.DELETE,
            description="Delete: ghost",
            status=ActionStatus.FAILED,
            result="Item not found: ghost"
        )

        failed = logger.get_failed_actions()

        assert len(failed) == 1
        assert failed[0].action_description == "Delete: ghost"
        assert failed[0].result == "Item not found: ghost"

    def test_get_failed_actions_newest_first(self, logger):
        """Test the limit keeps the latest failures, not the oldest."""
        for i in range(5):
            logger.log_action(ActionType.DELETE, f"Delete: f{i}", status=ActionStatus.FAILED)
            logger.log_action(ActionType.READ, f"List {i}")

        failed = logger.get_failed_actions(limit=2)

        assert [e.action_description for e in failed] == ["Delete: f4", "Delete: f3"]
        assert logger.get_failed_actions(limit=0) == []

    def test_skips_corrupt_lines(self, logger, temp_log):
        logger.log_action(ActionType.READ, "good")
        with open(temp_log, "a", encoding="utf-8") as f:
            f.write("not json\n")
            f.write('{"unexpected": 1}\n')

        assert [e.action_description for e in logger.get_recent()] == ["good"]

    def test_disabled_logger_writes_nothing(self):
        with tempfile.TemporaryDirectory() as d:
            log_path = Path(d, "logs", "audit.jsonl")
            logger = AuditLogger(log_path=str(log_path), enabled=False)

            entry = logger.log_action(ActionType.WRITE, "Create file: x")

            assert entry.action_description == "Create file: x"
            assert not log_path.exists()
            assert logger.get_recent() == []

    def test_creates_log_directory(self):
        with tempfile.TemporaryDirectory() as d:
            log_path = Path(d, "nested", "audit.jsonl")

            AuditLogger(log_path=str(log_path))

            assert log_path.exists()


class TestConfig:
    """Test load_config()."""

    @pytest.fixture
    def temp_config(self):
        """Create a temporary config file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("""explorer:
  audit:
    enabled: false
    log_path: /tmp/explorer-test.jsonl
  files:
    directory_mode: "700"
  search:
    follow_symlinks: true
  display:
    colors: false
""")
        yield f.name
        os.unlink(f.name)

    def test_defaults_when_missing(self):
        config = load_config("/nonexistent/config.yaml")

        assert config == ExplorerConfig()
        assert config.directory_mode == 0o755
        assert config.audit_enabled
        assert not config.follow_symlinks

    def test_none_gives_defaults(self):
        assert load_config(None) == ExplorerConfig()

    def test_values_from_file(self, temp_config):
        config = load_config(temp_config)

        assert not config.audit_enabled
        assert config.audit_log_path == "/tmp/explorer-test.jsonl"
        assert config.directory_mode == 0o700
        assert config.follow_symlinks
        assert not config.colors

    def test_partial_file_keeps_other_defaults(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("explorer:\n  display:\n    colors: false\n")
        try:
            config = load_config(f.name)
        finally:
            os.unlink(f.name)

        assert not config.colors
        assert config.audit_enabled
        assert config.directory_mode == 0o755

    @pytest.mark.parametrize("content", [
        "explorer: [unclosed\n",
        "just a string\n",
        "explorer:\n  files:\n    directory_mode: \"9z9\"\n",
        "explorer:\n  audit: yes\n",
    ])
    def test_bad_content_falls_back(self, content):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(content)
        try:
            config = load_config(f.name)
        finally:
            os.unlink(f.name)

        assert config.directory_mode == 0o755
        assert config.audit_enabled

    def test_dump_round_trip(self):
        original = ExplorerConfig(directory_mode=0o750, colors=False)

        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(original.dump())
        try:
            config = load_config(f.name)
        finally:
            os.unlink(f.name)

        assert config == original
        assert 'directory_mode: "750"' in original.dump() or "directory_mode: '750'" in original.dump()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
