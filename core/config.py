"""
Configuration for the File Explorer.

Settings are read from a YAML file whose top-level key is ``explorer``.
Anything missing or unreadable falls back to the defaults below.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

import yaml


DEFAULT_DIRECTORY_MODE = 0o755


@dataclass
class ExplorerConfig:
    """Effective configuration of an explorer session."""
    audit_enabled: bool = True
    audit_log_path: str = "data/audit_log.jsonl"
    directory_mode: int = DEFAULT_DIRECTORY_MODE
    follow_symlinks: bool = False
    colors: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration in its YAML layout."""
        return {
            "explorer": {
                "audit": {
                    "enabled": self.audit_enabled,
                    "log_path": self.audit_log_path,
                },
                "files": {
                    "directory_mode": format(self.directory_mode, "03o"),
                },
                "search": {
                    "follow_symlinks": self.follow_symlinks,
                },
                "display": {
                    "colors": self.colors,
                },
            }
        }

    def dump(self) -> str:
        """Render the configuration as YAML."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)


def _parse_mode(value: Any) -> int:
    """Parse an octal mode such as "755" or 0o755, falling back to the default."""
    if isinstance(value, int):
        return value & 0o777
    try:
        return int(str(value), 8) & 0o777
    except ValueError:
        return DEFAULT_DIRECTORY_MODE


def _load_raw(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}

    if not isinstance(config, dict):
        return {}
    section = config.get("explorer", config)
    return section if isinstance(section, dict) else {}


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def load_config(config_path: Optional[str] = "config.yaml") -> ExplorerConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults

    Returns:
        ExplorerConfig with file values applied over the defaults
    """
    config = ExplorerConfig()
    if config_path is None:
        return config

    raw = _load_raw(Path(config_path))

    audit = _section(raw, "audit")
    files = _section(raw, "files")
    search = _section(raw, "search")
    display = _section(raw, "display")

    if "enabled" in audit:
        config.audit_enabled = bool(audit["enabled"])
    if audit.get("log_path"):
        config.audit_log_path = str(audit["log_path"])
    if "directory_mode" in files:
        config.directory_mode = _parse_mode(files["directory_mode"])
    if "follow_symlinks" in search:
        config.follow_symlinks = bool(search["follow_symlinks"])
    if "colors" in display:
        config.colors = bool(display["colors"])

    return config
