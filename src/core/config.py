from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import Draft202012Validator

CONFIG_SCHEMA_PATH = Path(__file__).with_name("config.schema.json")


class ConfigurationError(ValueError):
    """Raised when config.yml cannot be used."""


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "INFO"
    log_max_mb: int = 5
    log_backup_count: int = 3


@dataclass(slots=True)
class ExtractionConfig:
    """Extraction configuration from config.yml."""

    max_depth: int = 64
    plist_path: Optional[Path] = None  # Overrides the discovered RecentlyClosedTabs.plist


@dataclass(slots=True)
class HeuristicsConfig:
    """
    Key-name overrides for the recently-closed heuristics.

    ``None`` means "use the built-in value" so that an empty config section
    never changes extraction behaviour.
    """

    url_keys: Optional[List[str]] = None
    title_keys: Optional[List[str]] = None
    closed_date_keys: Optional[List[str]] = None
    entries_key: Optional[str] = None
    persistent_state_key: Optional[str] = None
    tab_states_key: Optional[str] = None
    overview_title_key: Optional[str] = None
    window_title_key: Optional[str] = None


@dataclass(slots=True)
class RestoreConfig:
    """Settings for reopening windows in Safari."""

    timeout_seconds: float = 30.0
    confirm_window_threshold: int = 10  # More windows than this needs --force


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration resolved from disk."""

    base_dir: Path
    logs_dir: Path
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    heuristics: HeuristicsConfig = field(default_factory=HeuristicsConfig)
    restore: RestoreConfig = field(default_factory=RestoreConfig)

    def to_json(self) -> str:
        """Serialize the effective configuration for diagnostics."""
        data = {
            "logs_dir": str(self.logs_dir),
            "logging": {
                "level": self.logging.level,
                "log_max_mb": self.logging.log_max_mb,
                "log_backup_count": self.logging.log_backup_count,
            },
            "extraction": {
                "max_depth": self.extraction.max_depth,
                "plist_path": str(self.extraction.plist_path) if self.extraction.plist_path else None,
            },
            "restore": {
                "timeout_seconds": self.restore.timeout_seconds,
                "confirm_window_threshold": self.restore.confirm_window_threshold,
            },
        }
        return json.dumps(data, indent=2, sort_keys=True)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            content = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file {path} is not valid YAML: {exc}") from exc
        if not isinstance(content, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping at the top level.")
        return content


def _validate(document: Dict[str, Any], path: Path) -> None:
    schema = json.loads(CONFIG_SCHEMA_PATH.read_text(encoding="utf-8"))
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda err: list(err.absolute_path))
    if errors:
        details = "; ".join(
            "{where}: {message}".format(
                where="/".join(str(part) for part in error.absolute_path) or "<root>",
                message=error.message,
            )
            for error in errors
        )
        raise ConfigurationError(f"Config file {path} is invalid: {details}")


def load_app_config(base_dir: Path) -> AppConfig:
    """Load application configuration from disk, providing sensible defaults."""

    config_yaml = base_dir / "config" / "config.yml"
    config_overrides = _load_yaml(config_yaml)
    _validate(config_overrides, config_yaml)

    logs_dir = base_dir / "logs"

    logging_cfg = config_overrides.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_cfg.get("level", "INFO"),
        log_max_mb=logging_cfg.get("log_max_mb", 5),
        log_backup_count=logging_cfg.get("log_backup_count", 3),
    )

    extraction_cfg = config_overrides.get("extraction", {})
    plist_path = extraction_cfg.get("plist_path")
    extraction_config = ExtractionConfig(
        max_depth=extraction_cfg.get("max_depth", 64),
        plist_path=Path(plist_path).expanduser() if plist_path else None,
    )

    heuristics_cfg = config_overrides.get("heuristics", {})
    heuristics_config = HeuristicsConfig(
        url_keys=heuristics_cfg.get("url_keys"),
        title_keys=heuristics_cfg.get("title_keys"),
        closed_date_keys=heuristics_cfg.get("closed_date_keys"),
        entries_key=heuristics_cfg.get("entries_key"),
        persistent_state_key=heuristics_cfg.get("persistent_state_key"),
        tab_states_key=heuristics_cfg.get("tab_states_key"),
        overview_title_key=heuristics_cfg.get("overview_title_key"),
        window_title_key=heuristics_cfg.get("window_title_key"),
    )

    restore_cfg = config_overrides.get("restore", {})
    restore_config = RestoreConfig(
        timeout_seconds=float(restore_cfg.get("timeout_seconds", 30.0)),
        confirm_window_threshold=restore_cfg.get("confirm_window_threshold", 10),
    )

    return AppConfig(
        base_dir=base_dir,
        logs_dir=logs_dir,
        logging=logging_config,
        extraction=extraction_config,
        heuristics=heuristics_config,
        restore=restore_config,
    )


def default_config_dir() -> Path:
    """Per-user directory holding ``config/config.yml`` and ``logs/``."""
    return Path.home() / ".config" / "safari-tab-restore"
