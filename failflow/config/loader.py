# failflow/config/loader.py
"""
Configuration Loader

Loads construction defaults from YAML with code defaults as fallback.

Design principle:
- Code = truth (has all defaults)
- YAML = input parameters (optional)
- System works without YAML
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os

import yaml


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FAILFLOW_CONFIG"


@dataclass(frozen=True)
class FailFlowConfig:
    """
    Defaults applied when Fail is constructed without explicit toggles.

    - enable_suppression: track suppressed failures (Fail.add_suppressed)
    - capture_trace: capture the call stack at creation
    - trace_limit: max frames to capture (None = all)
    """

    enable_suppression: bool = True
    capture_trace: bool = True
    trace_limit: Optional[int] = None

    @classmethod
    def default(cls) -> "FailFlowConfig":
        """Create default configuration (no YAML needed)"""
        return cls()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "FailFlowConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML file. If None, tries:
                1. $FAILFLOW_CONFIG
                2. ~/.failflow/config.yml

        Returns:
            FailFlowConfig instance (always has code defaults as fallback)
        """
        config = cls.default()

        yaml_data = _load_yaml(config_path)
        if not yaml_data:
            return config

        section = yaml_data.get("fail")
        if not isinstance(section, dict):
            return config

        known = {f.name for f in fields(cls)}
        unknown = sorted((k for k in section if k not in known), key=str)
        if unknown:
            logger.warning("Ignoring unknown failflow config keys: %s", ", ".join(map(str, unknown)))

        return replace(config, **{k: v for k, v in section.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {"fail": {f.name: getattr(self, f.name) for f in fields(self)}}


def _load_yaml(config_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Load YAML file, return None if not found (not an error)"""
    if config_path:
        paths = [Path(config_path)]
    else:
        paths = []
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            paths.append(Path(env_path))
        paths.append(Path.home() / ".failflow" / "config.yml")

    for path in paths:
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Failed to load failflow config %s: %s (using defaults)", path, e)
                return None
            if data is not None and not isinstance(data, dict):
                logger.warning("Ignoring failflow config %s: top level must be a mapping", path)
                return None
            return data

    return None


def _check_config(config: FailFlowConfig) -> None:
    """Log warn-level issues, raise ValueError on error-level ones."""
    from .validator import validate_config

    issues = validate_config(config)
    for issue in issues:
        if issue.level == "warn":
            logger.warning("%s", issue)
    errors = [issue for issue in issues if issue.level == "error"]
    if errors:
        raise ValueError("Invalid failflow configuration:\n" + "\n".join(str(i) for i in errors))


# ---- active configuration ----

_active_config: FailFlowConfig = FailFlowConfig.default()


def get_config() -> FailFlowConfig:
    """Return the configuration Fail uses for its defaults."""
    return _active_config


def set_config(config: FailFlowConfig) -> FailFlowConfig:
    """
    Replace the active configuration.

    The configuration is validated first; Fail reads it on every
    construction, so an invalid one is never installed.

    Returns the previous configuration so callers (and tests) can restore it.

    Raises:
        TypeError: if config is not a FailFlowConfig
        ValueError: if validation reports any error-level issue
    """
    global _active_config
    if not isinstance(config, FailFlowConfig):
        raise TypeError(f"Expected FailFlowConfig, got {type(config).__name__}")
    _check_config(config)
    previous = _active_config
    _active_config = config
    return previous


def load_config(config_path: Optional[Path] = None) -> FailFlowConfig:
    """
    Load configuration from YAML, validate it and make it active.

    Raises:
        ValueError: if validation reports any error-level issue
    """
    config = FailFlowConfig.from_yaml(config_path)
    set_config(config)
    return config
