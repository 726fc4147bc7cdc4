# failflow/config/__init__.py
"""
failflow Configuration

Design principles:
1. Code has defaults, YAML is optional input
2. Explicit constructor arguments always win over configuration
3. One active configuration, swapped atomically
"""

from .loader import FailFlowConfig, load_config, get_config, set_config, CONFIG_ENV_VAR
from .validator import validate_config, ConfigIssue

__all__ = [
    "FailFlowConfig",
    "load_config",
    "get_config",
    "set_config",
    "CONFIG_ENV_VAR",
    "validate_config",
    "ConfigIssue",
]
