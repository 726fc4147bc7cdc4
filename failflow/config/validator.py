# failflow/config/validator.py
"""
Configuration Validator

Validates configuration for illegal/misleading combinations.
Returns structured issues with level (warn/error), path, message, hint.
"""

from typing import List, Literal
from dataclasses import dataclass

from .loader import FailFlowConfig


@dataclass(frozen=True)
class ConfigIssue:
    """
    Configuration validation issue

    Structured output for CLI/logging.
    """
    level: Literal["warn", "error"]
    path: str  # e.g., "fail.trace_limit"
    message: str
    hint: str = ""  # Optional hint for fixing

    def __str__(self) -> str:
        hint_str = f"\n   Hint: {self.hint}" if self.hint else ""
        return f"[{self.level}] [{self.path}] {self.message}{hint_str}"


def validate_config(config: FailFlowConfig) -> List[ConfigIssue]:
    """
    Validate configuration for illegal/misleading combinations.

    Returns:
        List of issues (warn/error level)
    """
    issues = []

    for name in ("enable_suppression", "capture_trace"):
        value = getattr(config, name)
        if not isinstance(value, bool):
            issues.append(ConfigIssue(
                level="error",
                path=f"fail.{name}",
                message=f"{name} must be a boolean, got {value!r}",
                hint="Use true or false",
            ))

    limit = config.trace_limit
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int):
            issues.append(ConfigIssue(
                level="error",
                path="fail.trace_limit",
                message=f"trace_limit must be an integer or null, got {limit!r}",
            ))
        elif limit <= 0:
            issues.append(ConfigIssue(
                level="error",
                path="fail.trace_limit",
                message=f"trace_limit must be positive, got {limit}",
                hint="Remove trace_limit to capture the full stack",
            ))
        elif config.capture_trace is False:
            # trace_limit: no effect when capture is off
            issues.append(ConfigIssue(
                level="warn",
                path="fail.trace_limit",
                message="trace_limit has no effect when capture_trace=false",
                hint="Set fail.capture_trace=true or drop trace_limit",
            ))

    return issues
