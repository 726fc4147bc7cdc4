# tests/conftest.py
import pytest

from failflow.config import FailFlowConfig, set_config


@pytest.fixture(autouse=True)
def reset_active_config():
    """Every test starts (and ends) with code-default configuration."""
    previous = set_config(FailFlowConfig.default())
    yield
    set_config(previous)
