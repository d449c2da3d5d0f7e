"""Shared fixtures.

Tests run against an isolated config directory via tmp_path and
PAY_SCHEDULE_CONFIG_PATH so no real settings or profile are read.
"""

import pytest


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("PAY_SCHEDULE_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir, "tmp_path": tmp_path}
