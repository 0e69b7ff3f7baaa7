"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from vpc_reconciler.config import CONFIG_PATH_ENV, ENV_VARS


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of the developer's AWS and reconciler settings."""
    for env_name in list(ENV_VARS.values()) + [CONFIG_PATH_ENV, "AWS_REGION", "AWS_DEFAULT_REGION"]:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setattr("vpc_reconciler.config.DEFAULT_CONFIG_PATH", tmp_path / "missing" / "config.yaml")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
