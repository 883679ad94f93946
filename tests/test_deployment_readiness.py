"""Deployment readiness tests for production settings."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

pytestmark = pytest.mark.integration

PRODUCTION_SECRET = "tests-only-secret-key-please-replace-with-a-long-random-value-0123456789"


def _repo_root() -> Path:
    """Return the repository root directory."""

    return Path(__file__).resolve().parent.parent


def _run_manage(*args: str, env: dict[str, str]) -> subprocess.CompletedProcess[str]:
    """Run `manage.py` with `args` in a subprocess.

    Args:
        args: Management command and its arguments.
        env: Environment variables to merge into the current environment.

    Returns:
        Completed process result with captured output.
    """

    merged_env = os.environ.copy()
    merged_env.update(env)
    merged_env.setdefault("DJANGO_SETTINGS_MODULE", "forecastDebug.settings")
    return subprocess.run(
        [sys.executable, "manage.py", *args],
        cwd=_repo_root(),
        env=merged_env,
        check=False,
        capture_output=True,
        text=True,
    )


def test_manage_check_deploy_passes_with_required_env(tmp_path: Path) -> None:
    """Verify production settings satisfy Django's deployment checks."""

    result = _run_manage(
        "check",
        "--deploy",
        "--fail-level",
        "WARNING",
        env={
            "DJANGO_DEBUG": "0",
            "DJANGO_SECRET_KEY": PRODUCTION_SECRET,
            "DJANGO_ALLOWED_HOSTS": "example.com",
            "DJANGO_CSRF_TRUSTED_ORIGINS": "https://example.com",
            "PREDICTION_DEBUG_PREDICTOR_MANAGER": "unittest.mock.MagicMock",
            "PREDICTION_DEBUG_SELECTOR_FETCHER": "unittest.mock.MagicMock",
            "PREDICTION_DEBUG_ENGINE": "unittest.mock.MagicMock",
            "DATABASE_URL": f"sqlite:///{tmp_path / 'db.sqlite3'}",
        },
    )
    assert result.returncode == 0, result.stdout + "\n" + result.stderr


def test_manage_check_deploy_requires_secret_key(tmp_path: Path) -> None:
    """Ensure production settings refuse to boot without a non-default secret key."""

    result = _run_manage(
        "check",
        "--deploy",
        env={
            "DJANGO_DEBUG": "0",
            "DJANGO_SECRET_KEY": "",
            "DJANGO_ALLOWED_HOSTS": "example.com",
            "DATABASE_URL": f"sqlite:///{tmp_path / 'db.sqlite3'}",
        },
    )
    assert result.returncode != 0
    assert "DJANGO_SECRET_KEY is required" in result.stderr


def test_prediction_debug_settings_read_environment(tmp_path: Path) -> None:
    """Timeout, chart width and collaborator paths come from the environment."""

    result = _run_manage(
        "shell",
        "-v",
        "0",
        "-c",
        "from django.conf import settings as s; "
        "print(s.PREDICTION_DEBUG_TIMEOUT_SECONDS, s.PREDICTION_DEBUG_CHART_WIDTH, "
        "s.PREDICTION_DEBUG_BACKENDS['ENGINE'])",
        env={
            "PREDICTION_DEBUG_TIMEOUT_SECONDS": "2.5",
            "PREDICTION_DEBUG_CHART_WIDTH": "1200px",
            "PREDICTION_DEBUG_ENGINE": "forecasting.debug.Engine",
            "DATABASE_URL": f"sqlite:///{tmp_path / 'db.sqlite3'}",
        },
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "2.5 1200px forecasting.debug.Engine"


def test_manage_check_fails_without_debug_engine(tmp_path: Path) -> None:
    """A missing debug engine is reported by `manage.py check`, before any request is served."""

    result = _run_manage(
        "check",
        env={
            "PREDICTION_DEBUG_PREDICTOR_MANAGER": "unittest.mock.MagicMock",
            "PREDICTION_DEBUG_SELECTOR_FETCHER": "unittest.mock.MagicMock",
            "PREDICTION_DEBUG_ENGINE": "",
            "DATABASE_URL": f"sqlite:///{tmp_path / 'db.sqlite3'}",
        },
    )
    assert result.returncode != 0
    assert "core.E001" in result.stderr
    assert "PREDICTION_DEBUG_BACKENDS['ENGINE']" in result.stderr
