"""
Shared fixtures for the civic_chat test suite.
"""
import os

import pytest

os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("ENABLE_AUDIT_LOGGING", "false")

from civic_chat.core.config import Settings


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        app_env="testing",
        log_dir="",
        gemini_api_key="test-key",
        survey_store_path=str(tmp_path / "nps-responses.json"),
        enable_audit_logging=False,
    )
