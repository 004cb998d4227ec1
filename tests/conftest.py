"""
Test configuration - ensures repo root is in sys.path + determinism guards.

This allows tests to import the workload package without installing it.
Enforces determinism by isolating tests from the developer's environment:
no WORKLOAD_* variable or repository config file leaks into a test, and every
test works from fixed reference clocks instead of the wall clock.
"""

import os
import sys
import time
from datetime import date, datetime
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import workload.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from workload.config import Settings, get_settings  # noqa: E402


# =============================================================================
# DETERMINISM GUARD: isolate configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point config at an empty temp location and drop WORKLOAD_* overrides."""
    for key in list(os.environ):
        if key.startswith("WORKLOAD_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("WORKLOAD_CONFIG", str(tmp_path / "missing.yaml"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# DETERMINISM GUARD: local timezone
# =============================================================================


@pytest.fixture
def local_tz():
    """Run the test with the process-local zone set to the given TZ name."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    original = os.environ.get("TZ")

    def _set(name):
        os.environ["TZ"] = name
        time.tzset()

    yield _set

    if original is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = original
    time.tzset()


# =============================================================================
# REFERENCE CLOCKS
# =============================================================================

# 2024-03-04 is a Monday
MONDAY = date(2024, 3, 4)


@pytest.fixture
def ref_now():
    """Wednesday 2024-03-06 10:00, inside the week of Mon 2024-03-04."""
    return datetime(2024, 3, 6, 10, 0)


@pytest.fixture
def ref_today():
    return MONDAY


@pytest.fixture
def settings():
    return Settings()
