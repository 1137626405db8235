"""Pytest configuration and fixtures for common-py tests.

This conftest.py ensures tests work for both developers (editable install)
and users (pip installed package).
"""
import io
import logging
import sys
import pytest
from pathlib import Path


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root is in the Python path.

    This makes the package importable whether tests are run from:
    - The package directory (packages/common-py)
    - The project root
    - Or after pip install
    """
    package_root = Path(__file__).parent.parent

    # Add package root to path for local development
    package_root_str = str(package_root)
    if package_root_str not in sys.path:
        sys.path.insert(0, package_root_str)

    yield


@pytest.fixture(autouse=True)
def clear_settings_env(monkeypatch):
    """Keep MODRESOLVE_* variables from the outer shell out of the tests."""
    for name in ("MODRESOLVE_LOG_LEVEL", "MODRESOLVE_LOG_JSON", "MODRESOLVE_MANIFEST_NAME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def log_stream():
    """Capture structured log output; restores the root logger afterwards."""
    from modresolve_common import configure_logging

    root = logging.getLogger()
    original_level = root.level
    original_handlers = list(root.handlers)

    stream = io.StringIO()
    configure_logging("debug", stream=stream)
    yield stream

    root.handlers[:] = original_handlers
    root.setLevel(original_level)
