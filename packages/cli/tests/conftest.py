"""Pytest configuration and fixtures for CLI tests.

This conftest.py ensures tests work for both developers (editable install)
and users (pip installed package).
"""
import logging
import sys
import pytest
from pathlib import Path
from typer.testing import CliRunner


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root is in the Python path.

    This makes the package importable whether tests are run from:
    - The package directory (packages/cli)
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
def restore_root_logger(monkeypatch):
    """The CLI installs a handler bound to the runner's stderr; drop it afterwards."""
    for name in ("MODRESOLVE_LOG_LEVEL", "MODRESOLVE_LOG_JSON", "MODRESOLVE_MANIFEST_NAME"):
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    original_level = root.level
    original_handlers = list(root.handlers)
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def valid_manifest(tmp_path):
    """Three modules declared out of dependency order."""
    path = tmp_path / "modules.yaml"
    path.write_text(
        """version: "1.0"
modules:
  - key: Admin
    version: 1.0.0
    requires: {Auth: ^1.0, Core: ^1.0}
  - key: Core
    version: 1.0.0
  - key: Auth
    version: 1.0.0
    requires: {Core: ^1.0}
    optional: {Cache: "*"}
  - key: Legacy
    version: 0.1.0
    enabled: false
"""
    )
    return str(path)


@pytest.fixture
def missing_manifest(tmp_path):
    path = tmp_path / "missing.yaml"
    path.write_text(
        """modules:
  - key: X
    version: 1.0.0
    requires: {Y: ^1.0}
"""
    )
    return str(path)


@pytest.fixture
def cyclic_manifest(tmp_path):
    path = tmp_path / "cyclic.yaml"
    path.write_text(
        """modules:
  - key: A
    version: 1.0.0
    requires: {B: "*"}
  - key: B
    version: 1.0.0
    requires: {A: "*"}
"""
    )
    return str(path)


@pytest.fixture
def broken_manifest(tmp_path):
    """Version violation and conflict in one file."""
    path = tmp_path / "broken.yaml"
    path.write_text(
        """modules:
  - key: A
    version: 1.0.0
    requires: {B: ^2.0}
    conflicts: {C: "*"}
  - key: B
    version: 1.0.0
  - key: C
    version: 1.0.0
"""
    )
    return str(path)

