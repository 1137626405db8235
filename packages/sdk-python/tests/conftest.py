"""Pytest configuration and fixtures for SDK tests.

This conftest.py ensures tests work for both developers (editable install)
and users (pip installed package).
"""
import sys
import pytest
from pathlib import Path


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root and tests directory are in the Python path.

    This makes fixtures importable whether tests are run from:
    - The package directory (packages/sdk-python)
    - The project root
    - Or after pip install
    """
    package_root = Path(__file__).parent.parent
    tests_root = Path(__file__).parent

    # Add package root to path for local development
    package_root_str = str(package_root)
    if package_root_str not in sys.path:
        sys.path.insert(0, package_root_str)

    # Add tests directory for fixture imports
    tests_root_str = str(tests_root)
    if tests_root_str not in sys.path:
        sys.path.insert(0, tests_root_str)

    yield


@pytest.fixture
def make_module():
    """Factory for descriptors: make_module("auth", requires={"core": "^1.0"})"""
    from modresolve_sdk import ModuleDescriptor

    def _make(key, version="1.0.0", **kwargs):
        return ModuleDescriptor.create(key, version, **kwargs)

    return _make


@pytest.fixture
def core_auth_admin(make_module):
    """Three-module chain Core <- Auth <- Admin, declared out of order"""
    return [
        make_module("Admin", requires={"Auth": "^1.0", "Core": "^1.0"}),
        make_module("Core"),
        make_module("Auth", requires={"Core": "^1.0"}),
    ]


@pytest.fixture
def write_manifest(tmp_path):
    """Write YAML text to a file under tmp_path and return its path"""

    def _write(text, name="modules.yaml"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
