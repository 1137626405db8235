"""Pytest configuration and fixtures for schema tests.

This conftest.py ensures tests work for both developers (editable install)
and users (pip installed package).
"""
import sys
import pytest
from pathlib import Path


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root is in the Python path.

    This makes the package importable whether tests are run from:
    - The package directory (packages/schema)
    - The project root
    - Or after pip install
    """
    package_root = Path(__file__).parent.parent

    # Add package root to path for local development
    package_root_str = str(package_root)
    if package_root_str not in sys.path:
        sys.path.insert(0, package_root_str)

    yield


@pytest.fixture
def minimal_module():
    """Smallest valid module entry"""
    return {"key": "core", "version": "1.0.0"}


@pytest.fixture
def full_module():
    """Module entry using every known field"""
    return {
        "key": "acme/admin",
        "version": "2.1.0",
        "name": "Admin Panel",
        "description": "Back-office screens",
        "requires": {"acme/auth": "^1.0", "core": ">=1.0.0 <2.0.0"},
        "optional": {"acme/audit": None},
        "conflicts": {"legacy/admin": "*"},
        "tags": ["admin", "ui"],
        "provides": ["AdminPanelInterface"],
        "enabled": True,
        "homepage": "https://example.com/admin",
    }


@pytest.fixture
def manifest_file_data(minimal_module, full_module):
    """Multi-module manifest file"""
    return {"version": "1.0", "modules": [minimal_module, full_module]}
