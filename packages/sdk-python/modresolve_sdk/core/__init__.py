"""
Core SDK Functionality
======================

Loading module manifests from disk and discovering module directories.
"""

from .manifest import (
    discover_modules,
    load_descriptors,
    load_manifest_file,
    manifest_to_descriptor,
)

__all__ = [
    "load_manifest_file",
    "discover_modules",
    "load_descriptors",
    "manifest_to_descriptor",
]
