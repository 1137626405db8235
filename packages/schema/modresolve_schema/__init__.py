"""
modresolve Schema Package

Pydantic models for module manifests. Pure validation: no file I/O and no
knowledge of the resolver.

Usage:
    from modresolve_schema import ManifestFile, ModuleManifest
"""

from modresolve_common import ValidationError

from .manifest_v1 import ManifestFile, ModuleManifest

__version__ = "0.1.0"

__all__ = [
    "ModuleManifest",
    "ManifestFile",
    "ValidationError",
]
