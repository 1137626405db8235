"""
modresolve Common Package

Shared primitives used across all modresolve packages.

This package provides:
- Exception classes for consistent error handling
- Constants for defaults, environment variables and patterns (namespaced)
- Structured logging
- Environment-driven settings

Usage:
    from modresolve_common import ParseError, MissingDependencyError
    from modresolve_common import get_logger, configure_logging
    from modresolve_common import Defaults, EnvVars, Patterns
"""

# Error classes
from .errors import (
    ResolverError,
    ValidationError,
    ParseError,
    ManifestError,
    DuplicateModuleError,
    RegistryFrozenError,
    ResolutionError,
    MissingDependencyError,
    VersionConstraintError,
    ConflictDetectedError,
    CircularDependencyError,
)

# Constants - Namespaced classes (recommended)
from .constants import (
    VersionInfo,
    Defaults,
    EnvVars,
    Patterns,
    LOG_LEVELS,
    MODRESOLVE_VERSION,
    SUPPORTED_MANIFEST_VERSIONS,
)

# Logger
from .logger import (
    ResolverLogger,
    StructuredFormatter,
    get_logger,
    configure_logging,
    set_resolution_id,
    get_resolution_id,
    clear_resolution_id,
)

# Settings
from .config import ResolverSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ResolverError",
    "ValidationError",
    "ParseError",
    "ManifestError",
    "DuplicateModuleError",
    "RegistryFrozenError",
    "ResolutionError",
    "MissingDependencyError",
    "VersionConstraintError",
    "ConflictDetectedError",
    "CircularDependencyError",
    # Namespaced constants
    "VersionInfo",
    "Defaults",
    "EnvVars",
    "Patterns",
    "LOG_LEVELS",
    "MODRESOLVE_VERSION",
    "SUPPORTED_MANIFEST_VERSIONS",
    # Logger
    "ResolverLogger",
    "StructuredFormatter",
    "get_logger",
    "configure_logging",
    "set_resolution_id",
    "get_resolution_id",
    "clear_resolution_id",
    # Settings
    "ResolverSettings",
    "load_settings",
]
