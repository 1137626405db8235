"""
modresolve Shared Constants

Single source of truth for defaults, environment variable names and
validation patterns used across the modresolve packages.

Usage:
    from modresolve_common.constants import Defaults, EnvVars, Patterns

    level = os.environ.get(EnvVars.LOG_LEVEL, Defaults.LOG_LEVEL)
"""


# =============================================================================
# VERSION INFORMATION
# =============================================================================


class VersionInfo:
    """Package and manifest format versions."""

    MODRESOLVE_VERSION = "0.1.0"
    """Current modresolve release"""

    SUPPORTED_MANIFEST_VERSIONS = ["1.0"]
    """Manifest file format versions accepted by the loader"""


# =============================================================================
# DEFAULT VALUES
# =============================================================================


class Defaults:
    """Default configuration values."""

    LOG_LEVEL = "warning"
    """Library log level when nothing is configured"""

    LOG_JSON = False
    """Emit plain text log lines unless JSON is requested"""

    MANIFEST_NAME = "module.yaml"
    """Per-module manifest file looked up during directory discovery"""

    WILDCARD_CONSTRAINT = "*"
    """Constraint used when a manifest leaves a dependency unconstrained"""


class EnvVars:
    """Environment variable names read by ``load_settings``."""

    PREFIX = "MODRESOLVE_"
    LOG_LEVEL = "MODRESOLVE_LOG_LEVEL"
    LOG_JSON = "MODRESOLVE_LOG_JSON"
    MANIFEST_NAME = "MODRESOLVE_MANIFEST_NAME"


# =============================================================================
# VALIDATION PATTERNS
# =============================================================================


class Patterns:
    """Regular expressions shared by the SDK and schema packages."""

    MODULE_KEY = r"^[A-Za-z0-9_][A-Za-z0-9_.\-/\\:]*\Z"
    """Module identifiers: vendor/package names or dotted/backslashed class paths"""

    CONSTRAINT_VERSION = r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-[0-9A-Za-z.\-]+)?(?:\+[0-9A-Za-z.\-]+)?\Z"
    """Version literal accepted inside a constraint expression"""

    MODULE_VERSION = r"^v?\d+(?:\.\d+){0,2}(?:[-+.][0-9A-Za-z.\-+]*)?\Z"
    """Version string accepted on a module manifest"""


LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]
"""Valid log levels for configuration"""

# Convenience aliases
MODRESOLVE_VERSION = VersionInfo.MODRESOLVE_VERSION
SUPPORTED_MANIFEST_VERSIONS = VersionInfo.SUPPORTED_MANIFEST_VERSIONS
