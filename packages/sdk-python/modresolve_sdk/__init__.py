"""modresolve SDK - module dependency resolution for plugin systems.

This package provides tools for:
- Describing modules and their required, optional and conflicting dependencies
- Resolving a load order that puts every module after its dependencies
- Validating version constraints and declared conflicts
- Registering module instances and booting them in order
- Loading module manifests from YAML

Example:
    >>> from modresolve_sdk import ModuleDescriptor, resolve
    >>> core = ModuleDescriptor.create("core", "1.0.0")
    >>> auth = ModuleDescriptor.create("auth", "1.0.0", requires={"core": "^1.0"})
    >>> resolve([auth, core]).unwrap()
    (ModuleKey('core'), ModuleKey('auth'))

Package Structure:
    modresolve_sdk/
    ├── core/           - Manifest loading and module discovery
    ├── dependencies/   - Versions, descriptors, graph, validation, resolution
    ├── registry.py     - Module registry with tag / interface indexes
    └── loader.py       - Ordered register / boot lifecycle
"""

# Core loading
from .core import discover_modules, load_descriptors, load_manifest_file, manifest_to_descriptor

# Dependency resolution
from .dependencies import (
    Comparator,
    Conflict,
    ConstraintViolation,
    DependencyGraph,
    DependencyResolver,
    GraphBuilder,
    GraphNode,
    MissingEdge,
    ModuleDescriptor,
    ModuleKey,
    NodeState,
    ResolutionResult,
    ValidationResult,
    Version,
    VersionConstraint,
    VersionOperator,
    VersionValidator,
    compare_versions,
    group_by_depth,
    parse_constraint,
    parse_version,
    resolve,
    satisfies,
)

# Registry and lifecycle
from .loader import LoadReport, ModuleLoader
from .registry import ModuleRegistry, RegistryEntry

# Errors
from modresolve_common import (
    CircularDependencyError,
    ConflictDetectedError,
    DuplicateModuleError,
    ManifestError,
    MissingDependencyError,
    ParseError,
    RegistryFrozenError,
    ResolutionError,
    ResolverError,
    ValidationError,
    VersionConstraintError,
)

__version__ = "0.1.0"

__all__ = [
    # Core loading
    "load_manifest_file",
    "discover_modules",
    "load_descriptors",
    "manifest_to_descriptor",
    # Versions
    "Version",
    "VersionOperator",
    "Comparator",
    "VersionConstraint",
    "parse_version",
    "parse_constraint",
    "compare_versions",
    "satisfies",
    # Models
    "ModuleKey",
    "ModuleDescriptor",
    # Graph
    "DependencyGraph",
    "GraphBuilder",
    "GraphNode",
    "MissingEdge",
    "NodeState",
    # Validation
    "VersionValidator",
    "ValidationResult",
    "ConstraintViolation",
    "Conflict",
    # Resolution
    "DependencyResolver",
    "ResolutionResult",
    "group_by_depth",
    "resolve",
    # Registry and lifecycle
    "ModuleRegistry",
    "RegistryEntry",
    "ModuleLoader",
    "LoadReport",
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
]
