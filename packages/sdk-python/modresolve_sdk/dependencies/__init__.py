"""
modresolve Dependency Resolution
================================

Provides:
- Version parsing and constraint evaluation
- Module keys and immutable module descriptors
- Dependency graph construction
- Version constraint and conflict validation
- Load-order resolution with cycle detection

Resolution is pure and synchronous: each call builds its own graph from the
descriptors it is given and shares nothing with other calls.
"""

from .graph import DependencyGraph, GraphBuilder, GraphNode, MissingEdge, NodeState
from .models import ModuleDescriptor, ModuleKey
from .resolver import DependencyResolver, ResolutionResult, group_by_depth, resolve
from .validator import Conflict, ConstraintViolation, ValidationResult, VersionValidator
from .version import (
    Comparator,
    Version,
    VersionConstraint,
    VersionOperator,
    compare_versions,
    parse_constraint,
    parse_version,
    satisfies,
)

__all__ = [
    # Version utilities
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
]
