"""
modresolve Error Classes

Every error raised or returned by modresolve derives from ResolverError, which
carries a human-readable message and a stable machine-readable code.

Hierarchy:
    ResolverError
    ├── ValidationError          invalid key / descriptor input
    ├── ParseError               malformed version constraint expression
    ├── ManifestError            unreadable or invalid manifest file
    ├── DuplicateModuleError     same module key supplied twice
    ├── RegistryFrozenError      registry mutated after freeze()
    └── ResolutionError          fatal outcome of a resolution pass
        ├── MissingDependencyError
        ├── VersionConstraintError
        ├── ConflictDetectedError
        └── CircularDependencyError

Usage:
    from modresolve_common import MissingDependencyError

    err = MissingDependencyError("app/admin", "app/auth", "^1.0")
    err.to_dict()  # {"error": "MissingDependencyError", "code": ..., ...}
"""

from typing import Any, Dict, List, Optional, Sequence


class ResolverError(Exception):
    """Base class for all modresolve errors."""

    code = "RESOLVER_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for JSON output."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }


class ValidationError(ResolverError):
    """Raised when a module key or descriptor field is invalid."""

    code = "VALIDATION_ERROR"


class ParseError(ResolverError):
    """Raised when a version constraint expression cannot be parsed."""

    code = "PARSE_ERROR"

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid version constraint '{expression}': {reason}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["expression"] = self.expression
        data["reason"] = self.reason
        return data


class ManifestError(ResolverError):
    """Raised when a module manifest cannot be read or validated."""

    code = "MANIFEST_ERROR"

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class DuplicateModuleError(ResolverError):
    """Raised when the same module key is supplied more than once."""

    code = "DUPLICATE_MODULE"

    def __init__(self, module: str):
        self.module = module
        super().__init__(f"Module {module} is declared more than once")


class RegistryFrozenError(ResolverError):
    """Raised when registering into a registry that has been frozen."""

    code = "REGISTRY_FROZEN"

    def __init__(self, module: str):
        self.module = module
        super().__init__(f"Cannot register {module}: the module registry is frozen")


# =============================================================================
# RESOLUTION FAILURES
# =============================================================================


class ResolutionError(ResolverError):
    """Base class for the fatal outcomes of a resolution pass."""

    code = "RESOLUTION_ERROR"

    @property
    def messages(self) -> List[str]:
        """Every diagnostic carried by this error."""
        return [self.message]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["messages"] = self.messages
        return data


class MissingDependencyError(ResolutionError):
    """
    A required dependency is absent from the descriptor set.

    ``module`` and ``dependency`` name the first missing edge; ``missing``
    holds the message for every missing edge found while building the graph.
    """

    code = "MISSING_DEPENDENCY"

    def __init__(
        self,
        module: str,
        dependency: str,
        constraint: str = "*",
        missing: Optional[Sequence[str]] = None,
    ):
        self.module = module
        self.dependency = dependency
        self.constraint = constraint
        first = f"Module {module} requires {dependency} {constraint} but it is not installed"
        self.missing = list(missing) if missing else [first]
        super().__init__(first)

    @property
    def messages(self) -> List[str]:
        return list(self.missing)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["module"] = self.module
        data["dependency"] = self.dependency
        return data


class VersionConstraintError(ResolutionError):
    """One or more dependency edges point at a version outside their constraint."""

    code = "VERSION_CONSTRAINT"

    def __init__(self, violations: Sequence[str]):
        self.violations = list(violations)
        count = len(self.violations)
        summary = f"{count} version constraint violation{'s' if count != 1 else ''}"
        super().__init__(summary + ":\n  - " + "\n  - ".join(self.violations))

    @property
    def messages(self) -> List[str]:
        return list(self.violations)


class ConflictDetectedError(ResolutionError):
    """Two present modules are declared mutually incompatible."""

    code = "CONFLICT_DETECTED"

    def __init__(
        self,
        module: str,
        conflicting_module: str,
        constraint: str,
        conflicts: Optional[Sequence[str]] = None,
        violations: Optional[Sequence[str]] = None,
    ):
        self.module = module
        self.conflicting_module = conflicting_module
        self.constraint = constraint
        first = f"Module {module} conflicts with {conflicting_module} {constraint}"
        self.conflicts = list(conflicts) if conflicts else [first]
        self.violations = list(violations or [])
        super().__init__(first)

    @property
    def messages(self) -> List[str]:
        """Every problem found in the same pass, version violations first."""
        return self.violations + self.conflicts

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["module"] = self.module
        data["conflicting_module"] = self.conflicting_module
        data["constraint"] = self.constraint
        return data


class CircularDependencyError(ResolutionError):
    """A cycle was found while ordering; ``module`` is where it was re-entered."""

    code = "CIRCULAR_DEPENDENCY"

    def __init__(self, module: str, cycle: Optional[Sequence[str]] = None):
        self.module = module
        self.cycle = list(cycle) if cycle else [module, module]
        super().__init__(
            f"Circular dependency detected involving module {module}: "
            + " -> ".join(self.cycle)
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["module"] = self.module
        data["cycle"] = self.cycle
        return data
