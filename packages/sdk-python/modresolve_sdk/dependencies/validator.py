"""
Version Constraint Validation
=============================

Walks a built DependencyGraph and checks:
- every present required / optional edge: the target's version satisfies
  the declared constraint
- every conflict declaration: the named module, if present, must NOT match
  the conflict constraint (``*`` forbids any presence)

All problems are collected in one pass so callers can report everything
that is wrong at once.
"""

from dataclasses import dataclass, field
from typing import List

from modresolve_common import get_logger

from .graph import DependencyGraph
from .models import ModuleKey
from .version import VersionConstraint

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConstraintViolation:
    """A dependency edge whose target version falls outside the constraint."""

    module: ModuleKey
    dependency: ModuleKey
    constraint: VersionConstraint
    actual_version: str
    required: bool = True

    def __str__(self) -> str:
        return (
            f"{self.module} requires {self.dependency} {self.constraint}, "
            f"but {self.actual_version} is present"
        )


@dataclass(frozen=True)
class Conflict:
    """A present module matching another module's conflict declaration."""

    module: ModuleKey
    conflicting_module: ModuleKey
    constraint: VersionConstraint
    actual_version: str

    def __str__(self) -> str:
        return (
            f"{self.module} conflicts with {self.conflicting_module} {self.constraint}, "
            f"but {self.actual_version} is present"
        )


@dataclass
class ValidationResult:
    """Outcome of validating a graph's constraints and conflicts."""

    violations: List[ConstraintViolation] = field(default_factory=list)
    conflicts: List[Conflict] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations and not self.conflicts

    @property
    def messages(self) -> List[str]:
        """Violation messages first, then conflict messages."""
        return [str(v) for v in self.violations] + [str(c) for c in self.conflicts]

    def __bool__(self) -> bool:
        return self.is_valid


class VersionValidator:
    """Checks version constraints and conflicts over a dependency graph."""

    def validate_constraints(self, graph: DependencyGraph) -> ValidationResult:
        """
        Validate every present dependency edge and every conflict declaration.

        Optional dependencies whose target is absent were never added to the
        graph and are not checked here.

        Args:
            graph: Graph produced by GraphBuilder

        Returns:
            ValidationResult listing all violations and conflicts
        """
        result = ValidationResult()

        for source, target, constraint, required in graph.edges():
            actual = graph.node(target).version
            if not constraint.satisfied_by(actual):
                result.violations.append(
                    ConstraintViolation(
                        module=source,
                        dependency=target,
                        constraint=constraint,
                        actual_version=actual,
                        required=required,
                    )
                )

        for node in graph.nodes():
            for target, constraint in node.descriptor.conflicts.items():
                if target == node.key or target not in graph:
                    continue
                actual = graph.node(target).version
                if constraint.satisfied_by(actual):
                    result.conflicts.append(
                        Conflict(
                            module=node.key,
                            conflicting_module=target,
                            constraint=constraint,
                            actual_version=actual,
                        )
                    )

        logger.debug(
            "Version constraints validated",
            modules_checked=graph.node_count,
            violations_found=len(result.violations),
            conflicts_found=len(result.conflicts),
        )
        return result

    def validate_single_constraint(self, version: str, constraint: str) -> bool:
        """Check one version against one constraint expression."""
        return VersionConstraint.parse(constraint).satisfied_by(version)
