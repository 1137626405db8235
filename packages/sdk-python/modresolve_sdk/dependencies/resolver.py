"""
Dependency Resolution
=====================

Produces the module load order: dependencies always before their
dependents, ties broken by discovery order.

Resolution Rules:
1. Build the graph. Any missing required dependency -> MissingDependencyError
   (ordering is not attempted).
2. Validate constraints. Any conflict -> ConflictDetectedError; otherwise any
   version violation -> VersionConstraintError. Both carry every message.
3. Depth-first ordering in discovery order (required dependencies first,
   then present optional ones). Re-entering a module that is still being
   visited -> CircularDependencyError.

Failure is total: the result carries either a complete order or an error,
never a partial order. ``resolve`` returns a ResolutionResult instead of
raising so every failure kind is handled explicitly; ``unwrap()`` raises the
carried error for callers that prefer exceptions.
"""

import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

from modresolve_common import (
    CircularDependencyError,
    ConflictDetectedError,
    DuplicateModuleError,
    MissingDependencyError,
    ResolverError,
    VersionConstraintError,
    clear_resolution_id,
    get_logger,
    set_resolution_id,
)

from .graph import DependencyGraph, GraphBuilder, NodeState
from .models import ModuleDescriptor, ModuleKey
from .validator import VersionValidator

if TYPE_CHECKING:
    from ..registry import ModuleRegistry

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """
    Outcome of one resolution pass.

    On success ``order`` holds the load order and ``error`` is None; on
    failure ``error`` holds the reason and ``order`` is empty.
    """

    order: Tuple[ModuleKey, ...] = ()
    error: Optional[ResolverError] = None

    @classmethod
    def success(cls, order: Sequence[ModuleKey]) -> "ResolutionResult":
        return cls(order=tuple(order))

    @classmethod
    def failure(cls, error: ResolverError) -> "ResolutionResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def messages(self) -> List[str]:
        if self.error is None:
            return []
        return list(getattr(self.error, "messages", [self.error.message]))

    def unwrap(self) -> Tuple[ModuleKey, ...]:
        """Return the order, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.order

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"ok": False, "error": self.error.to_dict()}
        return {"ok": True, "order": [str(key) for key in self.order]}

    def __bool__(self) -> bool:
        return self.ok


class DependencyResolver:
    """
    Orders modules so that every module loads after its dependencies.

    Holds no state between calls; every call builds and owns its own graph.
    """

    def __init__(
        self,
        graph_builder: Optional[GraphBuilder] = None,
        version_validator: Optional[VersionValidator] = None,
    ):
        self.graph_builder = graph_builder or GraphBuilder()
        self.version_validator = version_validator or VersionValidator()

    def resolve(self, descriptors: Iterable[ModuleDescriptor]) -> ResolutionResult:
        """
        Resolve the load order of a descriptor set.

        Args:
            descriptors: Modules in discovery order

        Returns:
            ResolutionResult with the order, or with the first fatal error
        """
        result, _ = self._resolve(tuple(descriptors))
        return result

    def resolve_registry(
        self, registry: "ModuleRegistry", enabled_only: bool = False
    ) -> ResolutionResult:
        """
        Resolve the descriptors held by a registry, in registration order.

        With ``enabled_only`` disabled modules are treated as not installed.
        """
        descriptors = registry.descriptors()
        if enabled_only:
            descriptors = [d for d in descriptors if d.enabled]
        return self.resolve(descriptors)

    def load_groups(self, descriptors: Iterable[ModuleDescriptor]) -> List[List[ModuleKey]]:
        """
        Split the load order into groups that could load side by side.

        Each module sits in the first group after all of its dependencies;
        no two modules in a group depend on each other. Group contents keep
        load order.

        Raises:
            ResolutionError: If the descriptors do not resolve
        """
        result, graph = self._resolve(tuple(descriptors))
        order = result.unwrap()
        return group_by_depth(graph, order)

    def _resolve(
        self, descriptors: Tuple[ModuleDescriptor, ...]
    ) -> Tuple[ResolutionResult, Optional[DependencyGraph]]:
        set_resolution_id(uuid.uuid4().hex[:12])
        try:
            logger.info("Resolving module load order", modules=len(descriptors))

            try:
                graph, errors = self.graph_builder.build(descriptors)
            except DuplicateModuleError as e:
                return self._fail(e), None

            if graph.missing:
                first = graph.missing[0]
                error = MissingDependencyError(
                    first.module, first.dependency, str(first.constraint), missing=errors
                )
                return self._fail(error), graph

            validation = self.version_validator.validate_constraints(graph)
            if validation.conflicts:
                first_conflict = validation.conflicts[0]
                error = ConflictDetectedError(
                    first_conflict.module,
                    first_conflict.conflicting_module,
                    str(first_conflict.constraint),
                    conflicts=[str(c) for c in validation.conflicts],
                    violations=[str(v) for v in validation.violations],
                )
                return self._fail(error), graph
            if validation.violations:
                error = VersionConstraintError([str(v) for v in validation.violations])
                return self._fail(error), graph

            try:
                order = self._order(graph)
            except CircularDependencyError as e:
                return self._fail(e), graph

            logger.info("Module load order resolved", modules=len(order))
            return ResolutionResult.success(order), graph
        finally:
            clear_resolution_id()

    def _fail(self, error: ResolverError) -> ResolutionResult:
        logger.warning("Module resolution failed", code=error.code, reason=error.message)
        return ResolutionResult.failure(error)

    def _order(self, graph: DependencyGraph) -> List[ModuleKey]:
        """
        Depth-first post-order over the graph.

        Uses an explicit stack of dependency iterators, so the traversal order
        is that of the recursive formulation without its depth limit.
        """
        order: List[ModuleKey] = []

        for start in graph:
            start_node = graph.node(start)
            if start_node.state != NodeState.UNVISITED:
                continue

            start_node.state = NodeState.VISITING
            path: List[ModuleKey] = [start]
            stack = [iter(start_node.dependencies)]

            while stack:
                dependency = next(stack[-1], None)

                if dependency is None:
                    stack.pop()
                    finished = graph.node(path.pop())
                    finished.state = NodeState.RESOLVED
                    order.append(finished.key)
                    continue

                node = graph.node(dependency)
                if node.state == NodeState.RESOLVED:
                    continue
                if node.state == NodeState.VISITING:
                    cycle = path[path.index(dependency):] + [dependency]
                    raise CircularDependencyError(dependency, cycle)

                node.state = NodeState.VISITING
                path.append(dependency)
                stack.append(iter(node.dependencies))

        return order


def group_by_depth(graph: DependencyGraph, order: Sequence[ModuleKey]) -> List[List[ModuleKey]]:
    """Group an already-resolved order by dependency depth."""
    depth: Dict[ModuleKey, int] = {}
    groups: List[List[ModuleKey]] = []

    for key in order:
        level = 1 + max((depth[d] for d in graph.get_dependencies(key)), default=-1)
        depth[key] = level
        if level == len(groups):
            groups.append([])
        groups[level].append(key)

    return groups


def resolve(descriptors: Iterable[ModuleDescriptor]) -> ResolutionResult:
    """Resolve with a default DependencyResolver."""
    return DependencyResolver().resolve(descriptors)
