"""
Dependency Graph Construction
=============================

Builds the adjacency structure the resolver orders:
- one node per descriptor, in discovery order
- forward edges (required, then present optional dependencies)
- reverse "dependents" edges
- a record of every required edge whose target is absent

Building never fails on missing required dependencies. They are collected
and returned next to the (incomplete) graph so callers can decide whether
the holes are fatal. Duplicate module keys make the input unusable and
raise DuplicateModuleError.

The graph also offers read-only introspection used by diagnostics: cycle
listing, transitive closures, and Mermaid / DOT rendering.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from modresolve_common import DuplicateModuleError, get_logger

from .models import ModuleDescriptor, ModuleKey
from .version import VersionConstraint

logger = get_logger(__name__)


class NodeState(str, Enum):
    """Traversal marker for one node."""

    UNVISITED = "unvisited"
    VISITING = "visiting"  # on the current depth-first path
    RESOLVED = "resolved"


@dataclass(frozen=True)
class MissingEdge:
    """A required dependency whose target is not in the descriptor set."""

    module: ModuleKey
    dependency: ModuleKey
    constraint: VersionConstraint

    def __str__(self) -> str:
        return (
            f"Module {self.module} requires {self.dependency} {self.constraint} "
            f"but it is not installed"
        )


@dataclass
class GraphNode:
    """A module in the graph with its resolved edge lists."""

    descriptor: ModuleDescriptor
    requires: List[ModuleKey] = field(default_factory=list)
    optional: List[ModuleKey] = field(default_factory=list)
    dependents: List[ModuleKey] = field(default_factory=list)
    state: NodeState = NodeState.UNVISITED

    @property
    def key(self) -> ModuleKey:
        return self.descriptor.key

    @property
    def version(self) -> str:
        return self.descriptor.version

    @property
    def dependencies(self) -> List[ModuleKey]:
        """Required dependencies first, then present optional ones."""
        return self.requires + [k for k in self.optional if k not in self.requires]


class DependencyGraph:
    """
    Module dependency graph (directed, A -> B means A depends on B).

    Node iteration order is discovery order. Instances are created by
    GraphBuilder and owned by a single resolution call.
    """

    def __init__(self):
        self._nodes: Dict[ModuleKey, GraphNode] = {}
        self.missing: List[MissingEdge] = []

    # =========================================================================
    # Construction (GraphBuilder only)
    # =========================================================================

    def _add_node(self, descriptor: ModuleDescriptor) -> None:
        if descriptor.key in self._nodes:
            raise DuplicateModuleError(descriptor.key)
        self._nodes[descriptor.key] = GraphNode(descriptor=descriptor)

    def _add_edge(self, source: ModuleKey, target: ModuleKey, required: bool) -> None:
        node = self._nodes[source]
        edges = node.requires if required else node.optional
        if target not in edges:
            edges.append(target)
        dependents = self._nodes[target].dependents
        if source not in dependents:
            dependents.append(source)

    # =========================================================================
    # Queries
    # =========================================================================

    def node(self, key: str) -> GraphNode:
        return self._nodes[ModuleKey(key)]

    def get(self, key: str) -> Optional[GraphNode]:
        return self._nodes.get(key)

    def keys(self) -> List[ModuleKey]:
        return list(self._nodes)

    def nodes(self) -> List[GraphNode]:
        return list(self._nodes.values())

    def descriptor(self, key: str) -> ModuleDescriptor:
        return self.node(key).descriptor

    def get_dependencies(self, key: str) -> List[ModuleKey]:
        """Direct dependencies present in the graph"""
        node = self._nodes.get(key)
        return node.dependencies if node else []

    def get_dependents(self, key: str) -> List[ModuleKey]:
        """Modules that directly depend on ``key``"""
        node = self._nodes.get(key)
        return list(node.dependents) if node else []

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(node.dependencies) for node in self._nodes.values())

    def edges(self) -> Iterator[Tuple[ModuleKey, ModuleKey, VersionConstraint, bool]]:
        """Yield ``(source, target, constraint, required)`` for every present edge."""
        for node in self._nodes.values():
            for target in node.requires:
                yield node.key, target, node.descriptor.requires[target], True
            for target in node.optional:
                if target not in node.requires:
                    yield node.key, target, node.descriptor.optional[target], False

    def transitive_dependencies(self, key: str) -> Set[ModuleKey]:
        """Every module reachable from ``key`` through dependency edges"""
        return self._reach(key, lambda node: node.dependencies)

    def transitive_dependents(self, key: str) -> Set[ModuleKey]:
        """Every module that reaches ``key`` through dependency edges"""
        return self._reach(key, lambda node: node.dependents)

    def _reach(self, key: str, neighbours) -> Set[ModuleKey]:
        if key not in self._nodes:
            return set()
        visited: Set[ModuleKey] = set()
        stack = [self._nodes[key]]
        while stack:
            current = stack.pop()
            for neighbour in neighbours(current):
                if neighbour not in visited:
                    visited.add(neighbour)
                    stack.append(self._nodes[neighbour])
        return visited

    def roots(self) -> List[ModuleKey]:
        """Modules nothing depends on"""
        return [k for k, node in self._nodes.items() if not node.dependents]

    def leaves(self) -> List[ModuleKey]:
        """Modules without dependencies"""
        return [k for k, node in self._nodes.items() if not node.dependencies]

    def reset_states(self) -> None:
        for node in self._nodes.values():
            node.state = NodeState.UNVISITED

    # =========================================================================
    # Cycle listing
    # =========================================================================

    def find_cycles(self) -> List[List[ModuleKey]]:
        """
        List dependency cycles as closed paths (``[A, B, A]``).

        Depth-first search from every node in discovery order; a cycle is
        recorded whenever an edge reaches a node on the current path.
        Cycles over the same node set are reported once. Node states are
        left untouched.
        """
        cycles: List[List[ModuleKey]] = []
        seen: Set[frozenset] = set()
        done: Set[ModuleKey] = set()

        for start in self._nodes:
            if start in done:
                continue
            path: List[ModuleKey] = [start]
            on_path: Set[ModuleKey] = {start}
            stack = [iter(self._nodes[start].dependencies)]

            while stack:
                neighbour = next(stack[-1], None)
                if neighbour is None:
                    stack.pop()
                    finished = path.pop()
                    on_path.discard(finished)
                    done.add(finished)
                    continue
                if neighbour in on_path:
                    cycle = path[path.index(neighbour):] + [neighbour]
                    members = frozenset(cycle)
                    if members not in seen:
                        seen.add(members)
                        cycles.append(cycle)
                elif neighbour not in done:
                    path.append(neighbour)
                    on_path.add(neighbour)
                    stack.append(iter(self._nodes[neighbour].dependencies))

        return cycles

    def has_cycle(self) -> bool:
        return bool(self.find_cycles())

    # =========================================================================
    # Rendering
    # =========================================================================

    def to_mermaid(self, max_nodes: int = 100) -> str:
        """Mermaid ``graph TD`` text; optional edges are dotted."""
        lines = ["graph TD"]
        shown = list(self._nodes)[:max_nodes]
        shown_set = set(shown)

        for key in shown:
            node = self._nodes[key]
            lines.append(f'    {self._diagram_id(key)}["{key}@{node.version}"]')

        for source, target, constraint, required in self.edges():
            if source not in shown_set or target not in shown_set:
                continue
            arrow = "-->" if required else "-.->"
            label = f"|{constraint}|" if not constraint.is_wildcard else ""
            lines.append(
                f"    {self._diagram_id(source)} {arrow}{label} {self._diagram_id(target)}"
            )

        if len(self._nodes) > max_nodes:
            lines.append(f"    %% ... and {len(self._nodes) - max_nodes} more nodes")

        return "\n".join(lines)

    def to_dot(self, max_nodes: int = 100) -> str:
        """DOT (Graphviz) text; optional edges are dashed."""
        lines = [
            "digraph ModuleDependencies {",
            "    rankdir=TB;",
            "    node [shape=box, style=rounded];",
        ]
        shown = list(self._nodes)[:max_nodes]
        shown_set = set(shown)

        for key in shown:
            node = self._nodes[key]
            lines.append(f'    "{key}" [label="{key}\\n{node.version}"];')

        for source, target, constraint, required in self.edges():
            if source not in shown_set or target not in shown_set:
                continue
            attrs = []
            if not constraint.is_wildcard:
                attrs.append(f'label="{constraint}"')
            if not required:
                attrs.append("style=dashed")
            suffix = f" [{', '.join(attrs)}]" if attrs else ""
            lines.append(f'    "{source}" -> "{target}"{suffix};')

        lines.append("}")
        return "\n".join(lines)

    @staticmethod
    def _diagram_id(key: str) -> str:
        safe = "".join(ch if ch.isalnum() else "_" for ch in key)
        return f"m_{safe}"

    def to_dict(self) -> dict:
        return {
            "modules": {
                str(key): {
                    "version": node.version,
                    "requires": [str(k) for k in node.requires],
                    "optional": [str(k) for k in node.optional],
                    "dependents": [str(k) for k in node.dependents],
                }
                for key, node in self._nodes.items()
            },
            "missing": [
                {
                    "module": str(edge.module),
                    "dependency": str(edge.dependency),
                    "constraint": str(edge.constraint),
                }
                for edge in self.missing
            ],
        }

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> Iterator[ModuleKey]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={self.node_count}, edges={self.edge_count})"


class GraphBuilder:
    """Builds a DependencyGraph from a collection of descriptors."""

    def build(
        self, descriptors: Iterable[ModuleDescriptor]
    ) -> Tuple[DependencyGraph, List[str]]:
        """
        Build the dependency graph.

        Args:
            descriptors: Modules in discovery order

        Returns:
            ``(graph, errors)`` where ``errors`` lists one message per
            missing required dependency (also recorded on ``graph.missing``)

        Raises:
            DuplicateModuleError: If two descriptors share a key
        """
        graph = DependencyGraph()
        for descriptor in descriptors:
            graph._add_node(descriptor)

        errors: List[str] = []
        for node in graph.nodes():
            descriptor = node.descriptor

            for dependency, constraint in descriptor.requires.items():
                if dependency not in graph:
                    edge = MissingEdge(descriptor.key, dependency, constraint)
                    graph.missing.append(edge)
                    errors.append(str(edge))
                    continue
                graph._add_edge(descriptor.key, dependency, required=True)

            for dependency in descriptor.optional:
                if dependency in descriptor.requires:
                    continue
                if dependency not in graph:
                    logger.debug(
                        "Optional dependency not present",
                        module=descriptor.key,
                        dependency=dependency,
                    )
                    continue
                graph._add_edge(descriptor.key, dependency, required=False)

        logger.debug(
            "Dependency graph built",
            nodes=graph.node_count,
            edges=graph.edge_count,
            missing=len(graph.missing),
        )
        return graph, errors
