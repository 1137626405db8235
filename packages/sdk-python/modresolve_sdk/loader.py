"""
Module Loader
=============

Boots registered module instances in resolved order.

Loading happens in three phases:
1. Freeze the registry and resolve its enabled descriptors. Any resolution
   failure is raised here, before a single instance is touched.
2. Call ``register()`` on every instance in load order.
3. Call ``boot()`` on every instance in load order.

Both hooks are optional on an instance; modules without an instance are
ordered but not called.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from modresolve_common import get_logger

from .dependencies.models import ModuleKey
from .dependencies.resolver import DependencyResolver
from .registry import ModuleRegistry

logger = get_logger(__name__)


@dataclass
class LoadReport:
    """What the loader did."""

    order: List[ModuleKey] = field(default_factory=list)
    registered: List[ModuleKey] = field(default_factory=list)
    booted: List[ModuleKey] = field(default_factory=list)


class ModuleLoader:
    """Resolves a registry and runs module lifecycle hooks in order."""

    def __init__(
        self,
        registry: ModuleRegistry,
        resolver: Optional[DependencyResolver] = None,
    ):
        self.registry = registry
        self.resolver = resolver or DependencyResolver()

    def load(self) -> LoadReport:
        """
        Resolve and boot every enabled module.

        Returns:
            LoadReport

        Raises:
            ResolutionError: If the enabled modules do not resolve; no hook
                has been called in that case
        """
        self.registry.freeze()
        result = self.resolver.resolve_registry(self.registry, enabled_only=True)
        order = list(result.unwrap())

        report = LoadReport(order=order)
        for key in order:
            if self._call_hook(key, "register"):
                report.registered.append(key)
        for key in order:
            if self._call_hook(key, "boot"):
                report.booted.append(key)

        logger.info(
            "Modules loaded",
            modules=len(order),
            registered=len(report.registered),
            booted=len(report.booted),
        )
        return report

    def _call_hook(self, key: ModuleKey, hook: str) -> bool:
        instance = self.registry.instance(key)
        method = getattr(instance, hook, None) if instance is not None else None
        if not callable(method):
            return False
        logger.debug("Running module hook", module=key, hook=hook)
        method()
        return True
