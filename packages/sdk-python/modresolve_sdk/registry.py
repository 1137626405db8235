"""
Module Registry
===============

Lookup table from module key to descriptor and (optionally) the module
instance the loader will register and boot.

The registry is populated by the caller and handed to the resolver or the
loader explicitly; nothing in modresolve keeps a global registry. Tag and
interface lookups are secondary indexes over the same descriptors and never
influence load order.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from modresolve_common import DuplicateModuleError, RegistryFrozenError, get_logger

from .dependencies.models import ModuleDescriptor, ModuleKey

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    """A registered module."""

    descriptor: ModuleDescriptor
    instance: Any = None


class ModuleRegistry:
    """Registration-ordered store of module descriptors and instances."""

    def __init__(self):
        self._entries: Dict[ModuleKey, RegistryEntry] = {}
        self._by_tag: Dict[str, List[ModuleKey]] = {}
        self._by_interface: Dict[str, List[ModuleKey]] = {}
        self._frozen = False

    def register(self, descriptor: ModuleDescriptor, instance: Any = None) -> None:
        """
        Add a module.

        Raises:
            DuplicateModuleError: If the key is already registered
            RegistryFrozenError: If the registry has been frozen
        """
        if self._frozen:
            raise RegistryFrozenError(descriptor.key)
        if descriptor.key in self._entries:
            raise DuplicateModuleError(descriptor.key)

        self._entries[descriptor.key] = RegistryEntry(descriptor=descriptor, instance=instance)
        for tag in descriptor.tags:
            self._by_tag.setdefault(tag, []).append(descriptor.key)
        for interface in descriptor.provides:
            self._by_interface.setdefault(interface, []).append(descriptor.key)

        logger.debug("Module registered", module=descriptor.key, version=descriptor.version)

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # =========================================================================
    # Lookups
    # =========================================================================

    def has(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[RegistryEntry]:
        return self._entries.get(key)

    def descriptor(self, key: str) -> ModuleDescriptor:
        """Raises KeyError for unknown keys."""
        return self._entries[key].descriptor

    def instance(self, key: str) -> Any:
        """Raises KeyError for unknown keys."""
        return self._entries[key].instance

    def keys(self) -> List[ModuleKey]:
        return list(self._entries)

    def descriptors(self) -> List[ModuleDescriptor]:
        """Descriptors in registration order."""
        return [entry.descriptor for entry in self._entries.values()]

    # =========================================================================
    # Secondary indexes
    # =========================================================================

    def by_tag(self, tag: str) -> List[ModuleDescriptor]:
        """Modules carrying ``tag``, in registration order."""
        return [self._entries[key].descriptor for key in self._by_tag.get(tag, [])]

    def by_interface(self, interface: str) -> List[ModuleDescriptor]:
        """Modules declaring that they provide ``interface``."""
        return [self._entries[key].descriptor for key in self._by_interface.get(interface, [])]

    def tags(self) -> List[str]:
        return sorted(self._by_tag)

    def interfaces(self) -> List[str]:
        return sorted(self._by_interface)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[ModuleKey]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"ModuleRegistry(modules={len(self._entries)}, frozen={self._frozen})"
