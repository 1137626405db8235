"""
Module Descriptor Models
========================

Value types the resolver works on:
- ModuleKey: validated module identifier
- ModuleDescriptor: immutable record of one module's version and its
  required / optional / conflicting dependency maps
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

from modresolve_common import ValidationError, Patterns

from .version import VersionConstraint, parse_constraint

_MODULE_KEY = re.compile(Patterns.MODULE_KEY)

ConstraintLike = Union[str, VersionConstraint, None]


class ModuleKey(str):
    """
    Opaque module identifier.

    A ``str`` subclass so keys compare and hash like the underlying text;
    construction validates the format.
    """

    __slots__ = ()

    def __new__(cls, value: str) -> "ModuleKey":
        if isinstance(value, ModuleKey):
            return value
        if not isinstance(value, str):
            raise ValidationError(
                f"Module key must be a string, got {type(value).__name__}"
            )
        if not _MODULE_KEY.match(value):
            raise ValidationError(
                f"Invalid module key '{value}'. Keys must be non-empty and contain only "
                "letters, digits and the characters _ . - / \\ :"
            )
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"ModuleKey({str.__repr__(self)})"


def _freeze_constraints(
    owner: str, kind: str, mapping: Optional[Mapping[str, ConstraintLike]]
) -> Mapping[ModuleKey, VersionConstraint]:
    frozen = {}
    for raw_key, raw_constraint in (mapping or {}).items():
        key = ModuleKey(raw_key)
        if key in frozen:
            raise ValidationError(f"Module {owner} lists {key} twice in {kind}")
        frozen[key] = (
            VersionConstraint.any() if raw_constraint is None else parse_constraint(raw_constraint)
        )
    return MappingProxyType(frozen)


@dataclass(frozen=True, eq=False)
class ModuleDescriptor:
    """
    Immutable description of one discovered module.

    Dependency maps preserve declaration order, which is the order the
    resolver visits them in. Build instances with ``ModuleDescriptor.create``.
    """

    key: ModuleKey
    version: str
    requires: Mapping[ModuleKey, VersionConstraint] = field(
        default_factory=lambda: MappingProxyType({})
    )
    optional: Mapping[ModuleKey, VersionConstraint] = field(
        default_factory=lambda: MappingProxyType({})
    )
    conflicts: Mapping[ModuleKey, VersionConstraint] = field(
        default_factory=lambda: MappingProxyType({})
    )
    name: Optional[str] = None
    description: str = ""
    tags: Tuple[str, ...] = ()
    provides: Tuple[str, ...] = ()
    enabled: bool = True

    @classmethod
    def create(
        cls,
        key: str,
        version: str,
        requires: Optional[Mapping[str, ConstraintLike]] = None,
        optional: Optional[Mapping[str, ConstraintLike]] = None,
        conflicts: Optional[Mapping[str, ConstraintLike]] = None,
        name: Optional[str] = None,
        description: str = "",
        tags: Iterable[str] = (),
        provides: Iterable[str] = (),
        enabled: bool = True,
    ) -> "ModuleDescriptor":
        """
        Build a descriptor from plain strings.

        ``None`` constraints mean ``*``.

        Raises:
            ValidationError: If a key or the version is invalid
            ParseError: If a constraint expression is malformed
        """
        module_key = ModuleKey(key)
        if not isinstance(version, str) or not version.strip():
            raise ValidationError(f"Module {module_key} must declare a non-empty version")

        return cls(
            key=module_key,
            version=version.strip(),
            requires=_freeze_constraints(module_key, "requires", requires),
            optional=_freeze_constraints(module_key, "optional", optional),
            conflicts=_freeze_constraints(module_key, "conflicts", conflicts),
            name=name,
            description=description,
            tags=tuple(tags),
            provides=tuple(provides),
            enabled=enabled,
        )

    @property
    def display_name(self) -> str:
        return self.name or str(self.key)

    def all_dependencies(self) -> Mapping[ModuleKey, VersionConstraint]:
        """Required then optional dependencies; required wins on overlap."""
        ordered = dict(self.requires)
        for key, constraint in self.optional.items():
            ordered.setdefault(key, constraint)
        return MappingProxyType(ordered)

    def to_dict(self) -> dict:
        return {
            "key": str(self.key),
            "version": self.version,
            "name": self.name,
            "description": self.description,
            "requires": {str(k): str(v) for k, v in self.requires.items()},
            "optional": {str(k): str(v) for k, v in self.optional.items()},
            "conflicts": {str(k): str(v) for k, v in self.conflicts.items()},
            "tags": list(self.tags),
            "provides": list(self.provides),
            "enabled": self.enabled,
        }

    def __repr__(self) -> str:
        return f"ModuleDescriptor(key={str(self.key)!r}, version={self.version!r})"
