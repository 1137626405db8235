"""
modresolve Module Manifest Schema v1.0

Pydantic models for validating module manifests.

Design Principles:
- Pure validation: Receives dicts, validates structure, returns typed objects
- No file I/O: Reading YAML and turning manifests into descriptors is the SDK's job
- Extensible: Accepts unknown fields so modules can carry their own metadata

Two shapes are accepted:

    # A single module (one module.yaml per module directory)
    key: acme/auth
    version: 1.2.0
    requires:
      acme/core: ^1.0

    # A manifest file listing several modules
    version: "1.0"
    modules:
      - key: acme/core
        version: 1.0.0
      - key: acme/auth
        version: 1.2.0
        requires: {acme/core: ^1.0}

Usage:
    from modresolve_schema import ManifestFile

    data = yaml.safe_load(file_content)
    manifest = ManifestFile.model_validate(data)
"""

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing_extensions import Self

from modresolve_common import (
    Defaults,
    Patterns,
    SUPPORTED_MANIFEST_VERSIONS,
    ValidationError,
)

_MODULE_KEY = re.compile(Patterns.MODULE_KEY)
_MODULE_VERSION = re.compile(Patterns.MODULE_VERSION)


def _validate_key(value: str, field: str = "key") -> str:
    if not _MODULE_KEY.match(value):
        raise ValidationError(
            f"Invalid module {field}: '{value}'. Keys must be non-empty and contain only "
            "letters, digits and the characters _ . - / \\ :"
        )
    return value


# =============================================================================
# MODULE MODEL
# =============================================================================


class ModuleManifest(BaseModel):
    """
    One module's manifest entry.

    Dependency maps go from module key to constraint expression. A ``null``
    constraint means ``*``. Constraint syntax itself is checked when the SDK
    builds the descriptor, so a bad expression surfaces as a ParseError
    naming the expression.
    """

    key: str
    version: str
    name: Optional[str] = None
    description: str = ""
    requires: Dict[str, Optional[str]] = {}
    optional: Dict[str, Optional[str]] = {}
    conflicts: Dict[str, Optional[str]] = {}
    tags: List[str] = []
    provides: List[str] = []
    enabled: bool = True

    model_config = ConfigDict(extra="allow")

    @field_validator("key")
    @classmethod
    def validate_key_format(cls, v: str) -> str:
        """Validate module key format"""
        return _validate_key(v.strip())

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> Any:
        """YAML reads ``1.0`` as a float; keep it as text"""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("version")
    @classmethod
    def validate_version_format(cls, v: str) -> str:
        """Validate module version looks like a version"""
        v = v.strip()
        if not _MODULE_VERSION.match(v):
            raise ValidationError(
                f"Invalid module version: '{v}'. Expected MAJOR[.MINOR[.PATCH]] "
                "with an optional leading 'v' and pre-release/build suffix"
            )
        return v

    @field_validator("requires", "optional", "conflicts", mode="before")
    @classmethod
    def normalize_constraints(cls, v: Any) -> Any:
        """Accept a mapping or a bare list of keys; stringify numeric constraints"""
        if v is None:
            return {}
        if isinstance(v, list):
            return {item: None for item in v}
        if isinstance(v, dict):
            return {
                key: str(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else value
                for key, value in v.items()
            }
        return v

    @field_validator("requires", "optional", "conflicts")
    @classmethod
    def validate_constraint_keys(cls, v: Dict[str, Optional[str]]) -> Dict[str, str]:
        """Validate dependency keys and replace empty constraints with the wildcard"""
        normalized = {}
        for key, constraint in v.items():
            _validate_key(key, "dependency key")
            if constraint is None or not constraint.strip():
                constraint = Defaults.WILDCARD_CONSTRAINT
            normalized[key] = constraint.strip()
        return normalized

    @field_validator("tags", "provides")
    @classmethod
    def validate_labels(cls, v: List[str]) -> List[str]:
        """Tags and interface names must be non-empty"""
        cleaned = [item.strip() for item in v]
        if any(not item for item in cleaned):
            raise ValidationError("Tags and provided interfaces cannot be empty strings")
        return cleaned

    @model_validator(mode="after")
    def validate_no_self_dependency(self) -> Self:
        """A module cannot require itself"""
        if self.key in self.requires:
            raise ValidationError(f"Module '{self.key}' lists itself in requires")
        return self


# =============================================================================
# FILE MODEL
# =============================================================================


class ManifestFile(BaseModel):
    """
    Root model for a manifest file listing one or more modules.

    Module order is kept: it becomes the discovery order the resolver uses
    to break ties.
    """

    version: Literal["1.0"] = "1.0"
    modules: List[ModuleManifest]

    model_config = ConfigDict(extra="allow")

    @field_validator("version", mode="before")
    @classmethod
    def validate_version_supported(cls, v: Any) -> Any:
        """Validate manifest format version is supported"""
        text = str(v)
        if text not in SUPPORTED_MANIFEST_VERSIONS:
            raise ValidationError(
                f"Unsupported manifest version: '{text}'. "
                f"Supported versions: {', '.join(SUPPORTED_MANIFEST_VERSIONS)}"
            )
        return text

    @model_validator(mode="after")
    def validate_unique_keys(self) -> Self:
        """Module keys must be unique within a file"""
        seen = set()
        for module in self.modules:
            if module.key in seen:
                raise ValidationError(f"Duplicate module key in manifest: '{module.key}'")
            seen.add(module.key)
        return self

    def keys(self) -> List[str]:
        return [module.key for module in self.modules]
