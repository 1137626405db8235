"""
Manifest Loading and Module Discovery
=====================================

Turns YAML manifests on disk into ModuleDescriptors, in discovery order.

Two layouts are supported:
- a single manifest file with a ``modules:`` list (file order is discovery order)
- a modules directory where each immediate subdirectory holds its own
  ``module.yaml`` (subdirectories are visited in sorted name order)

Every I/O, YAML or schema problem is reported as a ManifestError naming the
offending file. Malformed constraint expressions raise ParseError.
"""

from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from modresolve_common import (
    Defaults,
    ManifestError,
    ParseError,
    ResolverError,
    get_logger,
)
from modresolve_schema import ManifestFile, ModuleManifest

from ..dependencies.models import ModuleDescriptor

logger = get_logger(__name__)

PathLike = Union[str, Path]


def manifest_to_descriptor(manifest: ModuleManifest) -> ModuleDescriptor:
    """
    Build a descriptor from a validated manifest entry.

    Raises:
        ParseError: If a constraint expression is malformed
    """
    return ModuleDescriptor.create(
        key=manifest.key,
        version=manifest.version,
        requires=manifest.requires,
        optional=manifest.optional,
        conflicts=manifest.conflicts,
        name=manifest.name,
        description=manifest.description,
        tags=manifest.tags,
        provides=manifest.provides,
        enabled=manifest.enabled,
    )


def _read_yaml(file_path: Path) -> Any:
    if not file_path.is_file():
        raise ManifestError("Manifest file not found", path=str(file_path))

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML: {e}", path=str(file_path)) from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest: {e}", path=str(file_path)) from e

    if data is None:
        raise ManifestError("Manifest is empty", path=str(file_path))
    if not isinstance(data, dict):
        raise ManifestError(
            f"Manifest must be a mapping, got {type(data).__name__}", path=str(file_path)
        )
    return data


def _descriptors_from(data: dict, file_path: Path) -> List[ModuleDescriptor]:
    try:
        if "modules" in data:
            manifests = ManifestFile.model_validate(data).modules
        else:
            manifests = [ModuleManifest.model_validate(data)]
    except PydanticValidationError as e:
        raise ManifestError(f"Invalid manifest structure:\n{e}", path=str(file_path)) from e
    except ResolverError as e:
        raise ManifestError(e.message, path=str(file_path)) from e

    try:
        return [manifest_to_descriptor(manifest) for manifest in manifests]
    except ParseError:
        raise
    except ResolverError as e:
        raise ManifestError(e.message, path=str(file_path)) from e


def load_manifest_file(path: PathLike) -> List[ModuleDescriptor]:
    """
    Load every module declared in one manifest file.

    The file either lists modules under ``modules:`` or describes a single
    module at the top level.

    Args:
        path: Manifest file path

    Returns:
        Descriptors in file order

    Raises:
        ManifestError: If the file is missing, unreadable or invalid
        ParseError: If a constraint expression is malformed
    """
    file_path = Path(path)
    data = _read_yaml(file_path)
    descriptors = _descriptors_from(data, file_path)
    logger.debug("Manifest loaded", path=str(file_path), modules=len(descriptors))
    return descriptors


def discover_modules(
    directory: PathLike, manifest_name: Optional[str] = None
) -> List[ModuleDescriptor]:
    """
    Discover modules laid out one per subdirectory.

    Subdirectories without a manifest are skipped. Discovery order is the
    sorted subdirectory name order, so results are stable across
    filesystems.

    Args:
        directory: Directory whose immediate children are module directories
        manifest_name: Manifest file name inside each module directory

    Returns:
        Descriptors in discovery order

    Raises:
        ManifestError: If the directory is missing or a manifest is invalid
        ParseError: If a constraint expression is malformed
    """
    root = Path(directory)
    if not root.is_dir():
        raise ManifestError("Modules directory not found", path=str(root))

    name = manifest_name or Defaults.MANIFEST_NAME
    descriptors: List[ModuleDescriptor] = []

    for module_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        manifest_path = module_dir / name
        if not manifest_path.is_file():
            logger.debug("Skipping directory without manifest", path=str(module_dir))
            continue
        descriptors.extend(load_manifest_file(manifest_path))

    logger.info("Modules discovered", path=str(root), modules=len(descriptors))
    return descriptors


def load_descriptors(
    path: PathLike, manifest_name: Optional[str] = None
) -> List[ModuleDescriptor]:
    """Load from a manifest file, or discover from a modules directory."""
    target = Path(path)
    if target.is_dir():
        return discover_modules(target, manifest_name=manifest_name)
    return load_manifest_file(target)
