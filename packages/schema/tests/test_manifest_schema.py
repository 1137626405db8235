"""
Tests for module manifest schema models.

Tests cover:
- Valid single-module entries (minimal and full)
- Multi-module manifest files
- Field validators (key, version, constraint maps, labels)
- Model validators (self dependency, duplicate keys)
"""

import pytest
from modresolve_schema import ManifestFile, ModuleManifest, ValidationError


# =============================================================================
# MODULE ENTRIES
# =============================================================================


class TestModuleManifest:
    """Tests for ModuleManifest"""

    def test_minimal_defaults(self, minimal_module):
        module = ModuleManifest.model_validate(minimal_module)
        assert module.key == "core"
        assert module.version == "1.0.0"
        assert module.name is None
        assert module.requires == {}
        assert module.optional == {}
        assert module.conflicts == {}
        assert module.tags == []
        assert module.enabled is True

    def test_full_entry(self, full_module):
        module = ModuleManifest.model_validate(full_module)
        assert module.requires == {"acme/auth": "^1.0", "core": ">=1.0.0 <2.0.0"}
        assert module.tags == ["admin", "ui"]
        assert module.provides == ["AdminPanelInterface"]

    def test_requires_order_preserved(self, full_module):
        module = ModuleManifest.model_validate(full_module)
        assert list(module.requires) == ["acme/auth", "core"]

    def test_null_constraint_becomes_wildcard(self, full_module):
        module = ModuleManifest.model_validate(full_module)
        assert module.optional == {"acme/audit": "*"}

    def test_empty_constraint_becomes_wildcard(self):
        module = ModuleManifest.model_validate(
            {"key": "a", "version": "1.0.0", "requires": {"b": "  "}}
        )
        assert module.requires == {"b": "*"}

    def test_list_of_keys_accepted(self):
        module = ModuleManifest.model_validate(
            {"key": "a", "version": "1.0.0", "requires": ["b", "c"]}
        )
        assert module.requires == {"b": "*", "c": "*"}

    def test_null_map_accepted(self):
        module = ModuleManifest.model_validate({"key": "a", "version": "1.0.0", "conflicts": None})
        assert module.conflicts == {}

    def test_numeric_version_coerced(self):
        """YAML reads 1.0 as a float"""
        module = ModuleManifest.model_validate({"key": "a", "version": 1.5})
        assert module.version == "1.5"

    def test_numeric_constraint_coerced(self):
        module = ModuleManifest.model_validate(
            {"key": "a", "version": "1.0.0", "requires": {"b": 2}}
        )
        assert module.requires == {"b": "2"}

    def test_extra_fields_allowed(self, full_module):
        module = ModuleManifest.model_validate(full_module)
        assert module.model_extra["homepage"] == "https://example.com/admin"

    def test_disabled_flag(self):
        module = ModuleManifest.model_validate({"key": "a", "version": "1.0.0", "enabled": False})
        assert module.enabled is False

    @pytest.mark.parametrize("key", ["", "bad key", "-lead", "a@b", "core\n"])
    def test_invalid_key(self, key):
        with pytest.raises(ValidationError, match="Invalid module key"):
            ModuleManifest.model_validate({"key": key, "version": "1.0.0"})

    def test_invalid_dependency_key(self):
        with pytest.raises(ValidationError, match="dependency key"):
            ModuleManifest.model_validate(
                {"key": "a", "version": "1.0.0", "requires": {"bad key": "*"}}
            )

    @pytest.mark.parametrize("version", ["latest", "", "x1.0", "one.two"])
    def test_invalid_version(self, version):
        with pytest.raises(ValidationError, match="Invalid module version"):
            ModuleManifest.model_validate({"key": "a", "version": version})

    @pytest.mark.parametrize("version", ["1", "1.2", "v1.2.3", "1.0.0-beta.1", "2.0.0+build.7"])
    def test_valid_versions(self, version):
        assert ModuleManifest.model_validate({"key": "a", "version": version}).version == version

    def test_empty_tag_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            ModuleManifest.model_validate({"key": "a", "version": "1.0.0", "tags": ["ok", " "]})

    def test_self_requirement_rejected(self):
        with pytest.raises(ValidationError, match="lists itself"):
            ModuleManifest.model_validate(
                {"key": "a", "version": "1.0.0", "requires": {"a": "*"}}
            )

    def test_missing_version_is_pydantic_error(self):
        """Structural errors stay pydantic errors"""
        from pydantic import ValidationError as PydanticValidationError

        with pytest.raises(PydanticValidationError):
            ModuleManifest.model_validate({"key": "a"})


# =============================================================================
# MANIFEST FILES
# =============================================================================


class TestManifestFile:
    """Tests for ManifestFile"""

    def test_valid_file(self, manifest_file_data):
        manifest = ManifestFile.model_validate(manifest_file_data)
        assert manifest.version == "1.0"
        assert manifest.keys() == ["core", "acme/admin"]

    def test_version_defaults(self, minimal_module):
        assert ManifestFile.model_validate({"modules": [minimal_module]}).version == "1.0"

    def test_float_version_accepted(self, minimal_module):
        assert ManifestFile.model_validate({"version": 1.0, "modules": [minimal_module]}).version == "1.0"

    def test_unsupported_version(self, minimal_module):
        with pytest.raises(ValidationError, match="Unsupported manifest version"):
            ManifestFile.model_validate({"version": "2.0", "modules": [minimal_module]})

    def test_duplicate_keys_rejected(self, minimal_module):
        with pytest.raises(ValidationError, match="Duplicate module key"):
            ManifestFile.model_validate({"modules": [minimal_module, dict(minimal_module)]})

    def test_empty_module_list_allowed(self):
        assert ManifestFile.model_validate({"modules": []}).keys() == []

    def test_serialization_round_trip(self, manifest_file_data):
        manifest = ManifestFile.model_validate(manifest_file_data)
        again = ManifestFile.model_validate(manifest.model_dump())
        assert again.keys() == manifest.keys()
        assert again.modules[1].requires == manifest.modules[1].requires
