"""
modresolve Settings

Runtime settings read from ``MODRESOLVE_*`` environment variables by
pydantic-settings. Only the CLI and discovery front-end consult these; the
resolver core takes everything it needs as explicit arguments.

Usage:
    from modresolve_common.config import load_settings

    settings = load_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)
"""

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import LOG_LEVELS, Defaults, EnvVars
from .errors import ValidationError


class ResolverSettings(BaseSettings):
    """Validated runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix=EnvVars.PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    log_level: str = Defaults.LOG_LEVEL
    log_json: bool = Defaults.LOG_JSON
    manifest_name: str = Defaults.MANIFEST_NAME

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level"""
        normalized = v.strip().lower()
        if normalized == "warn":
            normalized = "warning"
        if normalized not in LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level '{v}'. Supported levels: {', '.join(LOG_LEVELS)}"
            )
        return normalized

    @field_validator("manifest_name")
    @classmethod
    def validate_manifest_name(cls, v: str) -> str:
        """Manifest name must be a bare YAML file name"""
        v = v.strip()
        if not v or "/" in v or "\\" in v:
            raise ValidationError(f"Manifest name must be a plain file name. Got: '{v}'")
        if not v.endswith((".yaml", ".yml")):
            raise ValidationError(f"Manifest name must end with .yaml or .yml. Got: '{v}'")
        return v


def load_settings() -> ResolverSettings:
    """
    Build settings from the environment.

    Returns:
        ResolverSettings

    Raises:
        ValidationError: If any variable holds an invalid value
    """
    try:
        return ResolverSettings()
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "settings"
        raise ValidationError(
            f"{EnvVars.PREFIX}{field.upper()}: {first['msg']}. Got: '{first.get('input')}'"
        ) from e
