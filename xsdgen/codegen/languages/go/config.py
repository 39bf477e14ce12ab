"""
Go-specific configuration and validation.

Extends the base configuration system with Go-specific settings.
"""

from dataclasses import asdict, dataclass
from typing import List

from ...core.config import ConfigError, GeneratorConfig
from .naming import validate_go_package_name

VALID_INT_TYPES = {"int", "int8", "int16", "int32", "int64", "uint", "uint32", "uint64"}
VALID_FLOAT_TYPES = {"float32", "float64"}


@dataclass
class GoConfig(GeneratorConfig):
    """Go-specific configuration."""

    def __post_init__(self):
        """Apply Go defaults and validate Go-specific settings."""
        self.custom = dict(self.custom or {})
        self.custom.setdefault("int_type", "int")
        self.custom.setdefault("float_type", "float64")
        self.custom.setdefault("string_type", "string")
        self.custom.setdefault("bool_type", "bool")
        self.custom.setdefault("type_overrides", {})

        errors = validate_go_settings(self)
        if errors:
            raise ConfigError("; ".join(errors))

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "GoConfig":
        """Promote a generic configuration, validating it for Go."""
        if isinstance(config, cls):
            return config
        return cls(**asdict(config))


def validate_go_settings(config: GeneratorConfig) -> List[str]:
    """
    Validate Go-specific configuration.

    Returns:
        List of validation errors
    """
    errors = list(validate_go_package_name(config.package_name))

    # Validate numeric types
    int_type = config.custom.get("int_type")
    if int_type and int_type not in VALID_INT_TYPES:
        errors.append(f"Invalid int_type: {int_type}")

    float_type = config.custom.get("float_type")
    if float_type and float_type not in VALID_FLOAT_TYPES:
        errors.append(f"Invalid float_type: {float_type}")

    overrides = config.custom.get("type_overrides")
    if overrides is not None and not isinstance(overrides, dict):
        errors.append("type_overrides must be a mapping of type name to Go type")

    return errors
