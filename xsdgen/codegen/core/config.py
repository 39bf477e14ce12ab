"""
Generator settings.

Settings come from per-language defaults, an optional JSON file and explicit
overrides, merged in that order. Unknown keys are language-specific and are
kept under ``custom``.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Raised for unreadable configuration files and invalid settings."""

    pass


@dataclass
class GeneratorConfig:
    """Settings shared by all generators; language extras live in ``custom``."""

    # Where the CLI writes the file; None means stdout
    output_file: Optional[str] = None
    package_name: str = "main"

    # Struct names: optional prefix, upper-case first letter when exported
    type_prefix: str = ""
    exported: bool = False

    indent_size: int = 4
    use_tabs: bool = True

    # Header and per-declaration comments
    add_comments: bool = True

    # Resolution: fail on conflicting type redefinitions
    strict_names: bool = True

    # Language-specific settings, e.g. Go int_type
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size


class ConfigManager:
    """Builds GeneratorConfig objects from defaults, files and overrides."""

    def __init__(self):
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Register the built-in defaults of each language."""
        # Go defaults
        self._configs["go"] = {
            "package_name": "main",
            "use_tabs": True,
            "add_comments": True,
            "custom": {
                "int_type": "int",
                "float_type": "float64",
                "string_type": "string",
                "bool_type": "bool",
                "type_overrides": {},
            },
        }

    def get_config(
        self,
        language: str = "go",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Merged configuration for ``language``.

        Args:
            language: Registry name of the language
            custom_config: Overrides; unknown keys go to ``custom``
            config_file: JSON file applied before the overrides
        """
        base_config = self._copy(self._configs.get(language.lower(), {}))

        # File values override defaults, explicit overrides win over both
        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        # Apply custom overrides
        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _copy(config: Dict[str, Any]) -> Dict[str, Any]:
        copied = dict(config)
        copied["custom"] = dict(config.get("custom", {}))
        return copied

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Merge overrides into base; the custom section is merged key by key."""
        for key, value in overrides.items():
            if key == "custom":
                if not isinstance(value, dict):
                    raise ConfigError("'custom' must be a JSON object")
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Read a JSON object from ``config_path``."""
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return data

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Split a flat settings dict into dataclass fields and ``custom``."""
        known = {f.name for f in fields(GeneratorConfig)}
        settings = {k: v for k, v in config_dict.items() if k in known}
        extras = {k: v for k, v in config_dict.items() if k not in known}

        # Unknown top-level keys are language settings
        settings["custom"] = {**settings.get("custom", {}), **extras}
        return GeneratorConfig(**settings)

    def list_languages(self) -> List[str]:
        """Languages that have built-in defaults."""
        return sorted(self._configs)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate language-independent settings.

        Returns:
            List of validation errors
        """
        errors = []

        if not isinstance(config.package_name, str):
            errors.append(f"Invalid package_name: {config.package_name!r}")

        if not isinstance(config.type_prefix, str):
            errors.append(f"Invalid type_prefix: {config.type_prefix!r}")

        if not isinstance(config.indent_size, int) or config.indent_size < 0:
            errors.append(f"Invalid indent_size: {config.indent_size!r}")

        for flag in ("exported", "use_tabs", "add_comments", "strict_names"):
            if not isinstance(getattr(config, flag), bool):
                errors.append(f"{flag} must be true or false")

        return errors


# Shared manager, created on first use
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Return the shared ConfigManager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "go",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Load and validate the configuration for ``language``.

    Raises:
        ConfigError: If the file cannot be loaded or settings are invalid
    """
    manager = get_config_manager()
    config = manager.get_config(language, custom_config, config_file)

    errors = manager.validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))

    return config


# Contents of a typical xsdgen.json
EXAMPLE_GO_CONFIG = {
    "package_name": "models",
    "type_prefix": "xsd",
    "exported": True,
    "add_comments": True,
    "strict_names": True,
    "int_type": "int64",
    "type_overrides": {"float": "string"},
}
