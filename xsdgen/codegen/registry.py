"""
Lookup of code generators by target language.

Generators register under a primary name plus aliases (``go``, ``golang``).
The module-level registry is filled with the built-in generators on first
use.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator

ConfigSource = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


class RegistryError(Exception):
    """Raised for unknown languages and invalid registrations."""

    pass


class GeneratorRegistry:
    """Maps language names and aliases to generator classes."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register ``generator_class`` for ``language``.

        A language that is already registered is left alone unless
        ``replace`` is set.

        Raises:
            RegistryError: If the class is not a CodeGenerator or an alias is
                taken by another language
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        name = language.lower()
        if name in self._generators and not replace:
            return

        self._generators[name] = generator_class
        for alias in aliases or []:
            self._add_alias(alias.lower(), name, replace)

    def _add_alias(self, alias: str, target: str, replace: bool):
        if alias == target:
            return
        if not replace:
            if alias in self._generators:
                raise RegistryError(f"Alias '{alias}' conflicts with existing primary language")
            current = self._aliases.get(alias)
            if current is not None and current != target:
                raise RegistryError(f"Alias '{alias}' already points to '{current}'")
        self._aliases[alias] = target

    def unregister(self, language: str):
        """Remove a language together with its aliases."""
        name = language.lower()
        self._generators.pop(name, None)
        self._aliases = {a: t for a, t in self._aliases.items() if t != name}

    def resolve_language(self, language: str) -> str:
        """
        Primary name for a language name or alias.

        Raises:
            RegistryError: If nothing is registered under that name
        """
        name = language.lower()
        if name in self._generators:
            return name
        if name in self._aliases:
            return self._aliases[name]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self._generators[self.resolve_language(language)]

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Instantiate the generator for ``language``.

        ``config`` may be a ready GeneratorConfig, a dict of overrides on the
        language defaults, a path to a JSON file, or None for the defaults.

        Raises:
            RegistryError: If the language is unknown or the generator fails
                to initialize
            ConfigError: If the configuration is invalid
        """
        name = self.resolve_language(language)
        generator_class = self._generators[name]

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(name, config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(name, custom_config=config)
        elif config is None:
            final_config = load_config(name)
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        try:
            return generator_class(final_config)
        except ConfigError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {name} generator: {e}") from e

    def list_languages(self) -> List[str]:
        """Primary language names, sorted."""
        return sorted(self._generators)

    def get_aliases_for_language(self, language: str) -> List[str]:
        name = language.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == name)

    def is_supported(self, language: str) -> bool:
        name = language.lower()
        return name in self._generators or name in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language for listings.

        Raises:
            RegistryError: If the language is unknown
        """
        name = self.resolve_language(language)
        generator = self.create_generator(name)

        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "module": type(generator).__module__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(name),
        }


_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Shared registry with the built-in generators registered."""
    global _registry
    if _registry is None:
        _registry = GeneratorRegistry()
        _register_builtin_generators(_registry)
    return _registry


def _register_builtin_generators(registry: GeneratorRegistry):
    # Imported here: the language packages import the codegen core
    from .languages.go import GoGenerator

    registry.register("go", GoGenerator, aliases=["golang"])


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str = "go", config: ConfigSource = None) -> CodeGenerator:
    """Create a generator from the shared registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Language info keyed by primary name."""
    return {language: get_language_info(language) for language in list_supported_languages()}
