"""
xsdgen code generation module.

Generates source code in supported languages from resolved element trees.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..resolver import ResolutionSession, XmlTree, resolve_file, resolve_string
from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)

ConfigLike = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


def generate_from_trees(
    trees: List[XmlTree],
    session: ResolutionSession,
    language: str = "go",
    config: ConfigLike = None,
) -> GenerationResult:
    """
    Generate code from already resolved trees.

    Args:
        trees: Root element trees
        session: Session the trees were built in
        language: Target language name
        config: Generator configuration object, dict or JSON file path

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, trees, session)


def generate_from_file(
    schema_path: Union[str, Path], language: str = "go", config: ConfigLike = None
) -> GenerationResult:
    """
    Load, resolve and generate code for an XSD file and its imports.

    Loading and resolution errors propagate; generation errors are reported
    on the returned result.
    """
    generator = get_generator(language, config)
    session, trees = resolve_file(schema_path, strict_names=generator.config.strict_names)
    return generate_code(generator, trees, session)


def quick_generate(schema: Union[str, bytes], language: str = "go", **options) -> str:
    """
    Quick code generation from an in-memory XSD document.

    Args:
        schema: XSD document text
        language: Target language
        **options: Generator options

    Returns:
        Generated code string

    Raises:
        GeneratorError: If code generation fails
    """
    generator = get_generator(language, options)
    session, trees = resolve_string(schema, strict_names=generator.config.strict_names)
    result = generate_code(generator, trees, session)

    if result.success:
        return result.code
    raise GeneratorError(result.error_message) from result.exception


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "generate_code",
    "generate_from_trees",
    "generate_from_file",
    "quick_generate",
    "get_generator",
    "get_registry",
    "list_supported_languages",
]
