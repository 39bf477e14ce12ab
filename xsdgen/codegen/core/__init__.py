"""
Language-independent pieces of code generation.

Language packages subclass :class:`CodeGenerator` and build on the naming,
configuration and template helpers exported here.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .naming import NameSanitizer, NamingCase, split_words
from .templates import TemplateEngine, TemplateError, comment_lines, create_template_engine

__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "generate_code",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "NameSanitizer",
    "NamingCase",
    "split_words",
    "TemplateEngine",
    "TemplateError",
    "comment_lines",
    "create_template_engine",
]
