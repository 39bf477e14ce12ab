"""
Go code generator module.

Generates Go structs tagged for encoding/xml from resolved element trees.
"""

from ...core.config import load_config
from .config import GoConfig, validate_go_settings
from .generator import GoGenerator
from .naming import create_go_sanitizer, go_field_name, go_struct_name, lint_title
from .types import GoType, GoTypeConfig, GoTypeMapper

__all__ = [
    "GoGenerator",
    "GoConfig",
    "GoType",
    "GoTypeConfig",
    "GoTypeMapper",
    "create_go_sanitizer",
    "go_field_name",
    "go_struct_name",
    "lint_title",
    "validate_go_settings",
    "create_generator",
]


def create_generator(**kwargs) -> GoGenerator:
    """
    Create a Go generator from keyword settings.

    Args:
        **kwargs: GeneratorConfig fields (package_name, type_prefix, exported, ...)
            and Go settings (int_type, float_type, type_overrides, ...)

    Returns:
        Configured GoGenerator instance
    """
    return GoGenerator(load_config("go", custom_config=kwargs))
