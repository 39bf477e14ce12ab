"""
Go-specific type system for code generation.

Maps the scalar kinds of the element tree onto Go types, with
configuration-driven numeric types and per-name overrides.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ....resolver.registry import ScalarKind


@dataclass(frozen=True)
class GoType:
    """
    Immutable representation of a Go field type.

    ``name`` is the element type (``string``, ``titleType``); ``is_slice``
    marks a repeated element.
    """

    name: str
    is_slice: bool = False
    is_struct: bool = False

    def as_slice(self) -> "GoType":
        """Return the slice version of this type."""
        if self.is_slice:
            return self
        return GoType(name=self.name, is_slice=True, is_struct=self.is_struct)

    def __str__(self) -> str:
        return f"[]{self.name}" if self.is_slice else self.name


@dataclass
class GoTypeConfig:
    """Configuration for Go type mapping behavior."""

    # Numeric type preferences
    int_type: str = "int"
    float_type: str = "float64"

    # String and basic types
    string_type: str = "string"
    bool_type: str = "bool"

    # Overrides keyed by resolved scalar name, e.g. {"float": "string"}
    type_overrides: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_custom(cls, custom: Dict[str, Any]) -> "GoTypeConfig":
        """Build from the ``custom`` section of a GeneratorConfig."""
        return cls(
            int_type=custom.get("int_type", "int"),
            float_type=custom.get("float_type", "float64"),
            string_type=custom.get("string_type", "string"),
            bool_type=custom.get("bool_type", "bool"),
            type_overrides=dict(custom.get("type_overrides") or {}),
        )


class GoTypeMapper:
    """Maps element tree scalar types to Go types."""

    def __init__(self, config: GoTypeConfig = None):
        self.config = config or GoTypeConfig()
        self._kinds = {
            ScalarKind.STRING.value: self.config.string_type,
            ScalarKind.INTEGER.value: self.config.int_type,
            ScalarKind.FLOAT.value: self.config.float_type,
            ScalarKind.BOOLEAN.value: self.config.bool_type,
        }

    def map_scalar(self, scalar: str) -> GoType:
        """
        Map a resolved scalar type name to a Go type.

        Names that are not one of the scalar kinds were passed through by the
        resolver as already-resolved type names and are used verbatim.
        """
        if scalar in self.config.type_overrides:
            return GoType(self.config.type_overrides[scalar])
        return GoType(self._kinds.get(scalar, scalar))

    def field_type(self, scalar: str, is_list: bool = False) -> GoType:
        """Go type of a scalar field, as a slice when the element repeats."""
        go_type = self.map_scalar(scalar)
        return go_type.as_slice() if is_list else go_type

    def struct_type(self, struct_name: str, is_list: bool = False) -> GoType:
        """Go type of a field holding a generated struct."""
        go_type = GoType(struct_name, is_struct=True)
        return go_type.as_slice() if is_list else go_type
