"""
Type registry: name-keyed lookup of every type defined by the loaded documents.

Lookups return a closed tagged union (:data:`TypeRef`): a registered complex
type, a registered simple type, or a primitive scalar name. XSD built-in
types are mapped onto a small set of scalar kinds; unknown names are passed
through verbatim as already-resolved type names.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Union

from ..logging_config import get_logger
from ..xsd.model import (
    AttributeGroupDef,
    ComplexTypeDef,
    ElementDeclaration,
    GroupDef,
    SchemaDocument,
    SimpleTypeDef,
)
from .errors import NameCollisionError

logger = get_logger(__name__)


class ScalarKind(Enum):
    """Scalar kinds XSD built-in types are mapped onto."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


BUILTIN_TYPES: Dict[str, ScalarKind] = {
    "boolean": ScalarKind.BOOLEAN,
    # Integer family
    "integer": ScalarKind.INTEGER,
    "int": ScalarKind.INTEGER,
    "long": ScalarKind.INTEGER,
    "short": ScalarKind.INTEGER,
    "byte": ScalarKind.INTEGER,
    "nonNegativeInteger": ScalarKind.INTEGER,
    "positiveInteger": ScalarKind.INTEGER,
    "nonPositiveInteger": ScalarKind.INTEGER,
    "negativeInteger": ScalarKind.INTEGER,
    "unsignedLong": ScalarKind.INTEGER,
    "unsignedInt": ScalarKind.INTEGER,
    "unsignedShort": ScalarKind.INTEGER,
    "unsignedByte": ScalarKind.INTEGER,
    # Floating point
    "decimal": ScalarKind.FLOAT,
    "float": ScalarKind.FLOAT,
    "double": ScalarKind.FLOAT,
    # Everything carried as text
    "string": ScalarKind.STRING,
    "normalizedString": ScalarKind.STRING,
    "token": ScalarKind.STRING,
    "language": ScalarKind.STRING,
    "Name": ScalarKind.STRING,
    "NCName": ScalarKind.STRING,
    "NMTOKEN": ScalarKind.STRING,
    "ID": ScalarKind.STRING,
    "IDREF": ScalarKind.STRING,
    "QName": ScalarKind.STRING,
    "anyURI": ScalarKind.STRING,
    "date": ScalarKind.STRING,
    "dateTime": ScalarKind.STRING,
    "time": ScalarKind.STRING,
    "duration": ScalarKind.STRING,
    "gYear": ScalarKind.STRING,
    "gYearMonth": ScalarKind.STRING,
    "gMonth": ScalarKind.STRING,
    "gMonthDay": ScalarKind.STRING,
    "gDay": ScalarKind.STRING,
    "base64Binary": ScalarKind.STRING,
    "hexBinary": ScalarKind.STRING,
    "anySimpleType": ScalarKind.STRING,
}


def strip_namespace(name: str) -> str:
    """Drop a namespace prefix: ``xs:string`` becomes ``string``."""
    return name.rsplit(":", 1)[-1]


@dataclass(frozen=True)
class ComplexType:
    definition: ComplexTypeDef


@dataclass(frozen=True)
class SimpleType:
    definition: SimpleTypeDef


@dataclass(frozen=True)
class Primitive:
    name: str


TypeRef = Union[ComplexType, SimpleType, Primitive]


class TypeRegistry:
    """Name-keyed tables of the complex types, simple types and elements of a run."""

    def __init__(self, strict_names: bool = True):
        """
        Initialize empty registry.

        Args:
            strict_names: Raise on conflicting redefinitions instead of
                letting the last registration win
        """
        self.strict_names = strict_names
        self._complex: Dict[str, ComplexTypeDef] = {}
        self._simple: Dict[str, SimpleTypeDef] = {}
        self._elements: Dict[str, ElementDeclaration] = {}
        self._groups: Dict[str, GroupDef] = {}
        self._attribute_groups: Dict[str, AttributeGroupDef] = {}

    def register(self, documents: Iterable[SchemaDocument]) -> None:
        """
        Populate the tables from every document.

        Re-registering a name with an identical definition is a no-op.

        Raises:
            NameCollisionError: If strict_names is set and a name is bound to
                two different definitions
        """
        for document in documents:
            for ctype in document.complex_types:
                self._bind_type(self._complex, ctype, "complex type", document.location)
            for stype in document.simple_types:
                self._bind_type(self._simple, stype, "simple type", document.location)
            for element in document.elements:
                self._bind_element(element, document.location)
            for group in document.groups:
                self._bind_group(self._groups, group, "group", document.location)
            for agroup in document.attribute_groups:
                self._bind_group(
                    self._attribute_groups, agroup, "attribute group", document.location
                )

        logger.debug(
            "Registered %d complex types, %d simple types, %d elements",
            len(self._complex),
            len(self._simple),
            len(self._elements),
        )

    def _bind_type(self, table: Dict, definition, kind: str, location: str) -> None:
        name = definition.name
        if not name:
            logger.warning("Ignoring unnamed top-level %s in %s", kind, location)
            return
        # Complex and simple types share one symbol space.
        existing = self._complex.get(name) or self._simple.get(name)
        if existing is None or existing == definition:
            self._remove(name)
            table[name] = definition
            return

        if self.strict_names:
            raise NameCollisionError(name, kind, location)

        logger.warning(
            "%s '%s' in %s shadows an earlier definition with the same name",
            kind.capitalize(),
            name,
            location or "schema",
        )
        self._remove(name)
        table[name] = definition

    def _remove(self, name: str) -> None:
        self._complex.pop(name, None)
        self._simple.pop(name, None)

    def _bind_group(self, table: Dict, definition, kind: str, location: str) -> None:
        # Groups and attribute groups each have a symbol space of their own.
        existing = table.get(definition.name)
        if existing is None or existing == definition:
            table[definition.name] = definition
            return

        if self.strict_names:
            raise NameCollisionError(definition.name, kind, location)

        logger.warning(
            "%s '%s' in %s shadows an earlier definition with the same name",
            kind.capitalize(),
            definition.name,
            location or "schema",
        )
        table[definition.name] = definition

    def _bind_element(self, element: ElementDeclaration, location: str) -> None:
        if not element.name:
            return
        existing = self._elements.get(element.name)
        if existing is None:
            self._elements[element.name] = element
        elif existing != element:
            logger.warning(
                "Top-level element '%s' in %s is declared more than once; "
                "references resolve to the first declaration",
                element.name,
                location or "schema",
            )

    def find_type(self, ref: str) -> TypeRef:
        """
        Look up a type reference.

        Args:
            ref: Type name, optionally namespace-prefixed

        Returns:
            ComplexType or SimpleType for registered names, otherwise a
            Primitive holding the mapped scalar kind or the name itself
        """
        name = strip_namespace(ref)
        if name in self._complex:
            return ComplexType(self._complex[name])
        if name in self._simple:
            return SimpleType(self._simple[name])

        kind = BUILTIN_TYPES.get(name)
        if kind is not None:
            return Primitive(kind.value)
        return Primitive(name)

    def find_element(self, ref: str) -> Optional[ElementDeclaration]:
        """Look up a top-level element declaration by (prefixed) name."""
        return self._elements.get(strip_namespace(ref))

    def find_group(self, ref: str) -> Optional[GroupDef]:
        """Look up a named model group by (prefixed) name."""
        return self._groups.get(strip_namespace(ref))

    def find_attribute_group(self, ref: str) -> Optional[AttributeGroupDef]:
        return self._attribute_groups.get(strip_namespace(ref))

    def __len__(self) -> int:
        return len(self._complex) + len(self._simple)

    def __contains__(self, name: str) -> bool:
        name = strip_namespace(name)
        return name in self._complex or name in self._simple
