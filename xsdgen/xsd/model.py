"""
Structural representation of parsed XSD documents.

These classes carry no behavior beyond a few convenience properties; the
parser fills them in and the resolver reads them. Equality is structural,
which the type registry relies on to tell a harmless re-registration from a
conflicting redefinition.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

UNBOUNDED = "unbounded"


@dataclass
class Restriction:
    """Derivation by restriction. Facets are not modelled."""

    base: str = ""


@dataclass
class AttributeDeclaration:
    """An ``<attribute>`` declaration."""

    name: str
    type_name: str = ""
    use: str = "optional"
    simple_type: Optional["SimpleTypeDef"] = None

    @property
    def required(self) -> bool:
        return self.use == "required"


@dataclass
class SimpleTypeDef:
    """A ``<simpleType>``, named or inline.

    Only restriction is resolvable; ``list`` and ``union`` varieties are
    recorded so the resolver can reject them explicitly.
    """

    name: str = ""
    restriction: Optional[Restriction] = None
    variety: str = "restriction"


@dataclass
class GroupReference:
    """A ``<group ref>`` particle; ``max_occurs`` applies to every member."""

    ref: str
    max_occurs: str = ""

    @property
    def is_list(self) -> bool:
        return self.max_occurs == UNBOUNDED


@dataclass
class AttributeGroupReference:
    """An ``<attributeGroup ref>`` inside an attribute list."""

    ref: str


Particle = Union["ElementDeclaration", GroupReference]
AttributeUse = Union[AttributeDeclaration, AttributeGroupReference]


@dataclass
class Extension:
    """Derivation by extension: a base plus additional content."""

    base: str = ""
    sequence: List[Particle] = field(default_factory=list)
    attributes: List[AttributeUse] = field(default_factory=list)


@dataclass
class ContentDerivation:
    """Body of a ``<complexContent>`` or ``<simpleContent>`` element."""

    extension: Optional[Extension] = None
    restriction: Optional[Restriction] = None


@dataclass
class ComplexTypeDef:
    """A ``<complexType>``, named or inline."""

    name: str = ""
    sequence: List[Particle] = field(default_factory=list)
    attributes: List[AttributeUse] = field(default_factory=list)
    complex_content: Optional[ContentDerivation] = None
    simple_content: Optional[ContentDerivation] = None
    # Text may appear between the child elements
    mixed: bool = False


@dataclass
class ElementDeclaration:
    """An ``<element>`` declaration, top-level or local."""

    name: str
    type_name: str = ""
    ref: str = ""
    min_occurs: str = ""
    max_occurs: str = ""
    default: str = ""
    complex_type: Optional[ComplexTypeDef] = None
    simple_type: Optional[SimpleTypeDef] = None

    @property
    def is_list(self) -> bool:
        return self.max_occurs == UNBOUNDED

    @property
    def is_optional(self) -> bool:
        return self.min_occurs == "0"

    @property
    def has_inline_type(self) -> bool:
        return self.type_name == ""


@dataclass
class GroupDef:
    """A named model group: the particles of its single compositor."""

    name: str
    particles: List[Particle] = field(default_factory=list)


@dataclass
class AttributeGroupDef:
    """A named ``<attributeGroup>``."""

    name: str
    attributes: List[AttributeUse] = field(default_factory=list)


@dataclass
class SchemaDocument:
    """A single parsed XSD file."""

    location: str = ""
    namespace: str = ""
    imports: List[str] = field(default_factory=list)
    elements: List[ElementDeclaration] = field(default_factory=list)
    complex_types: List[ComplexTypeDef] = field(default_factory=list)
    simple_types: List[SimpleTypeDef] = field(default_factory=list)
    groups: List[GroupDef] = field(default_factory=list)
    attribute_groups: List[AttributeGroupDef] = field(default_factory=list)
