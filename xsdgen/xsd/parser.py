"""
Decoding of raw XSD bytes into the schema document model.

Elements are matched by local name only, so both ``<xs:element>`` and an
unqualified ``<element>`` are accepted. lxml takes care of the declared
source encoding before tokenizing.
"""

from typing import Iterator, List

from lxml import etree

from ..logging_config import get_logger
from .model import (
    UNBOUNDED,
    AttributeDeclaration,
    AttributeGroupDef,
    AttributeGroupReference,
    AttributeUse,
    ComplexTypeDef,
    ContentDerivation,
    ElementDeclaration,
    Extension,
    GroupDef,
    GroupReference,
    Particle,
    Restriction,
    SchemaDocument,
    SimpleTypeDef,
)

logger = get_logger(__name__)

COMPOSITORS = {"sequence", "choice", "all"}


class SchemaLoaderError(Exception):
    """Raised when a schema document cannot be read."""

    pass


class MalformedSchemaError(SchemaLoaderError):
    """Raised when a document is not XML or cannot be mapped onto the schema model."""

    pass


def _local(el) -> str:
    return etree.QName(el).localname


def _children(el, *names: str) -> Iterator:
    """Yield element children (skipping comments and PIs), optionally by local name."""
    for child in el:
        if not isinstance(child.tag, str):
            continue
        if names and _local(child) not in names:
            continue
        yield child


def _first(el, name: str):
    return next(_children(el, name), None)


def parse_schema(data: bytes, location: str = "") -> SchemaDocument:
    """
    Parse XSD source into a SchemaDocument.

    Args:
        data: Raw document bytes, in whatever encoding the prolog declares
        location: File name recorded on the document (used in messages)

    Returns:
        SchemaDocument with top-level declarations in document order

    Raises:
        MalformedSchemaError: If the XML is invalid, its encoding is unknown,
            or the root is not a schema element
    """
    parser = etree.XMLParser(
        resolve_entities=False, no_network=True, remove_comments=True
    )
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise MalformedSchemaError(f"Invalid XML in {location or 'schema'}: {e}") from e
    except (LookupError, ValueError) as e:
        raise MalformedSchemaError(
            f"Cannot decode {location or 'schema'}: {e}"
        ) from e

    if _local(root) != "schema":
        raise MalformedSchemaError(
            f"Expected a schema root element in {location or 'document'}, "
            f"got <{_local(root)}>"
        )

    document = SchemaDocument(
        location=location,
        namespace=root.get("targetNamespace", ""),
    )

    for child in _children(root):
        tag = _local(child)
        if tag in ("import", "include"):
            schema_location = child.get("schemaLocation")
            if schema_location:
                document.imports.append(schema_location)
            else:
                logger.debug(
                    "Skipping %s without schemaLocation in %s", tag, location
                )
        elif tag == "element":
            document.elements.append(_parse_element(child, location))
        elif tag == "complexType":
            document.complex_types.append(_parse_complex_type(child, location))
        elif tag == "simpleType":
            document.simple_types.append(_parse_simple_type(child, location))
        elif tag == "group":
            document.groups.append(_parse_group(child, location))
        elif tag == "attributeGroup":
            document.attribute_groups.append(_parse_attribute_group(child, location))

    logger.debug(
        "Parsed %s: %d elements, %d complex types, %d simple types",
        location or "<memory>",
        len(document.elements),
        len(document.complex_types),
        len(document.simple_types),
    )
    return document


def _parse_element(el, location: str) -> ElementDeclaration:
    name = el.get("name", "")
    ref = el.get("ref", "")
    if not name and not ref:
        raise MalformedSchemaError(
            f"Element declaration without name or ref in {location or 'schema'} "
            f"(line {el.sourceline})"
        )

    decl = ElementDeclaration(
        name=name,
        type_name=el.get("type", ""),
        ref=ref,
        min_occurs=el.get("minOccurs", ""),
        max_occurs=el.get("maxOccurs", ""),
        default=el.get("default", ""),
    )

    complex_el = _first(el, "complexType")
    if complex_el is not None:
        decl.complex_type = _parse_complex_type(complex_el, location)

    simple_el = _first(el, "simpleType")
    if simple_el is not None:
        decl.simple_type = _parse_simple_type(simple_el, location)

    return decl


def _parse_particle(el, location: str, repeated: bool = False) -> List[Particle]:
    """
    Flatten one particle into element declarations and group references.

    Compositors are flattened into their parent; an unbounded compositor
    makes every particle below it repeat.
    """
    tag = _local(el)
    if tag == "element":
        decl = _parse_element(el, location)
        if repeated:
            decl.max_occurs = UNBOUNDED
        return [decl]

    if tag == "group":
        ref = el.get("ref", "")
        if not ref:
            raise MalformedSchemaError(
                f"Group particle without ref in {location or 'schema'} (line {el.sourceline})"
            )
        max_occurs = UNBOUNDED if repeated else el.get("maxOccurs", "")
        return [GroupReference(ref=ref, max_occurs=max_occurs)]

    if tag in COMPOSITORS:
        repeated = repeated or el.get("maxOccurs") == UNBOUNDED
        particles = []
        for child in _children(el):
            particles.extend(_parse_particle(child, location, repeated))
        return particles

    if tag == "any":
        logger.warning(
            "Ignoring <any> wildcard in %s (line %s)", location or "schema", el.sourceline
        )
    return []


def _parse_sequence(el, location: str) -> List[Particle]:
    """Content model of a complex type, extension or group definition."""
    particles = []
    for child in _children(el, *COMPOSITORS, "group"):
        particles.extend(_parse_particle(child, location))
    return particles


def _parse_group(el, location: str) -> GroupDef:
    name = el.get("name", "")
    if not name:
        raise MalformedSchemaError(
            f"Top-level group without a name in {location or 'schema'} (line {el.sourceline})"
        )
    return GroupDef(name=name, particles=_parse_sequence(el, location))


def _parse_attribute_group(el, location: str) -> AttributeGroupDef:
    name = el.get("name", "")
    if not name:
        raise MalformedSchemaError(
            f"Top-level attributeGroup without a name in {location or 'schema'} "
            f"(line {el.sourceline})"
        )
    return AttributeGroupDef(name=name, attributes=_parse_attributes(el, location))


def _parse_attributes(el, location: str) -> List[AttributeUse]:
    attributes = []
    for attr_el in _children(el, "attribute", "attributeGroup"):
        if _local(attr_el) == "attributeGroup":
            ref = attr_el.get("ref", "")
            if not ref:
                raise MalformedSchemaError(
                    f"attributeGroup without ref in {location or 'schema'} "
                    f"(line {attr_el.sourceline})"
                )
            attributes.append(AttributeGroupReference(ref=ref))
            continue

        name = attr_el.get("name", "")
        if not name:
            # A reference such as ref="xml:lang" names the attribute it stands for.
            name = attr_el.get("ref", "").split(":")[-1]
        if not name:
            raise MalformedSchemaError(
                f"Attribute declaration without name or ref in {location or 'schema'} "
                f"(line {attr_el.sourceline})"
            )

        attr = AttributeDeclaration(
            name=name,
            type_name=attr_el.get("type", ""),
            use=attr_el.get("use", "optional"),
        )
        simple_el = _first(attr_el, "simpleType")
        if simple_el is not None:
            attr.simple_type = _parse_simple_type(simple_el, location)
        attributes.append(attr)
    return attributes


def _parse_restriction(el) -> Restriction:
    return Restriction(base=el.get("base", ""))


def _parse_content(el, location: str) -> ContentDerivation:
    content = ContentDerivation()

    ext_el = _first(el, "extension")
    if ext_el is not None:
        content.extension = Extension(
            base=ext_el.get("base", ""),
            sequence=_parse_sequence(ext_el, location),
            attributes=_parse_attributes(ext_el, location),
        )

    restr_el = _first(el, "restriction")
    if restr_el is not None:
        content.restriction = _parse_restriction(restr_el)

    return content


def _parse_complex_type(el, location: str) -> ComplexTypeDef:
    ctype = ComplexTypeDef(
        name=el.get("name", ""),
        sequence=_parse_sequence(el, location),
        attributes=_parse_attributes(el, location),
        mixed=el.get("mixed") == "true",
    )

    complex_el = _first(el, "complexContent")
    if complex_el is not None:
        ctype.complex_content = _parse_content(complex_el, location)

    simple_el = _first(el, "simpleContent")
    if simple_el is not None:
        ctype.simple_content = _parse_content(simple_el, location)

    return ctype


def _parse_simple_type(el, location: str) -> SimpleTypeDef:
    stype = SimpleTypeDef(name=el.get("name", ""))

    restr_el = _first(el, "restriction")
    if restr_el is not None:
        stype.restriction = _parse_restriction(restr_el)
        return stype

    for variety in ("list", "union"):
        if _first(el, variety) is not None:
            stype.variety = variety
            return stype

    raise MalformedSchemaError(
        f"simpleType {stype.name or '(anonymous)'} in {location or 'schema'} has "
        f"no restriction, list or union"
    )
