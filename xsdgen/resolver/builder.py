"""
Tree builder: resolves element declarations into the intermediate tree.

Every element declaration is resolved by case, in priority order:

1. an element reference builds the referenced top-level element;
2. an explicit type reference is looked up in the registry;
3. an inline complex type is expanded;
4. an inline simple type adopts its restriction base;
5. anything else is a contentless (degenerate) element.

Complex types expand into children and attributes, with group and
attribute-group references spliced in where they occur; extensions compose
the resolved base shape with their own additions. Named types are guarded
against re-entry while they are being expanded, so cyclic definitions fail
with :class:`CyclicTypeError` instead of recursing without bound.
"""

from contextlib import contextmanager
from typing import Iterable, List, Tuple

from ..logging_config import get_logger
from ..xsd.model import (
    AttributeGroupReference,
    AttributeUse,
    ComplexTypeDef,
    ContentDerivation,
    ElementDeclaration,
    GroupReference,
    Particle,
    SchemaDocument,
    SimpleTypeDef,
)
from .errors import CyclicTypeError, ResolutionError, UnsupportedConstructError
from .registry import (
    ComplexType,
    Primitive,
    ScalarKind,
    SimpleType,
    TypeRef,
    TypeRegistry,
    strip_namespace,
)
from .tree import TreeShape, XmlAttrib, XmlTree, compose

logger = get_logger(__name__)


class TreeBuilder:
    """Builds XmlTree nodes from schema declarations using a TypeRegistry."""

    def __init__(self, registry: TypeRegistry, documents: Iterable[SchemaDocument] = ()):
        self.registry = registry
        self.documents = list(documents)
        self._expanding: List[Tuple[str, str]] = []

    def build(self) -> List[XmlTree]:
        """Build one tree per top-level element, in document order."""
        roots = []
        for document in self.documents:
            for decl in document.elements:
                logger.debug("Building top-level element %s", decl.name or decl.ref)
                roots.append(self.build_element(decl))
        return roots

    def build_element(self, decl: ElementDeclaration, repeated: bool = False) -> XmlTree:
        """
        Resolve a single element declaration into a tree node.

        ``repeated`` marks an element that sits inside a repeating group.
        """
        is_list = decl.is_list or repeated
        if decl.ref:
            target = self.registry.find_element(decl.ref)
            if target is None:
                raise ResolutionError(f"Unresolved element reference '{decl.ref}'")
            with self._guard("element", target.name):
                shape = self._element_shape(target)
            return XmlTree.from_shape(target.name, shape, is_list)

        return XmlTree.from_shape(decl.name, self._element_shape(decl), is_list)

    def _element_shape(self, decl: ElementDeclaration) -> TreeShape:
        if not decl.has_inline_type:
            return self._shape_of(self.registry.find_type(decl.type_name))
        if decl.complex_type is not None:
            return self.expand_complex_type(decl.complex_type)
        if decl.simple_type is not None:
            return TreeShape(type=self.resolve_simple_type(decl.simple_type))
        return TreeShape()

    def _shape_of(self, ref: TypeRef) -> TreeShape:
        if isinstance(ref, ComplexType):
            return self.expand_complex_type(ref.definition)
        if isinstance(ref, SimpleType):
            return TreeShape(type=self.resolve_simple_type(ref.definition))
        if isinstance(ref, Primitive):
            return TreeShape(type=ref.name)
        raise TypeError(f"Unexpected type reference: {ref!r}")

    def _scalar_of(self, ref: TypeRef, used_by: str) -> str:
        if isinstance(ref, SimpleType):
            return self.resolve_simple_type(ref.definition)
        if isinstance(ref, Primitive):
            return ref.name
        if isinstance(ref, ComplexType):
            raise UnsupportedConstructError(
                f"{used_by} refers to complex type '{ref.definition.name}' "
                f"where a simple type is required"
            )
        raise TypeError(f"Unexpected type reference: {ref!r}")

    def resolve_simple_type(self, stype: SimpleTypeDef) -> str:
        """Follow a chain of simple-type restrictions down to a primitive name."""
        label = f"simple type '{stype.name}'" if stype.name else "anonymous simple type"
        if stype.variety != "restriction" or stype.restriction is None:
            raise UnsupportedConstructError(
                f"Derivation by {stype.variety} is not supported ({label})"
            )
        if not stype.restriction.base:
            raise UnsupportedConstructError(f"Restriction without a base ({label})")

        with self._guard("simpleType", stype.name):
            return self._scalar_of(
                self.registry.find_type(stype.restriction.base), label
            )

    def expand_complex_type(self, ctype: ComplexTypeDef) -> TreeShape:
        """Expand a complex type into its children, attributes and scalar payload."""
        with self._guard("complexType", ctype.name):
            shape = TreeShape(
                children=self._build_children(ctype.sequence),
                attribs=self._build_attributes(ctype.attributes),
                mixed=ctype.mixed,
            )
            if ctype.complex_content is not None:
                shape = compose(
                    shape, self._derive(ctype.complex_content, ctype.name, complex_content=True)
                )
            if ctype.simple_content is not None:
                shape = compose(
                    shape, self._derive(ctype.simple_content, ctype.name, complex_content=False)
                )
            if shape.mixed and shape.type is None:
                shape.type = ScalarKind.STRING.value
        return shape

    def _derive(
        self, content: ContentDerivation, type_name: str, complex_content: bool
    ) -> TreeShape:
        label = f"type '{type_name}'" if type_name else "anonymous type"
        kind = "complex" if complex_content else "simple"

        if content.extension is not None:
            ext = content.extension
            if not ext.base:
                raise UnsupportedConstructError(f"Extension without a base ({label})")
            base = self._shape_of(self.registry.find_type(ext.base))
            delta = TreeShape(
                children=self._build_children(ext.sequence),
                attribs=self._build_attributes(ext.attributes),
            )
            logger.debug("Extending %s with base %s", label, strip_namespace(ext.base))
            return compose(base, delta)

        if content.restriction is not None:
            if complex_content:
                raise UnsupportedConstructError(
                    f"Restriction on complex content is not supported ({label})"
                )
            if not content.restriction.base:
                raise UnsupportedConstructError(f"Restriction without a base ({label})")
            return self._shape_of(self.registry.find_type(content.restriction.base))

        raise UnsupportedConstructError(
            f"{kind.capitalize()} content without extension or restriction ({label})"
        )

    def _build_children(
        self, particles: List[Particle], repeated: bool = False
    ) -> List[XmlTree]:
        """Build child nodes, expanding group references in place."""
        children = []
        for particle in particles:
            if isinstance(particle, GroupReference):
                group = self.registry.find_group(particle.ref)
                if group is None:
                    raise ResolutionError(f"Unresolved group reference '{particle.ref}'")
                with self._guard("group", group.name):
                    children.extend(
                        self._build_children(group.particles, repeated or particle.is_list)
                    )
            else:
                children.append(self.build_element(particle, repeated))
        return children

    def _build_attributes(self, attributes: List[AttributeUse]) -> List[XmlAttrib]:
        attribs = []
        for attr in attributes:
            if isinstance(attr, AttributeGroupReference):
                agroup = self.registry.find_attribute_group(attr.ref)
                if agroup is None:
                    raise ResolutionError(
                        f"Unresolved attribute group reference '{attr.ref}'"
                    )
                with self._guard("attributeGroup", agroup.name):
                    attribs.extend(self._build_attributes(agroup.attributes))
                continue

            used_by = f"attribute '{attr.name}'"
            if attr.type_name:
                attr_type = self._scalar_of(self.registry.find_type(attr.type_name), used_by)
            elif attr.simple_type is not None:
                attr_type = self.resolve_simple_type(attr.simple_type)
            else:
                attr_type = ScalarKind.STRING.value
            attribs.append(XmlAttrib(name=attr.name, type=attr_type))
        return attribs

    @contextmanager
    def _guard(self, kind: str, name: str):
        """Mark a named definition as being expanded for the duration of the block."""
        if not name:
            yield
            return

        key = (kind, name)
        if key in self._expanding:
            start = self._expanding.index(key)
            chain = [n for _, n in self._expanding[start:]] + [name]
            raise CyclicTypeError(chain)

        self._expanding.append(key)
        try:
            yield
        finally:
            self._expanding.pop()
