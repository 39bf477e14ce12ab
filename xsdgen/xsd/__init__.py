"""XSD document model and parser."""

from .model import (
    UNBOUNDED,
    AttributeDeclaration,
    AttributeGroupDef,
    AttributeGroupReference,
    ComplexTypeDef,
    ContentDerivation,
    ElementDeclaration,
    Extension,
    GroupDef,
    GroupReference,
    Restriction,
    SchemaDocument,
    SimpleTypeDef,
)
from .parser import MalformedSchemaError, SchemaLoaderError, parse_schema

__all__ = [
    "UNBOUNDED",
    "AttributeDeclaration",
    "AttributeGroupDef",
    "AttributeGroupReference",
    "ComplexTypeDef",
    "ContentDerivation",
    "ElementDeclaration",
    "Extension",
    "GroupDef",
    "GroupReference",
    "Restriction",
    "SchemaDocument",
    "SimpleTypeDef",
    "MalformedSchemaError",
    "SchemaLoaderError",
    "parse_schema",
]
