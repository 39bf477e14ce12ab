"""
Schema resolution.

Turns loaded schema documents into the intermediate element tree consumed
by the code generators.
"""

from pathlib import Path
from typing import List, Tuple

from .builder import TreeBuilder
from .errors import (
    CyclicTypeError,
    NameCollisionError,
    ResolutionError,
    UnsupportedConstructError,
)
from .registry import (
    BUILTIN_TYPES,
    ComplexType,
    Primitive,
    ScalarKind,
    SimpleType,
    TypeRef,
    TypeRegistry,
    strip_namespace,
)
from .session import ResolutionSession
from .tree import TreeShape, XmlAttrib, XmlTree, compose


def resolve_file(
    entry_path: str | Path, strict_names: bool = True
) -> Tuple[ResolutionSession, List[XmlTree]]:
    """
    Load a schema (and its imports) and build its element trees.

    Returns:
        The session used for the run and the list of root trees
    """
    session = ResolutionSession(strict_names=strict_names)
    session.load(entry_path)
    return session, session.build()


def resolve_string(
    source: str | bytes, strict_names: bool = True
) -> Tuple[ResolutionSession, List[XmlTree]]:
    """Build element trees from an in-memory schema document."""
    session = ResolutionSession(strict_names=strict_names)
    session.load_string(source)
    return session, session.build()


__all__ = [
    "TreeBuilder",
    "ResolutionSession",
    "TypeRegistry",
    "TypeRef",
    "ComplexType",
    "SimpleType",
    "Primitive",
    "ScalarKind",
    "BUILTIN_TYPES",
    "strip_namespace",
    "XmlTree",
    "XmlAttrib",
    "TreeShape",
    "compose",
    "ResolutionError",
    "UnsupportedConstructError",
    "CyclicTypeError",
    "NameCollisionError",
    "resolve_file",
    "resolve_string",
]
