"""
Intermediate element tree produced by schema resolution.

The tree is the only input of code emission. Each node describes one XML
element: its scalar payload (if any), whether it repeats, its attributes and
its child elements, all in source declaration order.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass
class XmlAttrib:
    """An attribute of an element node with its resolved scalar type."""

    name: str
    type: str


@dataclass
class TreeShape:
    """
    Content model of a type, independent of the element that uses it.

    Derivation works on shapes: a base type resolves to a shape, the deriving
    type contributes a delta shape, and :func:`compose` merges the two.
    """

    type: Optional[str] = None
    attribs: List[XmlAttrib] = field(default_factory=list)
    children: List["XmlTree"] = field(default_factory=list)
    # Text interleaved with the children (a mixed content model)
    mixed: bool = False


@dataclass
class XmlTree:
    """
    A resolved XML element.

    ``type`` holds the scalar type name, or ``None`` when the element is
    composite or contentless. ``chardata`` marks that the element's own text
    must be captured as a field of its own.
    """

    name: str
    type: Optional[str] = None
    is_list: bool = False
    chardata: bool = False
    attribs: List[XmlAttrib] = field(default_factory=list)
    children: List["XmlTree"] = field(default_factory=list)

    @classmethod
    def from_shape(cls, name: str, shape: TreeShape, is_list: bool = False) -> "XmlTree":
        """Build a node from a resolved shape."""
        return cls(
            name=name,
            type=shape.type,
            is_list=is_list,
            chardata=shape.type is not None and (shape.mixed or not shape.children),
            attribs=list(shape.attribs),
            children=list(shape.children),
        )

    @property
    def is_scalar(self) -> bool:
        """True for a plain scalar leaf: a typed value with no attributes or children."""
        return self.type is not None and not self.attribs and not self.children

    @property
    def is_degenerate(self) -> bool:
        """True for an element with no content at all."""
        return self.type is None and not self.attribs and not self.children

    def same_shape(self, other: "XmlTree") -> bool:
        """
        Compare the content of two nodes, ignoring whether each repeats.

        Two declarations of the same element name can differ in occurrence
        and still map to one struct; anything else is a real conflict.
        """
        return (
            self.name == other.name
            and self.type == other.type
            and self.chardata == other.chardata
            and self.attribs == other.attribs
            and self.children == other.children
        )

    def walk(self) -> Iterator["XmlTree"]:
        """Yield this node and its descendants, pre-order depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def get_child(self, name: str) -> Optional["XmlTree"]:
        """Get direct child by element name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def get_depth(self) -> int:
        """Get the number of levels in this subtree."""
        if not self.children:
            return 1
        return 1 + max(child.get_depth() for child in self.children)

    def get_summary(self) -> Dict[str, int]:
        """Get node counts for this subtree."""
        summary = {
            "elements": 0,
            "attributes": 0,
            "lists": 0,
            "scalars": 0,
            "max_depth": self.get_depth(),
        }
        for node in self.walk():
            summary["elements"] += 1
            summary["attributes"] += len(node.attribs)
            if node.is_list:
                summary["lists"] += 1
            if node.is_scalar:
                summary["scalars"] += 1
        return summary


def compose(base: TreeShape, delta: TreeShape) -> TreeShape:
    """
    Merge a derivation delta onto a base shape.

    Derivation is an additive union: the base's attributes and children come
    first, followed by those the deriving type adds. The delta's scalar type
    wins when it declares one; otherwise the base's is kept. Either side
    being mixed makes the result mixed.

    Args:
        base: Shape of the base type
        delta: Content added by the deriving type

    Returns:
        New merged shape; neither input is modified
    """
    return TreeShape(
        type=delta.type if delta.type is not None else base.type,
        attribs=list(base.attribs) + list(delta.attribs),
        children=list(base.children) + list(delta.children),
        mixed=base.mixed or delta.mixed,
    )
