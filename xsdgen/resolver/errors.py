"""Exceptions raised while resolving schema documents into the element tree."""

from typing import Sequence


class ResolutionError(Exception):
    """Base exception for schema resolution errors."""

    pass


class UnsupportedConstructError(ResolutionError):
    """Raised for derivation shapes the resolver does not handle."""

    pass


class CyclicTypeError(ResolutionError):
    """Raised when a type refers back to itself during expansion."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"Cyclic type definition: {' -> '.join(self.chain)}")


class NameCollisionError(ResolutionError):
    """Raised when a name is bound to two structurally different definitions."""

    def __init__(self, name: str, kind: str, location: str = ""):
        self.name = name
        self.kind = kind
        self.location = location
        where = f" in {location}" if location else ""
        super().__init__(
            f"Conflicting definition of {kind} '{name}'{where}: "
            f"a different definition with the same name is already registered"
        )
