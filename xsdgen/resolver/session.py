"""
Per-run resolution state.

A ResolutionSession owns everything a single run mutates: the set of loaded
file names, the type registry, and the emission memo used by code
generators. A new session is created for every run; nothing is shared
between sessions.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from ..loader import load_schemas
from ..logging_config import get_logger
from ..xsd.model import SchemaDocument
from ..xsd.parser import parse_schema
from .builder import TreeBuilder
from .registry import TypeRegistry
from .tree import XmlTree

logger = get_logger(__name__)


@dataclass
class ResolutionSession:
    """State of one load → resolve → emit run."""

    strict_names: bool = True
    documents: List[SchemaDocument] = field(default_factory=list)
    loaded_files: Set[str] = field(default_factory=set)
    registry: Optional[TypeRegistry] = None
    emitted: Dict[str, XmlTree] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.registry is None:
            self.registry = TypeRegistry(strict_names=self.strict_names)

    def load(self, entry_path: str | Path) -> List[SchemaDocument]:
        """Load an entry schema with its imports and register their types."""
        documents = load_schemas(entry_path, self.loaded_files)
        self.add_documents(documents)
        logger.info(
            "Loaded %d schema document(s) from %s", len(documents), Path(entry_path).name
        )
        return documents

    def load_string(self, source: str | bytes, location: str = "") -> SchemaDocument:
        """Parse an in-memory schema and register its types. Imports are not followed."""
        if isinstance(source, str):
            source = source.encode("utf-8")
        document = parse_schema(source, location)
        self.add_documents([document])
        return document

    def add_documents(self, documents: Iterable[SchemaDocument]) -> None:
        documents = list(documents)
        self.documents.extend(documents)
        self.registry.register(documents)

    def build(self) -> List[XmlTree]:
        """Resolve every top-level element of the loaded documents."""
        return TreeBuilder(self.registry, self.documents).build()

    def warn(self, message: str) -> None:
        """Record a non-fatal diagnostic for this run."""
        logger.warning(message)
        self.warnings.append(message)
