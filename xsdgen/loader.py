"""Loading of XSD documents from disk.

Reads an entry schema and transitively follows its ``import`` and
``include`` declarations, resolving each location relative to the
directory of the document that declares it.
"""

from pathlib import Path
from typing import List, Optional, Set

from .logging_config import get_logger
from .xsd.model import SchemaDocument
from .xsd.parser import MalformedSchemaError, SchemaLoaderError, parse_schema

logger = get_logger(__name__)

__all__ = [
    "SchemaLoaderError",
    "MalformedSchemaError",
    "load_schema_file",
    "load_schemas",
]


def load_schema_file(file_path: str | Path) -> SchemaDocument:
    """Load and parse a single XSD file, without following imports.

    Args:
        file_path: Path to the XSD file.

    Returns:
        The parsed document.

    Raises:
        SchemaLoaderError: If the file is missing or cannot be read.
        MalformedSchemaError: If the content is not a usable schema.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load schema from file: {file_path}")

    if not file_path.is_file():
        logger.error(f"Schema file not found: {file_path}")
        raise SchemaLoaderError(f"Schema file not found: {file_path}")

    try:
        data = file_path.read_bytes()
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise SchemaLoaderError(f"Error reading file {file_path}: {e}") from e

    document = parse_schema(data, file_path.name)
    logger.info(f"Loaded schema {file_path}")
    return document


def load_schemas(
    entry_path: str | Path, loaded_files: Optional[Set[str]] = None
) -> List[SchemaDocument]:
    """Load an entry schema and every document it transitively imports.

    Documents are deduplicated by bare file name: an import whose file name
    was already loaded is skipped, even when it lives in another directory.

    Args:
        entry_path: Path to the entry XSD file.
        loaded_files: File names already loaded in this run. Updated in
            place; a fresh set is used when omitted.

    Returns:
        Documents in load order, entry document first.

    Raises:
        SchemaLoaderError: If any document is missing or unreadable.
        MalformedSchemaError: If any document cannot be mapped onto the model.
    """
    if loaded_files is None:
        loaded_files = set()

    entry_path = Path(entry_path)
    document = load_schema_file(entry_path)
    loaded_files.add(entry_path.name)

    documents = [document]
    for location in document.imports:
        import_path = entry_path.parent / location
        if import_path.name in loaded_files:
            logger.debug(
                f"Skipping import {location} from {entry_path.name}: "
                f"{import_path.name} already loaded"
            )
            continue
        documents.extend(load_schemas(import_path, loaded_files))

    return documents
