"""
Generator interface shared by the target languages.

A generator turns the root element trees of a resolution session into the
text of one source file. ``generate_code`` drives a generator and reports
the outcome as a ``GenerationResult`` instead of raising.
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from ...resolver.session import ResolutionSession
from ...resolver.tree import XmlTree
from .config import GeneratorConfig
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

_BLANK_RUNS = re.compile(r"\n{3,}")


class GeneratorError(Exception):
    """Raised when a declaration cannot be generated."""

    pass


class CodeGenerator(ABC):
    """Renders element trees as declarations of one target language."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Registry name of the target language, e.g. ``go``."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension of generated files, including the dot."""

    def get_template_directory(self) -> Optional[Path]:
        """Directory of this language's templates; None means in-memory only."""
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        # Created on first use so subclasses can finish their own setup first
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_template_directory())
        return self._template_engine

    @abstractmethod
    def generate(self, trees: List[XmlTree], session: ResolutionSession) -> str:
        """
        Generate the file for all root trees.

        Args:
            trees: Root element trees, in document order
            session: Session of the run; its emission memo and warnings are
                updated by the generator

        Returns:
            Unformatted source text
        """

    @abstractmethod
    def generate_single_tree(self, tree: XmlTree) -> str:
        """Generate the declaration of one node, without its descendants."""

    def get_package_declaration(self) -> Optional[str]:
        """Package or module header placed before the declarations, if any."""
        return None

    def validate_trees(self, trees: List[XmlTree]) -> List[str]:
        """
        Collect warnings about trees that generate but look suspicious.

        Subclasses extend the list with checks for their own type system.
        """
        warnings = []

        if not trees:
            warnings.append("Schema declares no top-level elements; nothing to generate")

        for tree in trees:
            warnings.extend(
                f"Element '{node.name}' has no content and generates an empty declaration"
                for node in tree.walk()
                if node.is_degenerate
            )

        return warnings

    def format_code(self, code: str) -> str:
        """Strip trailing whitespace and keep at most one blank line in a row."""
        lines = "\n".join(line.rstrip() for line in code.split("\n"))
        return _BLANK_RUNS.sub("\n\n", lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Generated code together with warnings and run statistics."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "GenerationResult":
        """Result of a run that produced no code."""
        failed = cls(code="")
        failed.success = False
        failed.error_message = message
        failed.exception = exception
        return failed


def generate_code(
    generator: CodeGenerator,
    trees: List[XmlTree],
    session: Optional[ResolutionSession] = None,
) -> GenerationResult:
    """
    Run ``generator`` over ``trees`` and collect the outcome.

    Warnings come from tree validation first, then from the session. Any
    exception raised while generating turns into a failed result.

    Args:
        generator: Configured generator
        trees: Root element trees
        session: Session the trees were built in; a fresh one is used if omitted
    """
    if session is None:
        session = ResolutionSession(strict_names=generator.config.strict_names)

    try:
        warnings = generator.validate_trees(trees)
        code = generator.format_code(generator.generate(trees, session))
    except Exception as e:
        logger.debug("Code generation failed", exc_info=True)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    warnings.extend(w for w in session.warnings if w not in warnings)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "root_count": len(trees),
        "struct_count": len(session.emitted),
        "element_count": sum(tree.get_summary()["elements"] for tree in trees),
        "max_depth": max((tree.get_depth() for tree in trees), default=0),
    }

    return GenerationResult(code, warnings, metadata)
