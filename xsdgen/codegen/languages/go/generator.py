"""
Go code generator implementation.

Generates Go structs tagged for ``encoding/xml`` from resolved element trees.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ....logging_config import get_logger
from ....resolver.session import ResolutionSession
from ....resolver.tree import XmlTree
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import NamingCase
from .config import GoConfig
from .naming import create_go_sanitizer, go_struct_name
from .types import GoType, GoTypeConfig, GoTypeMapper

logger = get_logger(__name__)


class GoGenerator(CodeGenerator):
    """Code generator for Go structs with XML tags."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Go generator with configuration."""
        super().__init__(GoConfig.from_config(config or GeneratorConfig()))

        # Field names are unique per struct, struct names per file
        self.sanitizer = create_go_sanitizer()

        self.package_name = self.config.package_name
        self.add_comments = self.config.add_comments

        # Initialize type system
        self.type_mapper = GoTypeMapper(GoTypeConfig.from_custom(self.config.custom))

        # State tracking
        self._session = ResolutionSession(strict_names=self.config.strict_names)
        self._struct_names: Dict[str, str] = {}
        self._used_struct_names: Set[str] = set()
        self._warned: Set[str] = set()

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def generate(self, trees: List[XmlTree], session: ResolutionSession) -> str:
        """
        Generate a complete Go file for all root trees.

        Each root is walked pre-order; the first node seen for an element
        name produces its struct and later nodes with that name are skipped
        together with their subtrees.
        """
        # Reset state
        self._session = session
        self._struct_names.clear()
        self._used_struct_names.clear()
        self._warned.clear()

        struct_definitions = []
        for tree in trees:
            self._emit(tree, struct_definitions)

        parts = []
        package_decl = self.get_package_declaration()
        if package_decl:
            parts.append(package_decl.strip())
        parts.extend(s.strip() for s in struct_definitions)

        logger.debug("Generated %d Go struct(s)", len(struct_definitions))
        return "\n\n".join(parts)

    def _emit(self, node: XmlTree, out: List[str]):
        emitted = self._session.emitted.get(node.name)
        if emitted is not None:
            if not emitted.same_shape(node):
                self._warn_once(
                    f"Element '{node.name}' is declared with different content in "
                    f"several places; only the first declaration is generated"
                )
            return

        self._session.emitted[node.name] = node
        out.append(self.generate_single_tree(node))

        for child in node.children:
            if not child.is_scalar:
                self._emit(child, out)

    def _warn_once(self, message: str):
        if message not in self._warned:
            self._warned.add(message)
            self._session.warn(message)

    def generate_single_tree(self, tree: XmlTree) -> str:
        """Generate the Go struct for one element node."""
        self.sanitizer.reset_used_names()
        struct_name = self.struct_name(tree.name)
        fields = []

        for attrib in tree.attribs:
            fields.append(
                self._field(
                    attrib.name, self.type_mapper.field_type(attrib.type), f"{attrib.name},attr"
                )
            )

        for child in tree.children:
            if child.is_scalar:
                go_type = self.type_mapper.field_type(child.type, child.is_list)
            else:
                go_type = self.type_mapper.struct_type(
                    self.struct_name(child.name), child.is_list
                )
            fields.append(self._field(child.name, go_type, child.name))

        if tree.chardata:
            fields.append(
                self._field(tree.name, self.type_mapper.field_type(tree.type), ",chardata")
            )

        template_context = {
            "struct_name": struct_name,
            "comment": self._struct_comment(struct_name, tree) if self.add_comments else None,
            "fields": fields,
            "indent": self.config.indent,
            "name_width": max((len(f["name"]) for f in fields), default=0),
            "type_width": max((len(f["type"]) for f in fields), default=0),
        }

        if not self.template_exists("struct.go.j2"):
            raise GeneratorError("struct.go.j2 template not found")
        return self.render_template("struct.go.j2", template_context)

    def _field(self, xml_name: str, go_type: GoType, tag_value: str) -> Dict[str, Any]:
        return {
            "name": self.sanitizer.sanitize_name(xml_name, NamingCase.PASCAL_CASE),
            "type": str(go_type),
            "tag": f'`xml:"{tag_value}"`',
            "xml_name": xml_name,
        }

    def _struct_comment(self, struct_name: str, tree: XmlTree) -> str:
        kind = "repeated element" if tree.is_list else "element"
        return f"{struct_name} maps the {kind} <{tree.name}>."

    def struct_name(self, element_name: str) -> str:
        """
        Go struct name for an element name, stable within one generation run.

        Distinct element names that map to the same identifier get a numeric
        suffix, in order of first use.
        """
        if element_name in self._struct_names:
            return self._struct_names[element_name]

        base = go_struct_name(element_name, self.config.type_prefix, self.config.exported)
        name = base
        counter = 1
        while name in self._used_struct_names:
            name = f"{base}{counter}"
            counter += 1

        if name != base:
            self._warn_once(
                f"Element '{element_name}' maps to Go name '{base}' which is already "
                f"in use; generated as '{name}'"
            )

        self._struct_names[element_name] = name
        self._used_struct_names.add(name)
        return name

    def get_package_declaration(self) -> Optional[str]:
        """Get Go package clause, or None when no package name is configured."""
        if not self.package_name:
            return None

        source = self._session.documents[0].location if self._session.documents else ""
        if self.template_exists("package.go.j2"):
            context = {
                "package_name": self.package_name,
                "add_comments": self.add_comments,
                "source": source,
            }
            return self.render_template("package.go.j2", context)
        return f"package {self.package_name}"

    def validate_trees(self, trees: List[XmlTree]) -> List[str]:
        """Validate trees for Go generation."""
        warnings = super().validate_trees(trees)

        seen = set()
        for tree in trees:
            for node in tree.walk():
                scalars = [a.type for a in node.attribs]
                if node.type is not None:
                    scalars.append(node.type)
                for scalar in scalars:
                    go_name = self.type_mapper.map_scalar(scalar).name
                    if go_name.isidentifier() or "." in go_name or go_name in seen:
                        continue
                    seen.add(go_name)
                    warnings.append(
                        f"Type '{scalar}' of element '{node.name}' is not a valid Go type name"
                    )

        return warnings
