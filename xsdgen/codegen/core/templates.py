"""
Jinja2 rendering for generated source files.

Each language package ships its templates in a ``templates/`` directory.
Templates registered in memory shadow the files of the same name, which
lets callers restyle a single declaration without copying the whole set.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    select_autoescape,
)


class TemplateError(Exception):
    """Raised when a template is missing or fails to render."""

    pass


class TemplateEngine:
    """Loads and renders the declaration templates of one generator."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Args:
            template_dir: Directory holding ``*.j2`` files, or None for
                in-memory templates only
        """
        self.template_dir = template_dir
        self._overrides: Dict[str, str] = {}
        self._env = self._build_environment()

    def _build_environment(self) -> Environment:
        loaders = [DictLoader(self._overrides)]
        if self.template_dir and self.template_dir.exists():
            loaders.append(FileSystemLoader(str(self.template_dir)))

        env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["comment"] = comment_lines
        return env

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render ``template_name`` with ``context``.

        Raises:
            TemplateError: If the template cannot be found or rendered
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def add_template(self, name: str, content: str):
        """Register an in-memory template, shadowing any file called ``name``."""
        self._overrides[name] = content

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.loader.list_templates()


def comment_lines(value: str, marker: str = "//") -> str:
    """Prefix every line of ``value`` with a line-comment marker."""
    return "\n".join(
        f"{marker} {line}" if line.strip() else marker for line in str(value).split("\n")
    )


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, from a directory or with in-memory templates only."""
    return TemplateEngine(template_dir)
