"""
Base renderer for documentation generation.

Provides common functionality for document renderers: template loading
and custom filters.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from weavedoc.errors import RenderError
from weavedoc.models import SourceFile


class BaseRenderer(ABC):
    """Base class for document renderers.

    Architecture:
        ```
        list[SourceFile]
              │
              ▼
        Renderer.render() ──► context dict
              │
              ▼
        Jinja2 Template
              │
              ▼
        Rendered document
        ```

    Subclasses name their template and register any filters they need in
    :meth:`_register_filters`.
    """

    # Template file name
    template_name: str = ""

    def __init__(self, template_dir: Path | None = None):
        """Initialize the renderer.

        Args:
            template_dir: Directory containing templates (bundled ones if None)
        """
        if template_dir is None:
            template_dir = Path(__file__).parent.parent / "templates"
        self.template_dir = Path(template_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._register_filters()

    def _register_filters(self) -> None:
        """Hook for subclasses to add Jinja2 filters."""

    @abstractmethod
    def render(self, files: Sequence[SourceFile], **options: Any) -> str:
        """Render the document.

        Returns:
            Rendered document content as string
        """

    def _render_template(self, template_name: str | None = None, **context: Any) -> str:
        """Load and render a template, wrapping Jinja2 failures.

        Raises:
            RenderError: If the template is missing or fails to render
        """
        name = template_name or self.template_name
        try:
            template = self.env.get_template(name)
            return template.render(**context)
        except TemplateError as e:
            raise RenderError(f"Error rendering template '{name}': {e}", cause=e) from e

