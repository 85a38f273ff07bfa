"""
Markdown renderer.

Renders parsed DataWeave modules into one consolidated Markdown document.
"""

import re
from collections.abc import Sequence
from typing import Any

import structlog

from weavedoc.models import Annotation, AnnotationTable, Function, SourceFile
from weavedoc.renderers.base import BaseRenderer

logger = structlog.get_logger()

# Annotations that are shown through dedicated tables.
STRUCTURAL_ANNOTATIONS = ("param", "table", "row")


def order_modules(files: Sequence[SourceFile], module_list: Sequence[str] = ()) -> list[SourceFile]:
    """Put modules named in ``module_list`` first, in that order.

    Modules not named keep their discovery order after the listed ones.
    """
    by_name = {}
    for source in files:
        by_name.setdefault(source.module_name, source)

    ordered = []
    seen = set()
    for name in module_list:
        source = by_name.get(name)
        if source is None:
            logger.debug("module_list_entry_unmatched", module=name)
            continue
        if id(source) not in seen:
            ordered.append(source)
            seen.add(id(source))

    ordered.extend(source for source in files if id(source) not in seen)
    return ordered


def anchor(text: str) -> str:
    """GitHub-style heading anchor."""
    slug = re.sub(r"[^\w\- ]", "", text.strip().lower())
    return slug.replace(" ", "-")


def cell(value: Any) -> str:
    """Make ``value`` safe for a single Markdown table cell."""
    text = "" if value is None else str(value).strip()
    text = text.replace("|", "\\|")
    return re.sub(r"\r?\n", "<br/>", text)


def markdown_table(columns: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Format a Markdown table, padding short rows and header with empty cells."""
    width = max([len(columns), *(len(row) for row in rows)])
    if width == 0:
        return ""
    header = list(columns) + [""] * (width - len(columns))
    lines = [
        "| " + " | ".join(cell(col) for col in header) + " |",
        "|" + " --- |" * width,
    ]
    for row in rows:
        padded = list(row) + [""] * (width - len(row))
        lines.append("| " + " | ".join(cell(value) for value in padded) + " |")
    return "\n".join(lines)


def annotation_table(table: AnnotationTable | None) -> str:
    if table is None:
        return ""
    return markdown_table(table.columns, [row.fields for row in table.rows])


def argument_table(function: Function) -> str:
    """Arguments with their types and matching ``@param`` descriptions."""
    descriptions = {param.key: param.value for param in function.comment.params}
    rows = [
        (arg.name, arg.datatype or "", descriptions.get(arg.name, ""))
        for arg in function.arguments
    ]
    return markdown_table(("Argument", "Type", "Description"), rows)


def notes(annotations: Sequence[Annotation]) -> list[Annotation]:
    """Annotations without a dedicated rendering."""
    return [
        ann for ann in annotations
        if not any(ann.is_named(name) for name in STRUCTURAL_ANNOTATIONS)
    ]


def summary(source: SourceFile) -> str:
    """First line of the module description."""
    if source.comment is None:
        return ""
    for line in source.comment.text.splitlines():
        if line.strip():
            return line.strip()
    return ""


class MarkdownRenderer(BaseRenderer):
    """Render parsed modules as a single Markdown document.

    Features:
        - Optional header and footer text, written verbatim
        - Optional navigation table linking every module
        - Module order driven by an explicit module list
        - Argument tables joined with ``@param`` descriptions
        - Annotation tables with rows padded to a common width

    Examples:
        >>> renderer = MarkdownRenderer()
        >>> doc = renderer.render(files, header_table=True)
    """

    template_name = "dataweave.md.j2"

    def _register_filters(self) -> None:
        self.env.filters["anchor"] = anchor
        self.env.filters["cell"] = cell
        self.env.filters["annotation_table"] = annotation_table
        self.env.filters["argument_table"] = argument_table
        self.env.filters["notes"] = notes
        self.env.filters["summary"] = summary

    def render(
        self,
        files: Sequence[SourceFile],
        module_list: Sequence[str] = (),
        header_text: str = "",
        footer_text: str = "",
        header_table: bool = False,
    ) -> str:
        """Generate the consolidated document.

        Args:
            files: Parsed modules in discovery order
            module_list: Module names to place first, in order
            header_text: Written at the top as-is
            footer_text: Written at the bottom as-is
            header_table: Emit the module navigation table

        Returns:
            Markdown content
        """
        content = self._render_template(
            files=order_modules(files, module_list),
            header_text=header_text,
            footer_text=footer_text,
            header_table=header_table,
        )
        content = re.sub(r"\n{3,}", "\n\n", content)
        return content.strip() + "\n"
