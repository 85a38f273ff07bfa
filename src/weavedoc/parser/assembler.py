"""
File assembly.

Runs the block locators over one file's text and turns every located block
into the matching record of :mod:`weavedoc.models`.

Example:
    >>> parser = DataWeaveParser()
    >>> source = parser.parse_text(text, "src/dwl/modules/Utils.dwl", root_dir="src/dwl")
    >>> source.module_name
    'modules::Utils'
"""

import posixpath

import structlog

from weavedoc.models import Comment, DocumentedTable, Function, SourceFile, Variable
from weavedoc.parser.arguments import parse_arguments
from weavedoc.parser.comments import clean_comment, parse_comment
from weavedoc.parser.locators import (
    CommentBlock,
    body_offset,
    locate_body_tables,
    locate_functions,
    locate_module_header,
    locate_variables,
    scan_comment_blocks,
)
from weavedoc.parser.tables import build_annotation_table

logger = structlog.get_logger()


def relative_name(file_name: str, root_dir: str) -> str:
    """Drop the ``root_dir`` prefix from ``file_name``.

    Only whole path segments are stripped; a name outside ``root_dir`` is
    returned unchanged.
    """
    if not root_dir:
        return file_name
    name = posixpath.normpath(file_name)
    root = posixpath.normpath(root_dir)
    if name.startswith(root + "/"):
        return name[len(root):]
    return file_name


class DataWeaveParser:
    """Parse DataWeave source text into :class:`SourceFile` records.

    The parser holds no state between calls, so one instance can be shared
    by any number of threads.

    Guardrails:
        - Do NOT raise on malformed comments
          ✅ A block matching no declaration shape is left out
        - Do NOT read files here
          ✅ ``parse_text`` works on text it is handed; see weavedoc.walker
    """

    def parse_text(
        self,
        text: str,
        file_name: str,
        root_dir: str = "",
        file_ext: str = "dwl",
    ) -> SourceFile:
        """Assemble the document record for one file.

        Args:
            text: Full file contents
            file_name: Path the text was read from
            root_dir: Prefix removed from ``file_name`` for the stored identity
            file_ext: DataWeave file extension, stored as-is

        Returns:
            SourceFile with module comment, variables, functions and tables
        """
        header = locate_module_header(text)
        function_blocks = locate_functions(text)
        variable_blocks = locate_variables(text)

        functions = []
        for fb in function_blocks:
            comment = self._comment(fb.block)
            functions.append(Function(
                name=fb.name,
                comment=comment,
                arguments=tuple(parse_arguments(fb.arguments)),
                table=build_annotation_table(comment.annotations),
                line=fb.block.line,
            ))

        variables = [
            Variable(name=vb.name, comment=self._comment(vb.block), line=vb.block.line)
            for vb in variable_blocks
        ]

        tables = []
        for block in locate_body_tables(text):
            comment = self._comment(block)
            tables.append(DocumentedTable(
                comment=comment,
                table=build_annotation_table(comment.annotations),
                line=block.line,
            ))

        source = SourceFile(
            file_name=relative_name(file_name, root_dir),
            file_ext=file_ext,
            comment=self._comment(header) if header is not None else None,
            variables=tuple(variables),
            functions=tuple(functions),
            tables=tuple(tables),
        )
        attached = {fb.block.start for fb in function_blocks}
        attached.update(vb.block.start for vb in variable_blocks)
        if header is not None:
            attached.add(header.start)
        self._log_unattached(text, source, attached)
        return source

    def _comment(self, block: CommentBlock) -> Comment:
        return parse_comment(clean_comment(block.body))

    def _log_unattached(self, text: str, source: SourceFile, attached: set[int]) -> None:
        """Debug-log comment blocks above the body that documented nothing."""
        body = body_offset(text)
        for block in scan_comment_blocks(text):
            if block.start in attached or (body is not None and block.start >= body):
                continue
            logger.debug(
                "comment_not_attached",
                file=source.file_name,
                line=block.line,
            )
