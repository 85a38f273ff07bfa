"""
Block locators.

Finding documented declarations is done in two steps: ``scan_comment_blocks``
finds every ``/** ... */`` region by offset, and each locator then looks at
what immediately follows a block to decide what it documents. Decomposing a
block's text is left to :mod:`weavedoc.parser.comments`.

Locators are independent of each other and tolerate zero matches.
"""

import re
from dataclasses import dataclass

COMMENT_OPEN = "/**"
COMMENT_CLOSE = "*/"
MODULE_MARKER = "%dw"
BODY_SEPARATOR = "---"

_MODULE = re.compile(r"\s*%dw")
_FUNCTION = re.compile(r"\s*fun\b\s*(\w*)\s*\((.*?)\)", re.DOTALL)
_VARIABLE = re.compile(r"\s*var\s+(\w+)")


@dataclass(frozen=True)
class CommentBlock:
    """A ``/** ... */`` region of a file.

    Attributes:
        start: Offset of the opening ``/**``
        end: Offset just past the closing ``*/``
        body: Text between the delimiters
        line: 1-based line of the opening delimiter
    """

    start: int
    end: int
    body: str
    line: int


@dataclass(frozen=True)
class FunctionBlock:
    block: CommentBlock
    name: str
    arguments: str


@dataclass(frozen=True)
class VariableBlock:
    block: CommentBlock
    name: str


def scan_comment_blocks(text: str) -> list[CommentBlock]:
    """Return every doc-comment block in ``text`` in source order."""
    blocks = []
    line = 1
    last = 0
    pos = text.find(COMMENT_OPEN)
    while pos >= 0:
        close = text.find(COMMENT_CLOSE, pos + len(COMMENT_OPEN))
        if close < 0:
            break
        line += text.count("\n", last, pos)
        last = pos
        end = close + len(COMMENT_CLOSE)
        blocks.append(CommentBlock(
            start=pos,
            end=end,
            body=text[pos + len(COMMENT_OPEN):close],
            line=line,
        ))
        pos = text.find(COMMENT_OPEN, end)
    return blocks


def locate_module_header(text: str) -> CommentBlock | None:
    """First block followed, after whitespace only, by the ``%dw`` header."""
    for block in scan_comment_blocks(text):
        if _MODULE.match(text, block.end):
            return block
    return None


def locate_functions(text: str) -> list[FunctionBlock]:
    """Blocks followed by ``fun name(args)``; the name may be empty."""
    found = []
    for block in scan_comment_blocks(text):
        match = _FUNCTION.match(text, block.end)
        if match:
            found.append(FunctionBlock(block=block, name=match.group(1), arguments=match.group(2)))
    return found


def locate_variables(text: str) -> list[VariableBlock]:
    """Blocks followed by ``var name``."""
    found = []
    for block in scan_comment_blocks(text):
        match = _VARIABLE.match(text, block.end)
        if match:
            found.append(VariableBlock(block=block, name=match.group(1)))
    return found


def body_offset(text: str) -> int | None:
    """Offset where the script body starts, None without a ``---`` separator."""
    idx = text.find(BODY_SEPARATOR)
    if idx < 0:
        return None
    return idx + len(BODY_SEPARATOR)


def locate_body_tables(text: str) -> list[CommentBlock]:
    """Blocks in the script body that document no declaration.

    Only text after the first ``---`` is considered. Blocks the function and
    variable locators already claim are left out, so a documented
    declaration below the separator is not also reported as a table.
    """
    start = body_offset(text)
    if start is None:
        return []

    claimed = {fb.block.start for fb in locate_functions(text)}
    claimed.update(vb.block.start for vb in locate_variables(text))
    header = locate_module_header(text)
    if header is not None:
        claimed.add(header.start)

    return [
        block for block in scan_comment_blocks(text)
        if block.start >= start and block.start not in claimed
    ]
