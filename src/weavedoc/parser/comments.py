"""
Comment text decomposition.

Turns the raw body of a ``/** ... */`` block into a :class:`Comment`:

    raw body ──► normalize_comment() ──► split_annotations()
                                              │
                      description ◄───────────┤
                                              ▼
                                   tokenize_annotations()
                                              │
                                              ▼
                            decompose_param() for ``@param``

All functions are pure; malformed input degrades to less structure and
never raises.
"""

import re

import structlog

from weavedoc.models import Annotation, Comment

logger = structlog.get_logger()

# Leading whitespace, one continuation marker, trailing whitespace.
_CONTINUATION = re.compile(r"^\s*\*\s*")

# First line that starts exactly with "@".
_ANNOTATION_LINE = re.compile(r"^@", re.MULTILINE)

# "@name<ws>" then everything up to the next line starting with "@".
_ANNOTATION = re.compile(r"^@(\w+)\s(.*?)(?=^@)", re.DOTALL | re.MULTILINE)

# "@" lines that cannot open an annotation.
_MALFORMED_ANNOTATION = re.compile(r"^@(?!\w+\s).*$", re.MULTILINE)

_PARAM = re.compile(r"\s*(\S+)\s+(.*)", re.DOTALL)


def normalize_comment(raw: str) -> str:
    """Strip the ``*`` continuation decoration from every line.

    Lines without a continuation marker are left as they are. The block as
    a whole is not trimmed; callers do that.
    """
    return "\n".join(_CONTINUATION.sub("", line, count=1) for line in raw.splitlines())


def split_annotations(text: str) -> tuple[str, str]:
    """Split normalized comment text into ``(description, annotation_block)``.

    The annotation block starts at the first line beginning with ``@``. An
    ``@`` anywhere else stays part of the description.
    """
    match = _ANNOTATION_LINE.search(text)
    if match is None:
        return text, ""
    return text[: match.start()], text[match.start():]


def tokenize_annotations(block: str) -> list[tuple[str, str]]:
    """Split an annotation block into untrimmed ``(name, value)`` pairs."""
    if not block:
        return []

    for bad in _MALFORMED_ANNOTATION.finditer(block + "\n"):
        logger.debug("annotation_line_ignored", line=bad.group(0))

    # The trailing "@" gives the last real annotation a boundary.
    return [(m.group(1), m.group(2)) for m in _ANNOTATION.finditer(block + "\n@")]


def decompose_param(value: str) -> tuple[str | None, str]:
    """Split a ``param`` value into ``(key, rest)``.

    Without whitespace after the first token there is nothing to split and
    the value comes back unkeyed.
    """
    match = _PARAM.match(value)
    if match is None:
        return None, value
    return match.group(1), match.group(2)


def parse_annotations(block: str) -> list[Annotation]:
    annotations = []
    for name, raw in tokenize_annotations(block):
        if name.lower() == "param":
            key, value = decompose_param(raw)
            annotations.append(Annotation(name=name, value=value.strip(), key=key))
        else:
            annotations.append(Annotation(name=name, value=raw.strip()))
    return annotations


def clean_comment(raw: str) -> str:
    """Normalized and trimmed comment string."""
    return normalize_comment(raw).strip()


def parse_comment(text: str) -> Comment:
    """Build a :class:`Comment` from a cleaned comment string.

    Args:
        text: Output of :func:`clean_comment`

    Returns:
        Comment with the description trimmed and annotations in order
    """
    description, block = split_annotations(text)
    return Comment(
        text=description.strip(),
        annotations=tuple(parse_annotations(block)),
        source=text,
    )
