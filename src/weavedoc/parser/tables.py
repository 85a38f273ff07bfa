r"""
Annotation tables.

A comment declares a table with one ``@table`` annotation (column names)
and any number of ``@row`` annotations::

    @table Code, Description
    @row A1, Active\\, in good standing
    @row X9, Closed

Commas written as ``\\,`` are part of the value rather than separators.
"""

from collections.abc import Sequence

from weavedoc.models import Annotation, AnnotationTable, Row

ESCAPED_COMMA = "\\\\,"


def split_escaped(value: str, unescape: bool = False) -> list[str]:
    """Split ``value`` on commas that are not escaped.

    Line breaks are removed from every field and empty trailing fields are
    dropped. With ``unescape`` the escaped commas are written back as plain
    commas; otherwise they are kept as-is.
    """
    fields: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(value):
        if value.startswith(ESCAPED_COMMA, i):
            current.append("," if unescape else ESCAPED_COMMA)
            i += len(ESCAPED_COMMA)
        elif value[i] == ",":
            fields.append("".join(current))
            current = []
            i += 1
        else:
            current.append(value[i])
            i += 1
    fields.append("".join(current))
    # Trailing separators add no fields; an empty value is still one field.
    while len(fields) > 1 and not fields[-1]:
        fields.pop()
    return [field.replace("\r", "").replace("\n", "") for field in fields]


def build_annotation_table(annotations: Sequence[Annotation]) -> AnnotationTable | None:
    """Build the table declared by ``annotations``.

    Returns None when there is no ``table`` annotation, whether or not rows
    are present. Rows are not checked against the column count.
    """
    header = next((ann for ann in annotations if ann.is_named("table")), None)
    if header is None:
        return None

    rows = tuple(
        Row(fields=tuple(split_escaped(ann.value, unescape=True)))
        for ann in annotations
        if ann.is_named("row")
    )
    return AnnotationTable(columns=tuple(split_escaped(header.value)), rows=rows)
