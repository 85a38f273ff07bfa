"""
Document model for parsed DataWeave sources.

Every record here is produced by a single parse pass over one file and is
read-only afterwards. Sequences are tuples so that source order, which is
significant for rendering, cannot drift once a file has been assembled.

Example:
    >>> comment = Comment(text="Adds two numbers.", annotations=(
    ...     Annotation(name="param", key="a", value="first operand"),
    ... ))
    >>> comment.params[0].key
    'a'
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Annotation:
    """A single ``@name value`` entry of a comment.

    Attributes:
        name: Annotation name as written (lookups compare it case-insensitively)
        value: Annotation text, surrounding whitespace trimmed
        key: First token of a ``param`` annotation, None otherwise
    """

    name: str
    value: str = ""
    key: str | None = None

    def is_named(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.lower() == name.lower()


@dataclass(frozen=True)
class Comment:
    """Free-text description plus the ordered annotations that follow it.

    Attributes:
        text: Description text before the first annotation line
        annotations: Annotations in document order
        source: Normalized, trimmed comment string the comment was parsed from
    """

    text: str = ""
    annotations: tuple[Annotation, ...] = ()
    source: str = ""

    def get(self, name: str) -> Annotation | None:
        """Return the first annotation called ``name``, if any."""
        for ann in self.annotations:
            if ann.is_named(name):
                return ann
        return None

    def get_all(self, name: str) -> list[Annotation]:
        """Return every annotation called ``name`` in document order."""
        return [ann for ann in self.annotations if ann.is_named(name)]

    @property
    def params(self) -> list[Annotation]:
        """Keyed ``param`` annotations."""
        return [ann for ann in self.get_all("param") if ann.key is not None]

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.annotations


@dataclass(frozen=True)
class Argument:
    """One entry of a function's argument list."""

    name: str
    datatype: str | None = None


@dataclass(frozen=True)
class Row:
    """One ``row`` annotation split into fields (escaped commas resolved)."""

    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnnotationTable:
    """Table declared through ``table``/``row`` annotations.

    Column and row widths are independent; nothing checks that a row has as
    many fields as there are columns.
    """

    columns: tuple[str, ...] = ()
    rows: tuple[Row, ...] = ()


@dataclass(frozen=True)
class Function:
    """A documented ``fun`` declaration."""

    name: str
    comment: Comment = field(default_factory=Comment)
    arguments: tuple[Argument, ...] = ()
    table: AnnotationTable | None = None
    line: int = 0

    @property
    def signature(self) -> str:
        parts = []
        for arg in self.arguments:
            parts.append(f"{arg.name}: {arg.datatype}" if arg.datatype else arg.name)
        return f"{self.name}({', '.join(parts)})"


@dataclass(frozen=True)
class Variable:
    """A documented ``var`` declaration."""

    name: str
    comment: Comment = field(default_factory=Comment)
    line: int = 0


@dataclass(frozen=True)
class DocumentedTable:
    """A bare comment found in the script body, usually a mapping table."""

    comment: Comment = field(default_factory=Comment)
    table: AnnotationTable | None = None
    line: int = 0


@dataclass(frozen=True)
class SourceFile:
    """Everything extracted from one DataWeave file.

    Attributes:
        file_name: Path relative to the root it was discovered under
        file_ext: Declared DataWeave file extension (without the dot)
        comment: Module header comment, if the file has one
        variables: Documented variables in source order
        functions: Documented functions in source order
        tables: Documented body comments in source order
    """

    file_name: str
    file_ext: str = "dwl"
    comment: Comment | None = None
    variables: tuple[Variable, ...] = ()
    functions: tuple[Function, ...] = ()
    tables: tuple[DocumentedTable, ...] = ()

    @property
    def module_name(self) -> str:
        """DataWeave module identifier, e.g. ``modules::Utils``."""
        name = self.file_name.replace("\\", "/").lstrip("/")
        suffix = f".{self.file_ext}"
        if self.file_ext and name.endswith(suffix):
            name = name[: -len(suffix)]
        return "::".join(part for part in name.split("/") if part)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["module_name"] = self.module_name
        return data
