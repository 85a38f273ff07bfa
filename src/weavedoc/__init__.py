"""
weavedoc - DataWeave documentation generator.

Extracts ``/** ... */`` doc comments and their ``@annotations`` from
DataWeave modules and renders them as Markdown.

Example:
    >>> from weavedoc import DataWeaveParser
    >>> source = DataWeaveParser().parse_text(text, "modules/Utils.dwl")
    >>> [fn.name for fn in source.functions]
    ['camelize', 'pluralize']
"""

__version__ = "0.1.0"

from weavedoc.config import WeaveDocConfig
from weavedoc.models import (
    Annotation,
    AnnotationTable,
    Argument,
    Comment,
    DocumentedTable,
    Function,
    Row,
    SourceFile,
    Variable,
)
from weavedoc.orchestrator import DocumentationOrchestrator
from weavedoc.parser import DataWeaveParser
from weavedoc.renderers import MarkdownRenderer

__all__ = [
    "Annotation",
    "AnnotationTable",
    "Argument",
    "Comment",
    "DataWeaveParser",
    "DocumentationOrchestrator",
    "DocumentedTable",
    "Function",
    "MarkdownRenderer",
    "Row",
    "SourceFile",
    "Variable",
    "WeaveDocConfig",
    "__version__",
]
