"""
Parser package for DataWeave doc comments.

Locates ``/** ... */`` blocks in DataWeave sources and decomposes them into
the records of :mod:`weavedoc.models`.
"""

from weavedoc.parser.arguments import parse_arguments
from weavedoc.parser.assembler import DataWeaveParser
from weavedoc.parser.comments import (
    clean_comment,
    decompose_param,
    normalize_comment,
    parse_comment,
    split_annotations,
    tokenize_annotations,
)
from weavedoc.parser.tables import build_annotation_table, split_escaped

__all__ = [
    "DataWeaveParser",
    "build_annotation_table",
    "clean_comment",
    "decompose_param",
    "normalize_comment",
    "parse_arguments",
    "parse_comment",
    "split_annotations",
    "split_escaped",
    "tokenize_annotations",
]
