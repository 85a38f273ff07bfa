"""Tests for comment normalization and annotation parsing."""

import pytest

from weavedoc.models import Annotation
from weavedoc.parser.comments import (
    clean_comment,
    decompose_param,
    normalize_comment,
    parse_annotations,
    parse_comment,
    split_annotations,
    tokenize_annotations,
)


# =============================================================================
# Normalizer Tests
# =============================================================================

class TestNormalizeComment:
    """Tests for normalize_comment."""

    def test_strips_continuation_markers(self):
        """Test that leading whitespace and '*' are removed per line."""
        assert normalize_comment(" * first\n *   second") == "first\nsecond"

    def test_line_without_marker_unchanged(self):
        """Test that lines without a marker keep their text and indentation."""
        assert normalize_comment("  no marker here") == "  no marker here"

    def test_only_one_marker_removed(self):
        """Test that a second '*' survives as content."""
        assert normalize_comment(" * * bullet") == "* bullet"

    def test_block_not_trimmed(self):
        """Test that the normalizer leaves trimming to the caller."""
        raw = "\n * text\n "
        assert normalize_comment(raw) == "\ntext\n "
        assert clean_comment(raw) == "text"

    def test_empty_continuation_line(self):
        """Test that a bare ' *' line becomes an empty line."""
        assert normalize_comment(" * a\n *\n * b") == "a\n\nb"


# =============================================================================
# Splitter Tests
# =============================================================================

class TestSplitAnnotations:
    """Tests for split_annotations."""

    def test_splits_at_first_annotation_line(self):
        """Test that the block starts at the first line beginning with '@'."""
        description, block = split_annotations("Adds numbers.\n@param a first")

        assert description == "Adds numbers.\n"
        assert block == "@param a first"

    def test_inline_at_sign_stays_in_description(self):
        """Test that '@' not at line start is description text."""
        text = "Mail ops@example.com for access.\n@since 1.0"
        description, block = split_annotations(text)

        assert "ops@example.com" in description
        assert block == "@since 1.0"

    def test_indented_at_sign_does_not_start_block(self):
        """Test that a line must begin exactly with '@'."""
        text = "Description\n  @notAnAnnotation here"
        assert split_annotations(text) == (text, "")

    def test_no_annotations(self):
        """Test that text without annotations is all description."""
        assert split_annotations("just text") == ("just text", "")

    def test_only_annotations(self):
        """Test that an empty description is allowed."""
        assert split_annotations("@since 2.0") == ("", "@since 2.0")


# =============================================================================
# Tokenizer Tests
# =============================================================================

class TestTokenizeAnnotations:
    """Tests for tokenize_annotations."""

    def test_empty_block(self):
        """Test that an empty block yields no annotations."""
        assert tokenize_annotations("") == []

    def test_document_order_and_raw_values(self):
        """Test that values are returned untrimmed in order."""
        pairs = tokenize_annotations("@param x the input\n@return value")

        assert pairs == [("param", "x the input\n"), ("return", "value\n")]

    def test_multiline_value(self):
        """Test that a value runs until the next '@' line."""
        pairs = tokenize_annotations("@note first line\nsecond line\n@since 1.0")

        assert pairs[0] == ("note", "first line\nsecond line\n")
        assert pairs[1] == ("since", "1.0\n")

    def test_inline_at_sign_does_not_end_value(self):
        """Test that an '@' inside a line is part of the value."""
        pairs = tokenize_annotations("@author Jane jane@example.com\n@since 1.0")

        assert pairs[0] == ("author", "Jane jane@example.com\n")

    def test_name_case_preserved(self):
        """Test that names are stored as written."""
        assert tokenize_annotations("@Table A, B") == [("Table", "A, B\n")]

    def test_annotation_without_value(self):
        """Test that a bare '@name' line yields an empty value."""
        assert tokenize_annotations("@deprecated\n@since 1.0") == [
            ("deprecated", ""),
            ("since", "1.0\n"),
        ]

    def test_malformed_line_ends_previous_value_and_is_dropped(self):
        """Test that an '@' line with no word name is skipped."""
        pairs = tokenize_annotations("@a one\n@-oops text\n@b two")

        assert pairs == [("a", "one\n"), ("b", "two\n")]


# =============================================================================
# Param Decomposer Tests
# =============================================================================

class TestDecomposeParam:
    """Tests for decompose_param."""

    def test_key_and_rest(self):
        """Test splitting on the first whitespace run."""
        assert decompose_param("x the input value\n") == ("x", "the input value\n")

    def test_empty_value_has_no_key(self):
        """Test that an empty value stays unkeyed."""
        assert decompose_param("") == (None, "")

    def test_key_only(self):
        """Test that a lone token followed by a line break is a key."""
        assert decompose_param("x\n") == ("x", "")

    def test_no_whitespace_after_token(self):
        """Test that a single token without whitespace is not split."""
        assert decompose_param("x") == (None, "x")

    def test_whitespace_only(self):
        """Test that whitespace alone is not split."""
        assert decompose_param("   ") == (None, "   ")


# =============================================================================
# parse_comment Tests
# =============================================================================

class TestParseComment:
    """Tests for parse_annotations and parse_comment."""

    def test_param_annotation(self):
        """Test '@param x the input value'."""
        annotations = parse_annotations("@param x the input value")

        assert annotations == [Annotation(name="param", key="x", value="the input value")]

    def test_bare_param_annotation(self):
        """Test '@param' without text."""
        annotations = parse_annotations("@param")

        assert annotations == [Annotation(name="param", key=None, value="")]

    def test_param_name_case_insensitive(self):
        """Test that '@PARAM' is decomposed too."""
        annotations = parse_annotations("@PARAM x desc")

        assert annotations[0].key == "x"
        assert annotations[0].name == "PARAM"

    def test_non_param_values_are_not_keyed(self):
        """Test that other annotations pass through as name/value."""
        annotations = parse_annotations("@return the sum of a and b")

        assert annotations == [Annotation(name="return", value="the sum of a and b")]

    def test_description_and_annotations(self):
        """Test a one-line description followed by an annotation."""
        comment = parse_comment("Checks a@b addresses.\n@x value")

        assert comment.text == "Checks a@b addresses."
        assert [a.name for a in comment.annotations] == ["x"]
        assert comment.source == "Checks a@b addresses.\n@x value"

    def test_lookups(self):
        """Test case-insensitive get/get_all/params."""
        comment = parse_comment(
            "Adds numbers.\n@param a first\n@param b second\n@param\n@Return sum"
        )

        assert comment.get("return").value == "sum"
        assert comment.get("missing") is None
        assert len(comment.get_all("PARAM")) == 3
        assert [(p.key, p.value) for p in comment.params] == [("a", "first"), ("b", "second")]

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_comment(self, text):
        """Test that blank text yields an empty comment."""
        comment = parse_comment(text.strip())

        assert comment.is_empty
