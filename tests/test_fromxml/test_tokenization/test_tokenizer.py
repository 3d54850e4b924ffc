"""Tests for markup splitting and token classification."""

import pytest

from fromxml.tokenization import (
    Token,
    TokenizationResult,
    TokenType,
    XMLTokenizer,
    classify_tag,
    split_markup,
)


class TestSplitMarkup:
    """Tests for the raw alternating split."""

    def test_simple_document_alternates_text_and_tags(self):
        """Test that text runs and tag bodies alternate."""
        parts = split_markup("<a>hi</a>")
        assert parts == ["", "a", "hi", "/a", ""]

    def test_result_always_has_odd_length(self):
        """Test that the split starts and ends with a text run."""
        for text in ["", "plain", "<a/>", "x<a>y</a>z", "<?pi?><!--c--><r/>"]:
            assert len(split_markup(text)) % 2 == 1

    def test_gt_inside_double_quoted_attribute(self):
        """Test that '>' inside a double-quoted value does not end the tag."""
        parts = split_markup('<a x="1>2">t</a>')
        assert parts[1] == 'a x="1>2"'
        assert parts[2] == "t"

    def test_lt_and_gt_inside_single_quoted_attribute(self):
        """Test that '<' and '>' inside a single-quoted value are skipped."""
        parts = split_markup("<a x='<b>'/>")
        assert parts == ["", "a x='<b>'/", ""]

    def test_gt_inside_comment(self):
        """Test that a comment body may contain '>'."""
        parts = split_markup("<!-- a > b --><r/>")
        assert parts[1] == "!-- a > b --"
        assert parts[3] == "r/"

    def test_markup_inside_cdata(self):
        """Test that CDATA content is never interpreted as tags."""
        parts = split_markup("<r><![CDATA[<raw> & stuff]]></r>")
        assert parts[3] == "![CDATA[<raw> & stuff]]"

    def test_gt_inside_processing_instruction(self):
        """Test that a processing instruction may contain '>'."""
        parts = split_markup('<?pi a="x>y"?><r/>')
        assert parts[1] == '?pi a="x>y"?'

    def test_comment_spanning_lines(self):
        """Test that comments may span several lines."""
        parts = split_markup("<!--\nline one\nline two\n--><r/>")
        assert parts[1] == "!--\nline one\nline two\n--"

    def test_stray_less_than_stays_text(self):
        """Test that a '<' that never closes is left as text."""
        parts = split_markup("a < b")
        assert parts == ["a < b"]


class TestClassifyTag:
    """Tests for tag body classification."""

    def test_close_tag(self):
        """Test close tag classification strips the slash."""
        token = classify_tag("/item")
        assert token.type == TokenType.CLOSE_TAG
        assert token.value == "item"

    def test_processing_instruction(self):
        """Test PI content excludes both question marks."""
        token = classify_tag('?xml version="1.0"?')
        assert token.type == TokenType.PROCESSING_INSTRUCTION
        assert token.value == 'xml version="1.0"'

    def test_comment_keeps_dashes(self):
        """Test comment raw content is the body after the bang."""
        token = classify_tag("!-- note --")
        assert token.type == TokenType.COMMENT
        assert token.value == "-- note --"

    def test_cdata(self):
        """Test CDATA content is the text between the markers."""
        token = classify_tag("![CDATA[ a &amp; b ]]")
        assert token.type == TokenType.CDATA
        assert token.value == " a &amp; b "

    def test_doctype_is_comment(self):
        """Test other bang declarations are treated as comments."""
        token = classify_tag("!DOCTYPE html")
        assert token.type == TokenType.COMMENT
        assert token.value == "DOCTYPE html"

    def test_self_closing_tag(self):
        """Test trailing slash marks a self-closing tag."""
        token = classify_tag('br class="x" /')
        assert token.type == TokenType.SELF_CLOSING_TAG
        assert token.value == 'br class="x" '

    def test_open_tag(self):
        """Test regular open tag keeps its whole body."""
        token = classify_tag('item id="1"', offset=7)
        assert token.type == TokenType.OPEN_TAG
        assert token.value == 'item id="1"'
        assert token.offset == 7


class TestToken:
    """Tests for the Token dataclass."""

    def test_negative_offset_raises(self):
        """Test that negative offsets are rejected."""
        with pytest.raises(ValueError, match="Offset must be >= 0"):
            Token(TokenType.TEXT, "x", offset=-1)


class TestXMLTokenizer:
    """Tests for XMLTokenizer."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.tokenizer = XMLTokenizer(correlation_id="test-123")

    def test_tokenize_returns_result(self):
        """Test tokenize returns a TokenizationResult with counts."""
        result = self.tokenizer.tokenize("<a>hi</a>")
        assert isinstance(result, TokenizationResult)
        assert result.character_count == 9
        assert [t.type for t in result.tokens] == [
            TokenType.OPEN_TAG,
            TokenType.TEXT,
            TokenType.CLOSE_TAG,
        ]

    def test_empty_text_runs_are_skipped(self):
        """Test that adjacent tags produce no empty text tokens."""
        result = self.tokenizer.tokenize("<a><b/></a>")
        assert all(t.value for t in result.tokens if t.type == TokenType.TEXT)
        assert result.token_count == 3

    def test_whitespace_runs_are_kept(self):
        """Test whitespace-only runs reach the builder."""
        result = self.tokenizer.tokenize("<a>\n  <b/>\n</a>")
        texts = [t.value for t in result.tokens if t.type == TokenType.TEXT]
        assert texts == ["\n  ", "\n"]

    def test_offsets_point_at_markup(self):
        """Test token offsets are positions in the input."""
        text = "ab<c/>d"
        result = self.tokenizer.tokenize(text)
        assert [(t.type, t.offset) for t in result.tokens] == [
            (TokenType.TEXT, 0),
            (TokenType.SELF_CLOSING_TAG, 2),
            (TokenType.TEXT, 6),
        ]

    def test_plain_text_is_single_token(self):
        """Test input without markup becomes one text token."""
        result = self.tokenizer.tokenize("just text")
        assert result.tokens == [Token(TokenType.TEXT, "just text", 0)]

    def test_empty_input(self):
        """Test empty input produces no tokens."""
        result = self.tokenizer.tokenize("")
        assert result.tokens == []
        assert result.token_count == 0

    def test_count_by_type(self):
        """Test token distribution by type."""
        result = self.tokenizer.tokenize("<?pi?><r><!--c--><a/><a/></r>")
        counts = result.count_by_type()
        assert counts["SELF_CLOSING_TAG"] == 2
        assert counts["PROCESSING_INSTRUCTION"] == 1
        assert counts["COMMENT"] == 1
