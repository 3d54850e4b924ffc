"""Tests for open-tag name and attribute parsing."""

from fromxml.tree import parse_attribute, parse_open_tag, split_tag_body
from fromxml.tree.attributes import unquote


class TestSplitTagBody:
    """Tests for split_tag_body."""

    def test_name_only(self):
        """Test a bare tag name has no attribute runs."""
        assert split_tag_body("item") == ("item", [])

    def test_quoted_value_with_spaces_stays_one_run(self):
        """Test quoted values may contain whitespace."""
        name, runs = split_tag_body('item title="a b  c" id=\'x y\'')
        assert name == "item"
        assert runs == ['title="a b  c"', "id='x y'"]

    def test_valueless_and_bare_values(self):
        """Test valueless attributes and unquoted values."""
        name, runs = split_tag_body("input disabled size=10")
        assert name == "input"
        assert runs == ["disabled", "size=10"]

    def test_body_without_name(self):
        """Test a whitespace-only body yields an empty name."""
        assert split_tag_body("   ") == ("", [])


class TestUnquote:
    """Tests for unquote."""

    def test_strips_one_layer(self):
        """Test only one layer of matching quotes is removed."""
        assert unquote('""x""') == '"x"'
        assert unquote("'y'") == "y"

    def test_mismatched_quotes_are_kept(self):
        """Test mismatched quotes are left alone."""
        assert unquote("'z\"") == "'z\""
        assert unquote('"') == '"'


class TestParseAttribute:
    """Tests for parse_attribute."""

    def test_key_value(self):
        """Test quoted value is unquoted and unescaped."""
        assert parse_attribute('title="a &amp; b"') == ("title", "a & b")

    def test_valueless(self):
        """Test attribute without '=' maps to None."""
        assert parse_attribute("checked") == ("checked", None)

    def test_key_is_unescaped(self):
        """Test attribute keys are entity-unescaped."""
        assert parse_attribute("a&amp;b=1") == ("a&b", "1")

    def test_unescape_disabled(self):
        """Test entity references survive when unescaping is off."""
        assert parse_attribute('x="&lt;"', unescape=False) == ("x", "&lt;")

    def test_empty_value(self):
        """Test an empty quoted value."""
        assert parse_attribute('x=""') == ("x", "")


class TestParseOpenTag:
    """Tests for parse_open_tag."""

    def test_no_attributes(self):
        """Test tags without attributes have attributes=None."""
        tag = parse_open_tag("root")
        assert tag.name == "root"
        assert tag.attributes is None
        assert tag.duplicates == []

    def test_attributes_are_prefixed(self):
        """Test attribute keys carry the prefix."""
        tag = parse_open_tag('item id="1" hidden')
        assert tag.attributes == {"@id": "1", "@hidden": None}

    def test_custom_prefix(self):
        """Test a custom attribute prefix."""
        tag = parse_open_tag('item id="1"', prefix="$")
        assert tag.attributes == {"$id": "1"}

    def test_repeated_attribute_last_wins(self):
        """Test repeated keys keep the last value and are reported."""
        tag = parse_open_tag('a x="1" x="2"')
        assert tag.attributes == {"@x": "2"}
        assert tag.duplicates == ["x"]

    def test_gt_in_value(self):
        """Test quoted values may contain angle brackets."""
        tag = parse_open_tag('a expr="1 > 0"')
        assert tag.attributes == {"@expr": "1 > 0"}

    def test_trailing_whitespace(self):
        """Test whitespace before a stripped self-closing slash is ignored."""
        tag = parse_open_tag("br ")
        assert tag.name == "br"
        assert tag.attributes is None
