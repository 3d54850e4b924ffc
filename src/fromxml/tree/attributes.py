"""Open-tag parsing: tag name and attribute specifications."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fromxml.tokenization import unescape_entities

# A run is a key optionally followed by "=" and a quoted or bare value, so
# quoted values may contain whitespace.
_ATTRIBUTE_RUN = re.compile(
    r"""([^\s=]+(?:=(?:'.*?'|".*?"|[^\s'"]*))?)""",
    re.DOTALL,
)

_QUOTES = ("'", '"')


@dataclass
class OpenTag:
    """Parsed open tag.

    ``duplicates`` lists attribute keys (unprefixed) that occurred more than
    once; the stored value is the last one.
    """

    name: str
    attributes: Optional[Dict[str, Optional[str]]] = None
    duplicates: List[str] = field(default_factory=list)


def split_tag_body(body: str) -> Tuple[str, List[str]]:
    """Split a tag body into its name and attribute runs.

    Returns:
        Tuple of the tag name (empty when the body has none) and the
        non-empty attribute runs, stripped of surrounding whitespace
    """
    parts = _ATTRIBUTE_RUN.split(body)
    if len(parts) < 2:
        return "", []
    runs = (part.strip() for part in parts[2:])
    return parts[1], [run for run in runs if run]


def unquote(value: str) -> str:
    """Remove exactly one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_attribute(run: str, unescape: bool = True) -> Tuple[str, Optional[str]]:
    """Parse one attribute run into a key and value.

    A run without ``=`` is a valueless attribute and maps to None.
    """
    key, sep, value = run.partition("=")
    if unescape:
        key = unescape_entities(key)
    if not sep:
        return key, None
    value = unquote(value)
    return key, unescape_entities(value) if unescape else value


def parse_open_tag(
    body: str,
    prefix: str = "@",
    unescape: bool = True
) -> OpenTag:
    """Parse an open or self-closing tag body.

    Args:
        body: Tag body without angle brackets or trailing slash
        prefix: Prefix put in front of every attribute key
        unescape: Whether to replace entity references in keys and values

    Returns:
        OpenTag with prefixed attribute keys, or ``attributes=None`` when
        the tag has no attribute runs

    Examples:
        >>> parse_open_tag('item id="1" hidden').attributes
        {'@id': '1', '@hidden': None}
    """
    name, runs = split_tag_body(body)
    tag = OpenTag(name=name)
    if not runs:
        return tag

    attributes: Dict[str, Optional[str]] = {}
    for run in runs:
        key, value = parse_attribute(run, unescape)
        prefixed = prefix + key
        if prefixed in attributes:
            tag.duplicates.append(key)
        attributes[prefixed] = value

    tag.attributes = attributes
    return tag
