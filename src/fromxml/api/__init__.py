"""Public parsing API for XML folding."""

from .parser import FoldResult, FromXMLParser, InputType, from_xml, parse_xml

__all__ = [
    "FoldResult",
    "FromXMLParser",
    "InputType",
    "from_xml",
    "parse_xml",
]
