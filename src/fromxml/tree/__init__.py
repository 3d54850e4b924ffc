"""Tree building layer for XML folding.

Key Components:
    XMLTreeBuilder: Builds the intermediate tree with an explicit stack
    XMLNode: Intermediate node (element, PI, comment or synthetic root)
    TextChild / ElementChild: Tagged child entries of a node
    TreeBuildResult: Root node plus diagnostics and counters
    parse_open_tag: Tag name and attribute parsing
"""

from .attributes import OpenTag, parse_attribute, parse_open_tag, split_tag_body
from .builder import TreeBuildResult, XMLTreeBuilder
from .nodes import (
    COMMENT_NAME,
    PI_NAME,
    Child,
    ElementChild,
    TextChild,
    XMLNode,
)

__all__ = [
    "COMMENT_NAME",
    "PI_NAME",
    "Child",
    "ElementChild",
    "OpenTag",
    "TextChild",
    "TreeBuildResult",
    "XMLNode",
    "XMLTreeBuilder",
    "parse_attribute",
    "parse_open_tag",
    "split_tag_body",
]
