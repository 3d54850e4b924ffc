"""Intermediate tree nodes produced by the tree builder.

Children are a tagged variant: TextChild for character data and ElementChild
for nested nodes, so the folder can dispatch on type instead of guessing.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

PI_NAME = "?"
COMMENT_NAME = "!"


@dataclass(frozen=True)
class TextChild:
    """Text or CDATA content of a node."""

    text: str


@dataclass(frozen=True)
class ElementChild:
    """Nested node (element, processing instruction or comment)."""

    node: "XMLNode"


Child = Union[TextChild, ElementChild]


@dataclass(eq=False)
class XMLNode:
    """One XML construct in the intermediate tree.

    The synthetic root has ``name`` set to None. Processing instructions and
    comments are leaves named ``"?"`` and ``"!"`` whose ``raw_content``
    holds their literal text. Attribute keys carry the configured prefix.
    """

    name: Optional[str] = None
    children: List[Child] = field(default_factory=list)
    attributes: Optional[Dict[str, Optional[str]]] = None
    raw_content: Optional[str] = None
    self_closed: bool = False
    offset: Optional[int] = None

    @property
    def is_root(self) -> bool:
        """Check if this is the synthetic root node."""
        return self.name is None

    @property
    def is_leaf_markup(self) -> bool:
        """Check if this node is a processing instruction or comment."""
        return self.raw_content is not None

    @property
    def text_count(self) -> int:
        """Number of direct text children."""
        return sum(1 for child in self.children if isinstance(child, TextChild))

    def append_text(self, text: str) -> None:
        """Append a text child."""
        self.children.append(TextChild(text))

    def append_node(self, node: "XMLNode") -> None:
        """Append a nested node."""
        self.children.append(ElementChild(node))

    def iter_nodes(self) -> Iterator["XMLNode"]:
        """Iterate over this node and all descendant nodes in document order."""
        pending: List[XMLNode] = [self]
        while pending:
            node = pending.pop()
            yield node
            nested = [
                child.node for child in node.children
                if isinstance(child, ElementChild)
            ]
            pending.extend(reversed(nested))

