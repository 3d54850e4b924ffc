"""Folding of the intermediate tree into plain Python values.

The child object of a node is decided by these rules, in order:

1. start from the attributes (prefix removed) or an empty dict
2. more than one text child: every child, folded, goes into a list under
   the text key
3. exactly one child and no attributes: that child's folded value
4. no children and no attributes: None for ``<a/>``, "" for ``<a></a>``
5. otherwise a dict keyed by tag name (text under the text key), where a
   repeated key turns into a list of values

A named node folds to ``{name: child_object}``. The root, and any tag
without a name, folds to its child object directly.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from fromxml.shared import FoldingConfig, get_logger
from fromxml.tree import Child, ElementChild, TextChild, XMLNode

FoldedValue = Union[None, str, List[Any], Dict[str, Any]]
Reviver = Callable[[str, Any], Any]
Foldable = Union[str, TextChild, ElementChild, XMLNode]


class ObjectFolder:
    """Folds intermediate nodes into dicts, lists and strings.

    Nodes are folded children first from a flat node list rather than by
    recursion, so nesting depth is not limited by the Python call stack.
    """

    def __init__(
        self,
        config: Optional[FoldingConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the folder.

        Args:
            config: Folding configuration
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or FoldingConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "object_folder")

    def fold(self, entry: Foldable) -> FoldedValue:
        """Fold a node, a child entry or a raw string."""
        if isinstance(entry, str):
            return entry
        if isinstance(entry, TextChild):
            return entry.text
        if isinstance(entry, ElementChild):
            entry = entry.node
        return _wrap(entry, self.child_object(entry))

    def child_object(self, node: XMLNode) -> FoldedValue:
        """Compute the unwrapped value of ``node``."""
        folded: Dict[int, FoldedValue] = {}
        # Reversed pre-order visits every node after all of its descendants.
        for current in reversed(list(node.iter_nodes())):
            folded[id(current)] = self._shape(current, folded)
        return folded[id(node)]

    def _shape(self, node: XMLNode, folded: Dict[int, FoldedValue]) -> FoldedValue:
        """Apply the shape rules to ``node`` using its folded children."""
        if node.is_leaf_markup:
            return node.raw_content

        attributes = node.attributes
        children = node.children
        result: Dict[str, Any] = self._attribute_dict(attributes)

        if node.text_count > 1:
            result[self.config.text_key] = [
                _take_wrapped(child, folded) for child in children
            ]
            return result

        if len(children) == 1 and not attributes:
            return _take_wrapped(children[0], folded)

        if not children and not attributes:
            return None if node.self_closed else ""

        for child in children:
            if isinstance(child, TextChild):
                key = self.config.text_key
                value: FoldedValue = child.text
            else:
                key = child.node.name or ""
                value = folded.pop(id(child.node))
            _merge(result, key, value)

        return result

    def fold_document(
        self,
        root: XMLNode,
        reviver: Optional[Reviver] = None
    ) -> FoldedValue:
        """Fold the whole tree and apply ``reviver`` if given."""
        value = self.fold(root)
        if reviver is not None:
            value = revive(value, reviver)
            self.logger.debug("Reviver applied")
        return value

    def _attribute_dict(
        self,
        attributes: Optional[Dict[str, Optional[str]]]
    ) -> Dict[str, Any]:
        if not attributes:
            return {}
        if self.config.keep_attribute_prefix:
            return dict(attributes)

        prefix = self.config.attribute_prefix
        return {
            key[len(prefix):] if key.startswith(prefix) else key: value
            for key, value in attributes.items()
        }


def _wrap(node: XMLNode, child_object: FoldedValue) -> FoldedValue:
    """Key ``child_object`` by the node name; nameless nodes stay unwrapped."""
    if not node.name:
        return child_object
    return {node.name: child_object}


def _take_wrapped(child: Child, folded: Dict[int, FoldedValue]) -> FoldedValue:
    if isinstance(child, TextChild):
        return child.text
    return _wrap(child.node, folded.pop(id(child.node)))


def _merge(target: Dict[str, Any], key: str, value: FoldedValue) -> None:
    """Store ``value`` under ``key``, collecting repeats into a list."""
    if key not in target:
        target[key] = value
        return

    previous = target[key]
    if isinstance(previous, list):
        previous.append(value)
    else:
        target[key] = [previous, value]


def revive(value: FoldedValue, reviver: Reviver) -> FoldedValue:
    """Apply ``reviver`` bottom-up, the way JSON revivers walk a value.

    Dict entries are revived with their key and list items with their index
    as a string, children before their container. The whole value is revived
    last with the key ``""``. Whatever the reviver returns replaces the
    original value, None included.
    """
    holder: Dict[str, Any] = {"": value}
    # (container, slot, children already pushed)
    pending: List[Tuple[Any, Union[str, int], bool]] = [(holder, "", False)]

    while pending:
        container, slot, expanded = pending.pop()
        current = container[slot]
        if not expanded and isinstance(current, (dict, list)):
            pending.append((container, slot, True))
            slots = list(current) if isinstance(current, dict) else range(len(current))
            pending.extend((current, child_slot, False) for child_slot in reversed(slots))
            continue
        container[slot] = reviver(str(slot), current)

    return holder[""]
