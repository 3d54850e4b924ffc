"""Core tree building implementation for XML folding.

This module turns the flat token list into an intermediate tree using an
explicit ancestor stack, so document depth is not limited by the Python call
stack. Broken nesting is recovered from and reported as diagnostics unless
strict mode asks for a StructuralError instead.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from fromxml.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    StructuralError,
    TreeConfig,
    get_logger,
)
from fromxml.shared.config import DEFAULT_ATTRIBUTE_PREFIX
from fromxml.tokenization import (
    Token,
    TokenizationResult,
    TokenType,
    unescape_entities,
)

from .attributes import parse_open_tag
from .nodes import COMMENT_NAME, PI_NAME, ElementChild, XMLNode

COMPONENT = "tree_builder"


@dataclass
class TreeBuildResult:
    """Result of building the intermediate tree."""

    root: XMLNode = field(default_factory=XMLNode)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    element_count: int = 0
    text_count: int = 0
    max_depth: int = 0
    implicit_closes: int = 0
    processing_time_ms: float = 0.0
    correlation_id: Optional[str] = None

    @property
    def forest(self) -> List[XMLNode]:
        """Top-level nodes (root element plus any PI/comment siblings)."""
        return [
            child.node for child in self.root.children
            if isinstance(child, ElementChild)
        ]

    @property
    def has_warnings(self) -> bool:
        """Check if any structural recovery happened."""
        return any(
            diag.severity == DiagnosticSeverity.WARNING
            for diag in self.diagnostics
        )

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )


class XMLTreeBuilder:
    """Builds the intermediate tree from a token stream.

    Degradation policy in permissive mode:

    - a close tag with nothing open is ignored
    - a close tag always closes the current element, whatever its name
    - elements still open at end of input are closed implicitly, innermost
      first, so nothing is lost from the root
    - a repeated attribute key keeps the last value

    Each of these records a WARNING diagnostic. With ``strict=True`` each
    raises StructuralError instead.
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        attribute_prefix: str = DEFAULT_ATTRIBUTE_PREFIX,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Tree building configuration
            attribute_prefix: Prefix stored in front of attribute keys
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or TreeConfig()
        self.attribute_prefix = attribute_prefix
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tree_builder")

        self._stack: List[XMLNode] = []
        self._current = XMLNode()
        self._result = TreeBuildResult()

    def build(self, tokens: Union[TokenizationResult, List[Token]]) -> TreeBuildResult:
        """Build the intermediate tree.

        Args:
            tokens: Either a TokenizationResult or a list of tokens

        Returns:
            TreeBuildResult whose ``root`` holds the parse forest

        Raises:
            StructuralError: In strict mode, on broken nesting
        """
        start_time = time.time()
        token_list = tokens.tokens if isinstance(tokens, TokenizationResult) else tokens

        self._reset_state()
        self.logger.debug(
            "Starting tree building",
            extra={"token_count": len(token_list), "strict": self.config.strict}
        )

        for token in token_list:
            self._process_token(token)

        self._close_unclosed_elements()

        result = self._result
        result.processing_time_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            "Tree building completed",
            extra={
                "element_count": result.element_count,
                "max_depth": result.max_depth,
                "diagnostic_count": len(result.diagnostics),
            }
        )
        return result

    def _reset_state(self) -> None:
        """Reset internal state for a new build."""
        self._stack = []
        self._current = XMLNode()
        self._result = TreeBuildResult(
            root=self._current,
            correlation_id=self.correlation_id,
        )

    def _process_token(self, token: Token) -> None:
        """Dispatch one token to its handler."""
        if token.type == TokenType.TEXT:
            self._handle_text(token)
        elif token.type == TokenType.CLOSE_TAG:
            self._handle_close_tag(token)
        elif token.type == TokenType.PROCESSING_INSTRUCTION:
            self._append_leaf(PI_NAME, token)
        elif token.type == TokenType.COMMENT:
            self._append_leaf(COMMENT_NAME, token)
        elif token.type == TokenType.CDATA:
            self._handle_cdata(token)
        elif token.type == TokenType.SELF_CLOSING_TAG:
            node = self._open_node(token, self_closed=True)
            self._track_depth(node, token, len(self._stack) + 1)
            self._current.append_node(node)
        elif token.type == TokenType.OPEN_TAG:
            node = self._open_node(token, self_closed=False)
            self._stack.append(self._current)
            self._current = node
            self._track_depth(node, token, len(self._stack))

    def _handle_text(self, token: Token) -> None:
        """Append a text run unless it is whitespace only."""
        text = token.value
        if not text.strip():
            return
        if self.config.trim_text:
            text = text.strip()
        if self.config.unescape_entities:
            text = unescape_entities(text)
        self._current.append_text(text)
        self._result.text_count += 1

    def _handle_cdata(self, token: Token) -> None:
        """Append CDATA content verbatim; blank sections are dropped."""
        if not token.value.strip():
            return
        self._current.append_text(token.value)
        self._result.text_count += 1

    def _append_leaf(self, name: str, token: Token) -> None:
        """Append a processing instruction or comment leaf."""
        self._current.append_node(
            XMLNode(name=name, raw_content=token.value, offset=token.offset)
        )

    def _open_node(self, token: Token, self_closed: bool) -> XMLNode:
        """Create a node for an open or self-closing tag."""
        tag = parse_open_tag(
            token.value,
            prefix=self.attribute_prefix,
            unescape=self.config.unescape_entities,
        )
        for key in tag.duplicates:
            self._structural_issue(
                f"Repeated attribute '{key}' on <{tag.name}>, last value kept",
                token,
                tag=tag.name,
                details={"attribute": key},
            )

        self._result.element_count += 1
        return XMLNode(
            name=tag.name,
            attributes=tag.attributes,
            self_closed=self_closed,
            offset=token.offset,
        )

    def _track_depth(self, node: XMLNode, token: Token, depth: int) -> None:
        """Record nesting depth and enforce the configured limit."""
        self._result.max_depth = max(self._result.max_depth, depth)
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            self._structural_issue(
                f"Element <{node.name}> exceeds maximum depth {max_depth}",
                token,
                tag=node.name,
                details={"depth": depth},
            )

    def _handle_close_tag(self, token: Token) -> None:
        """Close the current element and attach it to its parent."""
        if not self._stack:
            self._structural_issue(
                f"Close tag </{token.value}> without matching open tag ignored",
                token,
                tag=token.value,
            )
            return

        if token.value != self._current.name:
            self._structural_issue(
                f"Close tag </{token.value}> closes <{self._current.name}>",
                token,
                tag=token.value,
                details={"expected": self._current.name},
            )

        parent = self._stack.pop()
        parent.append_node(self._current)
        self._current = parent

    def _close_unclosed_elements(self) -> None:
        """Close elements still open at end of input, innermost first."""
        while self._stack:
            node = self._current
            self._structural_issue(
                f"Element <{node.name}> was never closed",
                None,
                tag=node.name,
                offset=node.offset,
            )
            parent = self._stack.pop()
            parent.append_node(node)
            self._current = parent
            self._result.implicit_closes += 1

    def _structural_issue(
        self,
        message: str,
        token: Optional[Token],
        tag: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        offset: Optional[int] = None
    ) -> None:
        """Raise in strict mode, otherwise record a warning and continue."""
        if offset is None and token is not None:
            offset = token.offset

        if self.config.strict:
            self.logger.error(message, extra={"offset": offset, "tag": tag})
            raise StructuralError(message, offset=offset, tag=tag)

        self.logger.warning(message, extra={"offset": offset, "tag": tag})
        self._result.add_diagnostic(
            DiagnosticSeverity.WARNING,
            message,
            COMPONENT,
            position={"offset": offset} if offset is not None else None,
            details=details,
        )
