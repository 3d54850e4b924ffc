"""Markup tokenization for XML folding.

The tokenizer does not run a character state machine. A single regular
expression finds every tag body, and the text between two matches becomes a
text token. The pattern skips ``<`` and ``>`` inside quoted attribute
values, comments, CDATA sections and processing instructions.
"""

import re
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

from fromxml.shared import get_logger

# Group 1 captures the tag body between "<" and ">".
MARKUP_PATTERN = re.compile(
    r"<("
    r"[^!<>?](?:'.*?'|\".*?\"|[^'\"<>])*"      # open, close and empty tags
    r"|!(?:--.*?--|\[CDATA\[.*?]]|.*?)"       # comments, CDATA, declarations
    r"|\?.*?\?"                               # processing instructions
    r")>",
    re.DOTALL,
)

CDATA_OPEN = "![CDATA["
CDATA_CLOSE = "]]"


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    TEXT = auto()                    # Character content between tags
    OPEN_TAG = auto()                # <name attr="value">
    SELF_CLOSING_TAG = auto()        # <name attr="value"/>
    CLOSE_TAG = auto()               # </name>
    PROCESSING_INSTRUCTION = auto()  # <?target data?>
    COMMENT = auto()                 # <!-- ... --> and other <!...> bodies
    CDATA = auto()                   # <![CDATA[ ... ]]>


@dataclass(frozen=True)
class Token:
    """One classified piece of markup.

    ``value`` holds the payload for the token type: the text run, the tag
    body (without a trailing slash), the close-tag name, the raw content of
    a PI or comment, or the inner text of a CDATA section.
    """

    type: TokenType
    value: str
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate token values."""
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


@dataclass
class TokenizationResult:
    """Result of tokenizing one input string."""

    tokens: List[Token] = field(default_factory=list)
    character_count: int = 0
    processing_time_ms: float = 0.0

    @property
    def token_count(self) -> int:
        """Get the total number of tokens."""
        return len(self.tokens)

    def count_by_type(self) -> Dict[str, int]:
        """Count tokens per token type name."""
        counts: Dict[str, int] = {}
        for token in self.tokens:
            counts[token.type.name] = counts.get(token.type.name, 0) + 1
        return counts


def split_markup(text: str) -> List[str]:
    """Split ``text`` into alternating text runs and tag bodies.

    The result always has odd length: even indices are text runs (possibly
    empty), odd indices are tag bodies without their angle brackets.

    Examples:
        >>> split_markup('<a x="1>2">hi</a>')
        ['', 'a x="1>2"', 'hi', '/a', '']
    """
    return MARKUP_PATTERN.split(text)


def classify_tag(body: str, offset: int = 0) -> Token:
    """Classify a tag body by its leading and trailing characters.

    Args:
        body: Text between ``<`` and ``>``
        offset: Offset of the ``<`` in the input

    Returns:
        Token carrying the classified payload
    """
    first_char = body[0] if body else ""

    if first_char == "/":
        return Token(TokenType.CLOSE_TAG, body[1:].strip(), offset)
    if first_char == "?":
        return Token(TokenType.PROCESSING_INSTRUCTION, body[1:-1], offset)
    if first_char == "!":
        if body.startswith(CDATA_OPEN) and body.endswith(CDATA_CLOSE):
            return Token(
                TokenType.CDATA,
                body[len(CDATA_OPEN):-len(CDATA_CLOSE)],
                offset,
            )
        return Token(TokenType.COMMENT, body[1:], offset)
    if body.endswith("/"):
        return Token(TokenType.SELF_CLOSING_TAG, body[:-1], offset)
    return Token(TokenType.OPEN_TAG, body, offset)


class XMLTokenizer:
    """Tokenizer turning XML text into a flat token list.

    Empty text runs are dropped; whitespace-only runs are kept and left to
    the tree builder to discard.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the tokenizer.

        Args:
            correlation_id: Optional correlation ID for tracking requests
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tokenizer")

    def tokenize(self, text: str) -> TokenizationResult:
        """Tokenize ``text``.

        Args:
            text: XML-like markup

        Returns:
            TokenizationResult with tokens in document order
        """
        start_time = time.time()
        tokens: List[Token] = []
        position = 0

        for match in MARKUP_PATTERN.finditer(text):
            run = text[position:match.start()]
            if run:
                tokens.append(Token(TokenType.TEXT, run, position))
            tokens.append(classify_tag(match.group(1), match.start()))
            position = match.end()

        tail = text[position:]
        if tail:
            tokens.append(Token(TokenType.TEXT, tail, position))

        result = TokenizationResult(
            tokens=tokens,
            character_count=len(text),
            processing_time_ms=(time.time() - start_time) * 1000,
        )

        self.logger.debug(
            "Tokenization completed",
            extra={
                "token_count": result.token_count,
                "character_count": result.character_count,
            }
        )
        return result
