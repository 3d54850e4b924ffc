"""Tokenization layer for XML folding.

Key Components:
    XMLTokenizer: Splits markup into classified tokens
    Token: One text run or tag body with its offset
    TokenType: Classification of tag bodies
    split_markup: Raw alternating text/tag split
    unescape_entities: Predefined entity replacement
"""

from .entities import UNESCAPE, unescape_entities
from .tokenizer import (
    MARKUP_PATTERN,
    Token,
    TokenizationResult,
    TokenType,
    XMLTokenizer,
    classify_tag,
    split_markup,
)

__all__ = [
    "MARKUP_PATTERN",
    "UNESCAPE",
    "Token",
    "TokenType",
    "TokenizationResult",
    "XMLTokenizer",
    "classify_tag",
    "split_markup",
    "unescape_entities",
]
