"""Entity reference handling for text and attribute values.

Only the five predefined XML entities are recognised. Any other reference,
numeric character references included, is passed through unchanged.
"""

import re
from types import MappingProxyType
from typing import Mapping

UNESCAPE: Mapping[str, str] = MappingProxyType({
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&apos;": "'",
    "&quot;": '"',
})

_ENTITY_PATTERN = re.compile(r"&(?:lt|gt|amp|apos|quot);")


def unescape_entities(text: str) -> str:
    """Replace the predefined entity references in ``text``.

    Replacement is a single left-to-right pass, so ``&amp;lt;`` becomes
    ``&lt;`` and not ``<``.
    """
    if "&" not in text:
        return text
    return _ENTITY_PATTERN.sub(lambda match: UNESCAPE[match.group(0)], text)
