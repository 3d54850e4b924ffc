"""Exception hierarchy for XML folding.

The parser is permissive by default and raises nothing for malformed markup.
StructuralError is only raised when strict tree building is requested.
"""

from typing import Optional


class FromXMLError(Exception):
    """Base exception for all fromxml errors."""


class StructuralError(FromXMLError):
    """Raised in strict mode when the markup nesting cannot be trusted.

    Attributes:
        offset: Character offset of the offending construct, if known
        tag: Tag name involved, if any
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        tag: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.tag = tag

    def __str__(self) -> str:
        message = super().__str__()
        if self.offset is not None:
            return f"{message} (at offset {self.offset})"
        return message
