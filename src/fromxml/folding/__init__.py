"""Folding layer: intermediate tree to dicts, lists, strings and None."""

from .folder import FoldedValue, ObjectFolder, Reviver, revive

__all__ = [
    "FoldedValue",
    "ObjectFolder",
    "Reviver",
    "revive",
]
