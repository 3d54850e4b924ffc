"""Shared utilities for XML folding.

This module provides the configuration objects, diagnostic types, exceptions
and logging helpers used across the tokenization, tree and folding layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    FoldingConfig,
    ParserConfig,
    TreeConfig,
)
from .errors import (
    FromXMLError,
    StructuralError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseStatistics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "FoldingConfig",
    "FromXMLError",
    "ParseStatistics",
    "ParserConfig",
    "StructuralError",
    "TreeConfig",
    "get_logger",
]
