"""Diagnostic and statistics types shared by the pipeline layers."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Markup that was tolerated and recovered
    ERROR = auto()      # Markup that could not be recovered
    CRITICAL = auto()   # Pipeline could not produce a value


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a plain dictionary."""
        result: Dict[str, Any] = {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
        }
        if self.position is not None:
            result["position"] = dict(self.position)
        if self.details:
            result["details"] = dict(self.details)
        return result


@dataclass
class ParseStatistics:
    """Counters collected over one parse call."""

    characters_processed: int = 0
    tokens_generated: int = 0
    elements_built: int = 0
    text_nodes: int = 0
    max_depth: int = 0
    implicit_closes: int = 0
    processing_time_ms: float = 0.0
    tokens_by_type: Dict[str, int] = field(default_factory=dict)

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens generated per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_generated * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to a plain dictionary."""
        return {
            "characters_processed": self.characters_processed,
            "tokens_generated": self.tokens_generated,
            "elements_built": self.elements_built,
            "text_nodes": self.text_nodes,
            "max_depth": self.max_depth,
            "implicit_closes": self.implicit_closes,
            "processing_time_ms": self.processing_time_ms,
            "characters_per_second": self.characters_per_second,
            "tokens_per_second": self.tokens_per_second,
            "tokens_by_type": dict(self.tokens_by_type),
        }
