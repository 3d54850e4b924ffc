"""Parser API with progressive disclosure for XML folding.

Level 1 is the module-level ``parse_xml`` function returning the folded
value. Level 2 is the ``FromXMLParser`` class, which holds a configuration
and can also return the intermediate tree, diagnostics and statistics.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from fromxml.folding import FoldedValue, ObjectFolder, Reviver
from fromxml.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParserConfig,
    ParseStatistics,
    get_logger,
)
from fromxml.tokenization import XMLTokenizer
from fromxml.tree import XMLNode, XMLTreeBuilder

InputType = Union[str, bytes]

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


@dataclass
class FoldResult:
    """Folded value together with everything learned while producing it."""

    value: FoldedValue = None
    tree: XMLNode = field(default_factory=XMLNode)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    statistics: ParseStatistics = field(default_factory=ParseStatistics)
    correlation_id: Optional[str] = None

    @property
    def has_warnings(self) -> bool:
        """Check if the input needed any structural recovery."""
        return any(
            diag.severity == DiagnosticSeverity.WARNING
            for diag in self.diagnostics
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the parse."""
        by_severity: Dict[str, int] = {}
        for diagnostic in self.diagnostics:
            name = diagnostic.severity.name
            by_severity[name] = by_severity.get(name, 0) + 1

        return {
            "correlation_id": self.correlation_id,
            "has_warnings": self.has_warnings,
            "statistics": self.statistics.to_dict(),
            "diagnostics_by_severity": by_severity,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }


def _coerce_text(input_data: InputType) -> str:
    """Return ``input_data`` as text; bytes are decoded as UTF-8."""
    if isinstance(input_data, str):
        return input_data
    if isinstance(input_data, (bytes, bytearray)):
        return bytes(input_data).decode("utf-8-sig", errors="replace")
    raise TypeError(
        f"XML input must be str or bytes, not {type(input_data).__name__}"
    )


class FromXMLParser:
    """Configured parser that can be reused for many documents.

    The parser keeps only its configuration between calls. Pipeline
    components and the reviver live for a single call, so one instance may
    be shared between threads.

    Examples:
        Basic usage:
        >>> parser = FromXMLParser()
        >>> parser.parse('<root><item>value</item></root>')
        {'root': {'item': 'value'}}

        Keeping attribute prefixes:
        >>> FromXMLParser(ParserConfig.classic()).parse('<a id="1"/>')
        {'a': {'@id': '1'}}
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration (defaults to ParserConfig())
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "fromxml_parser")

    def parse(
        self,
        input_data: InputType,
        reviver: Optional[Reviver] = None
    ) -> FoldedValue:
        """Parse markup and return the folded value.

        Args:
            input_data: XML text (bytes are decoded as UTF-8)
            reviver: Optional ``(key, value) -> value`` transform

        Returns:
            Nested dicts, lists, strings and None

        Raises:
            StructuralError: When strict tree building is configured and the
                nesting is broken
            TypeError: When the input is neither str nor bytes
        """
        return self.parse_detailed(input_data, reviver).value

    def parse_detailed(
        self,
        input_data: InputType,
        reviver: Optional[Reviver] = None
    ) -> FoldResult:
        """Parse markup and return the value with tree and diagnostics."""
        start_time = time.time()
        text = _coerce_text(input_data)

        self.logger.info(
            "Starting parse operation",
            extra={
                "content_length": len(text),
                "preview": (
                    text[:PREVIEW_LENGTH] + "..."
                    if len(text) > PREVIEW_LENGTH else text
                ),
                "has_reviver": reviver is not None,
            }
        )

        tokenization = XMLTokenizer(self.correlation_id).tokenize(text)

        builder = XMLTreeBuilder(
            config=self.config.tree,
            attribute_prefix=self.config.folding.attribute_prefix,
            correlation_id=self.correlation_id,
        )
        tree_result = builder.build(tokenization)

        folder = ObjectFolder(self.config.folding, self.correlation_id)
        value = folder.fold_document(tree_result.root, reviver)

        statistics = ParseStatistics(
            characters_processed=tokenization.character_count,
            tokens_generated=tokenization.token_count,
            elements_built=tree_result.element_count,
            text_nodes=tree_result.text_count,
            max_depth=tree_result.max_depth,
            implicit_closes=tree_result.implicit_closes,
            tokens_by_type=tokenization.count_by_type(),
            processing_time_ms=(time.time() - start_time) * MS_PER_SECOND,
        )

        self.logger.info(
            "Parse operation completed",
            extra={
                "element_count": statistics.elements_built,
                "diagnostic_count": len(tree_result.diagnostics),
                "processing_time_ms": statistics.processing_time_ms,
                "characters_per_second": statistics.characters_per_second,
            }
        )

        return FoldResult(
            value=value,
            tree=tree_result.root,
            diagnostics=tree_result.diagnostics,
            statistics=statistics,
            correlation_id=self.correlation_id,
        )

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the parser configuration."""
        self.config = config
        self.logger.info(
            "Parser reconfigured",
            extra={"config_name": config.name}
        )


def parse_xml(
    text: InputType,
    reviver: Optional[Reviver] = None,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> FoldedValue:
    """Parse XML text into nested dicts, lists, strings and None.

    This is the primary entry point.

    Args:
        text: XML text (bytes are decoded as UTF-8)
        reviver: Optional ``(key, value) -> value`` transform applied
            bottom-up to every entry, then to the whole value with key ""
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The folded value

    Examples:
        >>> parse_xml('<a><b>1</b><b>2</b></a>')
        {'a': {'b': ['1', '2']}}

        >>> parse_xml('<a x="1" y="2"/>')
        {'a': {'x': '1', 'y': '2'}}

        >>> parse_xml('<a/>'), parse_xml('<a></a>')
        ({'a': None}, {'a': ''})
    """
    return FromXMLParser(config, correlation_id).parse(text, reviver)


# Name used by the JavaScript library this output format comes from.
from_xml = parse_xml
