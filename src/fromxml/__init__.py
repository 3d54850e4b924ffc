"""fromxml: fold XML text into plain Python values.

Elements become dicts keyed by tag name, repeated tags become lists, text
becomes strings and empty self-closing elements become None. The parser is
permissive: malformed markup yields a best-effort value plus diagnostics.

Progressive API Disclosure:
- Level 1: Simple function - parse_xml() (alias from_xml())
- Level 2: Configured parser - FromXMLParser class with parse_detailed()
- Level 3: Pipeline layers - XMLTokenizer, XMLTreeBuilder, ObjectFolder
"""

__version__ = "0.1.0"
__author__ = "fromxml developers"

# Level 1 and Level 2
from .api import FoldResult, FromXMLParser, from_xml, parse_xml

# Level 3: pipeline layers
from .folding import ObjectFolder
from .tokenization import XMLTokenizer, split_markup, unescape_entities
from .tree import XMLNode, XMLTreeBuilder

# Configuration, diagnostics and errors
from .shared import (
    ConfigError,
    ConfigValidationError,
    DiagnosticEntry,
    DiagnosticSeverity,
    FoldingConfig,
    FromXMLError,
    ParserConfig,
    StructuralError,
    TreeConfig,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: simple parsing
    "parse_xml",
    "from_xml",

    # Level 2: configured parser
    "FromXMLParser",
    "FoldResult",

    # Level 3: pipeline layers
    "ObjectFolder",
    "XMLNode",
    "XMLTokenizer",
    "XMLTreeBuilder",
    "split_markup",
    "unescape_entities",

    # Configuration
    "FoldingConfig",
    "ParserConfig",
    "TreeConfig",

    # Diagnostics and errors
    "ConfigError",
    "ConfigValidationError",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "FromXMLError",
    "StructuralError",
]
