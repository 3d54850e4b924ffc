#!/usr/bin/env python3
"""
Quick Start Guide for fromxml.

This example walks through folding XML into plain Python values, from the
one-line function call to the configured parser with diagnostics.
"""

import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fromxml import DiagnosticSeverity, FromXMLParser, ParserConfig, parse_xml

CATALOG = """<?xml version="1.0"?>
<catalog>
    <book id="bk101" lang="en">
        <title>XML Developer's Guide</title>
        <price currency="USD">44.95</price>
    </book>
    <book id="bk102">
        <title>Midnight &amp; Rain</title>
        <note><![CDATA[<b>out of print</b>]]></note>
    </book>
</catalog>"""


def level_one_example():
    """Fold a document with a single function call."""
    print("🚀 STEP 1 - parse_xml")
    print("=" * 45)

    value = parse_xml(CATALOG)
    print(json.dumps(value, indent=2))

    print("\nShapes at a glance:")
    for markup in ("<a/>", "<a></a>", "<a>x</a>", "<a>x<b/>y</a>"):
        print(f"  {markup:<16} -> {parse_xml(markup)!r}")


def reviver_example():
    """Transform values while folding."""
    print("\n🔧 STEP 2 - Reviver")
    print("=" * 45)

    def numbers(key, value):
        if key == "price" and isinstance(value, dict):
            return {**value, "": float(value[""])}
        return value

    value = parse_xml(CATALOG, numbers)
    print(f"Price as number: {value['catalog']['book'][0]['price']}")


def level_two_example():
    """Use a configured parser and inspect what it recovered from."""
    print("\n🔍 STEP 3 - FromXMLParser")
    print("=" * 45)

    parser = FromXMLParser(ParserConfig.classic(), correlation_id="quick-start")
    result = parser.parse_detailed('<order id="7"><item>pen<item>ink</order>')

    print(f"Value: {result.value!r}")
    print(f"Elements built: {result.statistics.elements_built}")
    print(f"Recovered input: {result.has_warnings}")
    for diagnostic in result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING):
        print(f"  ⚠️  {diagnostic.message}")


def main():
    """Run the quick start examples."""
    level_one_example()
    reviver_example()
    level_two_example()


if __name__ == "__main__":
    main()
