"""
Pattern Extractor
=================

Selects the Schematron <pattern> elements of a schema document.

Selection compares namespace URIs, so the pattern elements are found
whatever prefix (or default namespace) the schema author bound to the
Schematron namespace.
"""

from dataclasses import dataclass
from typing import List, Tuple

from lxml import etree

from .settings import SCHEMATRON_NS, UNNAMED_PATTERN

NamespaceBinding = Tuple[str, str]

_PATTERN_XPATH = etree.XPath(
    "//*[local-name()='pattern' and namespace-uri()=$ns]"
)
_NS_DECLARATION_XPATH = etree.XPath(
    "//*[local-name()='ns' and namespace-uri()=$ns]"
)


@dataclass(frozen=True)
class NamedPattern:
    """A pattern element paired with the name used to report on it."""

    name: str
    node: etree._Element


def find_pattern_nodes(schema_root: etree._Element) -> List[etree._Element]:
    """Return every Schematron pattern element, in document order."""
    return list(_PATTERN_XPATH(schema_root, ns=SCHEMATRON_NS))


def resolve_pattern_name(node: etree._Element) -> str:
    # Diagnostic only; never feeds into validation
    return node.get("id") or node.get("name") or UNNAMED_PATTERN


def extract_patterns(schema_root: etree._Element) -> List[NamedPattern]:
    """
    Extract all patterns of a schema document.

    Args:
        schema_root: Root element of the parsed schema

    Returns:
        NamedPattern list in document order (empty if the schema has none)
    """
    return [
        NamedPattern(resolve_pattern_name(node), node)
        for node in find_pattern_nodes(schema_root)
    ]


def extract_namespace_bindings(schema_root: etree._Element) -> List[NamespaceBinding]:
    """
    Collect the <ns prefix=... uri=...> declarations of the source schema.

    Patterns taken out of their schema lose these declarations, so they
    are carried over into every synthetic schema.
    """
    bindings: List[NamespaceBinding] = []
    for ns_el in _NS_DECLARATION_XPATH(schema_root, ns=SCHEMATRON_NS):
        prefix = (ns_el.get("prefix") or "").strip()
        uri = (ns_el.get("uri") or "").strip()
        if prefix and uri:
            bindings.append((prefix, uri))
    return bindings
