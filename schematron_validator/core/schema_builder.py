"""
Schema Rebuilder
================

Wraps extracted pattern elements into standalone Schematron schemas.

Two strategies are supported:
- per-pattern: one synthetic schema per pattern, so a failure can be
  attributed to the pattern that produced it
- combined: a single synthetic schema holding every pattern, validated once
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Tuple
from xml.sax.saxutils import quoteattr

from lxml import etree

from .pattern_extractor import NamedPattern, NamespaceBinding
from .settings import SCHEMATRON_NS, COMBINED_PATTERN_NAME


class RebuildStrategy(Enum):
    PER_PATTERN = "per-pattern"
    COMBINED = "combined"


@dataclass(frozen=True)
class ValidationUnit:
    """One synthetic schema, ready to be handed to the Schematron engine."""

    name: str
    schema_text: str
    pattern_names: Tuple[str, ...]


def merge_namespace_bindings(*groups: Iterable[NamespaceBinding]) -> List[NamespaceBinding]:
    """Concatenate binding groups, keeping the first binding of each prefix."""
    merged: List[NamespaceBinding] = []
    seen = set()
    for group in groups:
        for prefix, uri in group:
            if prefix in seen:
                continue
            seen.add(prefix)
            merged.append((prefix, uri))
    return merged


def serialize_pattern(node: etree._Element) -> str:
    # with_tail=False: text following the pattern belongs to its parent
    return etree.tostring(node, encoding="unicode", with_tail=False)


def build_synthetic_schema(
    pattern_nodes: Sequence[etree._Element],
    namespaces: Sequence[NamespaceBinding] = (),
) -> str:
    """
    Build a schema document around one or more pattern elements.

    Args:
        pattern_nodes: Pattern elements, serialized in the given order
        namespaces: (prefix, uri) pairs declared with <ns> in the schema

    Returns:
        Synthetic schema XML text
    """
    ns_lines = [
        f"  <ns prefix={quoteattr(prefix)} uri={quoteattr(uri)}/>"
        for prefix, uri in namespaces
    ]
    pattern_lines = ["  " + serialize_pattern(node) for node in pattern_nodes]
    body = "\n".join(ns_lines + pattern_lines)
    return f'<schema xmlns="{SCHEMATRON_NS}">\n{body}\n</schema>\n'


def build_validation_units(
    patterns: Sequence[NamedPattern],
    strategy: RebuildStrategy,
    namespaces: Sequence[NamespaceBinding] = (),
) -> List[ValidationUnit]:
    """
    Turn extracted patterns into validation units.

    Args:
        patterns: Extracted patterns in document order
        strategy: PER_PATTERN for one unit per pattern, COMBINED for one unit
        namespaces: Bindings declared in every synthetic schema

    Returns:
        List of ValidationUnit (empty when there are no patterns)
    """
    if not patterns:
        return []

    if strategy is RebuildStrategy.COMBINED:
        return [
            ValidationUnit(
                name=COMBINED_PATTERN_NAME,
                schema_text=build_synthetic_schema(
                    [p.node for p in patterns], namespaces
                ),
                pattern_names=tuple(p.name for p in patterns),
            )
        ]

    return [
        ValidationUnit(
            name=pattern.name,
            schema_text=build_synthetic_schema([pattern.node], namespaces),
            pattern_names=(pattern.name,),
        )
        for pattern in patterns
    ]
