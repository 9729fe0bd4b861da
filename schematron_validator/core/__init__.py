"""
Core Package
============

Reusable building blocks: settings, errors, XML loading, pattern
extraction and synthetic schema construction.
"""

from .xml_loader import load_schema_document, load_instance_document
from .pattern_extractor import NamedPattern, extract_patterns
from .schema_builder import RebuildStrategy, ValidationUnit, build_validation_units

__all__ = [
    'load_schema_document',
    'load_instance_document',
    'NamedPattern',
    'extract_patterns',
    'RebuildStrategy',
    'ValidationUnit',
    'build_validation_units',
]
