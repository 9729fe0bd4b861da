"""
Schematron Pattern Validator
============================

Validates an XML instance document against the Schematron patterns of a
schema file, pattern by pattern or all at once.
"""

__version__ = "1.0.0"
