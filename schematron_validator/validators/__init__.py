"""
Validators Package
==================

This package drives the external Schematron engine:
- Compiling synthetic schemas with lxml.isoschematron
- Reading rule results from the SVRL report
- Running validation units sequentially or in worker processes

Modules:
- schematron_driver.py: Schematron engine boundary (RuleResult records)
- validation_pipeline.py: Per-unit orchestration (PatternOutcome)
"""

from .schematron_driver import RuleResult, validate_schema_text
from .validation_pipeline import PatternOutcome, ValidationPipeline

__all__ = [
    'RuleResult',
    'validate_schema_text',
    'PatternOutcome',
    'ValidationPipeline',
]
