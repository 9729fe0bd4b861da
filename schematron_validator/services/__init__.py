"""
Services Package
================

Business logic layer for the Schematron pattern validator.

Services:
- ValidationService: Validation workflow
- ReportService: Outcome aggregation and reporting
"""

from .validation_service import ValidationService
from .report_service import ReportService, build_markdown_report

__all__ = [
    'ValidationService',
    'ReportService',
    'build_markdown_report',
]
