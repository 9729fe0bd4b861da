"""
Validation Service
==================

Orchestrates the validation workflow following Single Responsibility Principle:
load inputs, extract patterns, build synthetic schemas, validate, report.
"""

from typing import Iterator, List, Optional, Tuple

from lxml import etree

from ..cli.output_formatter import OutputFormatter
from ..core.options import ValidatorOptions
from ..core.pattern_extractor import extract_patterns, extract_namespace_bindings
from ..core.schema_builder import (
    ValidationUnit,
    build_validation_units,
    merge_namespace_bindings,
)
from ..core.settings import DEFAULT_NAMESPACES
from ..core.xml_loader import (
    load_schema_document,
    load_instance_document,
    parse_xml_bytes,
)
from ..validators.validation_pipeline import PatternOutcome, ValidationPipeline
from .report_service import ReportService, write_markdown_report


class ValidationService:
    """
    Service responsible for orchestrating the validation process.

    Follows SRP: Only handles validation orchestration.
    """

    def __init__(
        self,
        options: ValidatorOptions,
        formatter: Optional[OutputFormatter] = None,
        pipeline: Optional[ValidationPipeline] = None,
    ):
        """
        Initialize validation service.

        Args:
            options: Run options
            formatter: Console formatter (dependency injection)
            pipeline: Validation pipeline (dependency injection)
        """
        self.options = options
        self.formatter = formatter or OutputFormatter(verbose=options.verbose)
        self.pipeline = pipeline or ValidationPipeline(
            jobs=options.jobs,
            timeout=options.timeout,
            reports_as_errors=options.reports_as_errors,
        )

    def load_inputs(self) -> Tuple[etree._Element, bytes]:
        """
        Load the schema and instance files.

        Returns:
            (schema root element, raw instance content)

        Raises:
            DocumentReadError: If a file cannot be read
            DocumentParseError: If a file is not well-formed XML
        """
        self.formatter.print_info(f"Schema file: {self.options.schema_file}")
        schema_root = load_schema_document(self.options.schema_file)
        self.formatter.print_info(f"Instance file: {self.options.instance_file}")
        instance_content = load_instance_document(self.options.instance_file)
        return schema_root, instance_content

    def prepare_units(self, schema_root: etree._Element) -> List[ValidationUnit]:
        """
        Extract the patterns and wrap them into validation units.

        Args:
            schema_root: Root element of the schema document

        Returns:
            Validation units for the configured strategy
        """
        patterns = extract_patterns(schema_root)
        self.formatter.print_info(f"Found {len(patterns)} patterns in the schema.")

        namespaces = merge_namespace_bindings(
            self.options.namespaces,
            DEFAULT_NAMESPACES,
            extract_namespace_bindings(schema_root),
        )
        units = build_validation_units(patterns, self.options.strategy, namespaces)
        for unit in units:
            self.formatter.print_debug(f"Synthetic schema for {unit.name}:\n{unit.schema_text}")
        return units

    def iter_outcomes(
        self, schema_root: etree._Element, instance_content: bytes
    ) -> Iterator[PatternOutcome]:
        """Validate the instance against the schema's patterns, lazily."""
        units = self.prepare_units(schema_root)
        return self.pipeline.iter_outcomes(units, instance_content)

    def validate_documents(
        self, schema_content: bytes, instance_content: bytes
    ) -> List[PatternOutcome]:
        """
        Validate documents already held in memory (e.g. browser uploads).

        The option file names are only used to label parse errors.

        Raises:
            DocumentParseError: If a document is not well-formed XML
        """
        schema_root = parse_xml_bytes(schema_content, self.options.schema_file)
        parse_xml_bytes(instance_content, self.options.instance_file)
        return list(self.iter_outcomes(schema_root, instance_content))

    def run(self) -> bool:
        """
        Run the whole validation workflow.

        Returns:
            True if every pattern is valid
        """
        schema_root, instance_content = self.load_inputs()
        reporter = ReportService(self.formatter)
        is_valid = reporter.report(self.iter_outcomes(schema_root, instance_content))

        if self.options.report_file:
            path = write_markdown_report(
                self.options.report_file,
                reporter.outcomes,
                self.options.schema_file,
                self.options.instance_file,
            )
            self.formatter.print_info(f"Report saved to: {path}")

        return is_valid
