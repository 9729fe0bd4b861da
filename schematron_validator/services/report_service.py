"""
Report Service
==============

Aggregates pattern outcomes and reports them.
Follows SRP: Only handles result aggregation and reporting.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from ..cli.output_formatter import OutputFormatter
from ..validators.validation_pipeline import PatternOutcome


class ReportService:
    """
    Service responsible for reporting validation outcomes.

    Outcomes are reported as they arrive, so failures appear while later
    patterns are still being validated.
    """

    def __init__(self, formatter: Optional[OutputFormatter] = None):
        """
        Initialize report service.

        Args:
            formatter: Console formatter (dependency injection)
        """
        self.formatter = formatter or OutputFormatter()
        self.outcomes: List[PatternOutcome] = []

    def report_outcome(self, outcome: PatternOutcome) -> bool:
        """
        Report one pattern outcome.

        Args:
            outcome: Outcome of one validation unit

        Returns:
            True if the pattern is valid
        """
        self.outcomes.append(outcome)
        valid = outcome.error is None
        for rule in outcome.results:
            if not rule.valid:
                self.formatter.print_diagnostic(rule.context, rule.message)
                valid = False
        if outcome.error is not None:
            self.formatter.print_failure(f"Pattern {outcome.name}: {outcome.error}")

        self.formatter.print_pattern_status(outcome.name, valid, len(outcome.results))
        if not valid:
            self.formatter.print_failure(f"Pattern {outcome.name} is invalid.")
        return valid

    def report(self, outcomes: Iterable[PatternOutcome]) -> bool:
        """
        Report every outcome and print the final summary.

        Args:
            outcomes: Pattern outcomes, possibly produced lazily

        Returns:
            Overall outcome: True if every pattern is valid
        """
        is_valid = True
        for outcome in outcomes:
            if not self.report_outcome(outcome):
                is_valid = False

        if is_valid:
            self.formatter.print_success("All patterns are valid.")
        else:
            self.formatter.print_failure("Some patterns are invalid.")
        return is_valid


def build_markdown_report(
    outcomes: Iterable[PatternOutcome], schema_file: str, instance_file: str
) -> str:
    """
    Generate a markdown validation report.

    Args:
        outcomes: Pattern outcomes to include
        schema_file: Schema path shown in the header
        instance_file: Instance path shown in the header

    Returns:
        Report text
    """
    outcomes = list(outcomes)
    passed = sum(1 for o in outcomes if o.is_valid())
    failed = len(outcomes) - passed

    report_lines = []
    report_lines.append("# Schematron Validation Report")
    report_lines.append("")
    report_lines.append(f"**Schema:** `{schema_file}`")
    report_lines.append(f"**Instance:** `{instance_file}`")
    report_lines.append(f"**Patterns validated:** {len(outcomes)}")
    report_lines.append(f"**Passed:** {passed}")
    report_lines.append(f"**Failed:** {failed}")
    report_lines.append("")

    report_lines.append("## Per-pattern Results")
    report_lines.append("")

    for outcome in outcomes:
        failures = outcome.failures()
        if outcome.is_valid():
            status = "PASS"
        elif outcome.error is not None:
            status = "ERROR"
        else:
            status = f"FAIL ({len(failures)} errors)"

        report_lines.append(f"### {outcome.name} — {status}")
        report_lines.append("")
        if len(outcome.pattern_names) > 1:
            report_lines.append("Patterns: " + ", ".join(outcome.pattern_names))
            report_lines.append("")
        if outcome.error is not None:
            report_lines.append(f"- {outcome.error}")
        for rule in failures:
            location = f" at `{rule.location}`" if rule.location else ""
            report_lines.append(f"- `{rule.context}`{location}: {rule.message}")
        if outcome.error is not None or failures:
            report_lines.append("")

    return "\n".join(report_lines)


def write_markdown_report(
    output_file: str,
    outcomes: Iterable[PatternOutcome],
    schema_file: str,
    instance_file: str,
) -> Path:
    """Write the markdown report to output_file and return its path."""
    path = Path(output_file)
    path.write_text(
        build_markdown_report(outcomes, schema_file, instance_file), encoding="utf-8"
    )
    return path
