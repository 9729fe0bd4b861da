"""
Command Parser
==============

Handles CLI argument parsing.
Follows SRP: Only handles command-line argument parsing.
"""

import argparse
from typing import Any, Callable, Optional, Sequence

from .. import __version__
from ..core.errors import InvalidOptionError
from ..core.options import ValidatorOptions, parse_namespace_binding
from ..core.schema_builder import RebuildStrategy
from ..core.settings import TOOL_NAME, TOOL_DESCRIPTION, DEFAULT_JOBS, MEI_PREFIX, MEI_NS


def _argparse_type(convert: Callable[[str], Any]) -> Callable[[str], Any]:
    """Adapt a converter raising InvalidOptionError to argparse."""

    def wrapper(value: str) -> Any:
        try:
            return convert(value)
        except InvalidOptionError as e:
            raise argparse.ArgumentTypeError(str(e))

    wrapper.__name__ = convert.__name__
    return wrapper


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise InvalidOptionError(f"Expected an integer, got {value!r}")
    if number < 1:
        raise InvalidOptionError(f"Must be at least 1, got {number}")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise InvalidOptionError(f"Expected a number of seconds, got {value!r}")
    if number <= 0:
        raise InvalidOptionError(f"Must be positive, got {value}")
    return number


class CommandParser:
    """
    Parser for command-line arguments.

    Follows SRP: Only handles argument parsing.
    """

    def __init__(self):
        """Initialize command parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all options.

        Returns:
            Configured ArgumentParser
        """
        parser = argparse.ArgumentParser(
            prog=TOOL_NAME,
            description=TOOL_DESCRIPTION,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=f"""
Examples:
  # Validate each pattern separately
  {TOOL_NAME} rules.sch score.mei

  # Validate all patterns in one pass
  {TOOL_NAME} rules.sch score.mei --mode combined

  # Four workers, 30 seconds per pattern, markdown report
  {TOOL_NAME} rules.sch score.mei --jobs 4 --timeout 30 --report report.md

The prefix {MEI_PREFIX!r} is always bound to {MEI_NS}.
            """
        )

        parser.add_argument(
            "schema_file",
            metavar="schemaFile",
            help="Path to the XML file with Schematron rules"
        )

        parser.add_argument(
            "instance_file",
            metavar="instanceFile",
            help="Path to the instance XML file"
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"{TOOL_NAME} {__version__}"
        )

        # Validation arguments
        parser.add_argument(
            "--mode",
            choices=[s.value for s in RebuildStrategy],
            default=RebuildStrategy.PER_PATTERN.value,
            help="per-pattern: validate each pattern on its own and report which "
                 "one fails; combined: validate all patterns in one schema "
                 "(default: per-pattern)"
        )

        parser.add_argument(
            "--namespace",
            dest="namespaces",
            metavar="PREFIX=URI",
            action="append",
            default=[],
            type=_argparse_type(parse_namespace_binding),
            help="Extra namespace binding for rule XPaths (repeatable)"
        )

        parser.add_argument(
            "--reports-as-errors",
            action="store_true",
            help="Count fired <report> elements as failures"
        )

        # Execution arguments
        parser.add_argument(
            "--jobs",
            type=_argparse_type(_positive_int),
            default=DEFAULT_JOBS,
            help=f"Number of patterns validated in parallel (default: {DEFAULT_JOBS})"
        )

        parser.add_argument(
            "--timeout",
            type=_argparse_type(_positive_float),
            help="Seconds allowed per pattern (default: no limit)"
        )

        # Output arguments
        parser.add_argument(
            "--report",
            dest="report_file",
            metavar="FILE",
            help="Write a markdown validation report to FILE"
        )

        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Print the synthetic schemas as they are validated"
        )

        return parser

    def parse_args(self, args: Optional[Sequence[str]] = None) -> Any:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def parse_options(self, args: Optional[Sequence[str]] = None) -> ValidatorOptions:
        """
        Parse command-line arguments into run options.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Immutable ValidatorOptions
        """
        parsed = self.parse_args(args)
        return ValidatorOptions(
            schema_file=parsed.schema_file,
            instance_file=parsed.instance_file,
            strategy=RebuildStrategy(parsed.mode),
            namespaces=tuple(parsed.namespaces),
            reports_as_errors=parsed.reports_as_errors,
            jobs=parsed.jobs,
            timeout=parsed.timeout,
            report_file=parsed.report_file,
            verbose=parsed.verbose,
        )
