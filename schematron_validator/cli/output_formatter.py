"""
Output Formatter
================

Handles console output formatting.
Follows SRP: Only handles output formatting.

Progress and summaries go to stdout; diagnostics, warnings and errors go
to stderr. Every line is flushed as soon as it is written.
"""

import sys
from typing import TextIO, Optional


class OutputFormatter:
    """
    Formatter for console output.

    Follows SRP: Only handles output formatting.
    """

    def __init__(
        self,
        verbose: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """
        Initialize formatter.

        Args:
            verbose: Print debug output
            stdout: Stream for progress output (default: sys.stdout)
            stderr: Stream for diagnostics (default: sys.stderr)
        """
        self.verbose = verbose
        self._stdout = stdout
        self._stderr = stderr

    @property
    def out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._stderr or sys.stderr

    def print_pattern_status(self, name: str, valid: bool, rule_count: int) -> None:
        """
        Print the pass/fail line of one pattern.

        Args:
            name: Pattern name
            valid: Whether the pattern validated
            rule_count: Number of rule results evaluated
        """
        status = "[PASS]" if valid else "[FAIL]"
        print(f"{status} {name} ({rule_count} rule results)", file=self.out, flush=True)

    def print_diagnostic(self, context: str, message: str) -> None:
        """
        Print one failing rule.

        Args:
            context: Rule context
            message: Assertion message
        """
        print(f'invalid context: "{context}", message: {message}', file=self.err, flush=True)

    def print_failure(self, message: str) -> None:
        print(message, file=self.err, flush=True)

    def print_error(self, message: str) -> None:
        """
        Print error message.

        Args:
            message: Error message
        """
        print(f"ERROR: {message}", file=self.err, flush=True)

    def print_warning(self, message: str) -> None:
        """
        Print warning message.

        Args:
            message: Warning message
        """
        print(f"WARNING: {message}", file=self.err, flush=True)

    def print_success(self, message: str) -> None:
        """
        Print success message.

        Args:
            message: Success message
        """
        print(f"✓ {message}", file=self.out, flush=True)

    def print_info(self, message: str) -> None:
        """
        Print info message.

        Args:
            message: Info message
        """
        print(message, file=self.out, flush=True)

    def print_debug(self, message: str) -> None:
        """Print debug message (verbose mode only)."""
        if self.verbose:
            print(message, file=self.out, flush=True)
