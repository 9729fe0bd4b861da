#!/usr/bin/env python3
"""
Schematron Pattern Validator - CLI Entry Point
==============================================

This file is intentionally minimal, delegating all logic to specialized services.

Architecture:
- Services: Validation orchestration and reporting
- Validators: Schematron engine boundary and execution
- CLI: User interface (parsing, formatting)
- Core: Loading, pattern extraction, schema rebuilding

Usage:
    schematron-validator rules.sch score.mei
    schematron-validator rules.sch score.mei --mode combined
    python -m schematron_validator rules.sch score.mei --jobs 4 --timeout 30
"""

import sys
import traceback
from typing import Optional, Sequence

from .cli import CommandParser, OutputFormatter
from .core.errors import SchematronValidatorError
from .services import ValidationService


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for CLI."""
    parser = CommandParser()
    options = parser.parse_options(argv)
    formatter = OutputFormatter(verbose=options.verbose)

    try:
        is_valid = ValidationService(options, formatter).run()
    except KeyboardInterrupt:
        formatter.print_warning("Operation cancelled by user")
        sys.exit(130)
    except SchematronValidatorError as e:
        formatter.print_error(str(e))
        traceback.print_exc()
        sys.exit(1)

    sys.exit(0 if is_valid else 1)


if __name__ == "__main__":
    main()
