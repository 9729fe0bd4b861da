"""
Errors
======

Exception hierarchy for the validator.

Rule-level invalidity is never an exception: it travels as data in
RuleResult.valid. Only structural faults are raised.
"""


class SchematronValidatorError(Exception):
    """Base class for all validator errors."""


class DocumentReadError(SchematronValidatorError, OSError):
    """An input file is missing or unreadable."""


class DocumentParseError(SchematronValidatorError):
    """An input file is not well-formed XML."""


class InvalidOptionError(SchematronValidatorError):
    """A command-line option carries an unusable value."""


class SchemaConstructionError(SchematronValidatorError):
    """The synthetic schema was rejected by the Schematron engine."""


class ValidationEngineError(SchematronValidatorError):
    """The Schematron engine failed while evaluating the instance."""
