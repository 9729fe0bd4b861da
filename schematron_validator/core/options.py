"""
Options
=======

Immutable run configuration, built once from the command line and passed
by value into the validation service.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import InvalidOptionError
from .pattern_extractor import NamespaceBinding
from .schema_builder import RebuildStrategy
from .settings import DEFAULT_JOBS


@dataclass(frozen=True)
class ValidatorOptions:
    schema_file: str
    instance_file: str
    strategy: RebuildStrategy = RebuildStrategy.PER_PATTERN
    namespaces: Tuple[NamespaceBinding, ...] = field(default_factory=tuple)
    reports_as_errors: bool = False
    jobs: int = DEFAULT_JOBS
    timeout: Optional[float] = None
    report_file: Optional[str] = None
    verbose: bool = False


def parse_namespace_binding(value: str) -> NamespaceBinding:
    """
    Parse a PREFIX=URI command-line value.

    Raises:
        InvalidOptionError: If the prefix or the URI is missing
    """
    prefix, sep, uri = value.partition("=")
    prefix, uri = prefix.strip(), uri.strip()
    if not sep or not prefix or not uri:
        raise InvalidOptionError(f"Expected PREFIX=URI, got {value!r}")
    if ":" in prefix or " " in prefix:
        raise InvalidOptionError(f"Invalid namespace prefix: {prefix!r}")
    return prefix, uri
