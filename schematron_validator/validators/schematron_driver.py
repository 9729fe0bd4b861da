from dataclasses import dataclass, asdict
from typing import Dict, List, Optional
import re

from lxml import etree
from lxml.isoschematron import Schematron

from ..core.errors import (
    DocumentParseError,
    SchemaConstructionError,
    ValidationEngineError,
)
from ..core.settings import SVRL_NS

FIRED_RULE = "fired-rule"
FAILED_ASSERT = "failed-assert"
SUCCESSFUL_REPORT = "successful-report"

_SVRL_TEXT = f"{{{SVRL_NS}}}text"


def _normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


@dataclass(frozen=True)
class RuleResult:
    """Outcome of one fired rule or one assertion, read from the SVRL report."""

    valid: bool
    context: str
    message: str = ""
    location: str = ""
    test: str = ""
    kind: str = FIRED_RULE

    @classmethod
    def from_svrl(
        cls, element: etree._Element, context: str, reports_as_errors: bool = False
    ) -> "RuleResult":
        """
        Build a result from an SVRL event element.

        Args:
            element: svrl:fired-rule, svrl:failed-assert or svrl:successful-report
            context: Context of the rule the event belongs to
            reports_as_errors: Treat svrl:successful-report as a failure

        Raises:
            ValidationEngineError: If the element is not a known SVRL event
        """
        qname = etree.QName(element)
        if qname.namespace != SVRL_NS:
            raise ValidationEngineError(f"Unexpected element in SVRL report: {qname}")

        if qname.localname == FIRED_RULE:
            return cls(valid=True, context=element.get("context", context), kind=FIRED_RULE)

        if qname.localname not in (FAILED_ASSERT, SUCCESSFUL_REPORT):
            raise ValidationEngineError(
                f"Unexpected SVRL event: {qname.localname}"
            )

        test = element.get("test", "")
        # Prefer svrl:text content if present
        text_el = element.find(_SVRL_TEXT)
        message = _normalize_text(text_el.text if text_el is not None else "")
        if not message:
            message = _normalize_text(element.text) or f"Assertion failed (test: {test})"

        if qname.localname == FAILED_ASSERT:
            valid = False
        else:
            valid = not reports_as_errors

        return cls(
            valid=valid,
            context=context or element.get("location", ""),
            message=message,
            location=element.get("location", ""),
            test=test,
            kind=qname.localname,
        )

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def compile_schema(schema_text: str) -> Schematron:
    """
    Compile a synthetic schema with lxml's ISO Schematron implementation.

    Raises:
        SchemaConstructionError: If the text is not a usable Schematron schema
    """
    try:
        schema_root = etree.fromstring(schema_text)
        return Schematron(schema_root, store_report=True)
    except etree.LxmlError as e:
        raise SchemaConstructionError(f"Invalid synthetic schema: {e}") from e


def collect_rule_results(
    report: etree._ElementTree, reports_as_errors: bool = False
) -> List[RuleResult]:
    """
    Turn an SVRL report into RuleResult records, in report order.

    A fired rule yields one valid result. When assertions of that rule fail,
    the failures replace it: each failing assertion is its own invalid result.
    """
    results: List[RuleResult] = []
    context = ""
    placeholder: Optional[int] = None

    for event in report.getroot().iterchildren(tag=etree.Element):
        localname = etree.QName(event).localname
        if localname == FIRED_RULE:
            result = RuleResult.from_svrl(event, context)
            context = result.context
            placeholder = len(results)
            results.append(result)
        elif localname in (FAILED_ASSERT, SUCCESSFUL_REPORT):
            result = RuleResult.from_svrl(event, context, reports_as_errors)
            if not result.valid and placeholder is not None:
                del results[placeholder]
                placeholder = None
            results.append(result)
        elif localname == "active-pattern":
            context = ""
            placeholder = None

    return results


def validate_instance(
    schematron: Schematron, instance_content: bytes, reports_as_errors: bool = False
) -> List[RuleResult]:
    """
    Evaluate an instance document against a compiled schema.

    Raises:
        DocumentParseError: If the instance is not well-formed
        ValidationEngineError: If the engine fails during evaluation
    """
    try:
        instance_doc = etree.fromstring(instance_content)
    except etree.XMLSyntaxError as e:
        raise DocumentParseError(f"Instance document parse error: {e}") from e

    try:
        schematron.validate(instance_doc)
    except etree.LxmlError as e:
        raise ValidationEngineError(f"Schematron evaluation failed: {e}") from e

    report = schematron.validation_report
    if report is None:
        raise ValidationEngineError("Schematron engine produced no SVRL report")
    return collect_rule_results(report, reports_as_errors)


def validate_schema_text(
    schema_text: str, instance_content: bytes, reports_as_errors: bool = False
) -> List[RuleResult]:
    """Compile a synthetic schema and validate the instance against it."""
    schematron = compile_schema(schema_text)
    return validate_instance(schematron, instance_content, reports_as_errors)
