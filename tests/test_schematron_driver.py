"""Tests for the Schematron engine boundary."""

import pytest
from lxml import etree

from schematron_validator.core.errors import (
    DocumentParseError,
    SchemaConstructionError,
    ValidationEngineError,
)
from schematron_validator.core.pattern_extractor import extract_patterns
from schematron_validator.core.schema_builder import build_synthetic_schema
from schematron_validator.core.settings import DEFAULT_NAMESPACES, SVRL_NS
from schematron_validator.validators.schematron_driver import (
    FAILED_ASSERT,
    FIRED_RULE,
    SUCCESSFUL_REPORT,
    RuleResult,
    collect_rule_results,
    compile_schema,
    validate_schema_text,
)

REPORT_SCHEMA = """<schema xmlns="http://purl.oclc.org/dsdl/schematron">
  <pattern id="durations">
    <rule context="note">
      <report test="@dur">note has a duration</report>
    </rule>
  </pattern>
</schema>
"""


def _synthetic(schema_text: str, namespaces=DEFAULT_NAMESPACES) -> str:
    patterns = extract_patterns(etree.fromstring(schema_text.encode("utf-8")))
    return build_synthetic_schema([p.node for p in patterns], namespaces)


class TestValidateSchemaText:
    """Test end-to-end evaluation through lxml.isoschematron."""

    def test_note_with_pname_is_valid(self, note_schema):
        results = validate_schema_text(_synthetic(note_schema), b'<note pname="c"/>')

        assert results
        assert all(r.valid for r in results)
        assert results[0].kind == FIRED_RULE
        assert results[0].context == "note"

    def test_note_without_pname_is_invalid(self, note_schema):
        results = validate_schema_text(_synthetic(note_schema), b"<note/>")

        failures = [r for r in results if not r.valid]
        assert len(failures) == 1
        assert failures[0].context == "note"
        assert failures[0].message == "note must have a pname"
        assert failures[0].test == "@pname"
        assert failures[0].kind == FAILED_ASSERT
        assert failures[0].location

    def test_failing_rule_has_no_valid_placeholder(self, note_schema):
        results = validate_schema_text(_synthetic(note_schema), b"<note/>")

        assert len(results) == 1

    def test_rule_per_matching_node(self, note_schema):
        results = validate_schema_text(
            _synthetic(note_schema),
            b'<measure><note pname="c"/><note/><note pname="e"/></measure>',
        )

        assert [r.valid for r in results] == [True, False, True]

    def test_no_matching_context(self, note_schema):
        assert validate_schema_text(_synthetic(note_schema), b"<rest/>") == []

    def test_mei_prefix_is_bound(self, mei_schema):
        mei_ns = b'xmlns="http://www.music-encoding.org/ns/mei"'

        valid = validate_schema_text(
            _synthetic(mei_schema), b'<mei ' + mei_ns + b'><note pname="c"/></mei>'
        )
        invalid = validate_schema_text(
            _synthetic(mei_schema), b'<mei ' + mei_ns + b'><note/></mei>'
        )

        assert valid and all(r.valid for r in valid)
        assert [r.context for r in invalid if not r.valid] == ["mei:note"]

    def test_reports_are_informational_by_default(self):
        results = validate_schema_text(REPORT_SCHEMA, b'<note dur="4"/>')

        reports = [r for r in results if r.kind == SUCCESSFUL_REPORT]
        assert len(reports) == 1
        assert reports[0].valid
        assert reports[0].message == "note has a duration"

    def test_reports_as_errors(self):
        results = validate_schema_text(
            REPORT_SCHEMA, b'<note dur="4"/>', reports_as_errors=True
        )

        assert [r.valid for r in results] == [False]
        assert results[0].context == "note"

    def test_malformed_instance(self, note_schema):
        with pytest.raises(DocumentParseError):
            validate_schema_text(_synthetic(note_schema), b"<note>")


class TestCompileSchema:
    """Test synthetic schema construction failures."""

    def test_malformed_xml(self):
        with pytest.raises(SchemaConstructionError):
            compile_schema('<schema xmlns="http://purl.oclc.org/dsdl/schematron"><pattern>')

    def test_not_a_schematron_schema(self):
        with pytest.raises(SchemaConstructionError):
            compile_schema("<catalog/>")

    def test_rule_without_context(self):
        with pytest.raises(SchemaConstructionError):
            compile_schema(
                '<schema xmlns="http://purl.oclc.org/dsdl/schematron">'
                '<pattern><rule><assert test="true()">x</assert></rule></pattern>'
                "</schema>"
            )


SVRL_REPORT = f"""<svrl:schematron-output xmlns:svrl="{SVRL_NS}">
  <svrl:active-pattern id="P1"/>
  <svrl:fired-rule context="note"/>
  <svrl:failed-assert test="@pname" location="/note[1]">
    <svrl:text>
      note must have
      a pname
    </svrl:text>
  </svrl:failed-assert>
  <svrl:failed-assert test="@dur" location="/note[1]"/>
  <svrl:fired-rule context="rest"/>
  <!-- comment -->
  <svrl:active-pattern id="P2"/>
  <svrl:fired-rule context="measure"/>
</svrl:schematron-output>
"""


class TestCollectRuleResults:
    """Test SVRL report parsing."""

    def test_report_order_and_fields(self):
        report = etree.ElementTree(etree.fromstring(SVRL_REPORT))

        results = collect_rule_results(report)

        assert [(r.valid, r.context) for r in results] == [
            (False, "note"),
            (False, "note"),
            (True, "rest"),
            (True, "measure"),
        ]
        assert results[0].message == "note must have a pname"
        assert results[0].location == "/note[1]"
        assert results[1].message == "Assertion failed (test: @dur)"

    def test_rejects_foreign_elements(self):
        with pytest.raises(ValidationEngineError):
            RuleResult.from_svrl(etree.Element("failed-assert"), "note")

    def test_to_dict(self):
        result = RuleResult(valid=False, context="note", message="m", test="@pname")

        assert result.to_dict() == {
            "valid": False,
            "context": "note",
            "message": "m",
            "location": "",
            "test": "@pname",
            "kind": FIRED_RULE,
        }
