"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


NOTE_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<schema xmlns="http://purl.oclc.org/dsdl/schematron">
  <pattern id="P1">
    <rule context="note">
      <assert test="@pname">note must have a pname</assert>
    </rule>
  </pattern>
</schema>
"""

PREFIXED_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<sch:schema xmlns:sch="http://purl.oclc.org/dsdl/schematron">
  <sch:pattern id="pitch">
    <sch:rule context="note">
      <sch:assert test="@pname">note must have a pname</sch:assert>
    </sch:rule>
  </sch:pattern>
  <sch:pattern name="duration">
    <sch:rule context="note">
      <sch:assert test="@dur">note must have a dur</sch:assert>
    </sch:rule>
  </sch:pattern>
  <sch:pattern>
    <sch:rule context="measure">
      <sch:assert test="note">measure must contain a note</sch:assert>
    </sch:rule>
  </sch:pattern>
</sch:schema>
"""

# Same three patterns, Schematron as the default namespace
DEFAULT_NS_SCHEMA = PREFIXED_SCHEMA.replace("sch:", "").replace("xmlns:sch=", "xmlns=")

MEI_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<sch:schema xmlns:sch="http://purl.oclc.org/dsdl/schematron">
  <sch:pattern id="mei-notes">
    <sch:rule context="mei:note">
      <sch:assert test="@pname">MEI note must have a pname</sch:assert>
    </sch:rule>
  </sch:pattern>
</sch:schema>
"""

NO_PATTERN_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<sch:schema xmlns:sch="http://purl.oclc.org/dsdl/schematron">
  <sch:title>Nothing to check</sch:title>
  <pattern xmlns="urn:not-schematron" id="decoy"/>
</sch:schema>
"""


@pytest.fixture
def note_schema():
    return NOTE_SCHEMA


@pytest.fixture
def prefixed_schema():
    return PREFIXED_SCHEMA


@pytest.fixture
def default_ns_schema():
    return DEFAULT_NS_SCHEMA


@pytest.fixture
def mei_schema():
    return MEI_SCHEMA


@pytest.fixture
def no_pattern_schema():
    return NO_PATTERN_SCHEMA


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path as a string."""

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
