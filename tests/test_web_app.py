"""Tests for the streamlit front-end."""

from pathlib import Path

from streamlit.testing.v1 import AppTest

WEB_APP = Path(__file__).parent.parent / "schematron_validator" / "web_app.py"


class TestWebApp:
    """Test the page renders before any upload."""

    def test_initial_page(self):
        at = AppTest.from_file(str(WEB_APP), default_timeout=30)
        at.run()

        assert not at.exception
        assert at.title[0].value == "Schematron Pattern Validator"
        assert any("upload a schema" in info.value for info in at.info)

    def test_mode_choices(self):
        at = AppTest.from_file(str(WEB_APP), default_timeout=30)
        at.run()

        assert list(at.sidebar.radio[0].options) == ["per-pattern", "combined"]
