"""
Browser front-end for the Schematron pattern validator.

    streamlit run schematron_validator/web_app.py
"""

import io

import streamlit as st

from schematron_validator.cli.output_formatter import OutputFormatter
from schematron_validator.core.errors import SchematronValidatorError
from schematron_validator.core.options import ValidatorOptions
from schematron_validator.core.schema_builder import RebuildStrategy
from schematron_validator.services.validation_service import ValidationService

# ==============================================================================
# PAGE CONFIGURATION
# ==============================================================================
st.set_page_config(
    page_title="Schematron Pattern Validator",
    layout="wide",
    initial_sidebar_state="expanded",
)


def inject_styles():
    st.markdown("""
    <style>
    .section-header {
        color: #009999;
        font-size: 1.4rem;
        font-weight: 600;
        margin-top: 20px;
        border-bottom: 1px solid rgba(0, 153, 153, 0.3);
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    </style>
    """, unsafe_allow_html=True)


inject_styles()

# ==============================================================================
# SIDEBAR
# ==============================================================================
with st.sidebar:
    st.markdown("### Configuration")

    mode = st.radio(
        "Validation mode",
        [s.value for s in RebuildStrategy],
        help="per-pattern reports which pattern fails; combined validates all patterns at once",
    )
    reports_as_errors = st.checkbox("Count fired reports as failures", value=False)

    st.divider()
    st.markdown("### About")
    st.info("Extracts the Schematron patterns of a schema and validates an instance document against them.")

# ==============================================================================
# MAIN
# ==============================================================================
st.title("Schematron Pattern Validator")

st.markdown("<div class='section-header'>File Selection</div>", unsafe_allow_html=True)
schema_upload = st.file_uploader("Schematron schema", type=["sch", "xml"])
instance_upload = st.file_uploader("Instance document", type=["xml", "mei"])

if schema_upload and instance_upload:
    if st.button("Start Validation"):
        options = ValidatorOptions(
            schema_file=schema_upload.name,
            instance_file=instance_upload.name,
            strategy=RebuildStrategy(mode),
            reports_as_errors=reports_as_errors,
        )
        # Console output is kept for the page instead of the server log
        log = io.StringIO()
        service = ValidationService(options, OutputFormatter(stdout=log, stderr=log))

        try:
            outcomes = service.validate_documents(
                schema_upload.getvalue(), instance_upload.getvalue()
            )
        except SchematronValidatorError as e:
            st.error(str(e))
            st.stop()

        # --- SUMMARY ---
        st.markdown("<div class='section-header'>Validation Report Summary</div>", unsafe_allow_html=True)

        passed_count = sum(1 for o in outcomes if o.is_valid())
        failed_count = len(outcomes) - passed_count

        col1, col2, col3 = st.columns(3)
        col1.metric("Patterns", len(outcomes))
        col2.metric("Passed", passed_count)
        col3.metric("Failed", failed_count)

        if failed_count:
            st.error("Some patterns are invalid.")
        else:
            st.success("All patterns are valid.")

        # --- DETAILS ---
        st.markdown("<div class='section-header'>Detailed Results</div>", unsafe_allow_html=True)

        for outcome in outcomes:
            label = "PASSED" if outcome.is_valid() else f"FAILED ({len(outcome.failures())} errors)"
            with st.expander(f"Pattern: {outcome.name} - {label}", expanded=not outcome.is_valid()):
                if outcome.error:
                    st.code(outcome.error, language="text")
                if outcome.failures():
                    st.dataframe([rule.to_dict() for rule in outcome.failures()], hide_index=True)
                if outcome.is_valid():
                    st.write(f"{len(outcome.results)} rule results, all valid.")

        with st.expander("Validation log"):
            st.code(log.getvalue(), language="text")
else:
    st.info("Please upload a schema and an instance document to begin validation.")
