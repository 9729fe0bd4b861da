# ==============================================================================
# TOOL IDENTITY
# ==============================================================================
TOOL_NAME = "schematron-validator"
TOOL_DESCRIPTION = (
    "Extract the Schematron patterns from the passed schema file, and validate "
    "an instance document against those rules."
)

# ==============================================================================
# NAMESPACES
# ==============================================================================
SCHEMATRON_NS = "http://purl.oclc.org/dsdl/schematron"
SVRL_NS = "http://purl.oclc.org/dsdl/svrl"

# Pattern assertions commonly address MEI elements through the `mei` prefix
MEI_PREFIX = "mei"
MEI_NS = "http://www.music-encoding.org/ns/mei"

DEFAULT_NAMESPACES = [
    (MEI_PREFIX, MEI_NS),
]

# ==============================================================================
# PATTERN NAMING
# ==============================================================================
UNNAMED_PATTERN = "UnnamedPattern"
COMBINED_PATTERN_NAME = "CombinedPatterns"

# ==============================================================================
# EXECUTION
# ==============================================================================
DEFAULT_JOBS = 1
