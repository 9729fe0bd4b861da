"""
XML Loader
==========

Reads the schema and instance files and parses them with lxml.
Each file is opened, read fully and closed before parsing.
"""

from lxml import etree

from .errors import DocumentReadError, DocumentParseError


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=False, recover=False, no_network=True)


def read_file_bytes(path: str) -> bytes:
    """
    Read the full content of a file.

    Args:
        path: Path to the file

    Returns:
        Raw file content

    Raises:
        DocumentReadError: If the file is missing or unreadable
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise DocumentReadError(f"Cannot read file {path}: {e.strerror or e}") from e


def parse_xml_bytes(content: bytes, source: str) -> etree._Element:
    """
    Parse XML content into an element tree.

    Args:
        content: Raw XML bytes
        source: Name used in error messages (usually the file path)

    Returns:
        Root element of the parsed document

    Raises:
        DocumentParseError: If the content is not well-formed XML
    """
    try:
        return etree.fromstring(content, _make_parser())
    except etree.XMLSyntaxError as e:
        raise DocumentParseError(f"{source}: XML parse error: {e}") from e


def load_schema_document(path: str) -> etree._Element:
    """Load the Schematron schema file as a parsed tree."""
    return parse_xml_bytes(read_file_bytes(path), path)


def load_instance_document(path: str) -> bytes:
    """
    Load the instance file.

    The content is parsed once so malformed input fails here, but the raw
    bytes are returned: the Schematron engine re-parses the instance itself.
    """
    content = read_file_bytes(path)
    parse_xml_bytes(content, path)
    return content
