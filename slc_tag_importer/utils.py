"""
Utility functions for the tag importer.

Provides symbol text helpers (tag-name sanitizing, description cleanup),
node name validation, CDATA handling, and read/write helpers for the
namespace XML document using lxml.

Descriptions exported from RSLogix 500 are free text and routinely contain
characters that are awkward in XML attributes, so description values are
stored as CDATA sections.  lxml's default parser strips CDATA markers, so
documents are parsed with ``strip_cdata=False`` to keep them on round-trip.
"""

import re

from lxml import etree

from .schema import MAX_NODE_NAME_LENGTH, NAMESPACE_ROOT


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Namespace node names: no whitespace, control characters, colons, slashes
# or double quotes.
_NODE_NAME_RE = re.compile(
    r'^[^\s\x00-\x1f:/"]{1,%d}$' % MAX_NODE_NAME_LENGTH
)

# Control characters (and the two non-characters) that XML 1.0 forbids.
_XML_ILLEGAL_RE = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]')

# UTF-8 BOM bytes.
_UTF8_BOM = b"\xef\xbb\xbf"


# ---------------------------------------------------------------------------
# Symbol text helpers
# ---------------------------------------------------------------------------

def sanitize_tag_name(symbol: str) -> str:
    """Derive a namespace tag name from a raw controller symbol.

    Replaces ``:`` and ``/`` with ``_``, turns ``"`` into a space, then
    replaces every space with ``_``.  ``B3:0/1`` becomes ``B3_0_1``.

    Distinct symbols may sanitize to the same name; collisions are left to
    the importer's duplicate check.

    Args:
        symbol: The raw symbol text.

    Returns:
        The sanitized name.  Never contains ``:``, ``/``, ``"`` or spaces.
    """
    return (
        symbol.replace(':', '_')
        .replace('/', '_')
        .replace('"', ' ')
        .replace(' ', '_')
    )


def strip_xml_illegal(text: str) -> str:
    """Remove characters XML 1.0 cannot carry (NUL, BEL and other controls)."""
    return _XML_ILLEGAL_RE.sub('', text)


def clean_description(text: str) -> str:
    """Strip quotes, XML-illegal characters and surrounding whitespace."""
    return strip_xml_illegal(text.replace('"', ' ')).strip()


# ---------------------------------------------------------------------------
# Name validation
# ---------------------------------------------------------------------------

def validate_node_name(name: str) -> bool:
    """Validate that *name* is acceptable as a namespace node name.

    Names must be 1-128 characters and must not contain whitespace, ``:``,
    ``/`` or ``"``.

    Args:
        name: The proposed node name.

    Returns:
        ``True`` if the name is valid.

    Raises:
        ValueError: If the name is invalid, with a message describing
            the problem.
    """
    if not name:
        raise ValueError("Node name must not be empty.")

    if len(name) > MAX_NODE_NAME_LENGTH:
        raise ValueError(
            f"Node name '{name}' is {len(name)} characters long; "
            f"maximum is {MAX_NODE_NAME_LENGTH}."
        )

    if not _NODE_NAME_RE.match(name):
        raise ValueError(
            f"Node name '{name}' contains invalid characters. "
            "Whitespace, ':', '/' and '\"' are not allowed."
        )

    return True


# ---------------------------------------------------------------------------
# CDATA handling
# ---------------------------------------------------------------------------

def set_element_cdata(element: etree._Element, text: str) -> None:
    """Set the text content of *element* as a CDATA section.

    Text containing the CDATA closing delimiter ``]]>`` cannot live in a
    CDATA section and is stored as plain (escaped) text instead.
    """
    if "]]>" in text:
        element.text = text
    else:
        element.text = etree.CDATA(text)


# ---------------------------------------------------------------------------
# Namespace document I/O
# ---------------------------------------------------------------------------

def parse_namespace_bytes(raw: bytes) -> etree._Element:
    """Parse namespace XML from bytes, tolerating a leading UTF-8 BOM.

    Raises:
        etree.XMLSyntaxError: If the XML is malformed.
        ValueError: If the root element is not ``Namespace``.
    """
    if raw.startswith(_UTF8_BOM):
        raw = raw[len(_UTF8_BOM):]

    parser = etree.XMLParser(
        strip_cdata=False,
        remove_blank_text=True,
    )
    root = etree.fromstring(raw, parser=parser)

    if root.tag != NAMESPACE_ROOT:
        raise ValueError(
            f"Expected root element '{NAMESPACE_ROOT}', got '{root.tag}'"
        )
    return root


def parse_namespace_file(file_path: str) -> etree._Element:
    """Load and parse a namespace XML file, returning the root element.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        etree.XMLSyntaxError: If the file contains malformed XML.
        ValueError: If the root element is not ``Namespace``.
    """
    with open(file_path, "rb") as fh:
        raw = fh.read()
    return parse_namespace_bytes(raw)


def namespace_to_bytes(root: etree._Element) -> bytes:
    """Serialize the namespace tree, indented, with an XML declaration."""
    etree.indent(root, space="  ")
    return etree.tostring(
        root,
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )


def write_namespace_file(root: etree._Element, file_path: str) -> None:
    """Write the namespace tree to *file_path* as UTF-8 XML."""
    with open(file_path, "wb") as fh:
        fh.write(namespace_to_bytes(root))
