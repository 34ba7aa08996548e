"""Removal of authoring noise from mastered XML."""

import logging

from lxml import etree

from ..schema import NS
from ..utils.xml import remove_element

logger = logging.getLogger(__name__)

TABLE_ELEMENTS = ("table", "thead", "tbody", "tr")


def remove_comments(root: etree._Element) -> None:
    """
    Remove comments inside the root element.

    Comments before or after the root cannot be detached in lxml; they
    are dropped by serialize_exam.
    """
    comments = root.xpath(".//comment()")
    for comment in comments:
        remove_element(comment)
    logger.debug(f"Removed {len(comments)} comments")


def serialize_exam(root: etree._Element) -> str:
    """Serialize the exam element with an XML declaration, leaving out nodes outside it."""
    return etree.tostring(root, xml_declaration=True, encoding="utf-8").decode("utf-8")


def remove_table_whitespace_nodes(root: etree._Element) -> None:
    """
    Drop whitespace-only text directly inside table elements.

    Renderers warn about text nodes inside table structure, so they are
    removed during mastering.
    """
    condition = " or ".join(f"self::xhtml:{name}" for name in TABLE_ELEMENTS)
    for element in root.xpath(f"//*[{condition}]", namespaces=NS):
        if element.text is not None and not element.text.strip():
            element.text = None
        for child in element:
            if child.tail is not None and not child.tail.strip():
                child.tail = None
