"""Default translation extractor."""

from typing import List
import logging

from lxml import etree

from ..utils.xml import is_exam_element

logger = logging.getLogger(__name__)


def extract_translation(root: etree._Element) -> str:
    """
    Collect the strings of an exam document for translators.

    Returns the distinct non-blank text runs in document order, one per
    line. Formula markup is not translated and is skipped.
    """
    strings: List[str] = []
    seen = set()

    def add(text) -> None:
        text = (text or "").strip()
        if text and text not in seen:
            seen.add(text)
            strings.append(text)

    def walk(element: etree._Element) -> None:
        # Comments and formulas contribute only their tails, added by the parent
        if not isinstance(element.tag, str) or is_exam_element(element, "formula"):
            return
        add(element.text)
        for child in element:
            walk(child)
            add(child.tail)

    walk(root)
    logger.debug(f"Extracted {len(strings)} strings for translation")
    return "\n".join(strings)
