"""
Localization filtering.

Reduces a multi-language, multi-type exam document to the content of
one exam version:
- the <e:exam-versions> declaration is removed
- <e:localization> blocks for the version become plain xhtml spans,
  others (and empty ones) are removed
- exam elements whose lang or exam-type excludes the version are removed
"""

import logging

from lxml import etree

from ..schema import NS, XHTML_NS
from ..utils.xml import remove_element

logger = logging.getLogger(__name__)


def _includes_type(exam_types: str, exam_type: str) -> bool:
    return exam_type in exam_types.split()


def _is_blank(element: etree._Element) -> bool:
    # Comments and child elements count as content
    return len(element) == 0 and not (element.text or "").strip()


def apply_localizations(root: etree._Element, language: str, exam_type: str) -> None:
    """
    Filter root in place for the given exam version.

    Args:
        root: The <e:exam> element
        language: Target language, e.g. fi-FI
        exam_type: Target exam type, e.g. normal
    """
    for exam_versions in root.xpath("./e:exam-versions", namespaces=NS):
        remove_element(exam_versions)

    kept = removed = 0
    for localization in root.xpath("//e:localization", namespaces=NS):
        if (
            localization.get("lang", language) != language
            or not _includes_type(localization.get("exam-type", exam_type), exam_type)
            or _is_blank(localization)
        ):
            remove_element(localization)
            removed += 1
        else:
            localization.tag = f"{{{XHTML_NS}}}span"
            localization.attrib.pop("exam-type", None)
            kept += 1

    mismatching = [
        element
        for element in root.xpath(".//e:*[@lang or @exam-type]", namespaces=NS)
        if element.get("lang", language) != language
        or not _includes_type(element.get("exam-type", exam_type), exam_type)
    ]
    for element in mismatching:
        remove_element(element)

    logger.debug(
        f"Localized for {language}/{exam_type}: kept {kept}, removed {removed} localizations, "
        f"removed {len(mismatching)} elements for other versions"
    )
