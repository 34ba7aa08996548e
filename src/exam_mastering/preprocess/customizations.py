"""
Customizations for exams identified by an exam code.

Exams with an exam-code get a subject language, a generated title and a
generated footer when the author did not provide them. Titles and
footers come from a TitleCatalog keyed by "<exam-code>_<day-code>" (or
the bare exam code when there is no day code).
"""

from typing import Dict, Optional, Protocol
import logging

from lxml import etree

from ..errors import MissingTitleError
from ..schema import E_NS, NS, XHTML_NS

logger = logging.getLogger(__name__)

SUBJECT_LANGUAGES: Dict[str, str] = {
    "BA": "sv-FI",
    "BB": "sv-FI",
    "CA": "fi-FI",
    "CB": "fi-FI",
    "EA": "en-GB",
    "EC": "en-GB",
    "FA": "fr-FR",
    "FC": "fr-FR",
    "GC": "pt-PT",
    "L1": "la",
    "L7": "la",
    "PA": "es-ES",
    "PC": "es-ES",
    "SA": "de-DE",
    "SC": "de-DE",
    "TC": "it-IT",
    "IC": "smn-FI",
    "DC": "sme-FI",
    "QC": "sms-FI",
    "VA": "ru-RU",
    "VC": "ru-RU",
}


class TitleCatalog(Protocol):
    """Localized exam titles and footers."""

    def exam_title(self, key: str, language: str) -> Optional[str]:
        ...

    def type_suffix(self, exam_type: str, language: str) -> Optional[str]:
        ...

    def exam_footer(self, key: str, language: str) -> Optional[str]:
        ...


class StaticTitleCatalog:
    """
    In-memory TitleCatalog.

    Each table maps language -> key -> text. Footers fall back to the
    "default" key of the language.
    """

    def __init__(
        self,
        titles: Optional[Dict[str, Dict[str, str]]] = None,
        type_suffixes: Optional[Dict[str, Dict[str, str]]] = None,
        footers: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        self.titles = titles or {}
        self.type_suffixes = type_suffixes or {}
        self.footers = footers or {}

    def exam_title(self, key: str, language: str) -> Optional[str]:
        return self.titles.get(language, {}).get(key)

    def type_suffix(self, exam_type: str, language: str) -> Optional[str]:
        return self.type_suffixes.get(language, {}).get(exam_type)

    def exam_footer(self, key: str, language: str) -> Optional[str]:
        footers = self.footers.get(language, {})
        return footers.get(key, footers.get("default"))


def add_exam_code_customizations(
    root: etree._Element,
    language: str,
    exam_type: str,
    catalog: TitleCatalog,
) -> None:
    """
    Add subject language, title and footer to an exam with an exam-code.

    The footer is added only when the catalog has one for the exam.

    Raises:
        MissingTitleError: If the exam has no title and the catalog has none for its key
    """
    exam_code = root.get("exam-code")
    if not exam_code:
        return

    day_code = root.get("day-code")
    key = f"{exam_code}_{day_code}" if day_code else exam_code

    if not root.get("lang"):
        subject_language = SUBJECT_LANGUAGES.get(key)
        if subject_language:
            root.set("lang", subject_language)

    if root.find("e:exam-title", NS) is None:
        title = catalog.exam_title(key, language)
        if not title:
            raise MissingTitleError(f"No exam title defined for {exam_code}")

        suffix = catalog.type_suffix(exam_type, language)
        full_title = f"{title} {suffix}" if suffix else title

        exam_title = etree.Element(f"{{{E_NS}}}exam-title")
        span = etree.SubElement(exam_title, f"{{{XHTML_NS}}}span", lang=language)
        span.text = full_title
        root.insert(0, exam_title)
        logger.debug(f"Generated exam title {full_title!r} for {key}")

    footer_text = catalog.exam_footer(key, language)
    if footer_text and root.find("e:exam-footer", NS) is None:
        exam_footer = etree.SubElement(root, f"{{{E_NS}}}exam-footer")
        paragraph = etree.SubElement(exam_footer, f"{{{XHTML_NS}}}p", lang=language)
        paragraph.set("class", "e-text-center e-semibold")
        paragraph.text = footer_text
