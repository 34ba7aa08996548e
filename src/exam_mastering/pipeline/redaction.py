"""
Removal of content students must not see.

Applied only when correct answers are to be removed; grading
instruction documents are mastered without it.
"""

import logging

from lxml import etree

from ..preprocess.structure import Exam
from ..schema import AnswerKind, GRADING_INSTRUCTION_ELEMENTS, NS
from ..utils.xml import remove_element, xpath_or

logger = logging.getLogger(__name__)

HIDDEN_VALUES = ("true", "1")


def remove_correct_answers(exam: Exam) -> None:
    """Strip option scores and accepted answers."""
    for answer in exam.answers:
        if answer.kind.is_choice:
            for option in answer.options:
                option.attrib.pop("score", None)
        elif answer.kind is AnswerKind.SCORED_TEXT:
            for accepted in answer.element.xpath(".//e:accepted-answer", namespaces=NS):
                remove_element(accepted)


def remove_hidden_elements(root: etree._Element) -> None:
    hidden = [e for e in root.xpath("//e:*[@hidden]", namespaces=NS) if e.get("hidden") in HIDDEN_VALUES]
    for element in hidden:
        remove_element(element)
    logger.debug(f"Removed {len(hidden)} hidden elements")


def remove_grading_metadata(root: etree._Element) -> None:
    """Remove grading instructions and audio transcriptions."""
    names = GRADING_INSTRUCTION_ELEMENTS + ["audio-transcription"]
    for element in root.xpath(xpath_or(names), namespaces=NS):
        remove_element(element)


def redact(exam: Exam) -> None:
    remove_correct_answers(exam)
    remove_hidden_elements(exam.element)
    remove_grading_metadata(exam.element)
