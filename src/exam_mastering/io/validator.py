"""
Structural checks the exam schema cannot express.

Run after schema validation and before any mastering pass. Every
violation raises ExamValidationError with the line of the offending
element.
"""

from typing import Iterable
import logging

from lxml import etree

from ..errors import ExamValidationError
from ..schema import ANSWER_TYPES, HTML_LIKE_EXAM_ELEMENTS, NS, AnswerKind
from ..utils.xml import get_attribute, get_numeric_attribute, is_exam_element, local_name, query_ancestors, xpath_or

logger = logging.getLogger(__name__)


def assert_exam_is_valid(
    root: etree._Element,
    exam_codes_requiring_day_code: Iterable[str] = ("A", "O"),
) -> etree._Element:
    """
    Enforce the structural invariants of an exam document.

    Args:
        root: The <e:exam> element
        exam_codes_requiring_day_code: Exam codes that must carry a day-code

    Returns:
        The same root element

    Raises:
        ExamValidationError: On the first violation found
    """
    answers = root.xpath(xpath_or(ANSWER_TYPES), namespaces=NS)
    for answer in answers:
        _check_answer_placement(answer)
        if local_name(answer) == AnswerKind.SCORED_TEXT.value:
            _check_scored_text_answer(answer)

    _check_day_code(root, list(exam_codes_requiring_day_code))
    _check_external_material_audio(root)

    logger.debug(f"Structural validation passed ({len(answers)} answers)")
    return root


def _check_answer_placement(answer: etree._Element) -> None:
    # The nearest exam element, skipping a few HTML-like exam elements,
    # must be a question.
    maybe_parent_question = query_ancestors(
        answer,
        lambda e: is_exam_element(e) and local_name(e) not in HTML_LIKE_EXAM_ELEMENTS,
    )

    if maybe_parent_question is None or local_name(maybe_parent_question) != "question":
        raise ExamValidationError("All answers must be within a question.", answer.sourceline)

    child_questions = maybe_parent_question.xpath(".//e:question", namespaces=NS)
    if child_questions:
        raise ExamValidationError(
            "A question may not contain both answer elements and child questions",
            child_questions[0].sourceline,
        )


def _check_scored_text_answer(answer: etree._Element) -> None:
    max_score = get_numeric_attribute("max-score", answer, None)
    accepted_answers = answer.xpath("./e:accepted-answer", namespaces=NS)

    if max_score is None and not accepted_answers:
        raise ExamValidationError(
            "A scored-text-answer element must contain either a max-score attribute or contain accepted-answers",
            answer.sourceline,
        )

    if max_score is not None and any(
        get_numeric_attribute("score", accepted, 0) > max_score for accepted in accepted_answers
    ):
        raise ExamValidationError(
            "The max-score of a scored-text-answer cannot be smaller than the score of some of its accepted-answers",
            answer.sourceline,
        )


def _check_day_code(root: etree._Element, exam_codes_requiring_day_code: list) -> None:
    exam_code = get_attribute("exam-code", root, "")
    day_code = get_attribute("day-code", root, "")

    if day_code:
        if exam_code not in exam_codes_requiring_day_code:
            raise ExamValidationError(f"Invalid exam-code {exam_code} for day-code {day_code}", root.sourceline)
    elif exam_code in exam_codes_requiring_day_code:
        raise ExamValidationError(f"Invalid empty day-code for exam-code {exam_code}", root.sourceline)


def _check_external_material_audio(root: etree._Element) -> None:
    audios_with_times = root.xpath("//e:external-material//e:audio[@times]", namespaces=NS)
    if audios_with_times:
        raise ExamValidationError(
            "External material must not contain audio with times attribute",
            audios_with_times[0].sourceline,
        )
