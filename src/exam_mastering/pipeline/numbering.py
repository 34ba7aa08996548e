"""
Display numbers for sections, questions, answers and attachments.

Display numbers are what students see ("2.1", "3.B"); they are separate
from the internal question and option ids.
"""

import logging

from lxml import etree

from ..errors import ExamError
from ..preprocess.structure import Exam, Question
from ..schema import ATTACHMENT_ALPHABET, NS

logger = logging.getLogger(__name__)


def add_section_numbers(exam: Exam) -> None:
    for i, section in enumerate(exam.sections):
        section.element.set("display-number", str(i + 1))


def add_question_numbers(exam: Exam) -> None:
    """Number questions 1, 2, ... across sections; children get parent.N."""

    def add_question_number(question: Question, index: int, prefix: str = "") -> None:
        display_number = f"{prefix}.{index + 1}" if prefix else str(index + 1)
        question.element.set("display-number", display_number)
        for i, child in enumerate(question.child_questions):
            add_question_number(child, i, display_number)

    for i, question in enumerate(exam.top_level_questions):
        add_question_number(question, i)


def add_answer_numbers(exam: Exam) -> None:
    """A single answer shares its question's number; several get question.N."""
    for question in exam.questions:
        question_number = question.element.get("display-number")
        answers = question.answers
        for i, answer in enumerate(answers):
            display_number = question_number if len(answers) == 1 else f"{question_number}.{i + 1}"
            answer.element.set("display-number", display_number)


def add_attachment_numbers(exam: Exam) -> None:
    """
    Letter external material attachments.

    Only external attachments are numbered, since internal ones cannot be
    referred to. Exam level material and each question's material start
    from "A".
    """
    for i, attachment in enumerate(_external_attachments(exam.element)):
        attachment.set("display-number", _letter(i, attachment))

    for question in exam.questions:
        question_number = question.element.get("display-number")
        for i, attachment in enumerate(_external_attachments(question.element)):
            attachment.set("display-number", f"{question_number}.{_letter(i, attachment)}")


def _external_attachments(element: etree._Element) -> list:
    return element.xpath("./e:external-material/e:attachment", namespaces=NS)


def _letter(index: int, attachment: etree._Element) -> str:
    if index >= len(ATTACHMENT_ALPHABET):
        raise ExamError(
            f"Too many external attachments, at most {len(ATTACHMENT_ALPHABET)} can be numbered",
            attachment.sourceline,
        )
    return ATTACHMENT_ALPHABET[index]


def add_display_numbers(exam: Exam) -> None:
    """Run all numbering passes in order (questions before answers and attachments)."""
    add_section_numbers(exam)
    add_question_numbers(exam)
    add_answer_numbers(exam)
    add_attachment_numbers(exam)
    logger.debug(
        f"Numbered {len(exam.sections)} sections, {len(exam.questions)} questions, "
        f"{len(exam.answers)} answers"
    )
