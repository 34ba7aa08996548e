"""
Score aggregation.

Max scores are computed bottom-up: answers, then questions, sections and
the exam. Wherever max-answers limits how many items a student may
answer, only the best-scoring items count ("best of N").
"""

from typing import List, Optional, Sequence
import logging

from lxml import etree

from ..preprocess.structure import Exam, Question
from ..schema import NS
from ..utils.xml import Number, format_number, get_numeric_attribute

logger = logging.getLogger(__name__)


def _max_score(element: etree._Element) -> Number:
    return get_numeric_attribute("max-score", element, 0)


def _max_answers(element: etree._Element) -> Optional[int]:
    return get_numeric_attribute("max-answers", element, None)


def top_scores(scores: Sequence[Number], limit: Optional[int]) -> List[Number]:
    """Highest scores first; sorted() is stable so ties keep their order."""
    ordered = sorted(scores, reverse=True)
    return ordered if limit is None else ordered[:limit]


def update_max_scores_to_answers(exam: Exam) -> None:
    """
    Set max-score on choice, dropdown and scored-text answers that lack one.

    The max-score is the highest option or accepted-answer score (0 when
    there are none).
    """
    for answer in exam.answers:
        if not answer.kind.has_option_scores or answer.element.get("max-score") is not None:
            continue

        scored = answer.element.xpath(
            "./e:choice-answer-option | ./e:dropdown-answer-option | ./e:accepted-answer",
            namespaces=NS,
        )
        scores = [get_numeric_attribute("score", element, 0) for element in scored]
        answer.element.set("max-score", format_number(max(scores, default=0)))


def count_section_max_and_min_answers(exam: Exam) -> None:
    """
    Distribute the exam's max-answers budget over sections.

    Sections without max-answers get min(question count, exam max-answers).
    Each section's min-answers is its max-answers clamped to what is left
    of the exam budget after every other section takes its maximum.
    """
    exam_max_answers = _max_answers(exam.element)
    if not exam_max_answers:
        return

    for section in exam.sections:
        if _max_answers(section.element) is None:
            section.element.set("max-answers", str(min(len(section.questions), exam_max_answers)))

    section_max_answers = [_max_answers(section.element) for section in exam.sections]
    total = sum(section_max_answers)

    for section, max_answers in zip(exam.sections, section_max_answers):
        other_sections_max_answers = total - max_answers
        upper = exam_max_answers - other_sections_max_answers
        # Never negative, even when the other sections alone exceed the budget
        min_answers = max(min(max_answers, upper), 0)
        section.element.set("min-answers", str(min_answers))


def count_max_scores(exam: Exam) -> None:
    """Write max-score on every question, section and the exam root."""

    def count_max_score(answerables: list, max_answers: Optional[int]) -> Number:
        return sum(top_scores([_max_score(a.element) for a in answerables], max_answers))

    def count_question_max_score(question: Question) -> None:
        for child in question.child_questions:
            count_question_max_score(child)
        max_score = count_max_score(question.answerables, _max_answers(question.element))
        question.element.set("max-score", format_number(max_score))

    for section in exam.sections:
        for question in section.questions:
            count_question_max_score(question)
        max_score = count_max_score(section.questions, _max_answers(section.element))
        section.element.set("max-score", format_number(max_score))

    # Best questions of each section, then the best of those for the whole exam
    pooled: List[Number] = []
    for section in exam.sections:
        question_scores = [_max_score(q.element) for q in section.questions]
        pooled.extend(top_scores(question_scores, _max_answers(section.element)))

    exam_max_score = sum(top_scores(pooled, _max_answers(exam.element)))
    exam.element.set("max-score", format_number(exam_max_score))

    logger.debug(f"Exam max score {format_number(exam_max_score)} over {len(exam.sections)} sections")
