"""
Stable identifiers for answers and answer options.

One IdGenerator is created per exam version and passed through the
passes that need ids, so versions mastered in parallel never share a
counter.
"""

import logging

from lxml import etree

from ..preprocess.structure import Exam, parse_exam_structure

logger = logging.getLogger(__name__)


class IdGenerator:
    """Monotonic integer ids starting at 1."""

    def __init__(self, start: int = 1):
        self._next = start

    def __call__(self) -> int:
        current = self._next
        self._next += 1
        return current

    @property
    def peek(self) -> int:
        """The id the next call will return."""
        return self._next


def add_question_ids(root: etree._Element, generate_id: IdGenerator) -> None:
    """
    Number every answer with a question-id.

    Must run before localization filtering: the unfiltered tree is the
    same for every version, so the same authored answer gets the same id
    in every language.
    """
    exam = parse_exam_structure(root)
    for answer in exam.answers:
        answer.element.set("question-id", str(generate_id()))

    logger.debug(f"Assigned question ids to {len(exam.answers)} answers")


def add_answer_option_ids(exam: Exam, generate_id: IdGenerator) -> None:
    """
    Number choice and dropdown options with an option-id.

    Must run after shuffling so ids follow the delivered order.
    """
    count = 0
    for answer in exam.answers:
        for option in answer.options:
            option.set("option-id", str(generate_id()))
            count += 1

    logger.debug(f"Assigned option ids to {count} answer options")
