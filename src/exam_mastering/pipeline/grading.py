"""
Default grading structure builder.

Text answers become "text" questions graded by hand (or against their
accepted answers); choice and dropdown answers become "choicegroup"
questions graded automatically from option scores.
"""

from typing import Callable, List, Optional, Union
import logging

from ..preprocess.structure import Answer, Exam
from ..models import (
    AcceptedAnswer,
    ChoiceGroupChoice,
    ChoiceGroupOption,
    ChoiceGroupQuestion,
    GradingStructure,
    TextQuestion,
)
from ..schema import AnswerKind, NS
from ..utils.xml import get_attribute, get_numeric_attribute, text_content

logger = logging.getLogger(__name__)


def _question_id(answer: Answer) -> int:
    return int(get_attribute("question-id", answer.element))


def _display_number(answer: Answer) -> str:
    return answer.element.get("display-number", "")


def build_text_question(answer: Answer) -> TextQuestion:
    accepted_answers: List[AcceptedAnswer] = []
    if answer.kind is AnswerKind.SCORED_TEXT:
        accepted_answers = [
            AcceptedAnswer(
                text=text_content(accepted).strip(),
                score=get_numeric_attribute("score", accepted, 0),
            )
            for accepted in answer.element.xpath("./e:accepted-answer", namespaces=NS)
        ]

    return TextQuestion(
        id=_question_id(answer),
        display_number=_display_number(answer),
        max_score=get_numeric_attribute("max-score", answer.element, 0),
        accepted_answers=accepted_answers,
    )


def build_choice(answer: Answer) -> ChoiceGroupChoice:
    options = []
    for option in answer.options:
        score = get_numeric_attribute("score", option, 0)
        options.append(
            ChoiceGroupOption(
                id=int(get_attribute("option-id", option)),
                correct=score > 0,
                score=score,
            )
        )
    return ChoiceGroupChoice(id=_question_id(answer), display_number=_display_number(answer), options=options)


def build_grading_structure(
    exam: Exam,
    generate_id: Callable[[], int],
    group_choice_answers: bool = False,
) -> GradingStructure:
    """
    Build the grading structure of a mastered exam version.

    Must run after ids, display numbers and answer max-scores are in
    place and before correct answers are removed.

    Args:
        exam: Parsed exam structure
        generate_id: The version's id generator, used for choicegroup ids
        group_choice_answers: Put consecutive choice answers of a question
            into one choicegroup numbered like the question

    Returns:
        GradingStructure with questions in answer order
    """
    questions: List[Union[TextQuestion, ChoiceGroupQuestion]] = []
    current_group: Optional[ChoiceGroupQuestion] = None
    current_group_question = None

    for answer in exam.answers:
        if not answer.kind.is_choice:
            questions.append(build_text_question(answer))
            current_group = None
            continue

        choice = build_choice(answer)

        if group_choice_answers and current_group is not None and current_group_question is answer.question:
            current_group.choices.append(choice)
            continue

        display_number = (
            answer.question.get("display-number", "") if group_choice_answers else choice.display_number
        )
        current_group = ChoiceGroupQuestion(id=generate_id(), display_number=display_number, choices=[choice])
        current_group_question = answer.question
        questions.append(current_group)

    logger.debug(f"Built grading structure with {len(questions)} questions")
    return GradingStructure(questions=questions)
