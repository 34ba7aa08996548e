"""
Exam structure parsing.

Builds a typed view over the exam tree: sections own questions, a
question either owns child questions (branch) or answers (leaf). The
view keeps references to the lxml elements; passes read and write
attributes through them.

    Exam
    ├── Section "1"
    │   ├── Question "1" (leaf)
    │   │   ├── Answer "1.1"
    │   │   └── Answer "1.2"
    │   └── Question "2" (branch)
    │       ├── Question "2.1" (leaf)
    │       └── Question "2.2" (leaf)
    └── Section "2"
        └── Question "3" (leaf)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from lxml import etree

from ..schema import ANSWER_TYPES, HTML_LIKE_EXAM_ELEMENTS, NS, AnswerKind
from ..utils.xml import is_exam_element, local_name, query_ancestors, xpath_or


class QuestionKind(str, Enum):
    """Question node kind."""
    LEAF = "leaf"      # Owns answers
    BRANCH = "branch"  # Owns child questions

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class Answer:
    element: etree._Element
    question: etree._Element
    kind: AnswerKind

    @property
    def options(self) -> List[etree._Element]:
        """Direct choice or dropdown options, empty for other kinds."""
        if not self.kind.is_choice:
            return []
        return self.element.xpath(
            "./e:choice-answer-option | ./e:dropdown-answer-option", namespaces=NS
        )


@dataclass(eq=False)
class Question:
    element: etree._Element
    child_questions: List[Question] = field(default_factory=list)
    answers: List[Answer] = field(default_factory=list)

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.BRANCH if self.child_questions else QuestionKind.LEAF

    @property
    def answerables(self) -> list:
        """Child questions for a branch, answers for a leaf."""
        return self.child_questions if self.child_questions else self.answers

    def iter_all(self) -> Iterator[Question]:
        """Iterate over this question and all descendants (pre-order)."""
        yield self
        for child in self.child_questions:
            yield from child.iter_all()


@dataclass(eq=False)
class Section:
    element: etree._Element
    questions: List[Question] = field(default_factory=list)


@dataclass(eq=False)
class Exam:
    """
    Typed view of an exam document.

    Attributes:
        element: The <e:exam> root element
        sections: Sections in document order
        questions: Every question, pre-order
        top_level_questions: Direct questions of all sections, in order
        answers: Every answer in document order
    """
    element: etree._Element
    sections: List[Section] = field(default_factory=list)
    questions: List[Question] = field(default_factory=list)
    top_level_questions: List[Question] = field(default_factory=list)
    answers: List[Answer] = field(default_factory=list)


def parse_exam_structure(root: etree._Element) -> Exam:
    """Parse the section/question/answer structure below root."""
    sections = [parse_section(element) for element in root.xpath("//e:section", namespaces=NS)]
    top_level_questions = [q for section in sections for q in section.questions]

    questions: List[Question] = []
    answers: List[Answer] = []

    def collect(question: Question) -> None:
        questions.append(question)
        if question.answers:
            answers.extend(question.answers)
        else:
            for child in question.child_questions:
                collect(child)

    for question in top_level_questions:
        collect(question)

    return Exam(
        element=root,
        sections=sections,
        questions=questions,
        top_level_questions=top_level_questions,
        answers=answers,
    )


def parse_section(element: etree._Element) -> Section:
    questions = [parse_question(q) for q in element.xpath("./e:question", namespaces=NS)]
    return Section(element=element, questions=questions)


def parse_question(element: etree._Element) -> Question:
    child_questions = [
        parse_question(child)
        for child in element.xpath(".//e:question", namespaces=NS)
        if _nearest_question(child) is element
    ]
    if child_questions:
        return Question(element=element, child_questions=child_questions)

    answers = [
        Answer(element=answer, question=element, kind=AnswerKind(local_name(answer)))
        for answer in element.xpath(xpath_or(ANSWER_TYPES, prefix=".//"), namespaces=NS)
        if _owning_exam_element(answer) is element
    ]
    return Question(element=element, answers=answers)


def _nearest_question(element: etree._Element) -> Optional[etree._Element]:
    return query_ancestors(element, lambda e: is_exam_element(e, "question"))


def _owning_exam_element(answer: etree._Element) -> Optional[etree._Element]:
    # HTML-like exam elements (hints, localizations, ...) are transparent
    return query_ancestors(
        answer,
        lambda e: is_exam_element(e) and local_name(e) not in HTML_LIKE_EXAM_ELEMENTS,
    )
