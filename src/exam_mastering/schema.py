"""
Exam XML vocabulary.

Element names and namespaces shared by the loader, the structure parser
and the mastering passes. The vocabulary is fixed by the exam schema.
"""

from enum import Enum

E_NS = "http://ylioppilastutkinto.fi/exam.xsd"
XHTML_NS = "http://www.w3.org/1999/xhtml"

NS = {"e": E_NS, "xhtml": XHTML_NS}


class AnswerKind(str, Enum):
    """Answer element kinds."""
    TEXT = "text-answer"
    SCORED_TEXT = "scored-text-answer"
    RICH_TEXT = "rich-text-answer"
    CHOICE = "choice-answer"
    DROPDOWN = "dropdown-answer"
    AUDIO = "audio-answer"

    def __str__(self) -> str:
        return self.value

    @property
    def is_choice(self) -> bool:
        return self in (AnswerKind.CHOICE, AnswerKind.DROPDOWN)

    @property
    def has_option_scores(self) -> bool:
        """Kinds whose max-score derives from option or accepted-answer scores."""
        return self in (AnswerKind.CHOICE, AnswerKind.DROPDOWN, AnswerKind.SCORED_TEXT)


ANSWER_TYPES = [kind.value for kind in AnswerKind]
CHOICE_ANSWER_TYPES = [AnswerKind.CHOICE.value, AnswerKind.DROPDOWN.value]
CHOICE_ANSWER_OPTION_TYPES = ["choice-answer-option", "dropdown-answer-option"]

# Media elements referencing a file through their `src` attribute
ATTACHMENT_TYPES = ["audio", "audio-test", "file", "image", "video"]

# Exam elements that behave like HTML containers and may sit between a
# question and its answers.
HTML_LIKE_EXAM_ELEMENTS = ["hints", "scored-text-answers", "localization", "attachment", "audio-group"]

GRADING_INSTRUCTION_ELEMENTS = [
    "exam-grading-instruction",
    "question-grading-instruction",
    "answer-grading-instruction",
]

# Keep in sync with the grading instruction views of the exam renderer
VISIBLE_IN_GRADING_INSTRUCTIONS_ELEMENTS = [
    "answer-grading-instruction",
    "choice-answer-option",
    "dropdown-answer-option",
    "exam-grading-instruction",
    "question-grading-instruction",
    "hint",
    "question-title",
    "question-instruction",
]

ATTACHMENT_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZÅÄÖ"

EXAM_TYPES = ("normal", "visually-impaired", "hearing-impaired")

# Schema version accepted by the validator and the one written to mastered XML
CURRENT_EXAM_SCHEMA_VERSION = "0.5"
MASTERED_EXAM_SCHEMA_VERSION = "0.1"


__all__ = [
    "E_NS",
    "XHTML_NS",
    "NS",
    "AnswerKind",
    "ANSWER_TYPES",
    "CHOICE_ANSWER_TYPES",
    "CHOICE_ANSWER_OPTION_TYPES",
    "ATTACHMENT_TYPES",
    "HTML_LIKE_EXAM_ELEMENTS",
    "GRADING_INSTRUCTION_ELEMENTS",
    "VISIBLE_IN_GRADING_INSTRUCTIONS_ELEMENTS",
    "ATTACHMENT_ALPHABET",
    "EXAM_TYPES",
    "CURRENT_EXAM_SCHEMA_VERSION",
    "MASTERED_EXAM_SCHEMA_VERSION",
]
