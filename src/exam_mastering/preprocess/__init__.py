"""Exam preprocessing: localization, structure parsing and exam-code customizations."""

from .localization import apply_localizations
from .structure import Answer, Exam, Question, QuestionKind, Section, parse_exam_structure
from .customizations import StaticTitleCatalog, TitleCatalog, add_exam_code_customizations

__all__ = [
    "apply_localizations",
    "Answer",
    "Exam",
    "Question",
    "QuestionKind",
    "Section",
    "parse_exam_structure",
    "StaticTitleCatalog",
    "TitleCatalog",
    "add_exam_code_customizations",
]
