"""I/O utilities for exam mastering."""

from .exam_loader import ExamLoader, load_schema, parse_exam
from .validator import assert_exam_is_valid

__all__ = [
    "ExamLoader",
    "load_schema",
    "parse_exam",
    "assert_exam_is_valid",
]
