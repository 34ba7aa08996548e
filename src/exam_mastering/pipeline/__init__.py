"""Mastering passes and the pipeline that runs them per exam version."""

from .ids import IdGenerator, add_answer_option_ids, add_question_ids
from .grading import build_grading_structure
from .translation import extract_translation
from .pipeline import MasteringPipeline, master_exam

__all__ = [
    "IdGenerator",
    "add_answer_option_ids",
    "add_question_ids",
    "build_grading_structure",
    "extract_translation",
    "MasteringPipeline",
    "master_exam",
]
