"""
Exam Mastering

Turns an authored exam document into finalized delivery documents, one
per declared (language, exam type) version, with attachments, grading
data and translation strings.
"""

__version__ = "0.1.0"

# Core models - convenient imports
from .models import (
    ExamVersion,
    UuidMetadata,
    Attachment,
    GradingStructure,
    MasteringResult,
    ValidationHelper,
)
from .config import Config, MasteringOptions, PipelineConfig
from .errors import ExamError, ExamValidationError, FormulaRenderError, MissingTitleError

# I/O utilities
from .io import ExamLoader, parse_exam

# Pipeline
from .pipeline import MasteringPipeline, master_exam

__all__ = [
    # Models
    "ExamVersion",
    "UuidMetadata",
    "Attachment",
    "GradingStructure",
    "MasteringResult",
    "ValidationHelper",
    # Config
    "Config",
    "MasteringOptions",
    "PipelineConfig",
    # Errors
    "ExamError",
    "ExamValidationError",
    "FormulaRenderError",
    "MissingTitleError",
    # I/O
    "ExamLoader",
    "parse_exam",
    # Pipeline
    "MasteringPipeline",
    "master_exam",
]
