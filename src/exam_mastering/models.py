"""
Core data models for exam mastering.

Results and collaborator payloads use Pydantic for validation and JSON
serialization. Field names are snake_case in Python and dump to the
camelCase keys consumers of mastering results expect.
"""

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


ExamType = Literal["normal", "visually-impaired", "hearing-impaired"]

# Scores and media dimensions keep integers as integers in dumped JSON
Number = Union[int, float]


class CamelModel(BaseModel):
    """Base model dumping camelCase keys (use model_dump(by_alias=True))."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# ============================================================================
# Exam Version Models
# ============================================================================

class ExamVersion(CamelModel):
    """A (language, exam-type) combination declared in <e:exam-versions>."""

    language: str = Field(..., description="Language code, e.g. fi-FI")
    type: ExamType = Field("normal", description="Exam type")


class UuidMetadata(CamelModel):
    """Metadata passed to the UUID generator for exams with an exam-code and date."""

    exam_code: str = Field(..., description="Exam code, e.g. A")
    date: str = Field(..., description="Exam date (ISO 8601)")
    language: str = Field(..., description="Language of the exam version")
    type: ExamType = Field(..., description="Type of the exam version")

    model_config = {
        "json_schema_extra": {
            "example": {
                "examCode": "A",
                "date": "2020-01-01",
                "language": "fi-FI",
                "type": "normal",
            }
        }
    }


# ============================================================================
# Media Metadata Models
# ============================================================================

class ImageMetadata(BaseModel):
    """Dimensions of an image."""

    width: Number = Field(..., description="Width in pixels")
    height: Number = Field(..., description="Height in pixels")


class VideoMetadata(BaseModel):
    """Dimensions of a video."""

    width: Number = Field(..., description="Width in pixels")
    height: Number = Field(..., description="Height in pixels")


class AudioMetadata(BaseModel):
    """Duration of an audio file."""

    duration: Number = Field(..., description="Duration in seconds")


MediaMetadata = Union[ImageMetadata, VideoMetadata, AudioMetadata]
MediaKind = Literal["image", "video", "audio"]


# ============================================================================
# Attachment Models
# ============================================================================

class Attachment(CamelModel):
    """A file referenced by a mastered exam version."""

    filename: str = Field(..., description="Attachment file name (src attribute)")
    restricted: bool = Field(False, description="Audio with a limited number of plays")
    visible_in_grading_instructions: bool = Field(
        False, description="Shown in grading instructions (inside a grading, hint or title context)"
    )
    within_grading_instruction: bool = Field(
        False, description="Located inside a grading instruction element"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "filename": "kuuntelu.ogg",
                "restricted": True,
                "visibleInGradingInstructions": False,
                "withinGradingInstruction": False,
            }
        }
    }

    def key(self) -> tuple:
        """Identity used for deduplication: all four fields."""
        return (
            self.filename,
            self.restricted,
            self.visible_in_grading_instructions,
            self.within_grading_instruction,
        )


# ============================================================================
# Grading Structure Models
# ============================================================================

class AcceptedAnswer(CamelModel):
    """An accepted answer of a scored-text answer."""

    text: str
    score: Number


class TextQuestion(CamelModel):
    """A manually or automatically graded text answer."""

    type: Literal["text"] = "text"
    id: int = Field(..., description="Question id of the answer")
    display_number: str
    max_score: Number = 0
    accepted_answers: List[AcceptedAnswer] = Field(default_factory=list)


class ChoiceGroupOption(CamelModel):
    """An option of a choice or dropdown answer."""

    id: int = Field(..., description="Option id")
    correct: bool
    score: Number


class ChoiceGroupChoice(CamelModel):
    """A choice or dropdown answer inside a choicegroup."""

    type: Literal["choice"] = "choice"
    id: int = Field(..., description="Question id of the answer")
    display_number: str
    options: List[ChoiceGroupOption] = Field(default_factory=list)


class ChoiceGroupQuestion(CamelModel):
    """One or more choice answers graded together."""

    type: Literal["choicegroup"] = "choicegroup"
    id: int = Field(..., description="Generated choicegroup id")
    display_number: str
    choices: List[ChoiceGroupChoice] = Field(default_factory=list)


GradingStructureQuestion = Union[TextQuestion, ChoiceGroupQuestion]


class GradingStructure(CamelModel):
    """Data used to grade an exam version."""

    questions: List[GradingStructureQuestion] = Field(default_factory=list)


# ============================================================================
# Mastering Result Models
# ============================================================================

class MasteringResult(CamelModel):
    """Result of mastering one exam version."""

    attachments: List[Attachment] = Field(default_factory=list, description="Attachments used by this version")
    date: Optional[str] = Field(None, description="Date of the exam")
    day_code: Optional[str] = Field(None, description="Optional day code")
    exam_code: Optional[str] = Field(None, description="Optional exam code")
    exam_uuid: str = Field(..., description="UUID identifying this exam version")
    grading_structure: Any = Field(None, description="Data used to grade this exam version")
    translation: Any = Field(None, description="Strings to be sent to the translator")
    language: str = Field(..., description="Language of this exam version")
    title: Optional[str] = Field(None, description="Title of the exam")
    type: ExamType = Field("normal", description="Type of this exam version")
    xml: str = Field(..., description="The mastered XML")

    @field_validator("exam_uuid")
    @classmethod
    def validate_exam_uuid(cls, v: str) -> str:
        if not v:
            raise ValueError("exam_uuid must not be empty")
        return v

    def to_json_dict(self, include_xml: bool = True) -> Dict[str, Any]:
        """Dump as JSON-compatible dict with camelCase keys."""
        exclude = None if include_xml else {"xml"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


# ============================================================================
# Validation Helpers
# ============================================================================

class ValidationHelper:
    """Helper class for validating outputs."""

    @staticmethod
    def validate_mastering_result(data: Dict[str, Any]) -> MasteringResult:
        """Validate a mastering result dictionary (camelCase or snake_case keys)."""
        return MasteringResult(**data)

    @staticmethod
    def validate_attachment(data: Dict[str, Any]) -> Attachment:
        """Validate an attachment dictionary."""
        return Attachment(**data)

    @staticmethod
    def validate_grading_structure(data: Dict[str, Any]) -> GradingStructure:
        """Validate a grading structure dictionary."""
        return GradingStructure(**data)

    @staticmethod
    def get_json_schema(model_class) -> Dict[str, Any]:
        """Get JSON schema for a model class."""
        return model_class.model_json_schema()


# ============================================================================
# Export
# ============================================================================

__all__ = [
    "ExamType",
    "CamelModel",
    "ExamVersion",
    "UuidMetadata",
    "ImageMetadata",
    "VideoMetadata",
    "AudioMetadata",
    "MediaMetadata",
    "MediaKind",
    "Attachment",
    "AcceptedAnswer",
    "TextQuestion",
    "ChoiceGroupOption",
    "ChoiceGroupChoice",
    "ChoiceGroupQuestion",
    "GradingStructureQuestion",
    "GradingStructure",
    "MasteringResult",
    "ValidationHelper",
]
