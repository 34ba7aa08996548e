"""Configuration models."""

from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class MasteringOptions(BaseModel):
    """Options controlling how a single exam version is mastered."""

    multi_choice_shuffle_secret: Optional[str] = Field(
        None,
        description=(
            "Secret used to shuffle choice and dropdown options deterministically. "
            "Anyone holding it can recover the authored option order. "
            "None disables shuffling."
        ),
    )
    remove_correct_answers: bool = Field(
        True,
        description="Remove option scores, accepted answers, hidden elements and grading instructions",
    )
    throw_on_latex_error: bool = Field(True, description="Fail mastering on invalid formulas")
    group_choice_answers: bool = Field(
        False,
        description="Group sibling choice answers of a question under one choicegroup in the grading structure",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "multi_choice_shuffle_secret": "change-me",
                "remove_correct_answers": True,
                "throw_on_latex_error": True,
                "group_choice_answers": False
            }
        }
    }


class PipelineConfig(BaseModel):
    """Pipeline execution configuration."""

    parallel_versions: bool = Field(False, description="Master exam versions in a thread pool")
    max_workers: int = Field(4, ge=1, description="Thread pool size when parallel_versions is set")
    schema_path: Optional[str] = Field(None, description="Path to exam.xsd; schema validation is skipped if unset")
    exam_codes_requiring_day_code: List[str] = Field(
        default_factory=lambda: ["A", "O"],
        description="Exam codes that must (and only ones that may) carry a day-code",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "parallel_versions": False,
                "max_workers": 4,
                "schema_path": "schema/exam.xsd",
                "exam_codes_requiring_day_code": ["A", "O"]
            }
        }
    }


class Config(BaseSettings):
    """Main application configuration."""

    mastering: MasteringOptions = Field(default_factory=MasteringOptions)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)

    model_config = {
        "env_prefix": "EXAM_MASTERING_",
        "env_nested_delimiter": "__",
        "json_schema_extra": {
            "example": {
                "mastering": {"remove_correct_answers": True},
                "pipeline": {"parallel_versions": True, "max_workers": 4}
            }
        }
    }
