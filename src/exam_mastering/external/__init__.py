"""External collaborators of the mastering pipeline."""

from .collaborators import (
    FakeFormulaRenderer,
    FakeMediaMetadata,
    FormulaRenderer,
    GenerateUuid,
    GetMediaMetadata,
    GradingStructureBuilder,
    TranslationExtractor,
    random_uuid,
)
from .media_cache import MediaMetadataCache

__all__ = [
    "FakeFormulaRenderer",
    "FakeMediaMetadata",
    "FormulaRenderer",
    "GenerateUuid",
    "GetMediaMetadata",
    "GradingStructureBuilder",
    "TranslationExtractor",
    "random_uuid",
    "MediaMetadataCache",
]
