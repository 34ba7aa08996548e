"""
Interfaces of the services mastering depends on.

UUID generation, media probing, formula rendering, grading structure
construction and translation extraction live outside the mastering
core. Each is a Protocol so callers (and tests) can plug in their own.
"""

from typing import Any, Dict, Optional, Protocol, Tuple
import logging
import uuid

from lxml import etree

from ..errors import FormulaRenderError
from ..models import AudioMetadata, ImageMetadata, MediaKind, MediaMetadata, UuidMetadata, VideoMetadata

logger = logging.getLogger(__name__)


class GenerateUuid(Protocol):
    """Called once per exam version; metadata only for exams with exam-code and date."""

    def __call__(self, metadata: Optional[UuidMetadata] = None) -> str:
        ...


class GetMediaMetadata(Protocol):
    """Probe a media file: dimensions for image/video, duration for audio."""

    def __call__(self, src: str, kind: MediaKind) -> MediaMetadata:
        ...


class FormulaRenderer(Protocol):
    """
    Render a LaTeX formula to SVG.

    Raises FormulaRenderError with the renderer's messages on failure.
    """

    def __call__(self, formula: str, mode: Optional[str], strict: bool) -> str:
        ...


class GradingStructureBuilder(Protocol):
    """Build the grading data of a mastered exam version."""

    def __call__(self, exam: Any, generate_id: Any, group_choice_answers: bool = False) -> Any:
        ...


class TranslationExtractor(Protocol):
    """Extract the strings of an (unfiltered) exam document for translators."""

    def __call__(self, root: etree._Element) -> Any:
        ...


def random_uuid(metadata: Optional[UuidMetadata] = None) -> str:
    """Default GenerateUuid: a random UUID regardless of metadata."""
    return str(uuid.uuid4())


class FakeMediaMetadata:
    """
    Fake media probe for testing (no file access).

    Returns fixed dimensions and durations, overridable per src, and
    records every call.
    """

    def __init__(
        self,
        width: int = 999,
        height: int = 999,
        duration: int = 999,
        overrides: Optional[Dict[str, MediaMetadata]] = None,
    ):
        self.width = width
        self.height = height
        self.duration = duration
        self.overrides = overrides or {}
        self.calls: list = []

    def __call__(self, src: str, kind: MediaKind) -> MediaMetadata:
        self.calls.append((src, kind))
        if src in self.overrides:
            return self.overrides[src]
        if kind == "audio":
            return AudioMetadata(duration=self.duration)
        if kind == "video":
            return VideoMetadata(width=self.width, height=self.height)
        return ImageMetadata(width=self.width, height=self.height)


class FakeFormulaRenderer:
    """
    Fake formula renderer for testing.

    Wraps the formula text in a minimal SVG. Formulas listed in errors
    raise FormulaRenderError with the given messages.
    """

    def __init__(self, errors: Optional[Dict[str, Tuple[str, ...]]] = None):
        self.errors = errors or {}
        self.calls: list = []

    def __call__(self, formula: str, mode: Optional[str], strict: bool) -> str:
        self.calls.append((formula, mode, strict))
        if formula in self.errors:
            raise FormulaRenderError(list(self.errors[formula]))
        return f'<svg xmlns="http://www.w3.org/2000/svg"><text>{formula}</text></svg>'
