"""Exceptions raised while loading and mastering exams."""

from typing import List, Optional


class ExamError(Exception):
    """
    Error in an exam document.

    Carries the source line of the offending element when it is known,
    so authors can find the problem in their XML.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        return self.message


class ExamValidationError(ExamError):
    """Exception raised when an exam fails parsing, schema or structural validation."""
    pass


class MissingTitleError(ExamError):
    """Exception raised when no title can be generated for an exam code."""
    pass


class FormulaRenderError(Exception):
    """
    Raised by formula renderers.

    Holds every message the renderer produced for a single formula.
    """

    def __init__(self, errors: List[str]):
        super().__init__(", ".join(errors))
        self.errors = list(errors)
