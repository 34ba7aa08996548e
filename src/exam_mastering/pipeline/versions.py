"""Exam version discovery and per-version metadata."""

from typing import List
import logging

from lxml import etree

from ..external.collaborators import GenerateUuid
from ..models import ExamVersion, UuidMetadata
from ..schema import MASTERED_EXAM_SCHEMA_VERSION, NS

logger = logging.getLogger(__name__)


def list_exam_versions(root: etree._Element) -> List[ExamVersion]:
    """List the (language, exam-type) combinations declared in <e:exam-versions>."""
    return [
        ExamVersion(language=version.get("lang"), type=version.get("exam-type", "normal"))
        for version in root.xpath("./e:exam-versions/e:exam-version", namespaces=NS)
    ]


def add_exam_metadata(
    root: etree._Element,
    generate_uuid: GenerateUuid,
    language: str,
    exam_type: str,
) -> str:
    """
    Stamp the exam version's identity on the root element.

    generate_uuid is called exactly once. It receives metadata only when
    the exam has both an exam-code and a date.

    Returns:
        The generated exam UUID
    """
    exam_code = root.get("exam-code")
    date = root.get("date")
    metadata = (
        UuidMetadata(exam_code=exam_code, date=date, language=language, type=exam_type)
        if exam_code is not None and date is not None
        else None
    )
    exam_uuid = generate_uuid(metadata)

    root.set("exam-uuid", exam_uuid)
    root.set("exam-lang", language)
    root.set("exam-type", exam_type)
    # The exam server still reads mastered exams as schema version 0.1
    root.set("exam-schema-version", MASTERED_EXAM_SCHEMA_VERSION)

    return exam_uuid
