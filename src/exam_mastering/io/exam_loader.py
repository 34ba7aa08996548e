"""
Exam XML loading.

Parses exam XML with lxml and validates it against the exam schema and
the structural rules in validator.py. parse_exam is the only function
that should be used to parse exam XML, since it sets the parser options
that keep entity expansion and network access disabled.
"""

from pathlib import Path
from typing import Iterable, Optional, Union
import logging

from lxml import etree

from ..errors import ExamValidationError
from ..schema import CURRENT_EXAM_SCHEMA_VERSION
from .validator import assert_exam_is_valid

logger = logging.getLogger(__name__)

DEFAULT_EXAM_CODES_REQUIRING_DAY_CODE = ("A", "O")

OUTDATED_SCHEMA_MESSAGE = """This exam uses an outdated schema. Migrate it to the current schema before mastering.

    $ ee migrate path/to/exam.xml
"""


def _make_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


def parse_exam(
    xml: Union[str, bytes],
    validate: bool = False,
    schema: Optional[etree.XMLSchema] = None,
    exam_codes_requiring_day_code: Iterable[str] = DEFAULT_EXAM_CODES_REQUIRING_DAY_CODE,
) -> etree._ElementTree:
    """
    Parse an exam XML document.

    Args:
        xml: Exam XML source
        validate: Run schema (if given) and structural validation
        schema: Compiled exam schema
        exam_codes_requiring_day_code: Exam codes that must carry a day-code

    Returns:
        Parsed element tree

    Raises:
        ExamValidationError: If the XML is malformed or invalid
    """
    # Decoded text is re-encoded as UTF-8, overriding its declared encoding
    encoding = None
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
        encoding = "utf-8"

    try:
        root = etree.fromstring(xml, parser=_make_parser(encoding))
    except etree.XMLSyntaxError as e:
        raise ExamValidationError(e.msg, e.lineno) from e

    doc = root.getroottree()

    if validate:
        if schema is not None:
            _assert_matches_schema(doc, schema)
        assert_exam_is_valid(root, exam_codes_requiring_day_code)

    return doc


def _assert_matches_schema(doc: etree._ElementTree, schema: etree.XMLSchema) -> None:
    if schema.validate(doc):
        return

    # Warnings may precede the actual error, skip them
    errors = [e for e in schema.error_log if e.level >= etree.ErrorLevels.ERROR]
    error = errors[0] if errors else schema.error_log.last_error

    message = error.message
    if f"is not an element of the set {{'{CURRENT_EXAM_SCHEMA_VERSION}'}}" in message:
        message = OUTDATED_SCHEMA_MESSAGE

    raise ExamValidationError(message, error.line)


def load_schema(schema_path: Union[str, Path]) -> etree.XMLSchema:
    """Load and compile an XSD schema (imports resolve relative to its directory)."""
    schema_path = Path(schema_path)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    logger.info(f"Loading exam schema from: {schema_path}")
    schema_doc = etree.parse(str(schema_path))
    return etree.XMLSchema(schema_doc)


class ExamLoader:
    """
    Loader for exam documents.

    Compiles the schema once and validates every document it loads.
    """

    def __init__(
        self,
        schema_path: Optional[Union[str, Path]] = None,
        exam_codes_requiring_day_code: Iterable[str] = DEFAULT_EXAM_CODES_REQUIRING_DAY_CODE,
    ):
        """
        Initialize exam loader.

        Args:
            schema_path: Path to exam.xsd; without it only structural checks run
            exam_codes_requiring_day_code: Exam codes that must carry a day-code
        """
        self.schema = load_schema(schema_path) if schema_path else None
        self.exam_codes_requiring_day_code = tuple(exam_codes_requiring_day_code)

        logger.info(
            f"Initialized ExamLoader (schema={'yes' if self.schema is not None else 'no'}, "
            f"day_code_exams={list(self.exam_codes_requiring_day_code)})"
        )

    def load(self, xml: Union[str, bytes]) -> etree._ElementTree:
        """Parse and validate exam XML."""
        return parse_exam(
            xml,
            validate=True,
            schema=self.schema,
            exam_codes_requiring_day_code=self.exam_codes_requiring_day_code,
        )

    def load_path(self, path: Union[str, Path]) -> etree._ElementTree:
        """Read, parse and validate an exam XML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Exam file not found: {path}")

        logger.info(f"Loading exam from: {path}")
        return self.load(path.read_bytes())

    def parse(self, xml: Union[str, bytes]) -> etree._ElementTree:
        """Parse exam XML without validation (for already validated sources)."""
        return parse_exam(xml, validate=False)
