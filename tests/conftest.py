"""Shared fixtures for exam mastering tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exam_mastering.io import parse_exam
from exam_mastering.preprocess import parse_exam_structure


FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Body starts on line 3
EXAM_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<e:exam xmlns:e="http://ylioppilastutkinto.fi/exam.xsd" xmlns="http://www.w3.org/1999/xhtml" exam-schema-version="0.5"{attrs}>
{body}
</e:exam>"""


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def full_exam_xml():
    """Two-language exam with sections, nested questions, attachments and grading instructions."""
    return (FIXTURES_DIR / "full_exam.xml").read_bytes()


@pytest.fixture
def minimal_exam_xml():
    """Exam with exam-code A, day-code X and two languages."""
    return (FIXTURES_DIR / "minimal_yo_exam.xml").read_bytes()


@pytest.fixture
def make_exam():
    """Build exam XML from a body and root attributes."""

    def _make_exam(body: str, **attrs) -> str:
        rendered = "".join(f' {name.replace("_", "-")}="{value}"' for name, value in attrs.items())
        return EXAM_TEMPLATE.format(attrs=rendered, body=body)

    return _make_exam


@pytest.fixture
def parse_root(make_exam):
    """Parse a body into an <e:exam> root element (no validation)."""

    def _parse_root(body: str, **attrs):
        return parse_exam(make_exam(body, **attrs)).getroot()

    return _parse_root


@pytest.fixture
def parse_structure(parse_root):
    """Parse a body into an Exam structure."""

    def _parse_structure(body: str, **attrs):
        return parse_exam_structure(parse_root(body, **attrs))

    return _parse_structure
