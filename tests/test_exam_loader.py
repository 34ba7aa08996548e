"""Tests for exam loading and structural validation."""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exam_mastering.errors import ExamError, ExamValidationError
from exam_mastering.io import ExamLoader, assert_exam_is_valid, parse_exam
from exam_mastering.io.exam_loader import load_schema


QUESTION = """<e:section>
  <e:question>
    <e:text-answer max-score="2"/>
  </e:question>
</e:section>"""


class TestParseExam:
    """Tests for parse_exam."""

    def test_parse_returns_tree(self, make_exam):
        doc = parse_exam(make_exam(QUESTION))
        assert doc.getroot().tag == "{http://ylioppilastutkinto.fi/exam.xsd}exam"

    def test_parse_bytes(self, make_exam):
        doc = parse_exam(make_exam(QUESTION).encode("utf-8"))
        assert doc.getroot() is not None

    def test_parse_str_ignores_declared_encoding(self):
        xml = (
            '<?xml version="1.0" encoding="iso-8859-1"?>\n'
            '<e:exam xmlns:e="http://ylioppilastutkinto.fi/exam.xsd">Kysymys ä</e:exam>'
        )
        assert parse_exam(xml).getroot().text == "Kysymys ä"

    def test_parse_bytes_uses_declared_encoding(self):
        xml = (
            '<?xml version="1.0" encoding="iso-8859-1"?>\n'
            '<e:exam xmlns:e="http://ylioppilastutkinto.fi/exam.xsd">Kysymys ä</e:exam>'
        ).encode("iso-8859-1")
        assert parse_exam(xml).getroot().text == "Kysymys ä"

    def test_malformed_xml_has_line(self):
        xml = '<?xml version="1.0"?>\n<e:exam xmlns:e="http://ylioppilastutkinto.fi/exam.xsd">\n<e:section>\n</e:exam>'
        with pytest.raises(ExamValidationError) as exc_info:
            parse_exam(xml)
        assert exc_info.value.line == 4

    def test_entities_not_expanded(self):
        xml = (
            '<?xml version="1.0"?>\n'
            '<!DOCTYPE e:exam [<!ENTITY secret SYSTEM "file:///etc/passwd">]>\n'
            '<e:exam xmlns:e="http://ylioppilastutkinto.fi/exam.xsd">&secret;</e:exam>'
        )
        root = parse_exam(xml).getroot()
        assert "root:" not in "".join(root.itertext())

    def test_validation_error_is_exam_error(self):
        assert issubclass(ExamValidationError, ExamError)


class TestAnswerPlacement:
    """Answers must sit inside a leaf question."""

    def test_valid_exam(self, parse_root):
        root = parse_root(QUESTION)
        assert assert_exam_is_valid(root) is root

    def test_answer_outside_question(self, parse_root):
        root = parse_root("""<e:section>
  <e:text-answer/>
</e:section>""")
        with pytest.raises(ExamValidationError, match="All answers must be within a question.") as exc_info:
            assert_exam_is_valid(root)
        assert exc_info.value.line == 4

    def test_answer_inside_html_like_element(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:hints><p><e:text-answer/></p></e:hints>
  </e:question>
</e:section>""")
        assert_exam_is_valid(root)

    def test_answer_inside_other_exam_element(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:question-title><e:text-answer/></e:question-title>
  </e:question>
</e:section>""")
        with pytest.raises(ExamValidationError, match="within a question"):
            assert_exam_is_valid(root)

    def test_answers_and_child_questions(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:text-answer/>
    <e:question>
      <e:text-answer/>
    </e:question>
  </e:question>
</e:section>""")
        with pytest.raises(ExamValidationError, match="both answer elements and child questions") as exc_info:
            assert_exam_is_valid(root)
        # Reported at the child question
        assert exc_info.value.line == 6


class TestScoredTextAnswer:
    """Scored text answers need a max-score or accepted answers."""

    def test_neither_max_score_nor_accepted_answers(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:scored-text-answer/>
  </e:question>
</e:section>""")
        with pytest.raises(ExamValidationError, match="either a max-score attribute or contain accepted-answers"):
            assert_exam_is_valid(root)

    def test_accepted_answer_over_max_score(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:scored-text-answer max-score="1">
      <e:accepted-answer score="2">kaksi</e:accepted-answer>
    </e:scored-text-answer>
  </e:question>
</e:section>""")
        with pytest.raises(ExamValidationError, match="cannot be smaller than the score"):
            assert_exam_is_valid(root)

    def test_accepted_answers_without_max_score(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:scored-text-answer>
      <e:accepted-answer score="2">kaksi</e:accepted-answer>
    </e:scored-text-answer>
  </e:question>
</e:section>""")
        assert_exam_is_valid(root)


class TestDayCode:
    """Day codes belong to exam codes that require them."""

    def test_day_code_for_other_exam_code(self, parse_root):
        root = parse_root(QUESTION, exam_code="EA", day_code="X")
        with pytest.raises(ExamValidationError, match="Invalid exam-code EA for day-code X"):
            assert_exam_is_valid(root)

    def test_missing_day_code(self, parse_root):
        root = parse_root(QUESTION, exam_code="A")
        with pytest.raises(ExamValidationError, match="Invalid empty day-code for exam-code A"):
            assert_exam_is_valid(root)

    def test_day_code_present(self, parse_root):
        root = parse_root(QUESTION, exam_code="O", day_code="X")
        assert_exam_is_valid(root)

    def test_configurable_exam_codes(self, parse_root):
        root = parse_root(QUESTION, exam_code="A")
        assert_exam_is_valid(root, exam_codes_requiring_day_code=["O"])


class TestExternalMaterial:
    def test_restricted_audio_in_external_material(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:external-material>
      <e:attachment><e:audio src="a.ogg" times="1"/></e:attachment>
    </e:external-material>
    <e:text-answer/>
  </e:question>
</e:section>""")
        with pytest.raises(ExamValidationError, match="External material") as exc_info:
            assert_exam_is_valid(root)
        assert exc_info.value.line == 6


class TestExamLoader:
    """Tests for ExamLoader."""

    def test_initialization(self):
        loader = ExamLoader()
        assert loader.schema is None
        assert loader.exam_codes_requiring_day_code == ("A", "O")

    def test_load_validates(self, make_exam):
        loader = ExamLoader()
        with pytest.raises(ExamValidationError):
            loader.load(make_exam(QUESTION, exam_code="A"))

    def test_parse_skips_validation(self, make_exam):
        loader = ExamLoader()
        doc = loader.parse(make_exam(QUESTION, exam_code="A"))
        assert doc.getroot().get("exam-code") == "A"

    def test_load_path(self, fixtures_dir):
        loader = ExamLoader()
        doc = loader.load_path(fixtures_dir / "full_exam.xml")
        assert doc.getroot().get("exam-code") == "EA"

    def test_load_path_missing(self, tmp_path):
        loader = ExamLoader()
        with pytest.raises(FileNotFoundError):
            loader.load_path(tmp_path / "missing.xml")

    def test_load_schema_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_schema(tmp_path / "exam.xsd")

    def test_schema_validation(self, tmp_path, make_exam):
        schema_path = tmp_path / "exam.xsd"
        schema_path.write_text(
            """<?xml version="1.0"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://ylioppilastutkinto.fi/exam.xsd"
           elementFormDefault="qualified">
  <xs:element name="exam">
    <xs:complexType>
      <xs:attribute name="exam-schema-version" type="xs:string"/>
    </xs:complexType>
  </xs:element>
</xs:schema>""",
            encoding="utf-8",
        )
        loader = ExamLoader(schema_path=schema_path)
        assert loader.schema is not None

        with pytest.raises(ExamValidationError) as exc_info:
            loader.load(make_exam(QUESTION))
        assert exc_info.value.line is not None
