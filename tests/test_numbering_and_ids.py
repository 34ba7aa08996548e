"""Tests for display numbering, ids and option shuffling."""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exam_mastering.errors import ExamError
from exam_mastering.pipeline import IdGenerator, add_answer_option_ids, add_question_ids
from exam_mastering.pipeline.numbering import add_attachment_numbers, add_display_numbers
from exam_mastering.pipeline.shuffler import shuffle_answer_options
from exam_mastering.preprocess import parse_exam_structure
from exam_mastering.schema import ATTACHMENT_ALPHABET, NS


NESTED = """<e:external-material>
  <e:attachment><e:file src="yleinen.pdf"/></e:attachment>
</e:external-material>
<e:section>
  <e:question><e:text-answer/></e:question>
  <e:question>
    <e:external-material>
      <e:attachment><e:image src="a.png"/></e:attachment>
      <e:attachment><e:image src="b.png"/></e:attachment>
    </e:external-material>
    <e:question><e:text-answer/><e:text-answer/></e:question>
    <e:question>
      <e:question><e:choice-answer/></e:question>
    </e:question>
  </e:question>
</e:section>
<e:section>
  <e:question><e:text-answer/></e:question>
</e:section>"""


def display_numbers(elements):
    return [e.get("display-number") for e in elements]


class TestDisplayNumbers:
    """Tests for section, question, answer and attachment numbering."""

    def test_sections(self, parse_structure):
        exam = parse_structure(NESTED)
        add_display_numbers(exam)
        assert display_numbers(s.element for s in exam.sections) == ["1", "2"]

    def test_questions_across_sections(self, parse_structure):
        exam = parse_structure(NESTED)
        add_display_numbers(exam)
        assert display_numbers(q.element for q in exam.questions) == ["1", "2", "2.1", "2.2", "2.2.1", "3"]

    def test_answers(self, parse_structure):
        exam = parse_structure(NESTED)
        add_display_numbers(exam)
        assert display_numbers(a.element for a in exam.answers) == ["1", "2.1.1", "2.1.2", "2.2.1", "3"]

    def test_attachments(self, parse_structure):
        exam = parse_structure(NESTED)
        add_display_numbers(exam)
        attachments = exam.element.xpath("//e:attachment", namespaces=NS)
        assert display_numbers(attachments) == ["A", "2.A", "2.B"]

    def test_too_many_attachments(self, parse_structure):
        attachments = "".join(f'<e:attachment><e:file src="{i}.pdf"/></e:attachment>' for i in range(30))
        exam = parse_structure(f"<e:external-material>{attachments}</e:external-material><e:section/>")
        with pytest.raises(ExamError, match="Too many external attachments"):
            add_attachment_numbers(exam)

    def test_attachment_alphabet(self, parse_structure):
        attachments = "".join(f'<e:attachment><e:file src="{i}.pdf"/></e:attachment>' for i in range(29))
        exam = parse_structure(f"<e:external-material>{attachments}</e:external-material><e:section/>")
        add_attachment_numbers(exam)
        numbers = display_numbers(exam.element.xpath("//e:attachment", namespaces=NS))
        assert "".join(numbers) == ATTACHMENT_ALPHABET
        assert numbers[-3:] == ["Å", "Ä", "Ö"]


class TestIds:
    """Tests for IdGenerator and id assignment."""

    def test_id_generator(self):
        generate_id = IdGenerator()
        assert [generate_id(), generate_id(), generate_id()] == [1, 2, 3]
        assert generate_id.peek == 4

    def test_id_generators_are_independent(self):
        first, second = IdGenerator(), IdGenerator(start=10)
        first()
        assert second() == 10
        assert first() == 2

    def test_question_ids(self, parse_root):
        root = parse_root(NESTED)
        add_question_ids(root, IdGenerator())
        answers = parse_exam_structure(root).answers
        assert [a.element.get("question-id") for a in answers] == ["1", "2", "3", "4", "5"]

    def test_option_ids_follow_question_ids(self, parse_root):
        root = parse_root("""<e:section>
  <e:question>
    <e:choice-answer>
      <e:choice-answer-option>a</e:choice-answer-option>
      <e:choice-answer-option>b</e:choice-answer-option>
    </e:choice-answer>
    <e:dropdown-answer>
      <e:dropdown-answer-option>c</e:dropdown-answer-option>
    </e:dropdown-answer>
  </e:question>
</e:section>""")
        generate_id = IdGenerator()
        add_question_ids(root, generate_id)
        add_answer_option_ids(parse_exam_structure(root), generate_id)

        options = root.xpath("//e:choice-answer-option | //e:dropdown-answer-option", namespaces=NS)
        assert [o.get("option-id") for o in options] == ["3", "4", "5"]


CHOICES = """<e:section>
  <e:question>
    <e:choice-answer question-id="7">
      <e:choice-answer-option>1</e:choice-answer-option>
      <e:choice-answer-option type="no-answer">ei vastausta</e:choice-answer-option>
      <e:choice-answer-option>2</e:choice-answer-option>
      <e:choice-answer-option>3</e:choice-answer-option>
      <e:choice-answer-option>4</e:choice-answer-option>
      <e:choice-answer-option>5</e:choice-answer-option>
      <e:choice-answer-option>6</e:choice-answer-option>
    </e:choice-answer>
    <e:dropdown-answer question-id="8" ordering="fixed">
      <e:dropdown-answer-option>a</e:dropdown-answer-option>
      <e:dropdown-answer-option>b</e:dropdown-answer-option>
      <e:dropdown-answer-option>c</e:dropdown-answer-option>
    </e:dropdown-answer>
  </e:question>
</e:section>"""


def option_texts(answer):
    return [option.text for option in answer.options]


class TestShuffleAnswerOptions:
    """Tests for shuffle_answer_options."""

    def test_same_secret_same_order(self, parse_structure):
        first = parse_structure(CHOICES)
        second = parse_structure(CHOICES)
        shuffle_answer_options(first, "salaisuus")
        shuffle_answer_options(second, "salaisuus")
        assert option_texts(first.answers[0]) == option_texts(second.answers[0])

    def test_shuffle_keeps_options(self, parse_structure):
        exam = parse_structure(CHOICES)
        shuffle_answer_options(exam, "salaisuus")
        assert sorted(option_texts(exam.answers[0])) == sorted(["1", "2", "3", "4", "5", "6", "ei vastausta"])

    def test_no_answer_option_last(self, parse_structure):
        for secret in ("a", "b", "c", "d"):
            exam = parse_structure(CHOICES)
            shuffle_answer_options(exam, secret)
            assert option_texts(exam.answers[0])[-1] == "ei vastausta"

    def test_fixed_ordering(self, parse_structure):
        exam = parse_structure(CHOICES)
        shuffle_answer_options(exam, "salaisuus")
        assert option_texts(exam.answers[1]) == ["a", "b", "c"]

    def test_secret_changes_order(self, parse_structure):
        orders = set()
        for secret in ("yksi", "kaksi", "kolme", "neljä", "viisi"):
            exam = parse_structure(CHOICES)
            shuffle_answer_options(exam, secret)
            orders.add(tuple(option_texts(exam.answers[0])))
        assert len(orders) > 1

    def test_order_follows_hash(self, parse_structure):
        import hashlib

        exam = parse_structure(CHOICES)
        shuffle_answer_options(exam, "salaisuus")

        labels = ["1", "ei vastausta", "2", "3", "4", "5", "6"]
        key = "77"  # option count + question-id
        expected = sorted(
            labels,
            key=lambda label: hashlib.sha256(
                (key + str(labels.index(label)) + "salaisuus").encode("utf-8")
            ).hexdigest(),
        )
        expected.remove("ei vastausta")
        expected.append("ei vastausta")
        assert option_texts(exam.answers[0]) == expected
