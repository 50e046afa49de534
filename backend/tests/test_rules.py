import sys
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.engines.survey import rules
from app.engines.survey.catalog import QUESTIONS, Question, QuestionType, build_catalog, get_question


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0", False),
        ("1", True),
        ("120", True),
        ("121", False),
        ("-5", False),
        ("", False),
        ("   ", False),
        (" 42 ", True),
        ("abc", False),
        ("inf", False),
        ("nan", False),
        ("30.5", True),
    ],
)
def test_age_rule(value, expected):
    assert rules.is_age_valid(value) is expected


def test_count_non_whitespace_ignores_spaces_tabs_newlines():
    assert rules.count_non_whitespace("ab cd") == 4
    assert rules.count_non_whitespace(" a\tb\nc ") == 3
    assert rules.count_non_whitespace("") == 0


def test_cap_non_whitespace_preserves_whitespace_positions():
    assert rules.cap_non_whitespace("ab cd ef", 3) == "ab c "
    assert rules.cap_non_whitespace("  x  ", 0) == "    "
    assert rules.cap_non_whitespace("short", 10) == "short"


def test_bio_rule_bounds():
    assert rules.is_bio_valid("ab cd") is True
    assert rules.is_bio_valid("   \n") is False
    assert rules.is_bio_valid("x" * 500) is True
    assert rules.is_bio_valid("x" * 501) is False
    assert rules.is_bio_valid(("x " * 500).strip()) is True


def test_gender_derived_rule():
    assert rules.is_gender_valid({}) is False
    assert rules.is_gender_valid({"gender": "Female"}) is True
    assert rules.is_gender_valid({"gender": "Other", "genderOther": ""}) is False
    assert rules.is_gender_valid({"gender": "Other", "genderOther": "   "}) is False
    assert rules.is_gender_valid({"gender": "Other", "genderOther": "Nonbinary"}) is True


def test_apply_answer_clears_gender_other_when_leaving_other():
    answers = {"gender": "Other", "genderOther": "Nonbinary"}
    updated = rules.apply_answer(answers, "gender", "Male")
    assert updated["gender"] == "Male"
    assert "genderOther" not in updated
    assert answers["genderOther"] == "Nonbinary"


def test_apply_answer_keeps_gender_other_when_staying_other():
    updated = rules.apply_answer({"genderOther": "Agender"}, "gender", "Other")
    assert updated["genderOther"] == "Agender"


def test_generic_rule_requires_text_after_trim():
    assert rules.is_answer_valid("city", {"city": "  "}) is False
    assert rules.is_answer_valid("city", {"city": " Oslo "}) is True


def test_default_catalog_shape():
    assert [question.id for question in QUESTIONS] == ["age", "gender", "bio"]
    gender = get_question("gender")
    assert gender is not None
    assert gender.options == ("Male", "Female", "Other")
    assert get_question("missing") is None


def test_select_question_requires_options():
    with pytest.raises(ValueError):
        Question(id="colour", title="Colour", type=QuestionType.SELECT)


def test_catalog_rejects_duplicate_ids():
    question = Question(id="name", title="Name", type=QuestionType.TEXT)
    with pytest.raises(ValueError):
        build_catalog([question, question])
