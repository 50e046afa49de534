"""Per-question validation rules and field transforms.

Question ids with special handling:

    age     finite number, 0 < n <= AGE_MAX
    bio     0 < non-whitespace characters <= BIO_CHAR_LIMIT, capped on input
    gender  non-empty selection; "Other" additionally requires genderOther
"""

import math
import re
from typing import Mapping, Optional

AGE_FIELD = "age"
BIO_FIELD = "bio"
GENDER_FIELD = "gender"
GENDER_OTHER_FIELD = "genderOther"
GENDER_OTHER_VALUE = "Other"

AGE_MAX = 120
BIO_CHAR_LIMIT = 500
BIO_NEAR_LIMIT_RATIO = 0.9

_WHITESPACE_RE = re.compile(r"\s")


def count_non_whitespace(text: str) -> int:
    return len(_WHITESPACE_RE.sub("", text))


def cap_non_whitespace(text: str, limit: int = BIO_CHAR_LIMIT) -> str:
    """Keep at most ``limit`` non-whitespace characters, preserving all whitespace."""
    used = 0
    kept: list[str] = []
    for ch in text:
        if ch.isspace():
            kept.append(ch)
            continue
        if used >= limit:
            continue
        kept.append(ch)
        used += 1
    return "".join(kept)


def parse_number(raw: str) -> Optional[float]:
    """Lenient numeric parse: blank text counts as 0, junk yields None."""
    text = raw.strip()
    if not text:
        return 0.0
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def is_filled(value: str) -> bool:
    return value.strip() != ""


def is_age_valid(value: str) -> bool:
    number = parse_number(value)
    return number is not None and math.isfinite(number) and 0 < number <= AGE_MAX


def is_age_positive(value: str) -> bool:
    number = parse_number(value)
    return number is not None and math.isfinite(number) and number > 0


def is_bio_valid(value: str, limit: int = BIO_CHAR_LIMIT) -> bool:
    count = count_non_whitespace(value)
    return 0 < count <= limit


def is_bio_within_limit(value: str, limit: int = BIO_CHAR_LIMIT) -> bool:
    return count_non_whitespace(value) <= limit


def requires_gender_other(answers: Mapping[str, str]) -> bool:
    """Derived-field rule: genderOther is required exactly when gender is "Other"."""
    return answers.get(GENDER_FIELD, "") == GENDER_OTHER_VALUE


def is_gender_valid(answers: Mapping[str, str]) -> bool:
    if not is_filled(answers.get(GENDER_FIELD, "")):
        return False
    if requires_gender_other(answers):
        return is_filled(answers.get(GENDER_OTHER_FIELD, ""))
    return True


def is_answer_valid(question_id: str, answers: Mapping[str, str]) -> bool:
    value = answers.get(question_id, "")
    if question_id == AGE_FIELD:
        return is_age_valid(value)
    if question_id == BIO_FIELD:
        return is_bio_valid(value)
    if question_id == GENDER_FIELD:
        return is_gender_valid(answers)
    return is_filled(value)


def apply_answer(answers: Mapping[str, str], question_id: str, raw_value: str) -> dict[str, str]:
    """Return a new answer set with ``raw_value`` written under field-specific transforms."""
    updated = dict(answers)
    if question_id == BIO_FIELD:
        updated[BIO_FIELD] = cap_non_whitespace(raw_value)
        return updated
    updated[question_id] = raw_value
    if question_id == GENDER_FIELD and raw_value != GENDER_OTHER_VALUE:
        updated.pop(GENDER_OTHER_FIELD, None)
    return updated


def dependent_fields(question_id: str, answers: Mapping[str, str]) -> list[str]:
    """Fields that are surfaced together with ``question_id`` when it is touched."""
    if question_id == GENDER_FIELD and requires_gender_other(answers):
        return [GENDER_OTHER_FIELD]
    return []
