from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional


class QuestionType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"


@dataclass(frozen=True)
class Question:
    id: str
    title: str
    type: QuestionType
    description: Optional[str] = None
    options: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Question id must not be empty")
        if self.type is QuestionType.SELECT and not self.options:
            raise ValueError(f"Select question {self.id!r} requires options")
        if self.type is not QuestionType.SELECT and self.options:
            raise ValueError(f"Only select questions may define options ({self.id!r})")


def build_catalog(questions: Iterable[Question]) -> tuple[Question, ...]:
    catalog = tuple(questions)
    if not catalog:
        raise ValueError("A catalog needs at least one question")
    seen: set[str] = set()
    for question in catalog:
        if question.id in seen:
            raise ValueError(f"Duplicate question id: {question.id!r}")
        seen.add(question.id)
    return catalog


QUESTIONS: tuple[Question, ...] = build_catalog(
    [
        Question(id="age", title="Age", description="How old are you?", type=QuestionType.NUMBER),
        Question(id="gender", title="Gender", type=QuestionType.SELECT, options=("Male", "Female", "Other")),
        Question(id="bio", title="Short Bio", description="Tell us about yourself.", type=QuestionType.TEXT),
    ]
)


def get_question(question_id: str, catalog: Iterable[Question] = QUESTIONS) -> Optional[Question]:
    for question in catalog:
        if question.id == question_id:
            return question
    return None
