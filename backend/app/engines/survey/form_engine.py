"""Single-question-at-a-time survey form state machine.

The engine owns one :class:`FormSession`. Every mutation writes the answer
set back to the injected draft store; validity is recomputed on demand from
the answers, while ``touched`` only gates which errors are surfaced.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from . import rules
from .catalog import QUESTIONS, Question, get_question
from .draft_store import AnswerSet, DraftStore
from .errors import TransportError, UnknownQuestionError

logger = logging.getLogger(__name__)

AGE_ERROR = "Age must be greater than 0."
BIO_LIMIT_ERROR = f"Bio must be ≤ {rules.BIO_CHAR_LIMIT} characters."
INCOMPLETE_ERROR = "Please complete all fields."
GENDER_OTHER_ERROR = "Please specify your gender."
REQUIRED_ERROR = "This field is required."
SUBMIT_FAILED_ERROR = "Submission failed"


class ResponseSubmitter(Protocol):
    async def submit_response(self, answers: AnswerSet) -> int: ...


@dataclass
class FormSession:
    answers: AnswerSet = field(default_factory=dict)
    current_index: int = 0
    touched: set[str] = field(default_factory=set)
    submitting: bool = False
    error: Optional[str] = None


class FormEngine:
    def __init__(
        self,
        draft_store: DraftStore,
        submitter: ResponseSubmitter,
        catalog: Sequence[Question] = QUESTIONS,
    ):
        if not catalog:
            raise ValueError("FormEngine needs at least one question")
        self.catalog = tuple(catalog)
        self.draft_store = draft_store
        self.submitter = submitter
        self.session = FormSession(answers=draft_store.load())

    @property
    def total(self) -> int:
        return len(self.catalog)

    @property
    def current_question(self) -> Question:
        return self.catalog[self.session.current_index]

    @property
    def is_last_step(self) -> bool:
        return self.session.current_index >= self.total - 1

    def get(self, field_id: str) -> str:
        return self.session.answers.get(field_id, "")

    def _autosave(self) -> None:
        self.draft_store.save(self.session.answers)

    # -- mutations -----------------------------------------------------

    def set_answer(self, question_id: str, raw_value: str) -> None:
        if get_question(question_id, self.catalog) is None:
            raise UnknownQuestionError(question_id)
        self.session.answers = rules.apply_answer(self.session.answers, question_id, raw_value)
        self._autosave()

    def set_gender_other(self, raw_value: str) -> None:
        self.session.answers = {**self.session.answers, rules.GENDER_OTHER_FIELD: raw_value}
        self._autosave()

    def mark_touched(self, field_id: str) -> None:
        self.session.touched.add(field_id)

    def _touch_with_dependents(self, question_id: str) -> None:
        self.session.touched.add(question_id)
        self.session.touched.update(rules.dependent_fields(question_id, self.session.answers))

    # -- validation ----------------------------------------------------

    def is_question_valid(self, question: Question) -> bool:
        return rules.is_answer_valid(question.id, self.session.answers)

    def is_form_valid(self) -> bool:
        return all(self.is_question_valid(question) for question in self.catalog)

    def completed_count(self) -> int:
        return sum(1 for question in self.catalog if self.is_question_valid(question))

    def completion_fraction(self) -> float:
        return self.completed_count() / self.total

    def step_label(self) -> str:
        return f"Question {self.session.current_index + 1} of {self.total}"

    def bio_counter(self) -> str:
        return f"{rules.count_non_whitespace(self.get(rules.BIO_FIELD))}/{rules.BIO_CHAR_LIMIT}"

    def bio_near_limit(self) -> bool:
        count = rules.count_non_whitespace(self.get(rules.BIO_FIELD))
        return count >= int(rules.BIO_CHAR_LIMIT * rules.BIO_NEAR_LIMIT_RATIO)

    def field_error(self, question: Question) -> Optional[str]:
        """User-facing error for ``question``, shown only once it was touched or a submit failed."""
        session = self.session
        surfaced = question.id in session.touched or bool(session.error)
        if not surfaced or self.is_question_valid(question):
            return None
        if question.id == rules.AGE_FIELD:
            return AGE_ERROR
        if (
            question.id == rules.GENDER_FIELD
            and rules.requires_gender_other(session.answers)
            and not rules.is_filled(self.get(rules.GENDER_OTHER_FIELD))
        ):
            return GENDER_OTHER_ERROR
        return REQUIRED_ERROR

    # -- navigation ----------------------------------------------------

    def advance(self) -> bool:
        question = self.current_question
        if not self.is_question_valid(question):
            self._touch_with_dependents(question.id)
            return False
        self.session.current_index = min(self.session.current_index + 1, self.total - 1)
        return True

    def retreat(self) -> None:
        self.session.current_index = max(self.session.current_index - 1, 0)

    # -- submission ----------------------------------------------------

    def _precheck(self) -> bool:
        session = self.session
        has_age = get_question(rules.AGE_FIELD, self.catalog) is not None
        has_bio = get_question(rules.BIO_FIELD, self.catalog) is not None

        if has_age and not rules.is_age_positive(self.get(rules.AGE_FIELD)):
            session.error = AGE_ERROR
            session.touched.add(rules.AGE_FIELD)
            return False

        if has_bio and not rules.is_bio_within_limit(self.get(rules.BIO_FIELD)):
            session.error = BIO_LIMIT_ERROR
            session.touched.add(rules.BIO_FIELD)
            return False

        if not self.is_form_valid():
            session.error = INCOMPLETE_ERROR
            for question in self.catalog:
                self._touch_with_dependents(question.id)
            return False
        return True

    async def submit(self) -> Optional[int]:
        """Submit the answer set; returns the stored response id, or None on failure."""
        session = self.session
        if session.submitting:
            return None
        if not self._precheck():
            logger.info("Submission blocked by validation: %s", session.error)
            return None

        session.error = None
        session.submitting = True
        try:
            response_id = await self.submitter.submit_response(dict(session.answers))
        except TransportError as err:
            session.error = str(err) or SUBMIT_FAILED_ERROR
            logger.warning("Survey submission failed: %s", session.error)
            return None
        finally:
            session.submitting = False

        self.draft_store.clear()
        logger.info("Survey submitted as response %s", response_id)
        return response_id

    def reset_draft(self) -> None:
        self.session.answers = {}
        self.session.touched = set()
        self.session.current_index = 0
        self.session.error = None
        self.draft_store.clear()
