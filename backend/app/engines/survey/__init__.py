"""Survey form engine, validation rules, draft persistence and review rendering."""

from .catalog import QUESTIONS, Question, QuestionType
from .draft_store import DRAFT_KEY, DraftStore, FileDraftStore, MemoryDraftStore
from .errors import (
    CorruptDraftError,
    CorruptStoredResponseError,
    SurveyError,
    TransportError,
    UnknownQuestionError,
)
from .form_engine import FormEngine, FormSession

__all__ = [
    "QUESTIONS",
    "Question",
    "QuestionType",
    "DRAFT_KEY",
    "DraftStore",
    "FileDraftStore",
    "MemoryDraftStore",
    "FormEngine",
    "FormSession",
    "SurveyError",
    "UnknownQuestionError",
    "TransportError",
    "CorruptDraftError",
    "CorruptStoredResponseError",
]
