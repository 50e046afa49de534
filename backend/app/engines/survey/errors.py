"""Error kinds raised across the survey form, draft and transport layers."""


class SurveyError(Exception):
    """Base class for survey errors."""


class UnknownQuestionError(SurveyError, KeyError):
    def __init__(self, question_id: str):
        super().__init__(question_id)
        self.question_id = question_id

    def __str__(self) -> str:
        return f"Unknown question id: {self.question_id!r}"


class TransportError(SurveyError):
    """Non-success HTTP status or network failure talking to the response store."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class CorruptDraftError(SurveyError):
    """A persisted draft could not be decoded. Always recovered as 'no draft'."""


class CorruptStoredResponseError(SurveyError):
    """A stored response payload is not a valid answer set."""
