from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from . import rules
from .errors import CorruptStoredResponseError, TransportError

LOAD_FAILED_ERROR = "Failed to load response."


class ResponseFetcher(Protocol):
    async def fetch_response(self, response_id: int) -> dict[str, str]: ...


@dataclass
class ReviewResult:
    response_id: int
    answers: Optional[dict[str, str]] = None
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def format_gender(answers: Mapping[str, str]) -> str:
    gender = answers.get(rules.GENDER_FIELD, "")
    if gender.lower() != rules.GENDER_OTHER_VALUE.lower():
        return gender
    other = answers.get(rules.GENDER_OTHER_FIELD, "")
    return f"Other — {other}" if other else "Other"


def render_review(answers: Mapping[str, str]) -> str:
    lines = [
        "Thank you!",
        "Your responses are below.",
        "",
        f"Age: {answers.get(rules.AGE_FIELD, '')}",
        f"Gender: {format_gender(answers)}",
        "Short Bio:",
        answers.get(rules.BIO_FIELD, ""),
    ]
    return "\n".join(lines)


async def load_review(fetcher: ResponseFetcher, response_id: int) -> ReviewResult:
    """Fetch a stored response and render it. Failures are returned, never raised."""
    try:
        answers = await fetcher.fetch_response(response_id)
    except (TransportError, CorruptStoredResponseError) as err:
        return ReviewResult(response_id=response_id, error=str(err) or LOAD_FAILED_ERROR)
    return ReviewResult(response_id=response_id, answers=answers, text=render_review(answers))
