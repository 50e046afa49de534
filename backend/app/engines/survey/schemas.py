from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import CorruptStoredResponseError

AnswerSetAdapter = TypeAdapter(dict[str, str])


class SubmitResponseResult(BaseModel):
    id: int


def decode_answer_set(raw: Any) -> dict[str, str]:
    """Validate a fetched or stored payload as a string-to-string mapping."""
    try:
        return AnswerSetAdapter.validate_python(raw, strict=True)
    except ValidationError as err:
        raise CorruptStoredResponseError(
            f"Stored response is not a valid answer set ({err.error_count()} errors)"
        ) from err


def decode_answer_set_json(raw: str | bytes) -> dict[str, str]:
    try:
        return AnswerSetAdapter.validate_json(raw, strict=True)
    except ValidationError as err:
        raise CorruptStoredResponseError("Corrupted stored payload") from err
