import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping

from .errors import CorruptDraftError

logger = logging.getLogger(__name__)

DRAFT_KEY = "waterlily_survey_answers_v1"
DEFAULT_DRAFT_DIR = Path(__file__).resolve().parents[3] / "data" / "drafts"

AnswerSet = dict[str, str]


def resolve_draft_dir() -> Path:
    env_value = os.environ.get("SURVEY_DRAFT_DIR", "").strip()
    return Path(env_value).expanduser() if env_value else DEFAULT_DRAFT_DIR


def encode_draft(answers: Mapping[str, str]) -> str:
    return json.dumps(dict(answers), ensure_ascii=False)


def decode_draft(raw: str) -> AnswerSet:
    try:
        data: Any = json.loads(raw)
    except (TypeError, ValueError) as err:
        raise CorruptDraftError(f"Draft is not valid JSON: {err}") from err
    if not isinstance(data, dict):
        raise CorruptDraftError("Draft is not a JSON object")
    if not all(isinstance(key, str) and isinstance(value, str) for key, value in data.items()):
        raise CorruptDraftError("Draft contains non-string entries")
    return data


class DraftStore(ABC):
    """Advisory local slot holding the in-progress answer set.

    ``load`` never raises and ``save`` swallows failures: a form must keep
    working when the slot is missing, unreadable or unwritable.
    """

    def __init__(self, key: str = DRAFT_KEY):
        self.key = key

    @abstractmethod
    def _read(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def _write(self, raw: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def _remove(self) -> None:
        raise NotImplementedError

    def load(self) -> AnswerSet:
        try:
            raw = self._read()
        except Exception:
            logger.warning("Draft slot %s could not be read; starting empty", self.key, exc_info=True)
            return {}
        if raw is None:
            return {}
        try:
            return decode_draft(raw)
        except CorruptDraftError as err:
            logger.warning("Ignoring corrupt draft in slot %s: %s", self.key, err)
            return {}

    def save(self, answers: Mapping[str, str]) -> None:
        try:
            self._write(encode_draft(answers))
        except Exception:
            logger.exception("Failed to save draft to slot %s", self.key)

    def clear(self) -> None:
        try:
            self._remove()
        except Exception:
            logger.exception("Failed to clear draft slot %s", self.key)


class FileDraftStore(DraftStore):
    def __init__(self, directory: str | Path | None = None, key: str = DRAFT_KEY):
        super().__init__(key)
        self.directory = Path(directory) if directory is not None else resolve_draft_dir()

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def _read(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _write(self, raw: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path.write_text(raw, encoding="utf-8")

    def _remove(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryDraftStore(DraftStore):
    def __init__(self, slots: dict[str, str] | None = None, key: str = DRAFT_KEY):
        super().__init__(key)
        self.slots = slots if slots is not None else {}

    def _read(self) -> str | None:
        return self.slots.get(self.key)

    def _write(self, raw: str) -> None:
        self.slots[self.key] = raw

    def _remove(self) -> None:
        self.slots.pop(self.key, None)
