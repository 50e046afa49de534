"""Thin urllib client for the response store HTTP API."""

import asyncio
import json
import logging
import os
from http.client import HTTPException
from typing import Any, Mapping
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from pydantic import ValidationError

from ..engines.survey.errors import TransportError
from ..engines.survey.schemas import SubmitResponseResult, decode_answer_set

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:4000"
REQUEST_TIMEOUT_SECONDS = 20


def resolve_api_url() -> str:
    return os.environ.get("SURVEY_API_URL", "").strip() or DEFAULT_API_URL


def _request_json(method: str, url: str, body: Mapping[str, Any] | None = None) -> Any:
    data = None
    headers = {"Accept": "application/json"}
    if body is not None:
        data = json.dumps(dict(body)).encode("utf-8")
        headers["Content-Type"] = "application/json"
    request = Request(url, data=data, headers=headers, method=method)
    try:
        with urlopen(request, timeout=REQUEST_TIMEOUT_SECONDS) as response:  # noqa: S310
            raw = response.read()
    except HTTPError as err:
        raise TransportError(f"HTTP {err.code}", status=err.code) from err
    except (URLError, HTTPException, TimeoutError, OSError) as err:
        reason = getattr(err, "reason", None) or err
        raise TransportError(f"Network error: {reason}") from err
    try:
        return json.loads(raw.decode("utf-8"))
    except ValueError as err:
        raise TransportError("Response body is not valid JSON") from err


class SurveyApiClient:
    def __init__(self, base_url: str | None = None):
        self.base_url = (base_url or resolve_api_url()).rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def submit_response(self, answers: Mapping[str, str]) -> int:
        payload = await asyncio.to_thread(_request_json, "POST", self._url("/api/responses"), answers)
        try:
            result = SubmitResponseResult.model_validate(payload)
        except ValidationError as err:
            raise TransportError("Response store returned no id") from err
        logger.info("Stored survey response id=%s", result.id)
        return result.id

    async def fetch_response(self, response_id: int) -> dict[str, str]:
        payload = await asyncio.to_thread(_request_json, "GET", self._url(f"/api/responses/{int(response_id)}"))
        return decode_answer_set(payload)
