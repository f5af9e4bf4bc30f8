from __future__ import annotations

import mimetypes
import time
from pathlib import Path
from typing import Any, Optional, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .config import Settings
from .schemas import (
    Difficulty,
    QuestionHistoryItem,
    QuestionSolution,
    SimplifiedExplanation,
    SubjectList,
    TopicChatReply,
    TopicLesson,
)

M = TypeVar("M", bound=BaseModel)


class ApiError(RuntimeError):
    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiAuthError(ApiError):
    """The access token is missing, expired or not allowed for this resource."""


class ApiResponseError(ApiError):
    """The backend answered, but not with something we can use."""


def _error_detail(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return (resp.text or "").strip()[:300]
    if isinstance(data, dict) and data.get("detail"):
        return str(data["detail"])
    return str(data)[:300]


def _parse(model: type[M], payload: Any) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ApiResponseError(f"Unexpected {model.__name__} payload: {e}") from e


def _parse_list(model: type[M], payload: Any) -> list[M]:
    if not isinstance(payload, list):
        raise ApiResponseError(f"Expected a list of {model.__name__}, got {type(payload).__name__}")
    return [_parse(model, item) for item in payload]


class TutorApi:
    """Client for the tutoring backend endpoints that return renderable text."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self._settings = settings
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if settings.access_token:
            self._session.headers.update({"Authorization": f"Bearer {settings.access_token}"})

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict] = None,
        data: Optional[dict] = None,
        files: Optional[dict] = None,
    ) -> Any:
        url = f"{self._settings.api_url}{path}"
        last_err: Optional[ApiError] = None
        for attempt in range(self._settings.max_retries + 1):
            try:
                resp = self._session.request(
                    method,
                    url,
                    json=json,
                    params=params,
                    data=data,
                    files=files,
                    timeout=self._settings.timeout_s,
                )
            except requests.RequestException as e:
                last_err = ApiError(f"{method} {path} failed: {e}")
            else:
                status = resp.status_code
                if status in (401, 403):
                    raise ApiAuthError(f"{method} {path}: {_error_detail(resp)}", status_code=status)
                if status >= 500:
                    last_err = ApiError(f"{method} {path}: server error {status}", status_code=status)
                elif status >= 400:
                    raise ApiResponseError(f"{method} {path}: {_error_detail(resp)}", status_code=status)
                else:
                    try:
                        return resp.json()
                    except ValueError as e:
                        raise ApiResponseError(f"{method} {path}: response is not JSON", status_code=status) from e

            if attempt >= self._settings.max_retries:
                break
            print(f"[API] {last_err}; retry {attempt + 1}/{self._settings.max_retries}", flush=True)
            time.sleep(0.6 * (attempt + 1))
        raise last_err or ApiError(f"{method} {path} failed")

    # Questions

    def solve_question(self, question_text: str, subject: Optional[str] = None) -> QuestionSolution:
        body: dict[str, Any] = {"question_text": question_text}
        if subject:
            body["subject"] = subject
        return _parse(QuestionSolution, self._request("POST", "/api/questions/solve", json=body))

    def solve_question_image(
        self,
        image_path: str | Path,
        subject: Optional[str] = None,
        additional_context: Optional[str] = None,
    ) -> QuestionSolution:
        path = Path(image_path)
        return self.solve_question_image_bytes(path.name, path.read_bytes(), subject, additional_context)

    def solve_question_image_bytes(
        self,
        filename: str,
        raw: bytes,
        subject: Optional[str] = None,
        additional_context: Optional[str] = None,
    ) -> QuestionSolution:
        """Same as `solve_question_image`, for uploads that only exist in memory."""
        mime, _ = mimetypes.guess_type(filename)
        form: dict[str, str] = {}
        if subject:
            form["subject"] = subject
        if additional_context:
            form["additional_context"] = additional_context
        payload = self._request(
            "POST",
            "/api/questions/solve-with-image",
            data=form,
            files={"image": (filename, raw, mime or "application/octet-stream")},
        )
        return _parse(QuestionSolution, payload)

    def question_history(self, limit: int = 50, offset: int = 0, subject: Optional[str] = None) -> list[QuestionHistoryItem]:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if subject:
            params["subject"] = subject
        return _parse_list(QuestionHistoryItem, self._request("GET", "/api/questions/history", params=params))

    def question_detail(self, question_id: int) -> QuestionSolution:
        return _parse(QuestionSolution, self._request("GET", f"/api/questions/history/{int(question_id)}"))

    # Topics

    def list_subjects(self) -> SubjectList:
        return _parse(SubjectList, self._request("GET", "/api/topics/subjects"))

    def teach_topic(self, subject: str, topic: str, difficulty: Difficulty = "medium") -> TopicLesson:
        body = {"subject": subject, "topic": topic, "difficulty_level": difficulty}
        return _parse(TopicLesson, self._request("POST", "/api/topics/teach", json=body))

    def simplify(self, topic: str, original_explanation: str) -> SimplifiedExplanation:
        body = {"topic": topic, "original_explanation": original_explanation}
        return _parse(SimplifiedExplanation, self._request("POST", "/api/topics/simplify", json=body))

    def topic_chat(self, lesson_id: int, message: str) -> TopicChatReply:
        body = {"lesson_id": int(lesson_id), "message": message}
        return _parse(TopicChatReply, self._request("POST", "/api/topics/chat", json=body))
