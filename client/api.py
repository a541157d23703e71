# client/api.py
import logging
from typing import Dict, List, Optional

import httpx
from pydantic import TypeAdapter

from .models import Attempt, ExamQuestion, ExamResult, ExamSettings, Session

logger = logging.getLogger(__name__)


class ExamClientError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class BearerAuth(httpx.Auth):
    """Attach a bearer token to the single request it is passed with."""

    def __init__(self, token: str):
        self.token = token

    def auth_flow(self, request):
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class ExamClient:
    """
    Thin HTTP client for the exam portal API.

    Credentials are never stored on the underlying httpx client; every
    authenticated call takes the Session it should run as.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", timeout: float = 10.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, session: Optional[Session] = None, **kwargs):
        auth = BearerAuth(session.token) if session else None
        response = self._http.request(method, path, auth=auth, **kwargs)
        if response.is_error:
            raise ExamClientError(response.status_code, self._error_message(response))
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        if response.status_code == 404:
            return "API endpoint not found. Is the exam server running at the configured URL?"
        try:
            detail = response.json().get("detail")
        except (ValueError, AttributeError):
            detail = None
        if isinstance(detail, str):
            return detail
        return response.reason_phrase or "Request failed"

    def register(self, username: str, email: str, password: str) -> Session:
        data = self._request("POST", "/api/auth/register",
                             json={"username": username, "email": email, "password": password})
        return Session.model_validate(data)

    def login(self, email: str, password: str) -> Session:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return Session.model_validate(data)

    def me(self, session: Session) -> Session:
        data = self._request("GET", "/api/auth/me", session=session)
        return Session(token=session.token, user=data["user"])

    def settings(self) -> ExamSettings:
        return ExamSettings.model_validate(self._request("GET", "/api/exam/settings"))

    def fetch_questions(self, session: Session, limit: Optional[int] = None) -> List[ExamQuestion]:
        params = {"limit": limit} if limit else None
        data = self._request("GET", "/api/exam/questions", session=session, params=params)
        return TypeAdapter(List[ExamQuestion]).validate_python(data.get("questions", []))

    def submit(self, session: Session, answers: Dict[str, str]) -> ExamResult:
        payload = {
            "answers": [
                {"questionId": question_id, "selectedOptionId": option_id}
                for question_id, option_id in answers.items()
            ]
        }
        logger.info(f"Submitting {len(payload['answers'])} answers")
        return ExamResult.model_validate(self._request("POST", "/api/exam/submit", session=session, json=payload))

    def attempts(self, session: Session) -> List[Attempt]:
        data = self._request("GET", "/api/exam/attempts", session=session)
        return TypeAdapter(List[Attempt]).validate_python(data.get("attempts", []))

    def seed(self) -> dict:
        return self._request("POST", "/api/exam/seed-questions")
