from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from rachael.core.models import ChatTurn, Role
from rachael.core.prompt import GREETING, SUMMARY_REQUEST_MESSAGE
from rachael.gateway import CompletionError, extract_completion_text


CHAT_PATH = "/chat-with-rachael"


class InterviewError(RuntimeError):
    pass


class InterviewSession:
    """Client side of a Rachael interview.

    The service keeps no conversation state, so the session owns the
    transcript and resends it with every message. Once the summary has been
    produced the session is closed for further input.
    """

    greeting = GREETING

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._transport = transport
        self.history: List[ChatTurn] = []
        self.completed = False
        self.summary: Optional[str] = None

    def _post(self, payload: Dict[str, Any]) -> str:
        try:
            with httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers=self.headers,
            ) as client:
                response = client.post(CHAT_PATH, json=payload)
                data = response.json()
        except httpx.HTTPError as exc:
            raise InterviewError(f"Could not reach Rachael: {exc}") from exc
        except ValueError as exc:
            raise InterviewError(f"Rachael returned a non-JSON response: {exc}") from exc

        if response.is_error:
            error = data.get("error") if isinstance(data, dict) else None
            raise InterviewError(error or f"Rachael request failed with {response.status_code}")
        try:
            return extract_completion_text(data)
        except CompletionError as exc:
            raise InterviewError(str(exc)) from exc

    def _history_payload(self) -> List[Dict[str, str]]:
        return [turn.model_dump(mode="json") for turn in self.history]

    def send(self, text: str) -> str:
        if self.completed:
            raise InterviewError("This interview has already been summarized")
        if not text or not text.strip():
            raise InterviewError("Message cannot be empty")

        payload = {"message": text, "history": self._history_payload()}
        # The user's turn stays in the transcript even if the reply fails.
        self.history.append(ChatTurn(role=Role.USER, content=text))
        reply = self._post(payload)
        self.history.append(ChatTurn(role=Role.ASSISTANT, content=reply))
        return reply

    def generate_summary(self) -> str:
        if self.completed and self.summary is not None:
            return self.summary
        if not self.history:
            raise InterviewError(
                "Please have a conversation first before generating a description."
            )

        summary = self._post(
            {
                "message": SUMMARY_REQUEST_MESSAGE,
                "history": self._history_payload(),
                "isSummaryRequest": True,
            }
        )
        self.completed = True
        self.summary = summary
        return summary
