from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from langchain_core.messages import BaseMessage

from rachael.core.modes import ConversationMode, get_profile
from rachael.transcript import to_wire_messages


logger = logging.getLogger("rachael")


class CompletionError(RuntimeError):
    """Raised for any failed upstream chat-completion call."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CompletionGateway:
    """Relays an assembled conversation to an OpenAI-style completions endpoint.

    Holds only immutable configuration. Every call opens its own client, makes
    exactly one request and never retries.
    """

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str,
        model: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def build_body(
        self, conversation: Sequence[BaseMessage], mode: ConversationMode
    ) -> Dict[str, Any]:
        params = get_profile(mode).parameters
        return {
            "model": self.model,
            "messages": to_wire_messages(conversation),
            **params.as_dict(),
        }

    def complete(
        self, conversation: Sequence[BaseMessage], mode: ConversationMode
    ) -> Dict[str, Any]:
        if not self.api_key:
            raise CompletionError("Upstream API key is not configured")

        body = self.build_body(conversation, mode)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.endpoint, json=body, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            detail = " ".join(exc.response.text.split())[:500]
            raise CompletionError(
                f"Chat completion API returned {status}: {detail}", status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            raise CompletionError(f"Chat completion API call failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise CompletionError(
                f"Chat completion API returned a non-JSON body: {exc}",
                status_code=response.status_code,
            ) from exc

        logger.info("AI response: %s", data)
        return data


def extract_completion_text(body: Any) -> str:
    """Return the first choice's message content from a completion body."""
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise CompletionError(f"Completion body has no message content: {exc!r}") from exc
    if not isinstance(content, str):
        raise CompletionError("Completion message content is not text")
    return content
