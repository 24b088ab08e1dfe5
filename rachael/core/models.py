from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """One message of the transcript the client keeps and resends."""

    role: Role = Field(..., description="'system', 'user' or 'assistant'")
    content: str
