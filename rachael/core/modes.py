from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from rachael.core.prompt import INTERVIEW_DIRECTIVE, SUMMARY_DIRECTIVE


TOP_P = 0.7
MAX_TOKENS = 1024


class ConversationMode(str, Enum):
    INTERVIEW = "interview"
    SUMMARY = "summary"

    @classmethod
    def from_flag(cls, is_summary_request: Optional[bool]) -> "ConversationMode":
        return cls.SUMMARY if is_summary_request else cls.INTERVIEW


@dataclass(frozen=True)
class GenerationParameters:
    temperature: float
    top_p: float = TOP_P
    max_tokens: int = MAX_TOKENS

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ModeProfile:
    directive: str
    parameters: GenerationParameters


# Summaries run cooler than interviews so the written report stays focused.
MODE_PROFILES: Dict[ConversationMode, ModeProfile] = {
    ConversationMode.INTERVIEW: ModeProfile(
        directive=INTERVIEW_DIRECTIVE,
        parameters=GenerationParameters(temperature=0.7),
    ),
    ConversationMode.SUMMARY: ModeProfile(
        directive=SUMMARY_DIRECTIVE,
        parameters=GenerationParameters(temperature=0.3),
    ),
}


def get_profile(mode: ConversationMode) -> ModeProfile:
    return MODE_PROFILES[ConversationMode(mode)]
