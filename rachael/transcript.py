from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Union

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from rachael.core.models import ChatTurn, Role
from rachael.core.modes import ConversationMode, get_profile


TurnLike = Union[ChatTurn, Mapping[str, Any]]

_WIRE_ROLES = {"system": "system", "human": "user", "ai": "assistant"}


def build_prompt(mode: ConversationMode) -> ChatPromptTemplate:
    profile = get_profile(mode)
    return ChatPromptTemplate.from_messages(
        [
            SystemMessage(content=profile.directive),
            MessagesPlaceholder("chat_history", optional=True),
            ("human", "{input}"),
        ]
    )


def validate_history(history: Sequence[TurnLike]) -> List[ChatTurn]:
    """Coerce client-supplied turns into ``ChatTurn`` objects.

    Raises ``ValueError`` for entries without a valid role/content and for
    system turns, which only the assembler may inject.
    """
    turns: List[ChatTurn] = []
    for index, item in enumerate(history or []):
        turn = item if isinstance(item, ChatTurn) else ChatTurn.model_validate(item)
        if turn.role == Role.SYSTEM:
            raise ValueError(f"history[{index}] must not be a system turn")
        turns.append(turn)
    return turns


def to_lc_messages(history: Sequence[ChatTurn]) -> List[BaseMessage]:
    # Every turn is kept, in order; the transcript is never trimmed here.
    messages: List[BaseMessage] = []
    for turn in history:
        if turn.role == Role.USER:
            messages.append(HumanMessage(content=turn.content))
        elif turn.role == Role.ASSISTANT:
            messages.append(AIMessage(content=turn.content))
        else:
            raise ValueError(f"Unsupported history role: {turn.role.value}")
    return messages


def assemble(
    message: str, history: Sequence[TurnLike], mode: ConversationMode
) -> List[BaseMessage]:
    """Build [system directive, *history, user message] for the given mode."""
    turns = validate_history(history)
    prompt = build_prompt(mode)
    return prompt.format_messages(chat_history=to_lc_messages(turns), input=message)


def to_wire_messages(messages: Sequence[BaseMessage]) -> List[Dict[str, str]]:
    wire: List[Dict[str, str]] = []
    for msg in messages:
        role = _WIRE_ROLES.get(msg.type)
        if role is None:
            raise ValueError(f"Cannot send message of type {msg.type!r} upstream")
        wire.append({"role": role, "content": msg.content})
    return wire
