"""Message partitioning for Gemini chat dispatch.

Splits a request's messages into a system preamble and a turn history,
then decides whether the call goes out as a single prompt or as a chat
session seeded with history.

Example:
    >>> from execution_gemini.types import Message
    >>> partition = partition_messages([
    ...     Message(role="system", content="S"),
    ...     Message(role="user", content="U1"),
    ... ])
    >>> partition.preamble
    'S'
    >>> plan_dispatch(partition).prompt
    'U1'
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from execution_gemini.types import Message

logger = logging.getLogger(__name__)

PREAMBLE_ROLES = frozenset({"system", "developer"})

# Gemini rejects an empty prompt
EMPTY_PROMPT = " "

TurnRole = Literal["user", "model"]


@dataclass(frozen=True)
class Turn:
    """One entry of Gemini chat history."""

    role: TurnRole
    text: str


@dataclass
class MessagePartition:
    """Result of splitting request messages.

    Attributes:
        preamble: Joined system/developer content, empty if none.
        turns: User/model turns in original order.
        last_prompt: Content of the most recent user message.
    """

    preamble: str = ""
    turns: list[Turn] = field(default_factory=list)
    last_prompt: str = ""


@dataclass
class DispatchPlan:
    """How a partition is sent to Gemini.

    ``multi_turn`` plans carry ``history`` and ``message``; single-shot
    plans carry ``prompt`` only.
    """

    multi_turn: bool
    history: list[Turn] = field(default_factory=list)
    message: str = ""
    prompt: str = ""


def content_to_text(content: str | list[str] | None) -> str:
    """Return text content as-is, JSON-stringify everything else."""
    if isinstance(content, str):
        return content
    return json.dumps(content, separators=(",", ":"), ensure_ascii=False)


def partition_messages(messages: Sequence[Message]) -> MessagePartition:
    """Split messages into preamble and turns.

    Tool messages become user turns, since Gemini history has no
    distinct shape for free-text tool results.

    Args:
        messages: Request messages; not modified.

    Returns:
        MessagePartition with preamble, turns and last user prompt.
    """
    preamble = ""
    turns: list[Turn] = []
    last_prompt = ""

    for msg in messages:
        text = content_to_text(msg.content)

        if msg.role in PREAMBLE_ROLES:
            preamble += text + "\n\n"
            continue

        if msg.role == "user":
            last_prompt = text
        elif msg.role == "tool":
            logger.debug("Folding tool message into user turn (name=%s)", msg.name)

        turns.append(Turn(role="model" if msg.role == "assistant" else "user", text=text))

    return MessagePartition(preamble=preamble.strip(), turns=turns, last_prompt=last_prompt)


def plan_dispatch(partition: MessagePartition) -> DispatchPlan:
    """Choose single-shot or multi-turn dispatch by turn count.

    Args:
        partition: Partitioned request messages.

    Returns:
        DispatchPlan for the outbound call.
    """
    if len(partition.turns) > 1:
        *history, last = partition.turns
        return DispatchPlan(multi_turn=True, history=history, message=last.text)

    return DispatchPlan(multi_turn=False, prompt=partition.last_prompt or EMPTY_PROMPT)
