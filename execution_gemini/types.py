"""Shared execution interface types.

Provider-agnostic request and response shapes re-exported by this package
so hosts can build requests without importing a separate interface module.

Example:
    >>> from execution_gemini.types import Message, Request
    >>> request = Request(messages=[Message(role="user", content="Hello")], model="gemini-1.5-pro")
    >>> request.messages[0].content
    'Hello'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from execution_gemini.errors import ErrorKind, GeminiError

Model = str

Role = Literal["user", "assistant", "system", "developer", "tool"]


class Message(BaseModel):
    """Single role-tagged chat message supplied by the caller.

    Example:
        >>> msg = Message(role="user", content=["Hello", "World"], name="test-user")
        >>> msg.name
        'test-user'
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str | list[str] | None = None
    name: str | None = None


class ExecutionOptions(BaseModel):
    """Per-call execution options.

    ``timeout`` is in milliseconds. ``retries`` is accepted for interface
    compatibility; the Gemini provider makes exactly one outbound call.

    Example:
        >>> opts = ExecutionOptions(api_key="test-key", temperature=0.7)
        >>> opts.max_tokens is None
        True
    """

    api_key: str | None = None
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0)
    max_tokens: int | None = Field(default=None, ge=1)
    timeout: int | None = Field(default=None, ge=1)
    retries: int | None = Field(default=None, ge=0)


@dataclass
class Request:
    """Execution request: ordered messages plus target model.

    ``validator`` and ``add_message`` belong to the shared interface and
    are not consulted by the Gemini provider.
    """

    messages: list[Message]
    model: Model
    response_format: dict[str, Any] | None = None
    validator: Any = None

    def add_message(self, message: Message) -> None:
        """Append a message to the conversation."""
        self.messages.append(message)


@dataclass
class TokenUsage:
    """Token counts reported by the remote API."""

    input_tokens: int
    output_tokens: int


@dataclass
class ToolCallFunction:
    name: str
    arguments: str


@dataclass
class ToolCall:
    id: str
    function: ToolCallFunction
    type: Literal["function"] = "function"


@dataclass
class ProviderResponse:
    """Provider-agnostic result of a single execution.

    Example:
        >>> response = ProviderResponse(
        ...     content="Hello!",
        ...     model="gemini-1.5-pro",
        ...     usage=TokenUsage(input_tokens=10, output_tokens=5),
        ... )
        >>> response.usage.input_tokens
        10
    """

    content: str
    model: str
    usage: TokenUsage | None = None
    tool_calls: list[ToolCall] | None = None


@dataclass
class ExecutionResult:
    """Outcome of a non-raising execution.

    Exactly one of ``response`` and ``error`` is set.
    """

    response: ProviderResponse | None = None
    error: GeminiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None


@runtime_checkable
class Provider(Protocol):
    """Capability contract implemented by execution providers."""

    name: str

    async def execute(
        self, request: Request, options: ExecutionOptions | None = None
    ) -> ProviderResponse: ...

    def supports_model(self, model: Model | None) -> bool: ...
