"""Google Gemini provider for LLM execution.

Adapts provider-agnostic execution requests to the Gemini API:
- GeminiProvider: executes requests, probes model support
- Message, Request, ExecutionOptions, ProviderResponse: shared interface types
- init_redaction: credential redaction registry for error output

Example:
    >>> from execution_gemini import GeminiProvider, init_redaction
    >>> provider = GeminiProvider(redactor=init_redaction())
"""

from execution_gemini.config import ConfigError, GeminiSettings, load_settings
from execution_gemini.errors import (
    ErrorKind,
    GeminiError,
    InvalidCredentialError,
    InvalidOptionsError,
    MissingCredentialError,
    RemoteFailureError,
)
from execution_gemini.provider import GeminiProvider, create_gemini_provider
from execution_gemini.redaction import RedactionRegistry, init_redaction
from execution_gemini.schema import SchemaNode, translate_schema
from execution_gemini.types import (
    ExecutionOptions,
    ExecutionResult,
    Message,
    Model,
    Provider,
    ProviderResponse,
    Request,
    TokenUsage,
    ToolCall,
    ToolCallFunction,
)

VERSION = "0.0.1"

__all__ = [
    "VERSION",
    "ConfigError",
    "ErrorKind",
    "ExecutionOptions",
    "ExecutionResult",
    "GeminiError",
    "GeminiProvider",
    "GeminiSettings",
    "InvalidCredentialError",
    "InvalidOptionsError",
    "Message",
    "MissingCredentialError",
    "Model",
    "Provider",
    "ProviderResponse",
    "RedactionRegistry",
    "RemoteFailureError",
    "Request",
    "SchemaNode",
    "TokenUsage",
    "ToolCall",
    "ToolCallFunction",
    "create_gemini_provider",
    "init_redaction",
    "load_settings",
    "translate_schema",
]
