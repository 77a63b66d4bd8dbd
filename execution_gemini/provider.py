"""Google Gemini execution provider.

Executes a normalized request with a single call through the google-genai
SDK and maps the result into a ProviderResponse.

Example:
    >>> from execution_gemini import Message, Request, create_gemini_provider
    >>>
    >>> provider = create_gemini_provider()
    >>> request = Request(
    ...     messages=[
    ...         Message(role="system", content="Answer briefly."),
    ...         Message(role="user", content="What is 2+2?"),
    ...     ],
    ...     model="gemini-1.5-flash",
    ... )
    >>> response = await provider.execute(request)
    >>> response.content
    '4'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from google import genai
from google.genai import types
from pydantic import ValidationError

from execution_gemini.config import GeminiSettings, load_settings
from execution_gemini.errors import (
    PROVIDER_NAME,
    GeminiError,
    InvalidCredentialError,
    InvalidOptionsError,
    MissingCredentialError,
)
from execution_gemini.messages import DispatchPlan, partition_messages, plan_dispatch
from execution_gemini.redaction import GEMINI_KEY_PATTERN, RedactionRegistry, init_redaction
from execution_gemini.schema import build_generation_constraints
from execution_gemini.types import (
    ExecutionOptions,
    ExecutionResult,
    Model,
    ProviderResponse,
    Request,
    TokenUsage,
)

logger = logging.getLogger(__name__)

MODEL_FAMILY_PREFIX = "gemini"

_KEY_SHAPE = re.compile(GEMINI_KEY_PATTERN)

ClientFactory = Callable[[str], genai.Client]


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


class GeminiProvider:
    """Provider for the Gemini generate-content and chat APIs.

    Holds no per-call state, so one instance can serve concurrent calls.

    Example:
        >>> provider = GeminiProvider()
        >>> provider.supports_model("gemini-1.5-pro")
        True
    """

    name = PROVIDER_NAME

    def __init__(
        self,
        api_key: str | None = None,
        settings: GeminiSettings | None = None,
        redactor: RedactionRegistry | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """Create provider instance.

        Args:
            api_key: Key used when call options do not supply one.
            settings: Preloaded settings; read from the environment per call if None.
            redactor: Registry from ``init_redaction()``; a fresh one is built if None.
            client_factory: Builds the SDK client from an API key.
        """
        self._api_key = api_key
        self._settings = settings
        self._redactor = redactor if redactor is not None else init_redaction()
        self._client_factory = client_factory or _default_client_factory

    def supports_model(self, model: Model | None) -> bool:
        """Check if this provider supports a given model."""
        if not model:
            return False
        return model.startswith(MODEL_FAMILY_PREFIX)

    async def execute(
        self,
        request: Request,
        options: ExecutionOptions | Mapping[str, Any] | None = None,
    ) -> ProviderResponse:
        """Execute a request against Gemini.

        Args:
            request: Messages, model and optional response format.
            options: Per-call key, model override and sampling options.

        Returns:
            ProviderResponse with generated text, model and token usage.

        Raises:
            InvalidOptionsError: ``options`` mapping failed validation.
            MissingCredentialError: No non-empty API key available.
            InvalidCredentialError: API key does not have the Gemini key shape.
            RemoteFailureError: The outbound call or response mapping failed.
        """
        options = self._coerce_options(options)
        settings = self._settings or load_settings()
        api_key = self._resolve_api_key(options, settings)
        model_name = options.model or request.model or settings.default_model

        if options.retries:
            logger.debug("Ignoring retries=%d, single attempt only", options.retries)

        try:
            plan, config = self._prepare(request, options)
            logger.debug(
                "Executing request to %s (%s, %d message(s))",
                model_name,
                "multi-turn" if plan.multi_turn else "single-shot",
                len(request.messages),
            )
            response = await self._do_request(api_key, model_name, plan, config)
            result = self._process_response(response, model_name)
        except Exception as e:
            failure = self._redactor.sanitize(e, secrets=(api_key,))
            logger.error(
                "Request failed [%s] %s: %s",
                failure.correlation_id,
                failure.error_type,
                failure.detail,
            )
        else:
            return result

        # Raised outside the handler so the raw error is not chained as context
        raise failure

    async def try_execute(
        self,
        request: Request,
        options: ExecutionOptions | Mapping[str, Any] | None = None,
    ) -> ExecutionResult:
        """Execute a request, returning failures instead of raising them.

        Returns:
            ExecutionResult holding either the response or the classified error.
        """
        try:
            return ExecutionResult(response=await self.execute(request, options))
        except GeminiError as e:
            return ExecutionResult(error=e)

    @staticmethod
    def _coerce_options(
        options: ExecutionOptions | Mapping[str, Any] | None,
    ) -> ExecutionOptions:
        """Validate an options mapping into ExecutionOptions.

        Raises:
            InvalidOptionsError: A field failed validation.
        """
        if isinstance(options, ExecutionOptions):
            return options

        try:
            return ExecutionOptions.model_validate(options or {})
        except ValidationError as e:
            errors = e.errors()
            if errors:
                err = errors[0]
                field = ".".join(str(loc) for loc in err["loc"]) or "options"
                message = f"Invalid execution options: {field} {err['msg']}"
            else:
                message = "Invalid execution options"

        # Raised outside the handler; the validation error echoes input values
        raise InvalidOptionsError(message)

    def _resolve_api_key(self, options: ExecutionOptions, settings: GeminiSettings) -> str:
        """Pick the API key and check its shape.

        Raises:
            MissingCredentialError: No non-empty key from any source.
            InvalidCredentialError: Key does not match the Gemini key shape.
        """
        api_key = options.api_key or self._api_key or settings.api_key
        if not api_key:
            raise MissingCredentialError()
        if not _KEY_SHAPE.fullmatch(api_key):
            raise InvalidCredentialError()
        return api_key

    def _prepare(
        self, request: Request, options: ExecutionOptions
    ) -> tuple[DispatchPlan, types.GenerateContentConfig]:
        """Build dispatch plan and generation config from the request.

        Returns:
            Tuple of dispatch plan and SDK generation config.
        """
        partition = partition_messages(request.messages)

        params: dict[str, Any] = build_generation_constraints(request.response_format)
        params["system_instruction"] = partition.preamble or None

        # Forward optional sampling parameters only if set
        if options.temperature is not None:
            params["temperature"] = options.temperature
        if options.max_tokens is not None:
            params["max_output_tokens"] = options.max_tokens
        if options.timeout is not None:
            params["http_options"] = types.HttpOptions(timeout=options.timeout)

        return plan_dispatch(partition), types.GenerateContentConfig(**params)

    async def _do_request(
        self,
        api_key: str,
        model_name: str,
        plan: DispatchPlan,
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        """Execute single call to the Gemini API.

        The client's connection pool is released before returning, on
        success and on failure alike.

        Returns:
            Raw response object from the google-genai SDK.
        """
        client = self._client_factory(api_key)

        try:
            if plan.multi_turn:
                history = [
                    types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
                    for turn in plan.history
                ]
                chat = client.aio.chats.create(model=model_name, config=config, history=history)
                return await chat.send_message(plan.message)

            return await client.aio.models.generate_content(
                model=model_name,
                contents=plan.prompt,
                config=config,
            )
        finally:
            await client.aio.aclose()

    def _process_response(
        self, response: types.GenerateContentResponse, model_name: str
    ) -> ProviderResponse:
        """Map SDK response into ProviderResponse.

        Usage stays None when the API reports no usage metadata.
        """
        text = response.text or ""

        usage = None
        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata is not None:
            usage = TokenUsage(
                input_tokens=usage_metadata.prompt_token_count or 0,
                output_tokens=usage_metadata.candidates_token_count or 0,
            )
            logger.debug(
                "Response received: model=%s, input=%d, output=%d",
                model_name,
                usage.input_tokens,
                usage.output_tokens,
            )

        return ProviderResponse(content=text, model=model_name, usage=usage)


def create_gemini_provider() -> GeminiProvider:
    """Create a new Gemini provider instance."""
    return GeminiProvider()
