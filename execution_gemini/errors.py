"""Error hierarchy for the Gemini execution provider.

Every error carries an explicit ``kind`` tag so callers can branch on the
failure class without matching message text.

Example:
    >>> from execution_gemini.errors import ErrorKind, MissingCredentialError
    >>> try:
    ...     raise MissingCredentialError()
    ... except MissingCredentialError as e:
    ...     print(e.kind)
    ErrorKind.MISSING_CREDENTIAL
"""

from enum import Enum

PROVIDER_NAME = "gemini"


class ErrorKind(str, Enum):
    """Classification tag attached to every provider error."""

    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    INVALID_OPTIONS = "invalid_options"
    REMOTE_FAILURE = "remote_failure"


class GeminiError(Exception):
    """Base class for provider errors.

    All provider exceptions inherit from this class, allowing callers
    to catch every failure with a single except clause.

    Example:
        >>> e = GeminiError("Generic failure", ErrorKind.REMOTE_FAILURE)
        >>> e.provider
        'gemini'
    """

    def __init__(self, message: str, kind: ErrorKind, provider: str = PROVIDER_NAME) -> None:
        """Initialize provider error.

        Args:
            message: Human-readable description.
            kind: Failure classification.
            provider: Name of the provider that raised the error.
        """
        self.kind = kind
        self.provider = provider
        super().__init__(message)


class MissingCredentialError(GeminiError):
    """No usable API key was found.

    Raised before any network access when neither the call options,
    the constructor, nor the environment supply a non-empty key.
    """

    def __init__(self, message: str = "Gemini API key is required") -> None:
        super().__init__(message, ErrorKind.MISSING_CREDENTIAL)


class InvalidCredentialError(GeminiError):
    """API key is present but does not have the Gemini key shape.

    The shape check is a sanity gate only. Authentication failures are
    reported by the remote call as RemoteFailureError.
    """

    def __init__(self, message: str = "Gemini API key has an invalid format") -> None:
        super().__init__(message, ErrorKind.INVALID_CREDENTIAL)


class InvalidOptionsError(GeminiError):
    """Execution options failed validation.

    The message names the offending field only; input values are left out
    so a misplaced key never reaches the error text.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.INVALID_OPTIONS)


class RemoteFailureError(GeminiError):
    """Outbound call failed (auth rejection, rate limit, bad request, network).

    The message and traceback text are already redacted. The original
    exception is never attached as ``__cause__`` or ``__context__``.

    Example:
        >>> e = RemoteFailureError("quota exceeded", correlation_id="c0ffee", status_code=429)
        >>> str(e)
        'Gemini request failed [c0ffee]: quota exceeded'
        >>> e.status_code
        429
    """

    def __init__(
        self,
        message: str,
        correlation_id: str,
        status_code: int | None = None,
        error_type: str | None = None,
        sanitized_traceback: str = "",
    ) -> None:
        """Initialize remote failure.

        Args:
            message: Redacted message of the original error.
            correlation_id: Identifier that ties this error to log records.
            status_code: HTTP-like status reported by the SDK, if any.
            error_type: Class name of the original error.
            sanitized_traceback: Redacted formatted traceback of the original error.
        """
        self.correlation_id = correlation_id
        self.status_code = status_code
        self.error_type = error_type
        self.sanitized_traceback = sanitized_traceback
        self.detail = message
        super().__init__(
            f"Gemini request failed [{correlation_id}]: {message}",
            ErrorKind.REMOTE_FAILURE,
        )
