"""
Failure Explanation Envelope — Unified Response Classification.

Every API endpoint answers with the same envelope so the renderer can
show a message for any outcome without inspecting status codes.

INVARIANT: No raw 500 errors may reach the frontend.

Response types:
- Success: Analysis completed and a result set is attached
- KnownFailure: The system knows why it failed (empty input, bad JSON,
  catalogs still loading, catalogs unavailable)
- UnknownFailure: The system does not know why it failed

AUTHORITY BOUNDARY:
All user-visible responses MUST pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input failures
    EMPTY_INPUT = "empty_input"
    INVALID_FORMAT = "invalid_format"

    # Catalog failures
    NOT_READY = "not_ready"
    CATALOG_UNAVAILABLE = "catalog_unavailable"

    # Session failures
    SESSION_NOT_FOUND = "session_not_found"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )
    retryable: bool = Field(
        default=False,
        description="True if the same request may succeed when retried as-is",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope for all API endpoints.

    Every response is classified into one of three outcome types,
    ensuring no failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
        retryable: bool = False,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to a finalized ApiResponse."""
        response: ApiResponse[Any] = ApiResponse(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=self.kind,
                message=self.message,
                detail=self.detail,
                suggestion=self.suggestion,
                retryable=self.retryable,
            ),
        )
        return finalize_response(response)


class CatalogLoadError(KnownError):
    """
    Raised when catalog data cannot be loaded.

    For a single catalog this is recorded and the other catalog is still
    served. It only reaches the user when no catalog is available at all.
    """

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.CATALOG_UNAVAILABLE,
            message="No data available. The item catalogs could not be loaded.",
            detail=detail,
            suggestion="Ensure the catalog files are present and reload.",
            status_code=503,
        )


class InputEmptyError(KnownError):
    """Raised when the submitted save text is blank."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EMPTY_INPUT,
            message="Please paste your JSON data first!",
            detail=detail,
            suggestion="Paste the full save document into the input box.",
            status_code=400,
        )


class InputParseError(KnownError):
    """Raised when the submitted save text is not valid JSON."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_FORMAT,
            message="Invalid JSON format. Please check your data and try again.",
            detail=detail,
            suggestion="Copy the save document again without truncating it.",
            status_code=400,
        )


class NotReadyError(KnownError):
    """Raised when analysis is requested before any catalog has loaded."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.NOT_READY,
            message="Item data is still loading. Please wait and try again.",
            detail=detail,
            suggestion="Retry in a moment.",
            status_code=503,
            retryable=True,
        )


class SessionNotFoundError(KnownError):
    """Raised when a re-filter names a session that is unknown or has no result."""

    def __init__(self, session_id: str, detail: str | None = None):
        self.session_id = session_id
        super().__init__(
            kind=FailureKind.SESSION_NOT_FOUND,
            message="This analysis has expired. Please paste your data again.",
            detail=detail or f"Unknown session {session_id}",
            suggestion="Run the analysis again to start a new session.",
            status_code=404,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

UNKNOWN_FAILURE_MESSAGE = "Something went wrong and the cause is unknown. Please retry."
UNKNOWN_FAILURE_SUGGESTION = "If this persists, please report the issue."

# Track finalized responses by id()
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Every response that passes through this function is guaranteed to
    have a valid outcome classification and failure details when the
    outcome is not a success.

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return id(response) in _finalized_responses


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized. Only the exception
    type name is exposed, never its message.
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=UNKNOWN_FAILURE_MESSAGE,
            detail=detail,
            suggestion=UNKNOWN_FAILURE_SUGGESTION,
        ),
    )

    return finalize_response(response)


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    finalize_response(response)
    return response
