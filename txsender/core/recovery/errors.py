"""
Error Classification

Defines the typed errors surfaced by the transaction sender and the
classifier that decides whether a failed submission is retried.
Errors are distinguished by ``type`` (the node-reported kind), never by
message text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Error kinds the sender produces or reacts to."""

    KEY_NOT_FOUND = "KeyNotFound"
    ACCESS_KEY_DOES_NOT_EXIST = "AccessKeyDoesNotExist"
    ACCOUNT_DOES_NOT_EXIST = "AccountDoesNotExist"
    INVALID_NONCE = "InvalidNonce"            # Stale cached nonce
    EXPIRED = "Expired"                       # Reference block too old
    RETRIES_EXCEEDED = "RetriesExceeded"
    TIMEOUT = "TimeoutError"
    UNTYPED = "UntypedError"


class SubmissionVerdict(str, Enum):
    """What the broadcaster does after a failed submission."""

    RETRY_WITH_FRESH_KEY = "retry_with_fresh_key"  # Evict cached access key, retry
    RETRY = "retry"                                # Retry with a new block hash
    FATAL = "fatal"                                # Abort the broadcast


@dataclass
class ErrorContext:
    """Additional context about an error."""

    transaction_hash: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


class TypedError(Exception):
    """
    Base class for errors carrying a programmatic kind.

    ``type`` is a plain string because node failures are open ended
    (``GuestPanic``, ``ActionError`` ...); known kinds are listed in
    ``ErrorKind``.
    """

    def __init__(
        self,
        message: str,
        type: str = ErrorKind.UNTYPED.value,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message)
        self.message = message
        self.type = type.value if isinstance(type, ErrorKind) else type
        self.context = context

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type!r}, message={self.message!r})"


class KeyNotFoundError(TypedError):
    """No usable key pair exists for the account on this network."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message, ErrorKind.KEY_NOT_FOUND, context)


class RetriesExceededError(TypedError):
    """The bounded nonce retry budget was exhausted."""

    def __init__(
        self,
        message: str = (
            "nonce retries exceeded for transaction. This usually means there are "
            "too many parallel requests with the same access key."
        ),
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message, ErrorKind.RETRIES_EXCEEDED, context)


class ServerError(TypedError):
    """A structured failure reported by the node."""

    def __init__(
        self,
        message: str,
        type: str = ErrorKind.UNTYPED.value,
        data: Optional[Dict[str, Any]] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message, type, context)
        self.data = data or {}


class ServerTransactionError(ServerError):
    """A transaction whose final status is a structured failure."""

    def __init__(
        self,
        message: str,
        type: str = ErrorKind.UNTYPED.value,
        data: Optional[Dict[str, Any]] = None,
        transaction_outcome: Optional[Dict[str, Any]] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message, type, data, context)
        self.transaction_outcome = transaction_outcome


def error_kind(error: BaseException) -> Optional[str]:
    """Return the ``type`` an error carries, if any."""
    kind = getattr(error, "type", None)
    if isinstance(kind, ErrorKind):
        return kind.value
    return kind if isinstance(kind, str) else None


def classify_submission_error(error: BaseException) -> SubmissionVerdict:
    """
    Classify a failed ``send_transaction`` call.

    Only ``InvalidNonce`` and ``Expired`` are retried. Everything else,
    including ``TimeoutError`` and untyped exceptions, aborts the broadcast.
    """
    kind = error_kind(error)

    if kind == ErrorKind.INVALID_NONCE.value:
        return SubmissionVerdict.RETRY_WITH_FRESH_KEY

    if kind == ErrorKind.EXPIRED.value:
        return SubmissionVerdict.RETRY

    return SubmissionVerdict.FATAL
