"""
Error Recovery Module

Typed errors, node failure parsing and the exponential backoff used to
retry transaction submissions.
"""

from .errors import (
    ErrorContext,
    ErrorKind,
    KeyNotFoundError,
    RetriesExceededError,
    ServerError,
    ServerTransactionError,
    SubmissionVerdict,
    TypedError,
    classify_submission_error,
    error_kind,
)
from .rpc_errors import get_error_type_from_message, parse_result_error, parse_rpc_error
from .strategies import RetryConfig, exponential_backoff

__all__ = [
    # Errors
    "ErrorContext",
    "ErrorKind",
    "TypedError",
    "KeyNotFoundError",
    "RetriesExceededError",
    "ServerError",
    "ServerTransactionError",
    "SubmissionVerdict",
    "classify_submission_error",
    "error_kind",
    # Parsing
    "parse_rpc_error",
    "parse_result_error",
    "get_error_type_from_message",
    # Strategies
    "RetryConfig",
    "exponential_backoff",
]
