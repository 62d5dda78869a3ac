"""
Tests for the typed error taxonomy and submission classification.
"""

import pytest

from txsender.core.recovery.errors import (
    ErrorContext,
    ErrorKind,
    KeyNotFoundError,
    RetriesExceededError,
    SubmissionVerdict,
    TypedError,
    classify_submission_error,
    error_kind,
)


@pytest.mark.parametrize(
    "kind, verdict",
    [
        ("InvalidNonce", SubmissionVerdict.RETRY_WITH_FRESH_KEY),
        ("Expired", SubmissionVerdict.RETRY),
        ("TimeoutError", SubmissionVerdict.FATAL),
        ("InvalidSignature", SubmissionVerdict.FATAL),
    ],
)
def test_classify_typed_errors(kind, verdict):
    assert classify_submission_error(TypedError("x", kind)) == verdict


def test_classify_untyped_exception_is_fatal():
    assert classify_submission_error(RuntimeError("boom")) == SubmissionVerdict.FATAL


def test_enum_kind_is_stored_as_plain_string():
    error = TypedError("late", ErrorKind.TIMEOUT)

    assert error.type == "TimeoutError"
    assert error_kind(error) == "TimeoutError"
    assert str(error) == "late"


def test_kinds_are_distinguishable_by_type():
    assert KeyNotFoundError("no key").type == "KeyNotFound"
    assert RetriesExceededError().type == "RetriesExceeded"
    assert isinstance(RetriesExceededError(), TypedError)


def test_context_carries_transaction_hash():
    error = TypedError("bad", "InvalidTransaction", context=ErrorContext(transaction_hash="abc"))

    assert error.context.transaction_hash == "abc"
    assert error.context.details == {}
