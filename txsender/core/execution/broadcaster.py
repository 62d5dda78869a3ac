"""
Submission with bounded exponential-backoff retries.

Each attempt signs a fresh transaction and submits it. ``InvalidNonce``
evicts the cached access key and retries, ``Expired`` retries with a new
reference block, anything else aborts with the submitted hash attached.

Concurrent broadcasts with the same access key are not serialized: they
race for nonces, and the loser eventually fails with ``RetriesExceeded``.
Callers sharing a key across tasks own that coordination.
"""

import logging
from typing import Any, Optional, Sequence

import base58

from ...providers.base import Provider
from ..recovery.errors import (
    ErrorContext,
    RetriesExceededError,
    SubmissionVerdict,
    classify_submission_error,
)
from ..recovery.strategies import RetryConfig, exponential_backoff
from .access_keys import AccessKeyCache
from .models import BroadcastResult
from .tx_builder import TransactionSigner


class RetryingBroadcaster:
    """
    Drives ATTEMPT -> SUCCESS | RETRYABLE_FAILURE | FATAL_FAILURE.

    Attempts are strictly sequential; backoff only happens between
    retryable failures.
    """

    def __init__(
        self,
        tx_signer: TransactionSigner,
        provider: Provider,
        cache: AccessKeyCache,
        retry_config: Optional[RetryConfig] = None,
        emit_logs: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        self.tx_signer = tx_signer
        self.provider = provider
        self.cache = cache
        self.retry_config = retry_config or RetryConfig()
        self.emit_logs = emit_logs
        self.logger = logger or logging.getLogger(__name__)

    async def broadcast(self, receiver_id: str, actions: Sequence[Any]) -> BroadcastResult:
        """
        Sign and submit until the node accepts the transaction.

        Raises:
            RetriesExceededError: If every attempt hit a retryable failure
            Exception: Any non-retryable failure, with ``context`` set to
                the hash of the transaction that was submitted
        """
        result = await exponential_backoff(
            self.retry_config,
            lambda: self._attempt(receiver_id, actions),
        )
        if result is None:
            raise RetriesExceededError()

        # The nonce is consumed once the node returns an outcome
        transaction = result.signed_transaction.transaction
        self.cache.advance_nonce(transaction.public_key, transaction.nonce)
        return result

    async def _attempt(self, receiver_id: str, actions: Sequence[Any]) -> Optional[BroadcastResult]:
        tx_hash, signed_tx = await self.tx_signer.sign_transaction(receiver_id, actions)
        public_key = signed_tx.transaction.public_key
        encoded_hash = base58.b58encode(tx_hash).decode("ascii")

        try:
            outcome = await self.provider.send_transaction(signed_tx)
        except Exception as error:
            verdict = classify_submission_error(error)

            if verdict == SubmissionVerdict.RETRY_WITH_FRESH_KEY:
                self._warn(f"Retrying transaction {receiver_id}:{encoded_hash} with new nonce.")
                self.cache.evict(public_key)
                return None

            if verdict == SubmissionVerdict.RETRY:
                self._warn(f"Retrying transaction {receiver_id}:{encoded_hash} due to expired block hash")
                return None

            error.context = ErrorContext(transaction_hash=encoded_hash)
            raise

        return BroadcastResult(outcome=outcome, tx_hash=tx_hash, signed_transaction=signed_tx)

    def _warn(self, message: str) -> None:
        if self.emit_logs:
            self.logger.warning(message)
