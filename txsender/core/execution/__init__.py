"""
Transaction Signing and Broadcast

- TransactionSender: signs and sends transactions for one account
- AccessKeyResolver / AccessKeyCache: access key lookup with per-key cache
- TransactionSigner: fresh nonce + reference block per attempt
- RetryingBroadcaster: InvalidNonce / Expired retries with backoff
- OutcomeAggregator: receipt logs and failed-status errors

Usage:
    from txsender.core.execution import TransactionSender

    sender = TransactionSender(connection, "alice.testnet")
    outcome = await sender.sign_and_send_transaction(
        receiver_id="bob.testnet",
        actions=[transfer(10**24)],
    )
"""

from .models import (
    AccessKey,
    AccessKeyInfo,
    BroadcastResult,
    ReceiptLogRecord,
    SignAndSendOptions,
    SignedTransaction,
    Transaction,
)

from .access_keys import (
    AccessKeyCache,
    AccessKeyResolver,
)

from .tx_builder import (
    TransactionSigner,
)

from .broadcaster import (
    RetryingBroadcaster,
)

from .outcome import (
    OutcomeAggregator,
)

from .sender import (
    TransactionSender,
)

__all__ = [
    # Models
    "AccessKey",
    "AccessKeyInfo",
    "BroadcastResult",
    "ReceiptLogRecord",
    "SignAndSendOptions",
    "SignedTransaction",
    "Transaction",
    # Access keys
    "AccessKeyCache",
    "AccessKeyResolver",
    # Signing
    "TransactionSigner",
    # Broadcast
    "RetryingBroadcaster",
    # Outcome
    "OutcomeAggregator",
    # Sender
    "TransactionSender",
]
