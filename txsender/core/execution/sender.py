"""
Signs and sends transactions on behalf of one account.

Usage:
    connection = Connection.from_settings(signer)
    sender = TransactionSender(connection, "alice.testnet")
    outcome = await sender.sign_and_send_transaction("bob.testnet", actions)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ...config import Settings, settings as default_settings
from ...connection import Connection
from ..recovery.strategies import RetryConfig
from .access_keys import AccessKeyCache, AccessKeyResolver
from .broadcaster import RetryingBroadcaster
from .models import AccessKeyInfo, SignAndSendOptions, SignedTransaction
from .outcome import OutcomeAggregator
from .tx_builder import TransactionSigner


class TransactionSender:
    """
    Transaction broadcast core for an account.

    Responsibilities:
    - Resolve and cache access keys per public key
    - Sign with a fresh nonce and reference block on every attempt
    - Retry stale nonces and expired block hashes with backoff
    - Log receipts and raise typed errors for failed transactions
    """

    def __init__(
        self,
        connection: Connection,
        account_id: str,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.connection = connection
        self.account_id = account_id
        settings = settings or default_settings

        # NEAR_NO_LOGS is read once here
        emit_logs = settings.emit_logs

        self.access_key_by_public_key_cache = AccessKeyCache()
        self.resolver = AccessKeyResolver(
            provider=connection.provider,
            signer=connection.signer,
            account_id=account_id,
            network_id=connection.network_id,
            cache=self.access_key_by_public_key_cache,
        )
        self.tx_signer = TransactionSigner(
            resolver=self.resolver,
            provider=connection.provider,
            signer=connection.signer,
            account_id=account_id,
            network_id=connection.network_id,
        )
        self.broadcaster = RetryingBroadcaster(
            tx_signer=self.tx_signer,
            provider=connection.provider,
            cache=self.access_key_by_public_key_cache,
            retry_config=RetryConfig.from_millis(
                settings.tx_nonce_retry_number,
                settings.tx_nonce_retry_wait_ms,
                settings.tx_nonce_retry_wait_backoff,
            ),
            emit_logs=emit_logs,
            logger=logger,
        )
        self.aggregator = OutcomeAggregator(emit_logs=emit_logs)

    async def find_access_key(
        self,
        receiver_id: str,
        actions: Sequence[Any],
    ) -> Optional[AccessKeyInfo]:
        """Access key for the signer's public key, or None if the ledger has none."""
        return await self.resolver.find_access_key(receiver_id, actions)

    async def sign_transaction(
        self,
        receiver_id: str,
        actions: Sequence[Any],
    ) -> Tuple[bytes, SignedTransaction]:
        """Create a signed transaction which can be broadcast to the network."""
        return await self.tx_signer.sign_transaction(receiver_id, actions)

    async def sign_and_send_transaction(
        self,
        receiver_id: str,
        actions: List[Any],
        wallet_meta: Optional[str] = None,
        wallet_callback_url: Optional[str] = None,
        return_error: bool = False,
    ) -> Dict[str, Any]:
        """
        Sign a transaction performing ``actions`` and broadcast it.

        Args:
            receiver_id: Account receiving the transaction
            actions: Actions to perform, in order
            wallet_meta: Ignored, wallet redirects are not supported
            wallet_callback_url: Ignored, wallet redirects are not supported
            return_error: Return a failed outcome instead of raising

        Returns:
            The final execution outcome as returned by the node

        Raises:
            KeyNotFoundError: No usable key pair for the account
            RetriesExceededError: Nonce retries exhausted
            ServerTransactionError: The transaction failed on chain
        """
        result = await self.broadcaster.broadcast(receiver_id, actions)
        return self.aggregator.resolve(
            result.outcome,
            result.signed_transaction,
            return_error=return_error,
        )

    async def sign_and_send(self, options: SignAndSendOptions) -> Dict[str, Any]:
        return await self.sign_and_send_transaction(
            options.receiver_id,
            options.actions,
            wallet_meta=options.wallet_meta,
            wallet_callback_url=options.wallet_callback_url,
            return_error=options.return_error,
        )
