"""
Transaction signing: access key nonce + reference block + actions.
"""

from typing import Any, Sequence, Tuple

import base58

from ...providers.base import Provider, Signer
from ..recovery.errors import KeyNotFoundError
from .access_keys import AccessKeyResolver
from .models import SignedTransaction


class TransactionSigner:
    """
    Builds a signed transaction for a fresh attempt.

    The nonce and reference block hash are derived on every call; callers
    never reuse a signed transaction across attempts.
    """

    def __init__(
        self,
        resolver: AccessKeyResolver,
        provider: Provider,
        signer: Signer,
        account_id: str,
        network_id: str,
    ):
        self.resolver = resolver
        self.provider = provider
        self.signer = signer
        self.account_id = account_id
        self.network_id = network_id

    async def sign_transaction(
        self,
        receiver_id: str,
        actions: Sequence[Any],
    ) -> Tuple[bytes, SignedTransaction]:
        """
        Sign ``actions`` addressed to ``receiver_id``.

        Returns:
            (transaction hash, signed transaction)

        Raises:
            KeyNotFoundError: If no access key matches the signer's key pair
        """
        access_key_info = await self.resolver.find_access_key(receiver_id, actions)
        if not access_key_info:
            raise KeyNotFoundError(
                f"Can not sign transactions for account {self.account_id} on network "
                f"{self.network_id}, no matching key pair exists for this account"
            )

        # Final (irreversible) block bounds how long the transaction stays valid
        block = await self.provider.block(finality="final")
        block_hash = base58.b58decode(block["header"]["hash"])

        nonce = access_key_info.access_key.nonce + 1
        return await self.signer.sign_transaction(
            receiver_id,
            nonce,
            actions,
            block_hash,
            self.account_id,
            self.network_id,
        )
