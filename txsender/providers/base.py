from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from ..core.execution.models import SignedTransaction


class Provider(ABC):
    """Ledger node RPC interface"""

    name: str
    timeout_s: float = 30

    @abstractmethod
    async def query(self, **params: Any) -> Dict[str, Any]:
        """Run a ``query`` request (view_access_key, view_account, call_function...)"""
        pass

    @abstractmethod
    async def block(
        self,
        finality: Optional[str] = None,
        block_id: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """Fetch a block; the header carries ``hash`` and ``epoch_id``"""
        pass

    @abstractmethod
    async def send_transaction(self, signed_transaction: SignedTransaction) -> Dict[str, Any]:
        """Submit a signed transaction and wait for its final execution outcome"""
        pass

    @abstractmethod
    async def validators(self, block_id: Optional[Any] = None) -> Dict[str, Any]:
        """Validators for an epoch or block"""
        pass

    @abstractmethod
    async def experimental_protocol_config(
        self,
        finality: Optional[str] = None,
        block_id: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """Protocol configuration at a block"""
        pass


class Signer(ABC):
    """Key custody and transaction signing"""

    @abstractmethod
    async def get_public_key(self, account_id: str, network_id: str) -> Optional[Any]:
        """Public key for the account, or None when no key pair is held"""
        pass

    @abstractmethod
    async def sign_transaction(
        self,
        receiver_id: str,
        nonce: int,
        actions: Sequence[Any],
        block_hash: bytes,
        account_id: str,
        network_id: str,
    ) -> Tuple[bytes, SignedTransaction]:
        """Return ``(transaction hash, signed transaction)``"""
        pass
