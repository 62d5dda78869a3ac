"""
Transaction signing and broadcast models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..recovery.errors import ServerError


FULL_ACCESS = "FullAccess"


@dataclass
class AccessKey:
    """Replay-protection and permission state of one key on one account."""
    nonce: int                                  # Last nonce the ledger accepted for this key
    permission: Any = FULL_ACCESS               # "FullAccess" or {"FunctionCall": {...}}
    block_height: Optional[int] = None          # Block the view was taken at
    block_hash: Optional[str] = None

    @classmethod
    def from_view(cls, raw: Dict[str, Any]) -> "AccessKey":
        """Normalize a ``view_access_key`` query result."""
        # Nonces exceed 2**53 on long-lived keys; the node may send them as strings
        return cls(
            nonce=int(raw["nonce"]),
            permission=raw.get("permission", FULL_ACCESS),
            block_height=raw.get("block_height"),
            block_hash=raw.get("block_hash"),
        )


@dataclass(frozen=True)
class AccessKeyInfo:
    """The key pair to sign with and its ledger-side access key."""
    public_key: Any
    access_key: AccessKey


@dataclass(frozen=True)
class Transaction:
    """An unsigned transaction."""
    signer_id: str
    public_key: Any
    nonce: int
    receiver_id: str
    actions: Sequence[Any]
    block_hash: bytes


@dataclass(frozen=True)
class SignedTransaction:
    """A ledger-ready transaction. Produced once per broadcast attempt."""
    transaction: Transaction
    signature: bytes
    encoded: bytes                              # Wire encoding produced by the signer

    def encode(self) -> bytes:
        return self.encoded


@dataclass
class ReceiptLogRecord:
    """Diagnostic projection of one outcome with logs or a failure."""
    receipt_ids: List[str]
    logs: List[str]
    failure: Optional[ServerError] = None


@dataclass(frozen=True)
class BroadcastResult:
    """A submission the node accepted."""
    outcome: Dict[str, Any]                     # Raw final execution outcome
    tx_hash: bytes
    signed_transaction: SignedTransaction


@dataclass
class SignAndSendOptions:
    """Options for signing and sending a transaction."""
    receiver_id: str
    actions: List[Any] = field(default_factory=list)

    # Wallet redirect flows are not supported; accepted for call compatibility
    wallet_meta: Optional[str] = None
    wallet_callback_url: Optional[str] = None

    # Return a failed outcome instead of raising
    return_error: bool = False
