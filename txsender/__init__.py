"""Transaction signing and broadcast core for ledger accounts."""

from .config import Settings, settings
from .connection import Connection
from .logging_config import setup_logging
from .core.execution import SignAndSendOptions, TransactionSender
from .core.recovery import (
    ErrorContext,
    ErrorKind,
    KeyNotFoundError,
    RetriesExceededError,
    ServerError,
    ServerTransactionError,
    TypedError,
)
from .providers import JsonRpcProvider, Provider, Signer

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "settings",
    "setup_logging",
    "Connection",
    "TransactionSender",
    "SignAndSendOptions",
    "Provider",
    "Signer",
    "JsonRpcProvider",
    "TypedError",
    "ErrorKind",
    "ErrorContext",
    "KeyNotFoundError",
    "RetriesExceededError",
    "ServerError",
    "ServerTransactionError",
]
