"""Ledger node and signer collaborators."""

from .base import Provider, Signer
from .jsonrpc import JsonRpcProvider

__all__ = [
    "Provider",
    "Signer",
    "JsonRpcProvider",
]
