"""Network id, node provider and signer bundled for one network."""

from dataclasses import dataclass
from typing import Optional

from .config import Settings, settings as default_settings
from .providers.base import Provider, Signer
from .providers.jsonrpc import JsonRpcProvider


@dataclass
class Connection:
    network_id: str
    provider: Provider
    signer: Signer

    @classmethod
    def from_settings(cls, signer: Signer, settings: Optional[Settings] = None) -> "Connection":
        settings = settings or default_settings
        return cls(
            network_id=settings.network_id,
            provider=JsonRpcProvider.from_settings(settings),
            signer=signer,
        )
