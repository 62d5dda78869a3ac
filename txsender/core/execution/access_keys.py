"""
Access key resolution and caching.

Resolves the nonce-bearing access key for the signer's public key. Keys
are cached per public key for the lifetime of the sender; the broadcaster
evicts an entry when the node rejects its nonce.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional, Sequence

from ...providers.base import Provider, Signer
from ..recovery.errors import ErrorKind, KeyNotFoundError, error_kind
from .models import AccessKey, AccessKeyInfo


logger = logging.getLogger(__name__)


class AccessKeyCache:
    """
    Access keys keyed by ``str(public_key)``.

    Writes are populate-if-absent: a resolution that finishes after another
    one already cached an entry gets the cached entry back instead of
    overwriting it. There is no per-key lock, so concurrent resolutions
    still each hit the network.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, AccessKey] = {}

    def get(self, public_key: Any) -> Optional[AccessKey]:
        return self._entries.get(str(public_key))

    def put_if_absent(self, public_key: Any, access_key: AccessKey) -> AccessKey:
        """Insert unless present; return whichever entry is cached."""
        # dict.setdefault is a single atomic step, no await in between
        return self._entries.setdefault(str(public_key), access_key)

    def evict(self, public_key: Any) -> None:
        self._entries.pop(str(public_key), None)

    def advance_nonce(self, public_key: Any, nonce: int) -> None:
        """
        Record a consumed nonce. The cached nonce never decreases.

        The entry is replaced, so access keys handed out earlier keep the
        nonce they were returned with.
        """
        key = str(public_key)
        entry = self._entries.get(key)
        if entry is not None and nonce > entry.nonce:
            self._entries[key] = dataclasses.replace(entry, nonce=nonce)

    def __contains__(self, public_key: Any) -> bool:
        return str(public_key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class AccessKeyResolver:
    """Finds the access key to sign with for one account."""

    def __init__(
        self,
        provider: Provider,
        signer: Signer,
        account_id: str,
        network_id: str,
        cache: Optional[AccessKeyCache] = None,
    ):
        self.provider = provider
        self.signer = signer
        self.account_id = account_id
        self.network_id = network_id
        self.cache = cache if cache is not None else AccessKeyCache()

    async def find_access_key(
        self,
        receiver_id: str,
        actions: Sequence[Any],
    ) -> Optional[AccessKeyInfo]:
        """
        Return the public key and access key to sign with.

        ``receiver_id`` and ``actions`` are accepted for call compatibility;
        the signer's only key for the account is used regardless.

        Returns:
            AccessKeyInfo, or None when the ledger has no access key for
            the signer's public key

        Raises:
            KeyNotFoundError: If the signer holds no key pair for the account
        """
        public_key = await self.signer.get_public_key(self.account_id, self.network_id)
        if not public_key:
            raise KeyNotFoundError(f"no matching key pair found in {self.signer}")

        cached = self.cache.get(public_key)
        if cached is not None:
            return AccessKeyInfo(public_key=public_key, access_key=cached)

        try:
            raw_access_key = await self.provider.query(
                request_type="view_access_key",
                account_id=self.account_id,
                public_key=str(public_key),
                finality="optimistic",
            )
        except Exception as e:
            if error_kind(e) == ErrorKind.ACCESS_KEY_DOES_NOT_EXIST.value:
                logger.debug(f"No access key {public_key} on {self.account_id}")
                return None
            raise

        # Another resolution may have cached this key while the query was in flight
        access_key = self.cache.put_if_absent(public_key, AccessKey.from_view(raw_access_key))
        return AccessKeyInfo(public_key=public_key, access_key=access_key)
