from typing import List

import pytest

from txsender.connection import Connection

from stubs import NETWORK_ID, StubProvider, StubSigner


@pytest.fixture
def signer() -> StubSigner:
    return StubSigner()


@pytest.fixture
def provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def connection(provider, signer) -> Connection:
    return Connection(network_id=NETWORK_ID, provider=provider, signer=signer)


@pytest.fixture
def no_sleep(monkeypatch):
    """Replace the backoff sleep, recording requested delays."""
    delays: List[float] = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr("txsender.core.recovery.strategies.asyncio.sleep", fake_sleep)
    return delays
