"""
Tests for the JSON-RPC provider against a mocked transport.
"""

import base64
import json

import httpx
import pytest

from txsender.core.execution.models import SignedTransaction, Transaction
from txsender.core.recovery.errors import ServerError, TypedError
from txsender.core.recovery.strategies import RetryConfig
from txsender.providers.jsonrpc import JsonRpcProvider


URL = "https://rpc.testnet.example"


def _provider(handler, max_attempts=3) -> JsonRpcProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return JsonRpcProvider(
        URL,
        timeout_s=5,
        retry_config=RetryConfig(max_attempts=max_attempts, initial_delay_seconds=0),
        client=client,
    )


def _result(request: httpx.Request, result) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})


def _error(request: httpx.Request, error) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": error})


@pytest.mark.asyncio
async def test_query_sends_params_and_returns_result():
    requests = []

    def handler(request):
        requests.append(json.loads(request.content))
        return _result(request, {"nonce": 7, "permission": "FullAccess"})

    provider = _provider(handler)

    result = await provider.query(
        request_type="view_access_key",
        account_id="alice.testnet",
        public_key="ed25519:abc",
        finality="optimistic",
    )

    assert result["nonce"] == 7
    assert requests[0]["method"] == "query"
    assert requests[0]["params"]["finality"] == "optimistic"
    assert requests[0]["jsonrpc"] == "2.0"
    await provider.close()


@pytest.mark.asyncio
async def test_missing_access_key_query_is_typed():
    def handler(request):
        return _result(request, {
            "error": "access key ed25519:abc does not exist while viewing",
            "block_height": 1,
        })

    provider = _provider(handler)

    with pytest.raises(TypedError) as exc_info:
        await provider.query(request_type="view_access_key", account_id="a", public_key="k", finality="optimistic")

    assert exc_info.value.type == "AccessKeyDoesNotExist"


@pytest.mark.asyncio
async def test_block_defaults_to_final():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return _result(request, {"header": {"hash": "abc", "epoch_id": "e"}})

    provider = _provider(handler)

    block = await provider.block(finality="final")
    await provider.block(block_id=12)

    assert block["header"]["hash"] == "abc"
    assert seen[0]["params"] == {"finality": "final"}
    assert seen[1]["params"] == {"block_id": 12}


@pytest.mark.asyncio
async def test_send_transaction_base64_encodes():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return _result(request, {"status": {"SuccessValue": ""}})

    provider = _provider(handler)
    transaction = Transaction("alice.testnet", "k", 1, "bob.testnet", (), b"\x00" * 32)
    signed = SignedTransaction(transaction=transaction, signature=b"sig", encoded=b"wire-bytes")

    await provider.send_transaction(signed)

    assert seen[0]["method"] == "broadcast_tx_commit"
    assert seen[0]["params"] == [base64.b64encode(b"wire-bytes").decode("ascii")]


@pytest.mark.asyncio
async def test_structured_error_data_is_parsed():
    def handler(request):
        return _error(request, {
            "name": "HANDLER_ERROR",
            "code": -32000,
            "message": "Server error",
            "data": {"TxExecutionError": {"InvalidTxError": {"InvalidNonce": {"tx_nonce": 3, "ak_nonce": 4}}}},
        })

    provider = _provider(handler)

    with pytest.raises(ServerError) as exc_info:
        await provider.send_transaction(
            SignedTransaction(Transaction("a", "k", 3, "b", (), b""), b"", b"x")
        )

    assert exc_info.value.type == "InvalidNonce"


@pytest.mark.asyncio
async def test_legacy_error_data_is_typed():
    def handler(request):
        return _error(request, {
            "code": -32000,
            "message": "Server error",
            "data": {"error_message": "boom", "error_type": "GuestPanic"},
        })

    provider = _provider(handler)

    with pytest.raises(TypedError) as exc_info:
        await provider.validators(None)

    assert exc_info.value.type == "GuestPanic"
    assert exc_info.value.message == "boom"


@pytest.mark.asyncio
async def test_timeout_error_data():
    def handler(request):
        return _error(request, {"code": -32000, "message": "Server error", "data": "Timeout"})

    provider = _provider(handler)

    with pytest.raises(TypedError) as exc_info:
        await provider.experimental_protocol_config(finality="final")

    assert exc_info.value.type == "TimeoutError"


@pytest.mark.asyncio
async def test_http_408_is_timeout():
    provider = _provider(lambda request: httpx.Response(408))

    with pytest.raises(TypedError) as exc_info:
        await provider.block(finality="final")

    assert exc_info.value.type == "TimeoutError"


@pytest.mark.asyncio
async def test_503_is_retried_then_succeeds():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return _result(request, {"header": {"hash": "abc"}})

    provider = _provider(handler, max_attempts=3)

    block = await provider.block(finality="final")

    assert block["header"]["hash"] == "abc"
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_transport_errors_exhaust_retries():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    provider = _provider(handler, max_attempts=2)

    with pytest.raises(TypedError) as exc_info:
        await provider.block(finality="final")

    assert exc_info.value.type == "RetriesExceeded"
    assert len(calls) == 2
