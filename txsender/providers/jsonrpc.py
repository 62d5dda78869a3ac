"""JSON-RPC provider for ledger nodes."""

from __future__ import annotations

import base64
import itertools
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

import httpx

from ..config import Settings, settings as default_settings
from ..core.recovery.errors import ErrorKind, TypedError
from ..core.recovery.rpc_errors import get_error_type_from_message, parse_rpc_error
from ..core.recovery.strategies import RetryConfig, exponential_backoff
from .base import Provider

if TYPE_CHECKING:
    from ..core.execution.models import SignedTransaction


logger = logging.getLogger(__name__)

_TIMEOUT_MARKERS = ("Timeout error", "query has timed out")


def _block_reference(finality: Optional[str], block_id: Optional[Any]) -> Dict[str, Any]:
    if block_id is not None:
        return {"block_id": block_id}
    return {"finality": finality or "final"}


class JsonRpcProvider(Provider):
    """Talks JSON-RPC 2.0 to a node over httpx."""

    name = "jsonrpc"

    def __init__(
        self,
        url: str,
        timeout_s: Optional[float] = None,
        retry_config: Optional[RetryConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.timeout_s = timeout_s if timeout_s is not None else default_settings.request_timeout_seconds
        self.retry_config = retry_config or RetryConfig.from_millis(
            default_settings.request_retry_number,
            default_settings.request_retry_wait_ms,
            default_settings.request_retry_wait_backoff,
        )
        self._client = client or httpx.AsyncClient(timeout=self.timeout_s)
        self._ids = itertools.count(1)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "JsonRpcProvider":
        settings = settings or default_settings
        return cls(
            settings.node_url,
            timeout_s=settings.request_timeout_seconds,
            retry_config=RetryConfig.from_millis(
                settings.request_retry_number,
                settings.request_retry_wait_ms,
                settings.request_retry_wait_backoff,
            ),
        )

    async def _post(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """One HTTP round trip; ``None`` asks the backoff loop to retry."""
        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.TransportError as e:
            logger.warning(f"Retrying request to {payload['method']}: {e}")
            return None

        if response.status_code == 503:
            logger.warning(f"Retrying request to {payload['method']} as it has timed out")
            return None

        if response.status_code == 408:
            raise TypedError(
                f"Request to {payload['method']} timed out",
                ErrorKind.TIMEOUT,
            )

        if response.is_error:
            raise TypedError(
                f"[{response.status_code}] {response.reason_phrase}: {response.text}",
                f"HTTP{response.status_code}",
            )

        return response.json()

    async def send_json_rpc(self, method: str, params: Union[Dict[str, Any], List[Any]]) -> Any:
        """Send a request and unwrap its ``result``, raising typed errors."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        body = await exponential_backoff(self.retry_config, lambda: self._post(payload))
        if body is None:
            raise TypedError(
                f"Exceeded {self.retry_config.max_attempts} attempts for request to {method}.",
                ErrorKind.RETRIES_EXCEEDED,
            )

        if "error" in body:
            raise self._parse_error(body["error"])

        return body.get("result")

    @staticmethod
    def _parse_error(error: Dict[str, Any]) -> TypedError:
        data = error.get("data")

        if isinstance(data, dict):
            if isinstance(data.get("error_message"), str) and isinstance(data.get("error_type"), str):
                return TypedError(data["error_message"], data["error_type"])
            return parse_rpc_error(data)

        message = f"[{error.get('code')}] {error.get('message')}: {data}"
        if data == "Timeout" or any(marker in message for marker in _TIMEOUT_MARKERS):
            return TypedError(message, ErrorKind.TIMEOUT)

        name = error.get("name") or ErrorKind.UNTYPED.value
        return TypedError(message, get_error_type_from_message(data, name))

    async def query(self, **params: Any) -> Dict[str, Any]:
        result = await self.send_json_rpc("query", params)
        if isinstance(result, dict) and isinstance(result.get("error"), str):
            raise TypedError(
                f"Querying failed: {result['error']}.\n{result}",
                get_error_type_from_message(result["error"]),
            )
        return result

    async def block(
        self,
        finality: Optional[str] = None,
        block_id: Optional[Any] = None,
    ) -> Dict[str, Any]:
        return await self.send_json_rpc("block", _block_reference(finality, block_id))

    async def send_transaction(self, signed_transaction: "SignedTransaction") -> Dict[str, Any]:
        encoded = base64.b64encode(signed_transaction.encode()).decode("ascii")
        return await self.send_json_rpc("broadcast_tx_commit", [encoded])

    async def validators(self, block_id: Optional[Any] = None) -> Dict[str, Any]:
        return await self.send_json_rpc("validators", [block_id])

    async def experimental_protocol_config(
        self,
        finality: Optional[str] = None,
        block_id: Optional[Any] = None,
    ) -> Dict[str, Any]:
        return await self.send_json_rpc(
            "EXPERIMENTAL_protocol_config",
            _block_reference(finality, block_id),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
