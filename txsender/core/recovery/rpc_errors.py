"""
Parsing of node-reported failure payloads into typed errors.

Node failures are nested enums serialized as JSON, e.g.::

    {"ActionError": {"index": 0, "kind": {"FunctionCallError":
        {"ExecutionError": "Smart contract panicked: boom"}}}}
    {"TxExecutionError": {"InvalidTxError": {"InvalidNonce":
        {"tx_nonce": 5, "ak_nonce": 6}}}}
    {"InvalidTxError": "Expired"}

CamelCase keys are variant names, snake_case keys are fields, and a
``kind`` field wraps the next variant. The innermost variant is the
error type.
"""

import json
import re
from typing import Any, Dict, Optional, Tuple

from .errors import ErrorKind, ServerError, ServerTransactionError


_ACCESS_KEY_MISSING = re.compile(r"access key .* does not exist while viewing", re.IGNORECASE)
_ACCOUNT_MISSING = re.compile(r"account .* does not exist while viewing", re.IGNORECASE)


def _is_variant(name: Any) -> bool:
    return isinstance(name, str) and name.isidentifier() and name[:1].isupper()


def _walk_failure(payload: Any) -> Tuple[str, Dict[str, Any], Optional[str]]:
    """Return ``(type, data, message)`` for the innermost variant."""
    error_type = ErrorKind.UNTYPED.value
    data: Dict[str, Any] = {}
    node = payload

    while True:
        if isinstance(node, dict):
            variant = next((key for key in node if _is_variant(key)), None)
            if variant is not None:
                data.update({k: v for k, v in node.items() if k != variant})
                error_type = variant
                node = node[variant]
                continue

            kind = node.get("kind")
            if isinstance(kind, (dict, str)):
                data.update({k: v for k, v in node.items() if k != "kind"})
                node = kind
                continue

            data.update(node)
            return error_type, data, None

        if isinstance(node, str):
            if _is_variant(node):
                return node, data, None
            return error_type, data, node

        return error_type, data, None


def _render_message(error_type: str, data: Dict[str, Any]) -> str:
    if not data:
        return error_type
    return f"{error_type}: {json.dumps(data, sort_keys=True, default=str)}"


def parse_rpc_error(payload: Any) -> ServerError:
    """Build a ``ServerError`` from a structured failure payload."""
    error_type, data, message = _walk_failure(payload)
    return ServerError(message or _render_message(error_type, data), error_type, data)


def parse_result_error(outcome: Dict[str, Any]) -> ServerTransactionError:
    """Build a ``ServerTransactionError`` from a failed final outcome."""
    server_error = parse_rpc_error(outcome["status"]["Failure"])
    return ServerTransactionError(
        server_error.message,
        server_error.type,
        server_error.data,
        transaction_outcome=outcome.get("transaction_outcome"),
    )


def get_error_type_from_message(message: Any, fallback: str = ErrorKind.UNTYPED.value) -> str:
    """Map a free-text node error to a known kind."""
    text = message if isinstance(message, str) else str(message)

    if _ACCESS_KEY_MISSING.search(text):
        return ErrorKind.ACCESS_KEY_DOES_NOT_EXIST.value

    if _ACCOUNT_MISSING.search(text):
        return ErrorKind.ACCOUNT_DOES_NOT_EXIST.value

    return fallback or ErrorKind.UNTYPED.value
