"""
Final execution outcome handling.

Flattens the outcome tree into receipt log records, emits them as
diagnostics and turns a failed transaction status into a typed error.
"""

from typing import Any, Dict, List, Optional

import structlog

from ...logging_config import RECEIPTS_LOGGER
from ..recovery.errors import TypedError
from ..recovery.rpc_errors import parse_result_error, parse_rpc_error
from .models import ReceiptLogRecord, SignedTransaction


def _failure_of(status: Any) -> Optional[Dict[str, Any]]:
    """Return the structured failure payload of a status, if any."""
    if isinstance(status, dict):
        failure = status.get("Failure")
        if isinstance(failure, dict):
            return failure
    return None


class OutcomeAggregator:
    """Receipt diagnostics and final status decision."""

    def __init__(self, emit_logs: bool = True, logger: Optional[Any] = None):
        self.emit_logs = emit_logs
        self.logger = logger or structlog.stdlib.get_logger(RECEIPTS_LOGGER)

    def flatten(self, outcome: Dict[str, Any]) -> List[ReceiptLogRecord]:
        """
        Records for the transaction outcome then each receipt outcome, in
        provider order. Outcomes with no logs and no failure are skipped.
        """
        records: List[ReceiptLogRecord] = []
        outcomes = [outcome["transaction_outcome"], *outcome.get("receipts_outcome", [])]

        for item in outcomes:
            execution = item["outcome"]
            logs = list(execution.get("logs") or [])
            failure = _failure_of(execution.get("status"))

            if not logs and failure is None:
                continue

            records.append(ReceiptLogRecord(
                receipt_ids=list(execution.get("receipt_ids") or []),
                logs=logs,
                failure=parse_rpc_error(failure) if failure is not None else None,
            ))

        return records

    def print_logs_and_failures(self, contract_id: str, records: List[ReceiptLogRecord]) -> None:
        if not self.emit_logs:
            return

        for record in records:
            plural = "s" if len(record.receipt_ids) > 1 else ""
            self.logger.info(f"Receipt{plural}: {', '.join(record.receipt_ids)}")
            self.print_logs(contract_id, record.logs, "\t")
            if record.failure:
                self.logger.warning(f"\tFailure [{contract_id}]: {record.failure}")

    def print_logs(self, contract_id: str, logs: List[str], prefix: str = "") -> None:
        if not self.emit_logs:
            return

        for line in logs:
            self.logger.info(f"{prefix}Log [{contract_id}]: {line}")

    def resolve(
        self,
        outcome: Dict[str, Any],
        signed_transaction: SignedTransaction,
        return_error: bool = False,
    ) -> Dict[str, Any]:
        """
        Emit diagnostics, then return the raw outcome or raise.

        Raises:
            TypedError: Legacy ``{error_message, error_type}`` failures
            ServerTransactionError: Any other structured failure
        """
        records = self.flatten(outcome)
        self.print_logs_and_failures(signed_transaction.transaction.receiver_id, records)

        failure = _failure_of(outcome.get("status"))
        if return_error or failure is None:
            return outcome

        # Older nodes report {error_message, error_type}
        if failure.get("error_message") and failure.get("error_type"):
            transaction_id = outcome["transaction_outcome"]["id"]
            raise TypedError(
                f"Transaction {transaction_id} failed. {failure['error_message']}",
                failure["error_type"],
            )

        raise parse_result_error(outcome)
