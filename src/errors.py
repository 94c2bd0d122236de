from typing import Mapping, Optional


class LedgerError(Exception):
    """Base class for recoverable ledger input errors."""


class MalformedRecord(LedgerError):
    """Row cannot be decoded into a Transaction."""

    def __init__(self, reason: str, row: Optional[Mapping] = None):
        self.reason = reason
        self.row = row
        super().__init__(f"{reason}: {row}" if row is not None else reason)


class DuplicateTxId(LedgerError):
    """Deposit or withdrawal reuses a transaction id already in history."""

    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(f"transaction id {transaction_id} already exists")
