from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

AMOUNT_SCALE = Decimal("0.0001")
MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

ZERO = Decimal("0.0000")


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class ProcessingResult(Enum):
    SUCCESS = "success"
    IGNORED = "ignored"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class DisputableTransaction:
    """History entry for an applied deposit or withdrawal."""

    transaction_id: int
    client_id: int
    amount: Decimal
    transaction_type: TransactionType
    disputed: bool = False
    charged_back: bool = False

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "DisputableTransaction":
        return cls(
            transaction_id=transaction.transaction_id,
            client_id=transaction.client_id,
            amount=transaction.amount,
            transaction_type=transaction.transaction_type,
        )


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Decimal) -> None:
        self.held -= amount

    def lock(self) -> None:
        self.locked = True


@dataclass(frozen=True)
class AccountSummary:
    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool

    @classmethod
    def from_account(cls, account: ClientAccount) -> "AccountSummary":
        return cls(
            client_id=account.client_id,
            available=account.available,
            held=account.held,
            total=account.total,
            locked=account.locked,
        )


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.processed = 0
        self.ignored = 0
        self.rejected = 0
        self.malformed = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.SUCCESS:
            self.processed += 1
        elif result == ProcessingResult.IGNORED:
            self.ignored += 1
        elif result == ProcessingResult.REJECTED:
            self.rejected += 1

    def record_malformed(self) -> None:
        self.malformed += 1

    def __repr__(self) -> str:
        return f"Processed: {self.processed}, Ignored: {self.ignored}, Rejected: {self.rejected}, Malformed: {self.malformed}"
