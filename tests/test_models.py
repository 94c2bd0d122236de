import sys
import os
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    AccountSummary,
    ClientAccount,
    DisputableTransaction,
    ProcessingResult,
    ProcessingStats,
    Transaction,
    TransactionType,
)


class TestTransaction:
    def test_create_deposit(self):
        transaction = Transaction(
            transaction_type=TransactionType.DEPOSIT,
            client_id=1,
            transaction_id=1,
            amount=Decimal("100.0000"),
        )
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 1
        assert transaction.amount == Decimal("100.0000")

    def test_create_dispute_no_amount(self):
        transaction = Transaction(
            transaction_type=TransactionType.DISPUTE,
            client_id=1,
            transaction_id=1,
        )
        assert transaction.amount is None

    def test_is_immutable(self):
        transaction = Transaction(TransactionType.DISPUTE, client_id=1, transaction_id=1)
        with pytest.raises(FrozenInstanceError):
            transaction.client_id = 2

    def test_carries_amount(self):
        assert TransactionType.DEPOSIT.carries_amount
        assert TransactionType.WITHDRAWAL.carries_amount
        assert not TransactionType.DISPUTE.carries_amount
        assert not TransactionType.RESOLVE.carries_amount
        assert not TransactionType.CHARGEBACK.carries_amount


class TestClientAccount:
    def test_default_values(self):
        account = ClientAccount(client_id=1)
        assert account.available == Decimal("0")
        assert account.held == Decimal("0")
        assert account.locked is False

    def test_total_property(self):
        account = ClientAccount(
            client_id=1,
            available=Decimal("100"),
            held=Decimal("50"),
        )
        assert account.total == Decimal("150")

    def test_hold_and_release_keep_total(self):
        account = ClientAccount(client_id=1, available=Decimal("10.0000"))
        account.hold(Decimal("4.0000"))
        assert account.available == Decimal("6.0000")
        assert account.held == Decimal("4.0000")
        assert account.total == Decimal("10.0000")

        account.release_hold(Decimal("4.0000"))
        assert account.available == Decimal("10.0000")
        assert account.held == Decimal("0")

    def test_remove_held_and_lock(self):
        account = ClientAccount(client_id=1, held=Decimal("3.0000"))
        account.remove_held(Decimal("3.0000"))
        account.lock()
        assert account.total == Decimal("0")
        assert account.locked is True


class TestDisputableTransaction:
    def test_from_transaction(self):
        transaction = Transaction(TransactionType.WITHDRAWAL, client_id=4, transaction_id=9, amount=Decimal("2.5000"))
        entry = DisputableTransaction.from_transaction(transaction)
        assert entry.transaction_id == 9
        assert entry.client_id == 4
        assert entry.amount == Decimal("2.5000")
        assert entry.transaction_type == TransactionType.WITHDRAWAL
        assert entry.disputed is False
        assert entry.charged_back is False


class TestAccountSummary:
    def test_from_account(self):
        account = ClientAccount(client_id=7, available=Decimal("1.5000"), held=Decimal("2.0000"), locked=True)
        summary = AccountSummary.from_account(account)
        assert summary == AccountSummary(7, Decimal("1.5000"), Decimal("2.0000"), Decimal("3.5000"), True)


class TestProcessingStats:
    def test_enum_values(self):
        assert ProcessingResult.SUCCESS.value == "success"
        assert ProcessingResult.IGNORED.value == "ignored"
        assert ProcessingResult.REJECTED.value == "rejected"

    def test_record(self):
        stats = ProcessingStats()
        stats.record(ProcessingResult.SUCCESS)
        stats.record(ProcessingResult.SUCCESS)
        stats.record(ProcessingResult.IGNORED)
        stats.record(ProcessingResult.REJECTED)
        stats.record_malformed()
        assert (stats.processed, stats.ignored, stats.rejected, stats.malformed) == (2, 1, 1, 1)
        assert repr(stats) == "Processed: 2, Ignored: 1, Rejected: 1, Malformed: 1"
