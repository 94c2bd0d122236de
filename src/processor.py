import logging
from typing import Optional

from errors import DuplicateTxId
from models import ClientAccount, DisputableTransaction, ProcessingResult, Transaction, TransactionType
from state import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions against ledger state, one at a time.
    Returns ProcessingResult to indicate what happened to the record.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: State was mutated
            IGNORED: Defined no-op (locked account, insufficient funds, unknown or mismatched tx)
            REJECTED: Invalid amount for a deposit or withdrawal

        Raises:
            DuplicateTxId: Deposit or withdrawal reuses an id already in history
        """
        account = self._state.get_or_create_account(transaction.client_id)

        if account.locked:
            logger.debug(f"Client {account.client_id} is locked, ignoring {transaction}")
            return ProcessingResult.IGNORED

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(account, transaction)

        return ProcessingResult.REJECTED

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if not self._has_valid_amount(transaction):
            return ProcessingResult.REJECTED

        if self._state.has_transaction(transaction.transaction_id):
            raise DuplicateTxId(transaction.transaction_id)

        account.credit(transaction.amount)
        self._state.store_transaction(transaction)
        return ProcessingResult.SUCCESS

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if not self._has_valid_amount(transaction):
            return ProcessingResult.REJECTED

        if self._state.has_transaction(transaction.transaction_id):
            raise DuplicateTxId(transaction.transaction_id)

        if account.available < transaction.amount:
            logger.debug(f"Withdrawal tx {transaction.transaction_id}: insufficient funds ({account.available} < {transaction.amount})")
            return ProcessingResult.IGNORED

        account.debit(transaction.amount)
        self._state.store_transaction(transaction)
        return ProcessingResult.SUCCESS

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original = self._find_original(transaction)
        if original is None:
            return ProcessingResult.IGNORED

        if original.disputed or original.charged_back:
            logger.debug(f"Dispute for tx {transaction.transaction_id}: transaction already disputed or closed")
            return ProcessingResult.IGNORED

        # Deposits and withdrawals are held the same way; available may go negative.
        account.hold(original.amount)
        original.disputed = True
        return ProcessingResult.SUCCESS

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original = self._find_original(transaction)
        if original is None:
            return ProcessingResult.IGNORED

        if not original.disputed:
            logger.debug(f"Resolve for tx {transaction.transaction_id}: transaction not disputed")
            return ProcessingResult.IGNORED

        account.release_hold(original.amount)
        original.disputed = False
        return ProcessingResult.SUCCESS

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        original = self._find_original(transaction)
        if original is None:
            return ProcessingResult.IGNORED

        if not original.disputed:
            logger.debug(f"Chargeback for tx {transaction.transaction_id}: transaction not disputed")
            return ProcessingResult.IGNORED

        account.remove_held(original.amount)
        account.lock()
        original.disputed = False
        original.charged_back = True
        return ProcessingResult.SUCCESS

    def _find_original(self, transaction: Transaction) -> Optional[DisputableTransaction]:
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None:
            logger.debug(f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: transaction not found")
            return None

        if original.client_id != transaction.client_id:
            logger.debug(f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: client mismatch (expected {original.client_id}, got {transaction.client_id})")
            return None

        return original

    @staticmethod
    def _has_valid_amount(transaction: Transaction) -> bool:
        if transaction.amount is None or transaction.amount <= 0:
            logger.warning(f"{transaction.transaction_type.value.capitalize()} tx {transaction.transaction_id}: invalid amount {transaction.amount}")
            return False
        return True
