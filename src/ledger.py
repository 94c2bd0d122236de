import logging
from typing import Dict, Iterable, Iterator

from errors import DuplicateTxId
from models import AccountSummary, ClientAccount, ProcessingResult, ProcessingStats, Transaction
from processor import TransactionProcessor
from records import read_transactions
from state import StateManager

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Applies an ordered stream of transactions to client accounts.
    Each instance owns its own account map and transaction history.
    """

    def __init__(self):
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def apply(self, transaction: Transaction) -> ProcessingResult:
        """Apply one transaction. Duplicate tx ids are discarded, never raised."""
        try:
            result = self._processor.process_transaction(transaction)
        except DuplicateTxId as e:
            logger.warning(f"Discarding {transaction}: {e}")
            result = ProcessingResult.REJECTED

        self._stats.record(result)
        return result

    def apply_all(self, transactions: Iterable[Transaction]) -> None:
        for transaction in transactions:
            self.apply(transaction)

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing transactions from {filepath}")
        self.apply_all(read_transactions(filepath, self._stats))
        logger.info(f"Processing complete. {self._stats}")
        return self._state.get_all_accounts()

    def summaries(self) -> Iterator[AccountSummary]:
        """Yield a summary for every known client, in first-appearance order."""
        for account in self._state.iter_accounts():
            yield AccountSummary.from_account(account)
