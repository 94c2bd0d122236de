from typing import Dict, Iterator, Optional

from models import ClientAccount, DisputableTransaction, Transaction


class StateManager:
    """
    Owns the ledger state for a single engine instance.
    Stores client accounts and the disputable transaction history.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._history: Dict[int, DisputableTransaction] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def has_transaction(self, transaction_id: int) -> bool:
        return transaction_id in self._history

    def store_transaction(self, transaction: Transaction) -> DisputableTransaction:
        """Record an applied deposit or withdrawal for future dispute lookups."""
        entry = DisputableTransaction.from_transaction(transaction)
        self._history[transaction.transaction_id] = entry
        return entry

    def get_transaction(self, transaction_id: int) -> Optional[DisputableTransaction]:
        """Retrieve stored history entry by ID."""
        return self._history.get(transaction_id)

    def iter_accounts(self) -> Iterator[ClientAccount]:
        """Accounts in first-appearance order."""
        return iter(self._accounts.values())

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
