"""
Abstract Storage Interface

DESIGN DECISION: Handlers talk to the family ledger only through this
interface. This allows us to:
1. Put the remote FamZoo API behind it without touching handlers
2. Use in-memory storage for testing
3. Keep the command core free of transport concerns

The interface stores facts (accounts, transactions, lists) and never
derived figures. Balances are computed by callers from transactions.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from famzoo_commands.models.audit import AuditEvent
from famzoo_commands.models.ledger import (
    Account,
    AccountType,
    FamilyList,
    ListItem,
    Member,
    Transaction,
)


class LedgerStorageInterface(ABC):
    """
    Abstract interface for the family ledger.

    Any backend (remote API, database, memory) must implement these methods.
    """

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_accounts(self) -> list[Account]:
        """Return all active accounts in creation order."""
        pass

    @abstractmethod
    async def find_account(self, reference: str) -> Optional[Account]:
        """
        Find an account by name (case-insensitive) or ID.

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_account(
        self,
        name: str,
        account_type: AccountType,
        owner_id: Optional[UUID] = None,
        currency: str = "USD",
    ) -> Account:
        """
        Create a new account.

        Raises:
            DuplicateError: If an account with that name exists
        """
        pass

    @abstractmethod
    async def get_selected_account(self) -> Optional[Account]:
        """The account commands apply to when none is named."""
        pass

    @abstractmethod
    async def select_account(self, account_id: UUID) -> Account:
        """
        Make an account the current one.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        pass

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_transactions(self, account_id: UUID) -> list[Transaction]:
        """All transactions for an account, oldest first."""
        pass

    @abstractmethod
    async def add_transaction(self, transaction: Transaction) -> Transaction:
        """
        Record a transaction.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        pass

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_members(self) -> list[Member]:
        pass

    @abstractmethod
    async def find_member(self, reference: str) -> Optional[Member]:
        """Find a member by first name, full name or ID."""
        pass

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_lists(self) -> list[FamilyList]:
        pass

    @abstractmethod
    async def find_list(self, name: str) -> Optional[FamilyList]:
        pass

    @abstractmethod
    async def create_list(self, name: str) -> FamilyList:
        """
        Raises:
            DuplicateError: If a list with that name exists
        """
        pass

    @abstractmethod
    async def save_list(self, family_list: FamilyList) -> FamilyList:
        """
        Replace a stored list with an updated copy.

        Raises:
            NotFoundError: If the list doesn't exist
        """
        pass

    @abstractmethod
    async def find_item(self, text: str) -> Optional[tuple[FamilyList, ListItem]]:
        """Find the first open item whose text matches, with its list."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """All events for one utterance, in chronological order."""
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Most recent events, newest first."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
