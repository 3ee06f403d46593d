"""
In-Memory Storage Implementation

Backs the ledger and audit interfaces with plain Python collections.
Used for tests, local development and as the default collaborator when
no remote ledger is configured.

TRADEOFFS:
- Nothing survives a restart
- Single event loop only; there is no locking
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from famzoo_commands.models.audit import AuditEvent
from famzoo_commands.models.ledger import (
    Account,
    AccountType,
    FamilyList,
    ListItem,
    Member,
    MemberRole,
    Transaction,
    TransactionType,
)
from famzoo_commands.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    LedgerStorageInterface,
    NotFoundError,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Ledger kept in dictionaries, keyed by record ID."""

    def __init__(self):
        self._accounts: dict[UUID, Account] = {}
        self._transactions: list[Transaction] = []
        self._members: dict[UUID, Member] = {}
        self._lists: dict[UUID, FamilyList] = {}
        self._selected_account_id: Optional[UUID] = None

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    def add_member(self, member: Member) -> Member:
        self._members[member.id] = member
        return member

    def add_account(self, account: Account, opening_balance: Decimal = Decimal("0")) -> Account:
        """Store an account, recording any opening balance as a credit."""
        self._accounts[account.id] = account
        if opening_balance > 0:
            self._transactions.append(Transaction(
                account_id=account.id,
                type=TransactionType.CREDIT,
                amount=opening_balance,
                description="Opening balance",
            ))
        return account

    @classmethod
    def with_sample_family(cls) -> "InMemoryLedgerStorage":
        """A small family with accounts, balances and a todo list."""
        storage = cls()

        parent = storage.add_member(Member(
            first_name="John", last_name="Doe", role=MemberRole.PARENT, family_id="family1",
            email="john@example.com",
        ))
        teen = storage.add_member(Member(
            first_name="Sarah", last_name="Doe", role=MemberRole.TEEN, family_id="family1",
            email="sarah@example.com",
        ))
        storage.add_member(Member(
            first_name="Tommy", last_name="Doe", role=MemberRole.CHILD, family_id="family1",
        ))

        storage.add_account(
            Account(name="John's Spending", type=AccountType.SPENDING, owner_id=parent.id),
            opening_balance=Decimal("125.50"),
        )
        storage.add_account(
            Account(name="Sarah's Savings", type=AccountType.SAVINGS, owner_id=teen.id),
            opening_balance=Decimal("75.25"),
        )
        storage.add_account(
            Account(name="Parent Account", type=AccountType.PARENT, owner_id=parent.id),
            opening_balance=Decimal("1000.00"),
        )

        storage.add_list(FamilyList(
            name="To-do",
            items=(
                ListItem(text="Buy groceries"),
                ListItem(text="Walk the dog"),
                ListItem(text="Finish homework"),
            ),
        ))
        return storage

    def add_list(self, family_list: FamilyList) -> FamilyList:
        self._lists[family_list.id] = family_list
        return family_list

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    async def list_accounts(self) -> list[Account]:
        return [a for a in self._accounts.values() if a.is_active]

    async def find_account(self, reference: str) -> Optional[Account]:
        for account in self._accounts.values():
            if account.is_active and account.matches(reference):
                return account
        return None

    async def create_account(
        self,
        name: str,
        account_type: AccountType,
        owner_id: Optional[UUID] = None,
        currency: str = "USD",
    ) -> Account:
        if await self.find_account(name) is not None:
            raise DuplicateError(f"Account already exists: {name}")
        return self.add_account(Account(
            name=name, type=account_type, owner_id=owner_id, currency=currency
        ))

    async def get_selected_account(self) -> Optional[Account]:
        if self._selected_account_id is not None:
            return self._accounts.get(self._selected_account_id)
        accounts = await self.list_accounts()
        return accounts[0] if accounts else None

    async def select_account(self, account_id: UUID) -> Account:
        if account_id not in self._accounts:
            raise NotFoundError(f"Account not found: {account_id}")
        self._selected_account_id = account_id
        return self._accounts[account_id]

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    async def list_transactions(self, account_id: UUID) -> list[Transaction]:
        return [t for t in self._transactions if t.account_id == account_id]

    async def add_transaction(self, transaction: Transaction) -> Transaction:
        if transaction.account_id not in self._accounts:
            raise NotFoundError(f"Account not found: {transaction.account_id}")
        self._transactions.append(transaction)
        return transaction

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------

    async def list_members(self) -> list[Member]:
        return list(self._members.values())

    async def find_member(self, reference: str) -> Optional[Member]:
        for member in self._members.values():
            if member.matches(reference):
                return member
        return None

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    async def list_lists(self) -> list[FamilyList]:
        return list(self._lists.values())

    async def find_list(self, name: str) -> Optional[FamilyList]:
        for family_list in self._lists.values():
            if family_list.matches(name):
                return family_list
        return None

    async def create_list(self, name: str) -> FamilyList:
        if await self.find_list(name) is not None:
            raise DuplicateError(f"List already exists: {name}")
        family_list = FamilyList(name=name)
        self.add_list(family_list)
        return family_list

    async def save_list(self, family_list: FamilyList) -> FamilyList:
        if family_list.id not in self._lists:
            raise NotFoundError(f"List not found: {family_list.name}")
        self._lists[family_list.id] = family_list
        return family_list

    async def find_item(self, text: str) -> Optional[tuple[FamilyList, ListItem]]:
        wanted = text.strip().lower()
        for family_list in self._lists.values():
            for item in family_list.items:
                if not item.completed and item.text.lower() == wanted:
                    return family_list, item
        return None


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
