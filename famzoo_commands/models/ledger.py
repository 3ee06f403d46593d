"""
Family Ledger Models

Records held by the ledger collaborator that command handlers read and
write: accounts, members, transactions and shared lists.

DESIGN DECISION: Accounts do not store a balance.
A balance is always recomputed from the transaction history when a
handler needs it, so there is no cached figure to drift out of date.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================

class AccountType(str, Enum):
    """Kinds of family account."""
    SPENDING = "spending"
    SAVINGS = "savings"
    PARENT = "parent"
    ALLOWANCE = "allowance"
    CHORES = "chores"

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()} Account"

    @property
    def can_debit(self) -> bool:
        return self in (AccountType.SPENDING, AccountType.PARENT)

    @property
    def can_credit(self) -> bool:
        return True


class MemberRole(str, Enum):
    PARENT = "parent"
    CHILD = "child"
    TEEN = "teen"
    ADMIN = "admin"


class Permission(str, Enum):
    VIEW_ACCOUNTS = "view_accounts"
    MANAGE_OWN_ACCOUNT = "manage_own_account"
    MANAGE_ALL_ACCOUNTS = "manage_all_accounts"
    CREATE_LISTS = "create_lists"
    MANAGE_LISTS = "manage_lists"
    VIEW_TRANSACTIONS = "view_transactions"
    MANAGE_TRANSACTIONS = "manage_transactions"
    MANAGE_FAMILY_MEMBERS = "manage_family_members"
    MANAGE_SETTINGS = "manage_settings"


_ROLE_PERMISSIONS: dict[MemberRole, frozenset[Permission]] = {
    MemberRole.ADMIN: frozenset(Permission),
    MemberRole.PARENT: frozenset(Permission),
    MemberRole.TEEN: frozenset({
        Permission.VIEW_ACCOUNTS,
        Permission.MANAGE_OWN_ACCOUNT,
        Permission.CREATE_LISTS,
        Permission.MANAGE_LISTS,
        Permission.VIEW_TRANSACTIONS,
    }),
    MemberRole.CHILD: frozenset({
        Permission.VIEW_ACCOUNTS,
        Permission.MANAGE_OWN_ACCOUNT,
        Permission.CREATE_LISTS,
    }),
}


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class TransactionStatus(str, Enum):
    """Transaction lifecycle. Only COMPLETED transactions count toward a balance."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


# =============================================================================
# RECORDS
# =============================================================================

class Member(BaseModel):
    """A family member."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    role: MemberRole
    family_id: str = Field(..., min_length=1)
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self) -> str:
        return f"{self.full_name} ({self.role.value.capitalize()})"

    def has_permission(self, permission: Permission) -> bool:
        return permission in _ROLE_PERMISSIONS[self.role]

    def matches(self, reference: str) -> bool:
        """True if ``reference`` names this member (first or full name, any case)."""
        ref = reference.strip().lower()
        return ref in (self.first_name.lower(), self.full_name.lower(), str(self.id))


class Account(BaseModel):
    """A family account. Its balance is derived from transactions."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType
    currency: str = Field(default="USD", min_length=3, max_length=3)
    owner_id: Optional[UUID] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.type.display_name})"

    def matches(self, reference: str) -> bool:
        ref = reference.strip().lower()
        return ref in (self.name.lower(), str(self.id))


class Transaction(BaseModel):
    """One credit or debit against an account."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    account_id: UUID
    type: TransactionType
    amount: Decimal = Field(..., gt=0)
    description: str = Field(default="", max_length=500)
    status: TransactionStatus = TransactionStatus.COMPLETED
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TransactionType.CREDIT else -self.amount


class ListItem(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    text: str = Field(..., min_length=1, max_length=500)
    completed: bool = False
    due_date: Optional[date] = None
    recurrence: Optional[str] = None


class FamilyList(BaseModel):
    """A todo or shopping list, optionally shared with members."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=100)
    items: tuple[ListItem, ...] = ()
    shared_with: tuple[UUID, ...] = ()

    @property
    def open_items(self) -> list[ListItem]:
        return [item for item in self.items if not item.completed]

    def matches(self, reference: str) -> bool:
        return reference.strip().lower() == self.name.lower()


def compute_balance(transactions: list[Transaction]) -> Decimal:
    """Sum completed transactions into a balance."""
    return sum(
        (t.signed_amount for t in transactions if t.status == TransactionStatus.COMPLETED),
        Decimal("0"),
    )
