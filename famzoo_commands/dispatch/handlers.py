"""
Default Command Handlers

Handlers for the commands the assistant can run against the family
ledger. Each handler:
- reads parameters by type or flag name, never by position
- recomputes balances from transactions on every call
- reports user mistakes as failure responses rather than raising

Storage errors are allowed to propagate; the dispatcher turns them
into failure responses.

Pairs without a handler here (shortcuts, member select, list new)
are answered by the dispatcher with "not yet implemented".
"""

from decimal import Decimal
from typing import Optional

from famzoo_commands.dispatch.registry import HandlerContext, HandlerRegistry
from famzoo_commands.models.command import AccountBalanceResponse, Command, CommandResponse
from famzoo_commands.models.ledger import (
    Account,
    AccountType,
    FamilyList,
    ListItem,
    Transaction,
    TransactionType,
    compute_balance,
)
from famzoo_commands.models.vocabulary import CommandAction, CommandType, ParameterType


DEFAULT_HANDLERS = HandlerRegistry()


# =============================================================================
# PARAMETER HELPERS
# =============================================================================

def _flag_text(command: Command, *names: str) -> Optional[str]:
    for name in names:
        parameter = command.named(name)
        if parameter is not None and parameter.type == ParameterType.TEXT:
            return parameter.string_value
    return None


def _extra_text(command: Command) -> Optional[str]:
    """Bare trailing words joined back together ("walk the dog")."""
    words = [p.string_value for p in command.extra_arguments()]
    return " ".join(words) if words else None


def _main_text(command: Command) -> Optional[str]:
    """The action's required text value, wherever it sits."""
    for parameter in command.parameters_of_type(ParameterType.TEXT):
        if parameter.is_required:
            return parameter.string_value
    return None


def _account_reference(command: Command) -> Optional[str]:
    typed = command.first_of_type(ParameterType.ACCOUNT)
    if typed is not None:
        return typed.string_value
    return _flag_text(command, "account") or _extra_text(command)


def _member_reference(command: Command) -> Optional[str]:
    typed = command.first_of_type(ParameterType.MEMBER)
    if typed is not None:
        return typed.string_value
    return _flag_text(command, "member", "with") or _extra_text(command)


def _amount(command: Command) -> Optional[Decimal]:
    parameter = command.first_of_type(ParameterType.AMOUNT)
    if parameter is None or parameter.decimal_value is None:
        return None
    return parameter.decimal_value


async def _resolve_account(command: Command, context: HandlerContext) -> Optional[Account]:
    reference = _account_reference(command)
    if reference:
        return await context.storage.find_account(reference)
    return await context.storage.get_selected_account()


async def _balance(context: HandlerContext, account: Account) -> Decimal:
    return compute_balance(await context.storage.list_transactions(account.id))


async def _target_list(command: Command, context: HandlerContext) -> Optional[FamilyList]:
    name = _flag_text(command, "list") or context.settings.default_list_name
    return await context.storage.find_list(name)


# =============================================================================
# ACCOUNT
# =============================================================================

@DEFAULT_HANDLERS.register(CommandType.ACCOUNT, CommandAction.BALANCE)
async def account_balance(command: Command, context: HandlerContext) -> CommandResponse:
    account = await _resolve_account(command, context)
    if account is None:
        return CommandResponse.failure("Account not found")

    balance = await _balance(context, account)
    return AccountBalanceResponse.for_account(
        account_name=account.name,
        balance=balance,
        message=f"{account.name}: {context.formatter.format_currency(balance)}",
    )


async def _post_transaction(
    command: Command,
    context: HandlerContext,
    transaction_type: TransactionType,
) -> CommandResponse:
    amount = _amount(command)
    if amount is None or amount <= 0:
        return CommandResponse.failure("Invalid amount specified")

    account = await _resolve_account(command, context)
    if account is None:
        return CommandResponse.failure("Account not found")

    balance = await _balance(context, account)
    if transaction_type == TransactionType.DEBIT:
        if not account.type.can_debit:
            return CommandResponse.failure(
                f"{account.type.display_name} does not allow debits"
            )
        if balance < amount:
            return CommandResponse.failure(
                f"Insufficient funds in {account.name} "
                f"({context.formatter.format_currency(balance)} available)"
            )

    transaction = await context.storage.add_transaction(Transaction(
        account_id=account.id,
        type=transaction_type,
        amount=amount,
        description=_flag_text(command, "note", "description", "memo") or "",
    ))
    new_balance = await _balance(context, account)

    verb = "credited" if transaction_type == TransactionType.CREDIT else "debited"
    preposition = "to" if transaction_type == TransactionType.CREDIT else "from"
    return CommandResponse.ok(
        f"Successfully {verb} {context.formatter.format_currency(amount)} "
        f"{preposition} {account.name}",
        data={
            "amount": amount,
            "account_name": account.name,
            "balance": new_balance,
            "transaction_id": str(transaction.id),
        },
    )


@DEFAULT_HANDLERS.register(CommandType.ACCOUNT, CommandAction.CREDIT)
async def account_credit(command: Command, context: HandlerContext) -> CommandResponse:
    return await _post_transaction(command, context, TransactionType.CREDIT)


@DEFAULT_HANDLERS.register(CommandType.ACCOUNT, CommandAction.DEBIT)
async def account_debit(command: Command, context: HandlerContext) -> CommandResponse:
    return await _post_transaction(command, context, TransactionType.DEBIT)


@DEFAULT_HANDLERS.register(CommandType.ACCOUNT, CommandAction.NEW)
async def account_new(command: Command, context: HandlerContext) -> CommandResponse:
    name = _main_text(command)
    if not name:
        return CommandResponse.failure("No account name specified")

    type_name = (_flag_text(command, "type") or AccountType.SPENDING.value).lower()
    try:
        account_type = AccountType(type_name)
    except ValueError:
        valid = ", ".join(t.value for t in AccountType)
        return CommandResponse.failure(f"Unknown account type '{type_name}'. Use one of: {valid}")

    owner_id = None
    owner_reference = _flag_text(command, "owner", "member")
    if owner_reference:
        owner = await context.storage.find_member(owner_reference)
        if owner is None:
            return CommandResponse.failure(f"Member not found: {owner_reference}")
        owner_id = owner.id

    account = await context.storage.create_account(
        name,
        account_type,
        owner_id=owner_id,
        currency=context.formatter.settings.currency_code,
    )
    return CommandResponse.ok(
        f"Created {account.display_name}",
        data={"account_id": str(account.id), "account_name": account.name},
    )


@DEFAULT_HANDLERS.register(CommandType.ACCOUNT, CommandAction.SELECT)
async def account_select(command: Command, context: HandlerContext) -> CommandResponse:
    reference = _account_reference(command)
    if not reference:
        return CommandResponse.failure("Which account? Try: account select \"John's Spending\"")

    account = await context.storage.find_account(reference)
    if account is None:
        return CommandResponse.failure(f"Account not found: {reference}")

    await context.storage.select_account(account.id)
    return CommandResponse.ok(
        f"Now using {account.name}",
        data={"account_id": str(account.id), "account_name": account.name},
    )


@DEFAULT_HANDLERS.register(CommandType.ACCOUNT, CommandAction.LIST)
async def account_list(command: Command, context: HandlerContext) -> CommandResponse:
    accounts = await context.storage.list_accounts()
    rows = []
    for account in accounts:
        rows.append({
            "name": account.name,
            "type": account.type.value,
            "balance": await _balance(context, account),
        })

    lines = [
        f"{row['name']}: {context.formatter.format_currency(row['balance'])}" for row in rows
    ]
    return CommandResponse.ok(
        "\n".join(lines) if lines else "No accounts yet",
        data={"accounts": rows},
    )


# =============================================================================
# LIST / ITEM
# =============================================================================

@DEFAULT_HANDLERS.register(CommandType.LIST, CommandAction.LIST)
async def list_list(command: Command, context: HandlerContext) -> CommandResponse:
    lists = await context.storage.list_lists()
    return CommandResponse.ok(
        ", ".join(f"{fl.name} ({len(fl.open_items)})" for fl in lists) if lists else "No lists yet",
        data={"lists": [fl.name for fl in lists]},
    )


@DEFAULT_HANDLERS.register(CommandType.LIST, CommandAction.SHOW)
async def list_show(command: Command, context: HandlerContext) -> CommandResponse:
    name = _flag_text(command, "list") or _extra_text(command) or context.settings.default_list_name
    family_list = await context.storage.find_list(name)
    if family_list is None:
        return CommandResponse.failure(f"List not found: {name}")

    items = [item.text for item in family_list.open_items]
    return CommandResponse.ok(
        f"{family_list.name}: " + ("; ".join(items) if items else "nothing to do"),
        data={"list": family_list.name, "items": items},
    )


@DEFAULT_HANDLERS.register(CommandType.LIST, CommandAction.CREATE)
async def list_create(command: Command, context: HandlerContext) -> CommandResponse:
    name = _main_text(command)
    if not name:
        return CommandResponse.failure("No list name specified")

    family_list = await context.storage.create_list(name)
    return CommandResponse.ok(f"Created list '{family_list.name}'", data={"list": family_list.name})


@DEFAULT_HANDLERS.register(CommandType.LIST, CommandAction.ADD)
@DEFAULT_HANDLERS.register(CommandType.ITEM, CommandAction.ADD)
async def add_item(command: Command, context: HandlerContext) -> CommandResponse:
    text = _main_text(command)
    if not text:
        return CommandResponse.failure("No item text specified")

    family_list = await _target_list(command, context)
    if family_list is None:
        return CommandResponse.failure("List not found")

    item = ListItem(text=text)
    await context.storage.save_list(
        family_list.model_copy(update={"items": family_list.items + (item,)})
    )
    return CommandResponse.ok(
        f"Added '{text}' to {family_list.name}",
        data={"item": text, "list": family_list.name},
    )


@DEFAULT_HANDLERS.register(CommandType.LIST, CommandAction.SHARE)
async def list_share(command: Command, context: HandlerContext) -> CommandResponse:
    member_reference = _flag_text(command, "with", "member")
    if not member_reference:
        return CommandResponse.failure("Share with whom? Try: list share --with Sarah")

    member = await context.storage.find_member(member_reference)
    if member is None:
        return CommandResponse.failure(f"Member not found: {member_reference}")

    family_list = await _target_list(command, context)
    if family_list is None:
        return CommandResponse.failure("List not found")

    if member.id not in family_list.shared_with:
        family_list = await context.storage.save_list(
            family_list.model_copy(update={"shared_with": family_list.shared_with + (member.id,)})
        )
    return CommandResponse.ok(
        f"Shared {family_list.name} with {member.first_name}",
        data={"list": family_list.name, "member": member.full_name},
    )


async def _update_item(context: HandlerContext, reference: Optional[str], **changes):
    if not reference:
        return None, CommandResponse.failure("Which item? Name it after the command")

    found = await context.storage.find_item(reference)
    if found is None:
        return None, CommandResponse.failure(f"Item not found: {reference}")

    family_list, item = found
    updated = item.model_copy(update=changes)
    items = tuple(updated if i.id == item.id else i for i in family_list.items)
    await context.storage.save_list(family_list.model_copy(update={"items": items}))
    return updated, None


@DEFAULT_HANDLERS.register(CommandType.ITEM, CommandAction.COMPLETE)
async def item_complete(command: Command, context: HandlerContext) -> CommandResponse:
    reference = _flag_text(command, "item") or _extra_text(command)
    item, error = await _update_item(context, reference, completed=True)
    if error is not None:
        return error
    return CommandResponse.ok(f"Completed '{item.text}'", data={"item": item.text})


@DEFAULT_HANDLERS.register(CommandType.ITEM, CommandAction.DUE)
async def item_due(command: Command, context: HandlerContext) -> CommandResponse:
    parameter = command.first_of_type(ParameterType.DATE)
    if parameter is None or parameter.date_value is None:
        return CommandResponse.failure("Invalid due date specified")

    reference = _flag_text(command, "item") or _extra_text(command)
    item, error = await _update_item(context, reference, due_date=parameter.date_value)
    if error is not None:
        return error

    due = parameter.date_value.strftime(context.formatter.settings.short_date_format)
    return CommandResponse.ok(
        f"'{item.text}' is due {due}",
        data={"item": item.text, "due_date": parameter.date_value.isoformat()},
    )


@DEFAULT_HANDLERS.register(CommandType.ITEM, CommandAction.OCCURS)
async def item_occurs(command: Command, context: HandlerContext) -> CommandResponse:
    schedule = _main_text(command)
    if not schedule:
        return CommandResponse.failure("No schedule specified")

    reference = _flag_text(command, "item") or _extra_text(command)
    item, error = await _update_item(context, reference, recurrence=schedule)
    if error is not None:
        return error
    return CommandResponse.ok(
        f"'{item.text}' repeats {schedule}",
        data={"item": item.text, "recurrence": schedule},
    )


@DEFAULT_HANDLERS.register(CommandType.ITEM, CommandAction.LIST)
async def item_list(command: Command, context: HandlerContext) -> CommandResponse:
    family_list = await _target_list(command, context)
    if family_list is None:
        return CommandResponse.failure("List not found")

    items = [
        {
            "text": item.text,
            "due_date": item.due_date.isoformat() if item.due_date else None,
            "recurrence": item.recurrence,
        }
        for item in family_list.open_items
    ]
    return CommandResponse.ok(
        f"{len(items)} open items in {family_list.name}",
        data={"list": family_list.name, "items": items},
    )


# =============================================================================
# MEMBER
# =============================================================================

@DEFAULT_HANDLERS.register(CommandType.MEMBER, CommandAction.LIST)
async def member_list(command: Command, context: HandlerContext) -> CommandResponse:
    members = await context.storage.list_members()
    return CommandResponse.ok(
        ", ".join(m.display_name for m in members) if members else "No family members yet",
        data={"members": [m.full_name for m in members]},
    )


@DEFAULT_HANDLERS.register(CommandType.MEMBER, CommandAction.SHOW)
async def member_show(command: Command, context: HandlerContext) -> CommandResponse:
    reference = _member_reference(command)
    if not reference:
        return CommandResponse.failure("Which member? Try: member show Sarah")

    member = await context.storage.find_member(reference)
    if member is None:
        return CommandResponse.failure(f"Member not found: {reference}")

    return CommandResponse.ok(
        member.display_name,
        data={"member": member.full_name, "role": member.role.value, "email": member.email},
    )


@DEFAULT_HANDLERS.register(CommandType.MEMBER, CommandAction.BALANCE)
async def member_balance(command: Command, context: HandlerContext) -> CommandResponse:
    reference = _member_reference(command)
    if not reference:
        return CommandResponse.failure("Which member? Try: member balance Sarah")

    member = await context.storage.find_member(reference)
    if member is None:
        return CommandResponse.failure(f"Member not found: {reference}")

    total = Decimal("0")
    for account in await context.storage.list_accounts():
        if account.owner_id == member.id:
            total += await _balance(context, account)

    return CommandResponse.ok(
        f"{member.first_name} has {context.formatter.format_currency(total)}",
        data={"member": member.full_name, "balance": total},
    )
