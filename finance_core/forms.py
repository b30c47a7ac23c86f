"""Form state and the submit -> validate -> mutate -> notify cycle.

Form state is an immutable struct; every transition returns a new one.
The create/update/delete collaborators are injected async callables and
are awaited one at a time. A failed call is reported through the
notification sink and leaves the form fields as the user typed them.
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Awaitable, Callable, Mapping, Optional, Sequence, Union

from finance_core.domain import Budget, Category, Notification, Transaction
from finance_core.validation import BUDGET, TRANSACTION, parse_budget, parse_transaction

Mutation = Callable[..., Awaitable[None]]
Notify = Callable[[Notification], None]

_MESSAGES = {
    TRANSACTION: {
        "added": ("Transaction added", "Your transaction has been added successfully."),
        "updated": ("Transaction updated", "Your transaction has been updated successfully."),
        "deleted": ("Transaction deleted", "Your transaction has been deleted successfully."),
        "save_failed": "Failed to save transaction. Please try again.",
        "delete_failed": "Failed to delete transaction. Please try again.",
    },
    BUDGET: {
        "added": ("Budget added", "Your budget has been added successfully."),
        "updated": ("Budget updated", "Your budget has been updated successfully."),
        "save_failed": "Failed to save budget. Please try again.",
    },
}


class FormStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class FormState:
    kind: str
    fields: Mapping[str, str]
    errors: Mapping[str, str] = field(default_factory=dict)
    status: FormStatus = FormStatus.IDLE
    record: Optional[Union[Transaction, Budget]] = None  # the record being edited
    is_open: bool = True
    locked: frozenset = frozenset()

    @property
    def is_editing(self) -> bool:
        return self.record is not None and self.record.id is not None


@dataclass(frozen=True)
class DeleteDialog:
    is_open: bool = False
    target: Optional[Transaction] = None
    status: FormStatus = FormStatus.IDLE


def _amount_text(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def _first_category(categories: Sequence[Category]) -> str:
    return categories[0].name if categories else ""


def transaction_form(
    categories: Sequence[Category], today: date, transaction: Optional[Transaction] = None
) -> FormState:
    if transaction is None:
        fields = {
            "amount": "",
            "description": "",
            "date": today.isoformat(),
            "category": _first_category(categories),
        }
    else:
        fields = {
            "amount": _amount_text(transaction.amount),
            "description": transaction.description,
            "date": transaction.date.isoformat(),
            "category": transaction.category,
        }
    return FormState(kind=TRANSACTION, fields=fields, record=transaction)


def budget_form(categories: Sequence[Category], budget: Optional[Budget] = None) -> FormState:
    if budget is None:
        return FormState(kind=BUDGET, fields={"category": _first_category(categories), "amount": ""})

    # the category of an existing budget cannot be changed
    return FormState(
        kind=BUDGET,
        fields={"category": budget.category, "amount": _amount_text(budget.amount)},
        record=budget,
        locked=frozenset({"category"}),
    )


def set_field(state: FormState, name: str, value: str) -> FormState:
    """Update one field and clear that field's error."""
    if name in state.locked:
        return state
    errors = {k: v for k, v in state.errors.items() if k != name}
    return replace(state, fields={**state.fields, name: value}, errors=errors)


def close_form(state: FormState) -> FormState:
    return replace(state, is_open=False, errors={})


def _notify_success(notify: Notify, kind: str, key: str) -> None:
    title, message = _MESSAGES[kind][key]
    notify(Notification(title=title, message=message))


def _notify_error(notify: Notify, kind: str, key: str) -> None:
    notify(Notification(title="Error", message=_MESSAGES[kind][key], severity="destructive"))


async def _submit(
    state: FormState,
    parse: Callable,
    add: Mutation,
    edit: Mutation,
    notify: Notify,
    categories: Sequence[Category],
    reset: Callable[[], FormState],
) -> FormState:
    editing = state.is_editing
    record = {**state.fields, "id": state.record.id if editing else None}

    # membership is only enforced when creating, orphans stay editable
    check = parse(record, None if editing else categories)
    if check.is_left():
        return replace(state, errors=check.get_error(), status=FormStatus.IDLE)

    state = replace(state, errors={}, status=FormStatus.SUBMITTING)
    parsed = check.get_or_else(None)
    try:
        if editing:
            await edit(parsed)
        else:
            await add(parsed)
    except Exception as e:
        logging.error(f'Failed to save {state.kind}: {e}')
        _notify_error(notify, state.kind, "save_failed")
        return replace(state, status=FormStatus.ERROR)

    if editing:
        logging.info(f'Updated {state.kind} {parsed.id}')
        _notify_success(notify, state.kind, "updated")
        return replace(state, status=FormStatus.SUCCESS, is_open=False)

    logging.info(f'Added {state.kind} in category {parsed.category}')
    _notify_success(notify, state.kind, "added")
    return replace(reset(), status=FormStatus.SUCCESS)


async def submit_transaction(
    state: FormState,
    *,
    add: Mutation,
    edit: Mutation,
    notify: Notify,
    categories: Sequence[Category],
    today: date,
) -> FormState:
    return await _submit(
        state, parse_transaction, add, edit, notify, categories,
        reset=lambda: transaction_form(categories, today),
    )


async def submit_budget(
    state: FormState,
    *,
    add: Mutation,
    edit: Mutation,
    notify: Notify,
    categories: Sequence[Category],
) -> FormState:
    return await _submit(
        state, parse_budget, add, edit, notify, categories,
        reset=lambda: budget_form(categories),
    )


def request_delete(dialog: DeleteDialog, transaction: Transaction) -> DeleteDialog:
    return DeleteDialog(is_open=True, target=transaction)


def cancel_delete(dialog: DeleteDialog) -> DeleteDialog:
    return DeleteDialog()


async def confirm_delete(dialog: DeleteDialog, *, delete: Mutation, notify: Notify) -> DeleteDialog:
    if not dialog.is_open or dialog.target is None:
        return dialog

    dialog = replace(dialog, status=FormStatus.SUBMITTING)
    try:
        await delete(dialog.target.id)
    except Exception as e:
        logging.error(f'Failed to delete transaction {dialog.target.id}: {e}')
        _notify_error(notify, TRANSACTION, "delete_failed")
        return replace(dialog, status=FormStatus.ERROR)

    logging.info(f'Deleted transaction {dialog.target.id}')
    _notify_success(notify, TRANSACTION, "deleted")
    return DeleteDialog(status=FormStatus.SUCCESS)
