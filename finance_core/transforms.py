import json
import logging
from dataclasses import replace
from functools import reduce
from typing import Tuple
from uuid import uuid4

from finance_core.domain import Budget, Category, Transaction
from finance_core.validation import parse_budget, parse_transaction


def load_seed(
    path: str,
) -> Tuple[
    Tuple[Category, ...],
    Tuple[Transaction, ...],
    Tuple[Budget, ...],
]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    categories = tuple(Category(**c) for c in data.get("categories", []))
    transactions = tuple(
        _parsed(parse_transaction(t), "transaction", t) for t in data.get("transactions", [])
    )
    budgets = tuple(
        _parsed(parse_budget(b), "budget", b) for b in data.get("budgets", [])
    )

    logging.info(
        f'Loaded {len(categories)} categories, {len(transactions)} transactions '
        f'and {len(budgets)} budgets from {path}'
    )
    return categories, transactions, budgets


def _parsed(result, kind: str, record: dict):
    if result.is_left():
        raise ValueError(f"Invalid {kind} record {record!r}: {result.get_error()}")
    parsed = result.get_or_else(None)
    # records stored without an id get a fresh one
    if parsed.id is None:
        parsed = replace(parsed, id=new_id())
    return parsed


def new_id() -> str:
    return str(uuid4())


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    if t.id is None:
        t = Transaction(id=new_id(), amount=t.amount, description=t.description,
                        date=t.date, category=t.category)
    return trans + (t,)


def replace_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    """Full replacement of the transaction sharing ``t.id``."""
    if not any(old.id == t.id for old in trans):
        raise KeyError(f"Transaction {t.id} does not exist")
    return tuple(t if old.id == t.id else old for old in trans)


def remove_transaction(
    trans: Tuple[Transaction, ...], tid: str
) -> Tuple[Transaction, ...]:
    if not any(t.id == tid for t in trans):
        raise KeyError(f"Transaction {tid} does not exist")
    return tuple(filter(lambda t: t.id != tid, trans))


def add_budget(
    budgets: Tuple[Budget, ...], b: Budget
) -> Tuple[Budget, ...]:
    if b.id is None:
        b = Budget(id=new_id(), category=b.category, amount=b.amount)
    return budgets + (b,)


def replace_budget(
    budgets: Tuple[Budget, ...], b: Budget
) -> Tuple[Budget, ...]:
    if not any(old.id == b.id for old in budgets):
        raise KeyError(f"Budget {b.id} does not exist")
    return tuple(b if old.id == b.id else old for old in budgets)


def total_amount(trans: Tuple[Transaction, ...]) -> float:
    return reduce(lambda acc, t: acc + t.amount, trans, 0)
