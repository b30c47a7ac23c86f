"""Derived summaries over a list of transactions.

Every function here is pure: inputs are never mutated and the result only
depends on the arguments. Anything that depends on "now" takes the
evaluation date as an explicit ``today`` argument.
"""
from collections import defaultdict
from datetime import date
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from finance_core.domain import Budget, BudgetRow, CategoryTotal, MonthlyTotal, Transaction
from finance_core.lazy import iter_transactions, lazy_top_categories
from finance_core.transforms import total_amount

MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

RECENT_LIMIT = 3
TOP_CATEGORIES_LIMIT = 3


def month_label(month: int, year: int) -> str:
    return f"{MONTHS[month - 1]} {year}"


def by_category(name: str):
    def _filter(t: Transaction) -> bool:
        return t.category == name

    return _filter


def by_month(year: int, month: int):
    def _filter(t: Transaction) -> bool:
        return t.date.year == year and t.date.month == month

    return _filter


def previous_month_of(today: date) -> Tuple[int, int]:
    """(year, month) of the month before ``today``, rolling over January."""
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def current_month(trans: Iterable[Transaction], today: date) -> List[Transaction]:
    return list(iter_transactions(trans, by_month(today.year, today.month)))


def previous_month(trans: Iterable[Transaction], today: date) -> List[Transaction]:
    return list(iter_transactions(trans, by_month(*previous_month_of(today))))


def monthly_totals(trans: Iterable[Transaction]) -> List[MonthlyTotal]:
    totals: Dict[Tuple[int, int], float] = defaultdict(float)
    for t in trans:
        totals[(t.date.year, t.date.month)] += t.amount

    return [
        MonthlyTotal(name=month_label(month, year), month=month, year=year, total=total)
        for (year, month), total in sorted(totals.items())
    ]


def category_totals(trans: Iterable[Transaction]) -> List[CategoryTotal]:
    trans = tuple(trans)
    return list(lazy_top_categories(trans, len(trans)))


def top_categories(trans: Iterable[Transaction], k: int = TOP_CATEGORIES_LIMIT) -> List[CategoryTotal]:
    return list(lazy_top_categories(trans, k))


def overall_total(trans: Iterable[Transaction]) -> float:
    return total_amount(tuple(trans))


def recent_transactions(trans: Iterable[Transaction], limit: int = RECENT_LIMIT) -> List[Transaction]:
    return sorted(trans, key=lambda t: t.date, reverse=True)[:limit]


def category_spending(trans: Iterable[Transaction]) -> Dict[str, float]:
    """Category name -> summed amount, in first-seen order."""
    spending: Dict[str, float] = {}
    for t in trans:
        spending[t.category] = spending.get(t.category, 0) + t.amount
    return spending


def current_month_spending(trans: Iterable[Transaction], today: date) -> Dict[str, float]:
    return category_spending(current_month(trans, today))


def budget_comparison(
    trans: Iterable[Transaction], budgets: Sequence[Budget], today: date
) -> List[BudgetRow]:
    spending = current_month_spending(trans, today)
    rows = []
    for b in budgets:
        spent = spending.get(b.category, 0)
        rows.append(BudgetRow(
            name=b.category,
            budget=b.amount,
            spent=spent,
            remaining=max(0, b.amount - spent),
        ))
    return rows


def filter_transactions(
    trans: Iterable[Transaction], *preds: Callable[[Transaction], bool]
) -> List[Transaction]:
    return list(iter_transactions(trans, lambda t: all(p(t) for p in preds)))
