"""Advisory messages comparing this month's spending with last month and
with the category budgets.
"""
from datetime import date
from typing import Iterable, List, Optional, Sequence

from finance_core.aggregation import current_month, current_month_spending, overall_total, previous_month
from finance_core.domain import Budget, Insight, Transaction
from finance_core.formatting import format_money

TREND_THRESHOLD = 10.0      # percent, strict
APPROACHING_THRESHOLD = 90.0
OVER_THRESHOLD = 100.0

SPENDING_INCREASE = "spending_increase"
SPENDING_DECREASE = "spending_decrease"
OVER_BUDGET = "over_budget"
APPROACHING_BUDGET = "approaching_budget"


def percent_change(current: float, previous: float) -> Optional[float]:
    if previous <= 0:
        return None
    return (current - previous) / previous * 100


def trend_insight(current_total: float, previous_total: float) -> Optional[Insight]:
    change = percent_change(current_total, previous_total)
    if change is None:
        return None
    if change > TREND_THRESHOLD:
        return Insight(
            kind=SPENDING_INCREASE,
            severity="warning",
            title="Spending Increase",
            message=f"Your spending is up {abs(change):.1f}% compared to last month.",
        )
    if change < -TREND_THRESHOLD:
        return Insight(
            kind=SPENDING_DECREASE,
            severity="success",
            title="Spending Decrease",
            message=f"Your spending is down {abs(change):.1f}% compared to last month.",
        )
    return None


def percent_used(spent: float, budget_amount: float) -> Optional[float]:
    """None for a zero (or negative) budget, which has no meaningful ratio."""
    if budget_amount <= 0:
        return None
    return spent / budget_amount * 100


def _over_budget(budget: Budget, spent: float) -> Insight:
    return Insight(
        kind=OVER_BUDGET,
        severity="destructive",
        title=f"Over Budget: {budget.category}",
        message=(
            f"You've spent {format_money(spent)} of your {format_money(budget.amount)} "
            f"{budget.category} budget, {format_money(spent - budget.amount)} over."
        ),
    )


def budget_insight(budget: Budget, spent: float) -> Optional[Insight]:
    used = percent_used(spent, budget.amount)
    if used is None:
        return _over_budget(budget, spent) if spent > 0 else None
    if used >= OVER_THRESHOLD:
        return _over_budget(budget, spent)
    if used >= APPROACHING_THRESHOLD:
        return Insight(
            kind=APPROACHING_BUDGET,
            severity="warning",
            title=f"Approaching Budget: {budget.category}",
            message=(
                f"You've used {used:.0f}% of your {budget.category} budget "
                f"({format_money(spent)} of {format_money(budget.amount)})."
            ),
        )
    return None


def spending_insights(
    trans: Iterable[Transaction], budgets: Sequence[Budget], today: date
) -> List[Insight]:
    trans = tuple(trans)
    insights = []

    trend = trend_insight(
        overall_total(current_month(trans, today)),
        overall_total(previous_month(trans, today)),
    )
    if trend is not None:
        insights.append(trend)

    spending = current_month_spending(trans, today)
    for b in budgets:
        alert = budget_insight(b, spending.get(b.category, 0))
        if alert is not None:
            insights.append(alert)

    return insights
