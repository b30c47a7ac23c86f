import logging
from collections import Counter
from datetime import date
from typing import Any, Callable, Dict, Sequence

from finance_core import aggregation
from finance_core.functional import pipe, safe_category
from finance_core.insights import spending_insights


class DashboardService:
    """Facade that builds the dashboard view model from injected steps.

    validators: functions taking (today, transactions, budgets, categories) -> Sequence[str]
    calculators: functions taking (today, transactions, budgets, categories, acc) -> dict (partial results)
    """

    def __init__(self, validators: Sequence[Callable[..., Sequence[str]]], calculators: Sequence[Callable[..., Dict[str, Any]]]):
        self.validators = validators
        self.calculators = calculators

    def build(self, today: date, transactions: Sequence, budgets: Sequence, categories: Sequence) -> Dict[str, Any]:
        """Run validators and calculators and return the view model with intermediate steps."""
        transactions, budgets, categories = tuple(transactions), tuple(budgets), tuple(categories)
        report = {
            "today": today,
            "validation": [],
            "steps": [],
            "result": {}
        }

        for v in self.validators:
            try:
                msgs = v(today, transactions, budgets, categories)
            except Exception as e:
                logging.warning(f'Validator {getattr(v, "__name__", v)} failed: {e}')
                msgs = [f"validator_error: {e}"]
            report["validation"].append({"validator": getattr(v, "__name__", str(v)), "messages": list(msgs)})

        # calculators see the partial results of the ones before them
        acc = {}
        for calc in self.calculators:
            out = calc(today, transactions, budgets, categories, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report


# --- validators

def unresolved_categories(today, transactions, budgets, categories):
    names = sorted({
        t.category for t in transactions if safe_category(categories, t.category).is_none()
    })
    return [f"Category '{name}' is not in the category list" for name in names]


def duplicate_budgets(today, transactions, budgets, categories):
    counts = Counter(b.category for b in budgets)
    return [f"Category '{name}' has {n} budgets" for name, n in counts.items() if n > 1]


# --- calculators

def summary(today, transactions, budgets, categories, acc=None):
    return {
        "total": aggregation.overall_total(transactions),
        "top_categories": aggregation.top_categories(transactions),
        "recent": aggregation.recent_transactions(transactions),
    }


def monthly(today, transactions, budgets, categories, acc=None):
    return {"monthly": aggregation.monthly_totals(transactions)}


def by_category(today, transactions, budgets, categories, acc=None):
    return {"categories": aggregation.category_totals(transactions)}


def comparison(today, transactions, budgets, categories, acc=None):
    return {"comparison": aggregation.budget_comparison(transactions, budgets, today)}


def insights(today, transactions, budgets, categories, acc=None):
    return {"insights": spending_insights(transactions, budgets, today)}


def month_to_date(today, transactions, budgets, categories, acc=None):
    return {
        "current_month_total": pipe(
            transactions,
            lambda trans: aggregation.current_month(trans, today),
            aggregation.overall_total,
        ),
        "previous_month_total": pipe(
            transactions,
            lambda trans: aggregation.previous_month(trans, today),
            aggregation.overall_total,
        ),
    }


DEFAULT_VALIDATORS = (unresolved_categories, duplicate_budgets)
DEFAULT_CALCULATORS = (summary, monthly, by_category, month_to_date, comparison, insights)


def default_dashboard_service() -> DashboardService:
    return DashboardService(validators=DEFAULT_VALIDATORS, calculators=DEFAULT_CALCULATORS)
