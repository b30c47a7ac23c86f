from datetime import date

from finance_core.domain import Budget, Transaction
from finance_core.insights import (
    APPROACHING_BUDGET,
    OVER_BUDGET,
    SPENDING_DECREASE,
    SPENDING_INCREASE,
    budget_insight,
    percent_change,
    percent_used,
    spending_insights,
    trend_insight,
)

TODAY = date(2024, 5, 20)


def make_tx(id, amount, ts, category="Food"):
    return Transaction(id=id, amount=amount, description=id, date=date.fromisoformat(ts), category=category)


def months(previous, current):
    trans = []
    if previous:
        trans.append(make_tx("p", previous, "2024-04-10", "Misc"))
    if current:
        trans.append(make_tx("c", current, "2024-05-10", "Misc"))
    return trans


def kinds(insights):
    return [i.kind for i in insights]


def test_spending_increase():
    insights = spending_insights(months(100, 115), [], TODAY)
    assert kinds(insights) == [SPENDING_INCREASE]
    assert insights[0].severity == "warning"
    assert insights[0].message == "Your spending is up 15.0% compared to last month."


def test_no_trend_inside_threshold():
    assert spending_insights(months(100, 91), [], TODAY) == []
    assert spending_insights(months(100, 105), [], TODAY) == []
    assert spending_insights(months(100, 95), [], TODAY) == []


def test_spending_decrease():
    insights = spending_insights(months(200, 100), [], TODAY)
    assert kinds(insights) == [SPENDING_DECREASE]
    assert insights[0].severity == "success"
    assert "down 50.0%" in insights[0].message


def test_no_trend_without_previous_month():
    assert spending_insights(months(0, 500), [], TODAY) == []
    assert trend_insight(500, 0) is None
    assert percent_change(500, 0) is None


def test_trend_uses_previous_month_across_year_boundary():
    trans = [make_tx("dec", 100, "2023-12-05"), make_tx("jan", 150, "2024-01-05")]
    assert kinds(spending_insights(trans, [], date(2024, 1, 20))) == [SPENDING_INCREASE]


def test_over_budget_example():
    trans = [make_tx("t1", 50, "2024-05-01"), make_tx("t2", 30, "2024-05-15"), make_tx("t3", 20, "2024-04-01", "Rent")]
    insights = spending_insights(trans, [Budget("b1", "Food", 70)], TODAY)
    over = [i for i in insights if i.kind == OVER_BUDGET]
    assert len(over) == 1
    assert over[0].severity == "destructive"
    assert over[0].title == "Over Budget: Food"


def test_budget_tiers():
    budget = Budget("b", "Food", 200)
    assert budget_insight(budget, 179) is None
    assert budget_insight(budget, 180).kind == APPROACHING_BUDGET
    assert budget_insight(budget, 199.99).kind == APPROACHING_BUDGET
    assert budget_insight(budget, 200).kind == OVER_BUDGET
    assert budget_insight(budget, 450).kind == OVER_BUDGET


def test_approaching_message():
    insight = budget_insight(Budget("b", "Food", 100), 95)
    assert insight.severity == "warning"
    assert insight.title == "Approaching Budget: Food"
    assert "95%" in insight.message


def test_zero_budget_does_not_divide():
    zero = Budget("b", "Food", 0)
    assert percent_used(10, 0) is None
    assert budget_insight(zero, 0) is None
    assert budget_insight(zero, 10).kind == OVER_BUDGET


def test_only_current_month_counts_for_budgets():
    trans = [make_tx("old", 500, "2024-03-02")]
    assert spending_insights(trans, [Budget("b", "Food", 100)], TODAY) == []


def test_trend_comes_before_budget_alerts():
    trans = [
        make_tx("p", 100, "2024-04-02"),
        make_tx("c1", 150, "2024-05-02"),
        make_tx("c2", 95, "2024-05-03", "Rent"),
    ]
    budgets = [Budget("b1", "Rent", 100), Budget("b2", "Food", 100)]
    assert kinds(spending_insights(trans, budgets, TODAY)) == [SPENDING_INCREASE, APPROACHING_BUDGET, OVER_BUDGET]
