from datetime import date

from finance_core.domain import Budget, Category, Transaction
from finance_core.insights import OVER_BUDGET
from finance_core.services import DashboardService, default_dashboard_service, duplicate_budgets, unresolved_categories

TODAY = date(2024, 5, 20)


def sample():
    categories = (Category("Food"), Category("Rent"))
    transactions = (
        Transaction("t1", 50, "a", date(2024, 5, 1), "Food"),
        Transaction("t2", 30, "b", date(2024, 5, 15), "Food"),
        Transaction("t3", 20, "c", date(2024, 4, 1), "Rent"),
        Transaction("t4", 5, "d", date(2024, 3, 1), "Gone"),
    )
    budgets = (Budget("b1", "Food", 70),)
    return transactions, budgets, categories


def test_default_dashboard_report():
    transactions, budgets, categories = sample()
    report = default_dashboard_service().build(TODAY, transactions, budgets, categories)
    result = report["result"]

    assert report["today"] == TODAY
    assert result["total"] == 105
    assert [c.name for c in result["top_categories"]] == ["Food", "Rent", "Gone"]
    assert [t.id for t in result["recent"]] == ["t2", "t1", "t3"]
    assert [m.name for m in result["monthly"]] == ["Mar 2024", "Apr 2024", "May 2024"]
    assert [c.name for c in result["categories"]] == ["Food", "Rent", "Gone"]
    assert result["current_month_total"] == 80
    assert result["previous_month_total"] == 20
    assert result["comparison"][0].remaining == 0
    assert OVER_BUDGET in [i.kind for i in result["insights"]]
    assert [s["calculator"] for s in report["steps"]] == [
        "summary", "monthly", "by_category", "month_to_date", "comparison", "insights",
    ]


def test_unresolved_category_is_reported_not_dropped():
    transactions, budgets, categories = sample()
    report = default_dashboard_service().build(TODAY, transactions, budgets, categories)

    messages = {v["validator"]: v["messages"] for v in report["validation"]}
    assert messages["unresolved_categories"] == ["Category 'Gone' is not in the category list"]
    assert messages["duplicate_budgets"] == []


def test_duplicate_budgets():
    budgets = (Budget("b1", "Food", 70), Budget("b2", "Food", 90))
    assert duplicate_budgets(TODAY, (), budgets, ()) == ["Category 'Food' has 2 budgets"]
    assert unresolved_categories(TODAY, (), budgets, ()) == []


def test_validator_error_is_captured():
    def bad_validator(today, transactions, budgets, categories):
        raise RuntimeError('oops')

    def c_dummy(today, transactions, budgets, categories, acc=None):
        return {'x': 1}

    svc = DashboardService(validators=[bad_validator], calculators=[c_dummy])
    rpt = svc.build(TODAY, [], [], [])
    assert 'validator_error' in rpt['validation'][0]['messages'][0]
    assert rpt['result']['x'] == 1


def test_calculators_see_previous_results():
    def first(today, transactions, budgets, categories, acc=None):
        return {"n": len(transactions)}

    def second(today, transactions, budgets, categories, acc=None):
        return {"double": acc["n"] * 2}

    rpt = DashboardService(validators=[], calculators=[first, second]).build(TODAY, sample()[0], [], [])
    assert rpt["result"] == {"n": 4, "double": 8}


def test_empty_dashboard():
    result = default_dashboard_service().build(TODAY, (), (), ())["result"]
    assert result["total"] == 0
    assert result["monthly"] == []
    assert result["categories"] == []
    assert result["recent"] == []
    assert result["insights"] == []
