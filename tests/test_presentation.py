from datetime import date

import pandas as pd

from finance_core.charts import COLORS, budget_comparison_figure, category_pie_figure, monthly_expenses_figure
from finance_core.domain import BudgetRow, CategoryTotal, MonthlyTotal, Transaction
from finance_core.formatting import format_date, format_money
from finance_core.tables import budget_frame, display_transactions, transactions_csv, transactions_frame


def sample():
    return (
        Transaction("t1", 50, "Groceries", date(2024, 5, 1), "Food"),
        Transaction("t2", 1234.5, "Rent", date(2024, 5, 3), "Rent"),
    )


def test_format_money_and_date():
    assert format_money(1234.5, "$") == "$1,234.50"
    assert format_money(-3, "€") == "-€3.00"
    assert format_date(date(2024, 5, 1)) == "May 01, 2024"


def test_monthly_figure():
    fig = monthly_expenses_figure([MonthlyTotal("Apr 2024", 4, 2024, 20), MonthlyTotal("May 2024", 5, 2024, 80)])
    assert list(fig.data[0].x) == ["Apr 2024", "May 2024"]
    assert list(fig.data[0].y) == [20, 80]


def test_pie_colors_cycle():
    cats = [CategoryTotal(f"c{i}", 10 - i) for i in range(10)]
    fig = category_pie_figure(cats)
    colors = list(fig.data[0].marker.colors)
    assert colors[0] == COLORS[0]
    assert colors[8] == COLORS[0]
    assert list(fig.data[0].labels) == [c.name for c in cats]


def test_budget_figure_has_budget_and_spent_series():
    fig = budget_comparison_figure([BudgetRow("Food", 70, 80, 0), BudgetRow("Rent", 500, 0, 500)])
    assert [trace.name for trace in fig.data] == ["Budget", "Spent"]
    assert list(fig.data[1].y) == [80, 0]
    assert fig.layout.barmode == "group"


def test_empty_figures():
    assert len(monthly_expenses_figure([]).data[0].x or ()) == 0
    assert len(budget_comparison_figure([]).data) == 2


def test_transactions_frame_newest_first():
    df = transactions_frame(sample())
    assert list(df["id"]) == ["t2", "t1"]
    assert pd.api.types.is_datetime64_any_dtype(df["date"])


def test_display_and_csv():
    df = transactions_frame(sample())
    shown = display_transactions(df)
    assert list(shown.columns) == ["Date", "Description", "Category", "Amount"]
    assert shown.iloc[0]["Date"] == "May 03, 2024"

    csv = transactions_csv(df)
    assert csv.splitlines()[0] == "id,date,description,category,amount"
    assert "2024-05-03" in csv


def test_empty_tables():
    df = transactions_frame(())
    assert df.empty
    assert transactions_csv(df).strip() == "id,date,description,category,amount"
    assert budget_frame([]).empty


def test_budget_frame():
    df = budget_frame([BudgetRow("Food", 70, 80, 0)])
    assert df.to_dict("records") == [{"Category": "Food", "Budget": 70, "Spent": 80, "Remaining": 0}]
