from typing import Sequence

import pandas as pd

from finance_core.domain import BudgetRow, Transaction
from finance_core.formatting import format_date, format_money

TRANSACTION_COLUMNS = ["id", "date", "description", "category", "amount"]


def transactions_frame(trans: Sequence[Transaction]) -> pd.DataFrame:
    """Raw transaction rows, newest first."""
    df = pd.DataFrame(
        [{"id": t.id, "date": pd.Timestamp(t.date), "description": t.description,
          "category": t.category, "amount": float(t.amount)} for t in trans],
        columns=TRANSACTION_COLUMNS,
    )
    if df.empty:
        return df
    return df.sort_values("date", ascending=False, kind="stable").reset_index(drop=True)


def display_transactions(df: pd.DataFrame) -> pd.DataFrame:
    """Formatted copy of a transactions frame for the history table."""
    return (
        df[["date", "description", "category", "amount"]]
        .assign(
            date=lambda x: x["date"].map(lambda d: format_date(d.date())),
            amount=lambda x: x["amount"].map(format_money),
        )
        .rename(columns={
            "date": "Date",
            "description": "Description",
            "category": "Category",
            "amount": "Amount",
        })
    )


def transactions_csv(df: pd.DataFrame) -> str:
    out = df.copy()
    if not out.empty:
        out["date"] = pd.to_datetime(out["date"]).dt.strftime("%Y-%m-%d")
    return out.to_csv(index=False)


def budget_frame(rows: Sequence[BudgetRow]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Category": r.name, "Budget": r.budget, "Spent": r.spent, "Remaining": r.remaining}
         for r in rows],
        columns=["Category", "Budget", "Spent", "Remaining"],
    )
