"""Plotly figure configuration for the dashboard charts."""
from typing import Sequence

import plotly.graph_objects as go

from finance_core import config
from finance_core.domain import BudgetRow, CategoryTotal, MonthlyTotal

COLORS = ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884D8', '#FF6B6B', '#6877e0', '#556B2F']
TOTAL_COLOR = '#3b82f6'
BUDGET_COLOR = '#8884d8'
SPENT_COLOR = '#82ca9d'

MARGIN = dict(t=20, r=30, l=20, b=30)


def _money_hover(label: str) -> str:
    return f"%{{x}}<br>{label}: {config.CURRENCY_SYMBOL}%{{y:,.2f}}<extra></extra>"


def monthly_expenses_figure(monthly: Sequence[MonthlyTotal]) -> go.Figure:
    fig = go.Figure(go.Bar(
        x=[m.name for m in monthly],
        y=[m.total for m in monthly],
        marker_color=TOTAL_COLOR,
        name="Total",
        hovertemplate=_money_hover("Total"),
    ))
    fig.update_layout(title="Monthly Expenses", height=300, margin=MARGIN)
    fig.update_xaxes(type="category")
    return fig


def category_pie_figure(categories: Sequence[CategoryTotal]) -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=[c.name for c in categories],
        values=[c.total for c in categories],
        marker=dict(colors=[COLORS[i % len(COLORS)] for i in range(len(categories))]),
        textinfo="label+percent",
        sort=False,
        hovertemplate=f"%{{label}}: {config.CURRENCY_SYMBOL}%{{value:,.2f}}<extra></extra>",
    ))
    fig.update_layout(title="Spending by Category", height=300, margin=MARGIN, showlegend=True)
    return fig


def budget_comparison_figure(rows: Sequence[BudgetRow]) -> go.Figure:
    names = [r.name for r in rows]
    fig = go.Figure([
        go.Bar(x=names, y=[r.budget for r in rows], name="Budget",
               marker_color=BUDGET_COLOR, hovertemplate=_money_hover("Budget")),
        go.Bar(x=names, y=[r.spent for r in rows], name="Spent",
               marker_color=SPENT_COLOR, hovertemplate=_money_hover("Spent")),
    ])
    fig.update_layout(title="Budget vs. Actual Spending", barmode="group", height=400, margin=MARGIN)
    return fig
