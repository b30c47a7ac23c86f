from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Category:
    name: str


@dataclass(frozen=True)
class Transaction:
    id: Optional[str]   # None until the data source assigns one
    amount: float       # always > 0, an expense
    description: str
    date: date
    category: str       # soft reference to Category.name


# A monthly spending cap for one category
@dataclass(frozen=True)
class Budget:
    id: Optional[str]
    category: str
    amount: float


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    severity: str = "default"  # "default" or "destructive"


# --- derived view models, recomputed on every render

@dataclass(frozen=True)
class MonthlyTotal:
    name: str    # e.g. "Apr 2024"
    month: int   # 1..12
    year: int
    total: float


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    total: float


@dataclass(frozen=True)
class BudgetRow:
    name: str
    budget: float
    spent: float
    remaining: float


@dataclass(frozen=True)
class Insight:
    kind: str      # spending_increase, spending_decrease, over_budget, approaching_budget
    severity: str  # warning, success, destructive
    title: str
    message: str
