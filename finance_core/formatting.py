from datetime import date

from finance_core import config


def format_money(value: float, symbol: str = None) -> str:
    if symbol is None:
        symbol = config.CURRENCY_SYMBOL
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date(value: date) -> str:
    """e.g. "May 01, 2024"."""
    return value.strftime("%b %d, %Y")
