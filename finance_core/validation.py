"""Field validation for transaction and budget input records.

Records are plain mappings as they come out of a form (amounts and dates
usually still text). Validation never raises: it returns a mapping of
field name to message, empty when the record is acceptable.
"""
import math
from datetime import date, datetime
from typing import Dict, Iterable, Mapping, Optional

from finance_core.domain import Budget, Category, Transaction
from finance_core.functional import Either, Left, Right, safe_category

TRANSACTION = "transaction"
BUDGET = "budget"

AMOUNT_MESSAGE = "Please enter a valid amount"
DESCRIPTION_MESSAGE = "Description is required"
DATE_MESSAGE = "Date is required"
DATE_FORMAT_MESSAGE = "Please enter a valid date"
CATEGORY_MESSAGE = "Category is required"
UNKNOWN_CATEGORY_MESSAGE = "Please select a valid category"


def parse_amount(value) -> Optional[float]:
    """Return the amount as a finite float, or None if it does not parse."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def parse_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _check_amount(record: Mapping, errors: Dict[str, str]) -> None:
    amount = parse_amount(record.get("amount"))
    if amount is None or amount <= 0:
        errors["amount"] = AMOUNT_MESSAGE


def _check_category(
    record: Mapping, errors: Dict[str, str], categories: Optional[Iterable[Category]]
) -> None:
    category = record.get("category")
    if not category:
        errors["category"] = CATEGORY_MESSAGE
    elif categories is not None and safe_category(categories, category).is_none():
        errors["category"] = UNKNOWN_CATEGORY_MESSAGE


def validate_transaction(
    record: Mapping, categories: Optional[Iterable[Category]] = None
) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    _check_amount(record, errors)
    if not _text(record.get("description")):
        errors["description"] = DESCRIPTION_MESSAGE

    raw_date = record.get("date")
    if raw_date is None or (isinstance(raw_date, str) and not raw_date.strip()):
        errors["date"] = DATE_MESSAGE
    elif parse_date(raw_date) is None:
        errors["date"] = DATE_FORMAT_MESSAGE

    _check_category(record, errors, categories)
    return errors


def validate_budget(
    record: Mapping, categories: Optional[Iterable[Category]] = None
) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    _check_amount(record, errors)
    _check_category(record, errors, categories)
    return errors


_VALIDATORS = {
    TRANSACTION: validate_transaction,
    BUDGET: validate_budget,
}


def validate(
    record: Mapping, kind: str, categories: Optional[Iterable[Category]] = None
) -> Dict[str, str]:
    """Validate ``record`` as ``kind`` ("transaction" or "budget").

    When ``categories`` is given, the category must also name one of them.
    """
    try:
        validator = _VALIDATORS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind!r}") from None
    if categories is not None:
        categories = tuple(categories)
    return validator(record, categories)


def parse_transaction(
    record: Mapping, categories: Optional[Iterable[Category]] = None
) -> Either[Dict[str, str], Transaction]:
    errors = validate(record, TRANSACTION, categories)
    if errors:
        return Left(errors)
    return Right(Transaction(
        id=record.get("id"),
        amount=parse_amount(record["amount"]),
        description=record["description"].strip(),
        date=parse_date(record["date"]),
        category=record["category"],
    ))


def parse_budget(
    record: Mapping, categories: Optional[Iterable[Category]] = None
) -> Either[Dict[str, str], Budget]:
    errors = validate(record, BUDGET, categories)
    if errors:
        return Left(errors)
    return Right(Budget(
        id=record.get("id"),
        category=record["category"],
        amount=parse_amount(record["amount"]),
    ))
