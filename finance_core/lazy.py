from itertools import islice
from typing import Callable, Dict, Iterable, Iterator

from finance_core.domain import CategoryTotal, Transaction


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def lazy_top_categories(
    trans: Iterable[Transaction], k: int
) -> Iterator[CategoryTotal]:
    """Yield the ``k`` biggest category buckets, biggest first.

    Unknown category names are their own bucket. Equal totals keep the
    order in which the category was first seen.
    """
    totals_by_category: Dict[str, float] = {}
    for t in trans:
        totals_by_category[t.category] = totals_by_category.get(t.category, 0) + t.amount

    ordered = sorted(totals_by_category.items(), key=lambda item: item[1], reverse=True)

    for name, total in islice(ordered, max(0, k)):
        yield CategoryTotal(name=name, total=total)
