from datetime import date
from itertools import islice
from typing import Iterable

from finance_core.domain import CategoryTotal, Transaction
from finance_core.lazy import iter_transactions, lazy_top_categories


def make_sample():
    return (
        Transaction("t1", 300, "Groceries", date(2025, 1, 1), "Food"),
        Transaction("t2", 200, "Bus", date(2025, 1, 2), "Transport"),
        Transaction("t3", 50, "Cinema", date(2025, 1, 3), "Fun"),
        Transaction("t4", 700, "Restaurant", date(2025, 1, 4), "Food"),
        Transaction("t5", 100, "Taxi", date(2025, 1, 5), "Transport"),
    )


def test_iter_transactions_is_lazy_stop_early():
    trans = make_sample()
    calls = {"n": 0}

    def pred(t: Transaction) -> bool:
        calls["n"] += 1
        return t.amount >= 100

    first_two = list(islice(iter_transactions(trans, pred), 2))

    assert [t.id for t in first_two] == ["t1", "t2"]
    assert calls["n"] < len(trans)


def test_lazy_top_categories_sum_and_order():
    result = list(lazy_top_categories(make_sample(), k=2))
    assert result == [CategoryTotal("Food", 1000), CategoryTotal("Transport", 300)]


def test_lazy_top_categories_accepts_generator_input():
    trans = make_sample()

    def tx_stream() -> Iterable[Transaction]:
        for t in trans:
            yield t

    assert list(lazy_top_categories(tx_stream(), k=1)) == [CategoryTotal("Food", 1000)]


def test_lazy_top_categories_k_bounds():
    assert len(list(lazy_top_categories(make_sample(), k=10))) == 3
    assert list(lazy_top_categories(make_sample(), k=0)) == []
    assert list(lazy_top_categories(make_sample(), k=-1)) == []
