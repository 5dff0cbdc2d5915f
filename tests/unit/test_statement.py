"""Tests for statement transactions and running balances."""

import random
from datetime import date
from decimal import Decimal

import pytest

from buelldocs.sdk.paystubs import generate_series
from buelldocs.sdk.pay_periods import generate_pay_dates
from buelldocs.sdk.schemas import (
    HourlyBasis,
    InvalidArgumentError,
    PayFrequency,
    Transaction,
    TransactionKind,
)
from buelldocs.sdk.statement import (
    PAYROLL_CATEGORY,
    TRANSACTION_CATALOG,
    build_statement,
    compute_balances,
    default_statement_window,
    derive_deposits_from_pay_periods,
    synthesize_random_transactions,
)


# === FIXTURES ===


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("BUELLDOCS_CONFIG_PATH", str(tmp_path / "config"))


@pytest.fixture
def periods():
    """Three biweekly flat-model stubs, net 1507.00 each."""
    basis = HourlyBasis(rate=Decimal("25"), hours=Decimal("80"))
    dates = [date(2024, 1, 12), date(2024, 1, 26), date(2024, 2, 9)]
    return generate_series(basis, PayFrequency.BIWEEKLY, [], None, dates).periods


def _txn(id, day, amount, kind):
    return Transaction(id=id, date=day, description=id, amount=Decimal(amount), kind=kind)


# === BALANCES ===


class TestComputeBalances:

    def test_sorts_by_date_and_tracks_balance(self):
        transactions = [
            _txn("pay", date(2024, 1, 3), "500", TransactionKind.DEPOSIT),
            _txn("rent", date(2024, 1, 2), "200", TransactionKind.WITHDRAWAL),
        ]

        summary = compute_balances(Decimal("1000"), transactions)

        assert [t.id for t in summary.transactions] == ["rent", "pay"]
        assert [t.running_balance for t in summary.transactions] == [
            Decimal("800.00"), Decimal("1300.00"),
        ]
        assert summary.total_deposits == Decimal("500")
        assert summary.total_withdrawals == Decimal("200")
        assert summary.closing_balance == Decimal("1300.00")

    def test_same_day_keeps_input_order(self):
        day = date(2024, 1, 2)
        transactions = [
            _txn("a", day, "10", TransactionKind.WITHDRAWAL),
            _txn("b", day, "20", TransactionKind.DEPOSIT),
            _txn("c", day, "5", TransactionKind.WITHDRAWAL),
        ]

        summary = compute_balances(Decimal("0"), transactions)

        assert [t.id for t in summary.transactions] == ["a", "b", "c"]
        assert summary.closing_balance == Decimal("5.00")

    def test_rounds_balance_at_every_step(self):
        day = date(2024, 1, 2)
        transactions = [
            _txn("x", day, "0.005", TransactionKind.DEPOSIT),
            _txn("y", day, "0.005", TransactionKind.DEPOSIT),
        ]

        summary = compute_balances(Decimal("0"), transactions)

        assert [t.running_balance for t in summary.transactions] == [
            Decimal("0.01"), Decimal("0.02"),
        ]
        assert summary.total_deposits == Decimal("0.010")

    def test_no_transactions_closes_at_opening(self):
        summary = compute_balances("250.50", [])

        assert summary.transactions == []
        assert summary.closing_balance == Decimal("250.50")

    def test_balance_can_go_negative(self):
        transactions = [_txn("atm", date(2024, 1, 2), "300", TransactionKind.WITHDRAWAL)]

        summary = compute_balances(Decimal("100"), transactions)

        assert summary.closing_balance == Decimal("-200.00")


# === RANDOM TRANSACTIONS ===


class TestSynthesizeRandomTransactions:

    def test_count_and_window(self):
        start, end = date(2024, 1, 1), date(2024, 1, 31)

        transactions = synthesize_random_transactions(start, end, 25, seed=7)

        assert len(transactions) == 25
        assert all(start <= t.date < end for t in transactions)
        assert [t.id for t in transactions[:2]] == ["random-0", "random-1"]

    def test_amounts_come_from_catalog_ranges(self):
        transactions = synthesize_random_transactions("2024-01-01", "2024-03-01", 50, seed=3)

        by_category = {row.category: row for row in TRANSACTION_CATALOG}
        for txn in transactions:
            row = by_category[txn.category]
            low, high = row.amount_range
            assert txn.kind is row.kind
            assert txn.description in row.descriptions
            assert Decimal(str(low)) <= txn.amount <= Decimal(str(high))
            assert txn.amount == txn.amount.quantize(Decimal("0.01"))

    def test_same_seed_is_reproducible(self):
        first = synthesize_random_transactions("2024-01-01", "2024-01-31", 10, rng=random.Random(42))
        second = synthesize_random_transactions("2024-01-01", "2024-01-31", 10, rng=random.Random(42))

        assert first == second

    def test_single_day_window_lands_on_start(self):
        day = date(2024, 5, 1)

        transactions = synthesize_random_transactions(day, day, 5, seed=1)

        assert {t.date for t in transactions} == {day}

    def test_zero_count(self):
        assert synthesize_random_transactions("2024-01-01", "2024-01-31", 0) == []

    def test_end_before_start_raises(self):
        with pytest.raises(InvalidArgumentError):
            synthesize_random_transactions("2024-02-01", "2024-01-01", 3)

    def test_negative_count_raises(self):
        with pytest.raises(InvalidArgumentError):
            synthesize_random_transactions("2024-01-01", "2024-01-31", -1)


# === PAYROLL DEPOSITS ===


class TestDeriveDeposits:

    def test_only_periods_paid_inside_window(self, periods):
        deposits = derive_deposits_from_pay_periods(periods, "2024-01-12", "2024-01-31")

        assert [d.date for d in deposits] == [date(2024, 1, 12), date(2024, 1, 26)]
        assert [d.id for d in deposits] == ["paystub-0", "paystub-1"]
        assert all(d.amount == Decimal("1507.00") for d in deposits)
        assert all(d.kind is TransactionKind.DEPOSIT for d in deposits)
        assert all(d.category == PAYROLL_CATEGORY for d in deposits)

    def test_description_uses_first_name(self, periods):
        deposits = derive_deposits_from_pay_periods(periods, "2024-01-01", "2024-12-31", "Jane Q Doe")

        assert deposits[0].description == "Payroll Deposit from Jane Employer"

    def test_description_without_name(self, periods):
        deposits = derive_deposits_from_pay_periods(periods, "2024-01-01", "2024-12-31")

        assert deposits[0].description == "Payroll Deposit from Employer"


# === FULL STATEMENT ===


class TestBuildStatement:

    def test_default_window_pads_run(self):
        basis = HourlyBasis(rate=Decimal("20"), hours=Decimal("40"))
        dates = generate_pay_dates(5, PayFrequency.BIWEEKLY, date(2024, 2, 2))
        run = generate_series(basis, PayFrequency.BIWEEKLY, [], None, dates).periods

        assert dates[0] == date(2024, 1, 5)
        assert default_statement_window(run) == (date(2023, 12, 18), date(2024, 2, 7))

    def test_default_window_needs_periods(self):
        with pytest.raises(InvalidArgumentError):
            default_statement_window([])

    def test_payroll_only(self, periods):
        summary = build_statement(Decimal("100"), "2024-01-01", "2024-02-29", periods)

        assert len(summary.transactions) == 3
        assert summary.total_deposits == Decimal("4521.00")
        assert summary.closing_balance == Decimal("4621.00")

    def test_payroll_posts_before_random_on_same_day(self, periods):
        day = date(2024, 1, 12)

        summary = build_statement(Decimal("0"), day, day, periods, random_count=3,
                                  rng=random.Random(9))

        assert summary.transactions[0].id == "paystub-0"
        assert len(summary.transactions) == 4

    def test_seeded_statement_is_reproducible(self, periods):
        first = build_statement("500", "2024-01-01", "2024-02-15", periods, 12, rng=random.Random(5))
        second = build_statement("500", "2024-01-01", "2024-02-15", periods, 12, rng=random.Random(5))

        assert first == second

    def test_closing_matches_totals(self, periods):
        summary = build_statement("500", "2024-01-01", "2024-02-15", periods, 20, rng=random.Random(11))

        expected = Decimal("500") + summary.total_deposits - summary.total_withdrawals
        assert summary.closing_balance == expected

    def test_window_end_before_start_raises(self, periods):
        with pytest.raises(InvalidArgumentError):
            build_statement("0", "2024-02-01", "2024-01-01", periods)
