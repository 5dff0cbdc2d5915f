"""Bank statement transactions and balances.

Builds the transaction list for a statement period from two sources:
payroll deposits derived from generated pay stubs, and randomly
synthesized everyday transactions. Transactions are sorted by date
(stable, so same-day transactions keep their input order) and a running
balance is computed after each one, rounded to cents at every step.

Randomness always comes from an explicit random.Random so a seed makes
a statement reproducible.
"""

import logging
import random
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from .money import ZERO, to_cents, to_decimal
from .pay_periods import parse_date
from .schemas import (
    BalancedTransaction,
    InvalidArgumentError,
    PayPeriodResult,
    StatementSummary,
    Transaction,
    TransactionKind,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionTemplate:
    """One row of the synthesis catalog."""
    kind: TransactionKind
    category: str
    descriptions: Tuple[str, ...]
    amount_range: Tuple[float, float]


TRANSACTION_CATALOG: Tuple[TransactionTemplate, ...] = (
    TransactionTemplate(TransactionKind.WITHDRAWAL, "Grocery Store",
                        ("WHOLE FOODS", "SAFEWAY", "KROGER", "WALMART GROCERY"), (25, 150)),
    TransactionTemplate(TransactionKind.WITHDRAWAL, "Restaurant",
                        ("STARBUCKS", "MCDONALDS", "CHIPOTLE", "SUBWAY"), (8, 45)),
    TransactionTemplate(TransactionKind.WITHDRAWAL, "Gas Station",
                        ("SHELL", "CHEVRON", "EXXON", "BP"), (30, 80)),
    TransactionTemplate(TransactionKind.WITHDRAWAL, "Online Purchase",
                        ("AMAZON.COM", "PAYPAL", "APPLE.COM", "NETFLIX"), (15, 200)),
    TransactionTemplate(TransactionKind.WITHDRAWAL, "ATM Withdrawal",
                        ("ATM WITHDRAWAL", "CASH WITHDRAWAL"), (20, 300)),
    TransactionTemplate(TransactionKind.WITHDRAWAL, "Utility Bill",
                        ("ELECTRIC COMPANY", "WATER DEPT", "INTERNET SERVICE"), (50, 200)),
    TransactionTemplate(TransactionKind.DEPOSIT, "Transfer",
                        ("ONLINE TRANSFER", "MOBILE DEPOSIT", "WIRE TRANSFER"), (100, 1000)),
    TransactionTemplate(TransactionKind.DEPOSIT, "Interest",
                        ("INTEREST PAYMENT", "SAVINGS INTEREST"), (1, 25)),
    TransactionTemplate(TransactionKind.DEPOSIT, "Refund",
                        ("REFUND", "CASHBACK", "RETURN"), (10, 150)),
)

PAYROLL_CATEGORY = "Payroll"
PAYROLL_DESCRIPTION = "Payroll Deposit from {payer} Employer"


def _check_window(start: date, end: date) -> None:
    if end < start:
        raise InvalidArgumentError(f"Statement window ends ({end}) before it starts ({start})")


def synthesize_random_transactions(
    start_date,
    end_date,
    count: int,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> List[Transaction]:
    """Draw `count` everyday transactions inside a date window.

    For each draw: a day offset uniform in [0, days between start and
    end), then a catalog row, one of its descriptions, and an amount
    uniform in its range rounded to cents. When start == end every
    transaction lands on start.

    Args:
        start_date: Window start (date or YYYY-MM-DD)
        end_date: Window end (date or YYYY-MM-DD)
        count: Number of transactions (>= 0)
        rng: Random source; takes precedence over seed
        seed: Seed for a fresh random.Random when rng is not given

    Returns:
        Transactions in draw order, ids random-0, random-1, ...

    Raises:
        InvalidArgumentError: Negative count or end before start
    """
    if count < 0:
        raise InvalidArgumentError(f"count must be >= 0, got {count}")
    start = parse_date(start_date)
    end = parse_date(end_date)
    _check_window(start, end)

    rng = rng or random.Random(seed)
    days = (end - start).days
    transactions = []

    for i in range(count):
        offset = rng.randrange(days) if days > 0 else 0
        template = rng.choice(TRANSACTION_CATALOG)
        description = rng.choice(template.descriptions)
        low, high = template.amount_range
        amount = to_cents(rng.uniform(low, high))

        transactions.append(Transaction(
            id=f"random-{i}",
            date=start + timedelta(days=offset),
            description=description,
            amount=amount,
            kind=template.kind,
            category=template.category,
        ))

    logger.debug(f"synthesized {len(transactions)} transactions over {days} days")
    return transactions


def derive_deposits_from_pay_periods(
    periods: Iterable[PayPeriodResult],
    window_start,
    window_end,
    account_holder: str = "",
) -> List[Transaction]:
    """Turn pay stubs paid inside the window into payroll deposits.

    Args:
        periods: Generated pay periods
        window_start: First day of the statement (inclusive)
        window_end: Last day of the statement (inclusive)
        account_holder: Account holder name; its first word labels the payer

    Returns:
        One deposit per period with pay_date in the window, amount = net pay,
        ids paystub-0, paystub-1, ... in input order
    """
    start = parse_date(window_start)
    end = parse_date(window_end)
    payer = account_holder.split(" ")[0] if account_holder else ""
    description = PAYROLL_DESCRIPTION.format(payer=payer).replace("  ", " ")

    in_window = [p for p in periods if start <= p.pay_date <= end]
    return [
        Transaction(
            id=f"paystub-{index}",
            date=period.pay_date,
            description=description,
            amount=period.net_pay,
            kind=TransactionKind.DEPOSIT,
            category=PAYROLL_CATEGORY,
        )
        for index, period in enumerate(in_window)
    ]


def compute_balances(
    opening_balance,
    transactions: Sequence[Transaction],
) -> StatementSummary:
    """Sort transactions by date and compute the running balance.

    The balance is rounded to cents after every transaction. Totals are
    plain sums of the transaction amounts, which are already in cents for
    generated transactions.

    Args:
        opening_balance: Balance before the first transaction
        transactions: Transactions in any order

    Returns:
        StatementSummary; closing_balance is the last running balance, or
        the opening balance when there are no transactions
    """
    opening = to_decimal(opening_balance)
    # sorted() is stable, so same-day transactions keep input order
    ordered = sorted(transactions, key=lambda t: t.date)

    balance = opening
    total_deposits = ZERO
    total_withdrawals = ZERO
    balanced = []

    for txn in ordered:
        balance = to_cents(balance + txn.signed_amount)
        if txn.kind is TransactionKind.DEPOSIT:
            total_deposits += txn.amount
        else:
            total_withdrawals += txn.amount
        fields = txn.model_dump(exclude={"running_balance"})
        balanced.append(BalancedTransaction(**fields, running_balance=balance))

    return StatementSummary(
        opening_balance=opening,
        closing_balance=balanced[-1].running_balance if balanced else opening,
        total_deposits=total_deposits,
        total_withdrawals=total_withdrawals,
        transactions=balanced,
    )


def default_statement_window(
    periods: Sequence[PayPeriodResult],
    padding_days: int = 5,
) -> Tuple[date, date]:
    """Statement window covering a run of pay stubs.

    From the earliest period start to the latest pay date, padded on
    both sides.

    Raises:
        InvalidArgumentError: No periods given
    """
    if not periods:
        raise InvalidArgumentError("Need at least one pay period to derive a statement window")
    padding = timedelta(days=padding_days)
    start = min(p.period_start for p in periods) - padding
    end = max(p.pay_date for p in periods) + padding
    return start, end


def build_statement(
    opening_balance,
    window_start,
    window_end,
    periods: Sequence[PayPeriodResult] = (),
    random_count: int = 0,
    rng: Optional[random.Random] = None,
    account_holder: str = "",
) -> StatementSummary:
    """Full statement: payroll deposits plus random transactions, balanced.

    Payroll deposits come first in the merged list, so on a day with both
    the deposit posts before the random transactions.
    """
    start = parse_date(window_start)
    end = parse_date(window_end)
    _check_window(start, end)

    deposits = derive_deposits_from_pay_periods(periods, start, end, account_holder)
    synthetic = synthesize_random_transactions(start, end, random_count, rng=rng)
    logger.debug(f"statement {start}..{end}: {len(deposits)} payroll, {len(synthetic)} random")
    return compute_balances(opening_balance, deposits + synthetic)
