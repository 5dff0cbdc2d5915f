"""Pay stub calculation.

Computes the figures on a pay stub: gross pay from an hourly or salary
basis, withholding under the caller's tax model, user deductions, net pay,
and year-to-date totals threaded through a run of pay dates.

Supports:
- Hourly (rate x hours) and salary target (annual or monthly) bases
- Custom earnings on top of base pay (taxable ones count toward gross)
- Flat and bracket tax models (see taxes.withholding)
- Starting YTD for a mid-year start
- Sequential check numbers across a run

Pretax deductions: by default the tax base is the full gross, whatever
the pretax flag says, which is how the stub generator has always worked.
Pass pretax_reduces_taxable_wages=True to tax gross minus pretax
deductions instead.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from .money import ZERO, to_cents, to_decimal
from .pay_periods import compute_pay_period_dates, parse_date, parse_frequency
from .schemas import (
    Deduction,
    Earning,
    HourlyBasis,
    PayFrequency,
    PayPeriodResult,
    PaySeries,
    SalaryTargetBasis,
    TaxResult,
    YTDAccumulator,
)
from .taxes import TaxModel, get_tax_model

logger = logging.getLogger(__name__)


def compute_gross_pay(
    basis,
    frequency: PayFrequency,
    earnings: Iterable[Earning] = (),
) -> Decimal:
    """Gross pay for one period.

    Args:
        basis: HourlyBasis or SalaryTargetBasis
        frequency: Pay frequency (ignored for hourly)
        earnings: Custom earnings; taxable ones are added to gross,
                  non-taxable ones are left off the stub

    Returns:
        Gross pay rounded to cents
    """
    frequency = parse_frequency(frequency)

    if isinstance(basis, HourlyBasis):
        gross = basis.rate * basis.hours
    elif isinstance(basis, SalaryTargetBasis):
        annual = basis.amount * basis.salary_period.per_year
        gross = annual / frequency.periods_per_year
    else:
        raise TypeError(f"Unsupported pay basis: {type(basis).__name__}")

    for earning in earnings:
        if earning.taxable:
            gross += earning.amount
        else:
            logger.debug(f"skipping non-taxable earning '{earning.name}'")

    return to_cents(gross)


def implied_hourly_rate(basis: SalaryTargetBasis, frequency: PayFrequency, hours: Decimal = Decimal("40")) -> Decimal:
    """Hourly rate a salary target works out to, for printing on the stub.

    Assumes a standard 40-hour period unless told otherwise.
    """
    if hours == 0:
        return ZERO
    gross = compute_gross_pay(basis, frequency)
    return to_cents(gross / hours)


def taxable_wages(
    gross_pay: Decimal,
    deductions: Sequence[Deduction],
    pretax_reduces_taxable_wages: bool = False,
) -> Decimal:
    """Wages the tax model is applied to.

    Args:
        gross_pay: Gross pay for the period
        deductions: User deductions
        pretax_reduces_taxable_wages: If False (default), the full gross is
            taxed. If True, pretax deductions are subtracted first, floored
            at zero.
    """
    if not pretax_reduces_taxable_wages:
        return gross_pay
    pretax = sum((d.amount for d in deductions if d.pretax), ZERO)
    return max(ZERO, gross_pay - pretax)


def compute_total_deductions(taxes: TaxResult, deductions: Sequence[Deduction]) -> Decimal:
    """All taxes plus all user deductions, pretax or not."""
    return taxes.total + sum((d.amount for d in deductions), ZERO)


def compute_net_pay(
    gross_pay: Decimal,
    taxes: TaxResult,
    deductions: Sequence[Deduction],
) -> Decimal:
    """Gross minus taxes minus deductions. Not clamped; may be negative."""
    return to_decimal(gross_pay) - compute_total_deductions(taxes, deductions)


def fold_ytd(previous: YTDAccumulator, period: PayPeriodResult) -> YTDAccumulator:
    """Add one period's figures to the running YTD totals.

    Returns a new accumulator; previous is not modified.
    """
    return YTDAccumulator(
        gross_pay=previous.gross_pay + period.gross_pay,
        net_pay=previous.net_pay + period.net_pay,
        taxes=TaxResult(
            federal=previous.taxes.federal + period.taxes.federal,
            state=previous.taxes.state + period.taxes.state,
            social_security=previous.taxes.social_security + period.taxes.social_security,
            medicare=previous.taxes.medicare + period.taxes.medicare,
        ),
    )


def compute_pay_period(
    basis,
    frequency: PayFrequency,
    pay_date,
    deductions: Sequence[Deduction] = (),
    ytd: Optional[YTDAccumulator] = None,
    jurisdiction: Optional[str] = None,
    tax_model: Optional[TaxModel] = None,
    earnings: Sequence[Earning] = (),
    check_number: Optional[str] = None,
    pretax_reduces_taxable_wages: bool = False,
) -> PayPeriodResult:
    """All figures for a single pay date.

    Args:
        basis: HourlyBasis or SalaryTargetBasis
        frequency: Pay frequency
        pay_date: date or YYYY-MM-DD string
        deductions: User deductions (order preserved on the result)
        ytd: YTD totals before this period (default: zero)
        jurisdiction: State code for the bracket model
        tax_model: Tax model instance (default: flat model, 2024 rules)
        earnings: Custom earnings
        check_number: Check number to print
        pretax_reduces_taxable_wages: See taxable_wages()

    Returns:
        PayPeriodResult
    """
    frequency = parse_frequency(frequency)
    pay_date = parse_date(pay_date)
    ytd = ytd or YTDAccumulator.zero()
    tax_model = tax_model or get_tax_model("flat")
    deductions = list(deductions)

    window = compute_pay_period_dates(pay_date, frequency)
    gross = compute_gross_pay(basis, frequency, earnings)
    wages = taxable_wages(gross, deductions, pretax_reduces_taxable_wages)
    taxes = tax_model.compute(wages, ytd.gross_pay, jurisdiction, frequency)
    total = compute_total_deductions(taxes, deductions)

    logger.debug(
        f"{pay_date}: gross={gross} taxable={wages} taxes={taxes.total} "
        f"deductions={total - taxes.total} ytd_gross_before={ytd.gross_pay}"
    )

    return PayPeriodResult(
        period_start=window.start,
        period_end=window.end,
        pay_date=pay_date,
        gross_pay=gross,
        taxes=taxes,
        deductions=deductions,
        total_deductions=total,
        net_pay=gross - total,
        check_number=check_number,
    )


def _next_check_number(start: Optional[str], index: int) -> Optional[str]:
    """Check number for the index-th stub in a run.

    Numeric check numbers increment; anything else is repeated as-is.
    """
    if not start:
        return None
    if start.isdigit():
        return str(int(start) + index).zfill(len(start))
    return start


def generate_series(
    basis,
    frequency: PayFrequency,
    deductions: Sequence[Deduction],
    starting_ytd: Optional[YTDAccumulator],
    pay_dates: Sequence,
    jurisdiction: Optional[str] = None,
    tax_model: Optional[TaxModel] = None,
    earnings: Sequence[Earning] = (),
    starting_check_number: Optional[str] = None,
    pretax_reduces_taxable_wages: bool = False,
) -> PaySeries:
    """Generate a run of pay stubs for one employee.

    Pay dates are processed in the order given (callers pass them oldest
    first). Each period is taxed against the YTD gross accumulated so far,
    then folded into YTD before the next date, so SS and Medicare caps
    track the run exactly.

    Args:
        basis: HourlyBasis or SalaryTargetBasis
        frequency: Pay frequency
        deductions: User deductions, applied every period
        starting_ytd: YTD totals before the first date (None for zero)
        pay_dates: Ordered pay dates (date or YYYY-MM-DD)
        jurisdiction: State code for the bracket model
        tax_model: Tax model instance (default: flat model)
        earnings: Custom earnings, applied every period
        starting_check_number: First check number; numeric values increment
        pretax_reduces_taxable_wages: See taxable_wages()

    Returns:
        PaySeries with per-period results, per-period YTD snapshots and the
        final YTD
    """
    tax_model = tax_model or get_tax_model("flat")
    ytd = starting_ytd or YTDAccumulator.zero()
    periods: List[PayPeriodResult] = []
    snapshots: List[YTDAccumulator] = []

    for index, pay_date in enumerate(pay_dates):
        period = compute_pay_period(
            basis,
            frequency,
            pay_date,
            deductions=deductions,
            ytd=ytd,
            jurisdiction=jurisdiction,
            tax_model=tax_model,
            earnings=earnings,
            check_number=_next_check_number(starting_check_number, index),
            pretax_reduces_taxable_wages=pretax_reduces_taxable_wages,
        )
        ytd = fold_ytd(ytd, period)
        periods.append(period)
        snapshots.append(ytd)

    logger.debug(f"generated {len(periods)} stubs, ytd gross {ytd.gross_pay}")
    return PaySeries(periods=periods, ytd_by_period=snapshots, ytd=ytd)
