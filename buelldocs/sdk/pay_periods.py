"""Pay period date arithmetic.

Maps a pay date and frequency to the work window it compensates, and
builds evenly spaced pay date schedules for generating a run of stubs.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional

from .schemas import InvalidArgumentError, PayFrequency, PayPeriod

# Spacing used when laying out a schedule of pay dates. Semimonthly and
# monthly are approximated with fixed day counts.
SCHEDULE_DAYS = {
    PayFrequency.WEEKLY: 7,
    PayFrequency.BIWEEKLY: 14,
    PayFrequency.SEMIMONTHLY: 15,
    PayFrequency.MONTHLY: 30,
}


def parse_date(value) -> date:
    """Parse a YYYY-MM-DD string (dates pass through).

    Raises:
        InvalidArgumentError: Not a date or not in YYYY-MM-DD format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            pass
    raise InvalidArgumentError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_frequency(value) -> PayFrequency:
    """Parse a pay frequency name (enum members pass through).

    Raises:
        InvalidArgumentError: Not one of weekly, biweekly, semimonthly, monthly
    """
    try:
        return PayFrequency(value)
    except ValueError:
        choices = ", ".join(f.value for f in PayFrequency)
        raise InvalidArgumentError(f"Invalid pay frequency: {value!r} (expected one of: {choices})")


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def compute_pay_period_dates(pay_date, frequency: PayFrequency) -> PayPeriod:
    """Work window for a pay date.

    - weekly: the 7 days ending on the pay date
    - biweekly: the 14 days ending on the pay date
    - semimonthly: 1st-15th if paid on or before the 15th, else 16th-month end
    - monthly: the calendar month containing the pay date

    Args:
        pay_date: date or YYYY-MM-DD string
        frequency: Pay frequency

    Returns:
        PayPeriod with start and end (inclusive)
    """
    pay_date = parse_date(pay_date)
    frequency = parse_frequency(frequency)

    if frequency is PayFrequency.WEEKLY:
        return PayPeriod(start=pay_date - timedelta(days=6), end=pay_date)

    if frequency is PayFrequency.BIWEEKLY:
        return PayPeriod(start=pay_date - timedelta(days=13), end=pay_date)

    if frequency is PayFrequency.SEMIMONTHLY:
        if pay_date.day <= 15:
            return PayPeriod(
                start=pay_date.replace(day=1),
                end=pay_date.replace(day=15),
            )
        return PayPeriod(
            start=pay_date.replace(day=16),
            end=last_day_of_month(pay_date.year, pay_date.month),
        )

    return PayPeriod(
        start=pay_date.replace(day=1),
        end=last_day_of_month(pay_date.year, pay_date.month),
    )


def generate_pay_dates(
    count: int,
    frequency: PayFrequency,
    end_date: Optional[date] = None,
) -> List[date]:
    """Lay out `count` pay dates ending on end_date.

    Dates step back from end_date by the schedule spacing for the
    frequency and are returned oldest first, which is the order
    generate_series expects.

    Args:
        count: Number of pay dates (>= 0)
        frequency: Pay frequency
        end_date: Most recent pay date (default: today)

    Returns:
        List of pay dates in chronological order

    Raises:
        InvalidArgumentError: count is negative
    """
    if count < 0:
        raise InvalidArgumentError(f"count must be >= 0, got {count}")

    end_date = parse_date(end_date) if end_date is not None else date.today()
    step = timedelta(days=SCHEDULE_DAYS[parse_frequency(frequency)])

    dates = [end_date - step * i for i in range(count)]
    dates.reverse()
    return dates
