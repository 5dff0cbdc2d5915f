"""Pydantic schemas for pay and statement data.

All schemas use extra='forbid' to reject unknown fields, so a typo in
a saved document or a CLI JSON file causes a clear error rather than
being silently ignored. Result records are frozen: the engines build a
new record instead of mutating one.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class InvalidArgumentError(ValueError):
    """Raised when an engine call receives a value outside its domain.

    Examples: a negative transaction count, a statement window that ends
    before it starts, a pay date that is not a date.
    """
    pass


# =============================================================================
# Enumerations
# =============================================================================


class PayFrequency(str, Enum):
    """How often an employee is paid."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        return PERIODS_PER_YEAR[self]

    @property
    def label(self) -> str:
        return FREQUENCY_LABELS[self]


PERIODS_PER_YEAR = {
    PayFrequency.WEEKLY: 52,
    PayFrequency.BIWEEKLY: 26,
    PayFrequency.SEMIMONTHLY: 24,
    PayFrequency.MONTHLY: 12,
}

FREQUENCY_LABELS = {
    PayFrequency.WEEKLY: "Weekly",
    PayFrequency.BIWEEKLY: "Bi-Weekly",
    PayFrequency.SEMIMONTHLY: "Semi-Monthly",
    PayFrequency.MONTHLY: "Monthly",
}


class SalaryPeriod(str, Enum):
    """Period a salary target is quoted in."""

    ANNUAL = "annual"
    MONTHLY = "monthly"

    @property
    def per_year(self) -> int:
        return 1 if self is SalaryPeriod.ANNUAL else 12


class TransactionKind(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


# =============================================================================
# Pay inputs
# =============================================================================


class HourlyBasis(BaseModel):
    """Hourly pay: rate times hours worked in the period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["hourly"] = "hourly"
    rate: Decimal = Field(..., ge=0, description="Hourly rate")
    hours: Decimal = Field(..., ge=0, description="Hours worked per period")


class SalaryTargetBasis(BaseModel):
    """Salary target spread evenly across the year's pay periods."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["salary"] = "salary"
    amount: Decimal = Field(..., ge=0, description="Target salary")
    salary_period: SalaryPeriod = Field(
        default=SalaryPeriod.ANNUAL,
        description="Whether amount is per year or per month",
    )


PayBasis = Annotated[Union[HourlyBasis, SalaryTargetBasis], Field(discriminator="kind")]


class Deduction(BaseModel):
    """User-defined deduction taken every period.

    The pretax flag is recorded for display. Whether it reduces the tax
    base is decided by the caller (see paystubs.taxable_wages).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Deduction label (e.g., '401(k)')")
    amount: Decimal = Field(..., ge=0, description="Amount per period")
    pretax: bool = Field(default=False, description="Pre-tax deduction")


class Earning(BaseModel):
    """Custom earning line added on top of base pay."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Earning label (e.g., 'Bonus')")
    amount: Decimal = Field(..., ge=0, description="Amount per period")
    taxable: bool = Field(default=True, description="Counts toward gross pay")


# Common deduction names offered to users.
PRE_TAX_DEDUCTIONS = [
    "401(k)",
    "Health Insurance",
    "Dental Insurance",
    "Vision Insurance",
    "HSA",
]

POST_TAX_DEDUCTIONS = [
    "Roth 401(k)",
    "Garnishments",
]


# =============================================================================
# Pay results
# =============================================================================


class TaxResult(BaseModel):
    """Withholding by tax type for one period (or YTD)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    federal: Decimal = Field(..., description="Federal income tax")
    state: Decimal = Field(..., description="State income tax")
    social_security: Decimal = Field(..., description="Social Security")
    medicare: Decimal = Field(..., description="Medicare (incl. additional)")

    @property
    def total(self) -> Decimal:
        return self.federal + self.state + self.social_security + self.medicare

    @classmethod
    def zero(cls) -> "TaxResult":
        return cls(
            federal=Decimal("0"),
            state=Decimal("0"),
            social_security=Decimal("0"),
            medicare=Decimal("0"),
        )


class PayPeriod(BaseModel):
    """Work window a paycheck compensates."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: dt.date
    end: dt.date


class PayPeriodResult(BaseModel):
    """All figures for one generated pay stub."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period_start: dt.date = Field(..., description="First day of work period")
    period_end: dt.date = Field(..., description="Last day of work period")
    pay_date: dt.date = Field(..., description="Date money is disbursed")
    gross_pay: Decimal = Field(..., description="Gross pay for the period")
    taxes: TaxResult = Field(..., description="Withholding for the period")
    deductions: List[Deduction] = Field(
        default_factory=list, description="User deductions, in input order"
    )
    total_deductions: Decimal = Field(..., description="Taxes plus deductions")
    net_pay: Decimal = Field(..., description="Gross minus total deductions (may be negative)")
    check_number: Optional[str] = Field(default=None, description="Check number printed on stub")


class YTDAccumulator(BaseModel):
    """Running year-to-date totals, threaded by the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_pay: Decimal = Field(default=Decimal("0"))
    net_pay: Decimal = Field(default=Decimal("0"))
    taxes: TaxResult = Field(default_factory=TaxResult.zero)

    @classmethod
    def zero(cls) -> "YTDAccumulator":
        return cls()


class PaySeries(BaseModel):
    """Result of generating a run of pay stubs for one employee.

    ytd_by_period[i] is the YTD snapshot printed on periods[i];
    ytd is the final accumulator after the last period.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    periods: List[PayPeriodResult] = Field(default_factory=list)
    ytd_by_period: List[YTDAccumulator] = Field(default_factory=list)
    ytd: YTDAccumulator = Field(default_factory=YTDAccumulator.zero)


# =============================================================================
# Statement records
# =============================================================================


class Transaction(BaseModel):
    """A dated account transaction. Amount is always a magnitude; kind
    says which way money moves. Amounts are not range-checked here."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., description="Caller-assigned identifier")
    date: dt.date = Field(..., description="Posting date")
    description: str = Field(..., description="Statement line text")
    amount: Decimal = Field(..., description="Transaction amount")
    kind: TransactionKind = Field(..., description="deposit or withdrawal")
    category: str = Field(default="", description="Spending/deposit category")

    @property
    def signed_amount(self) -> Decimal:
        if self.kind is TransactionKind.DEPOSIT:
            return self.amount
        return -self.amount


class BalancedTransaction(Transaction):
    """Transaction with the balance after it posted."""

    running_balance: Decimal = Field(..., description="Balance after this transaction")


class StatementSummary(BaseModel):
    """Balances and totals for a statement period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    opening_balance: Decimal
    closing_balance: Decimal
    total_deposits: Decimal
    total_withdrawals: Decimal
    transactions: List[BalancedTransaction] = Field(default_factory=list)
