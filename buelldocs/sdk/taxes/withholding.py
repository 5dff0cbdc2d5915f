"""Per-period withholding calculations.

Two tax models are available and callers pick one by name:

- FlatRateTaxModel ("flat"): fixed percentages of gross pay. No brackets,
  no wage base, no surcharge. This is what the quick single-stub form uses.
- BracketTaxModel ("bracket"): progressive federal brackets applied to
  YTD-plus-current gross and prorated by periods per year, a flat rate per
  state, Social Security capped at the wage base, and Medicare with the
  additional surcharge above the YTD threshold. This is what the multi-stub
  generator uses, because its SS and Medicare figures depend on the YTD
  gross threaded through the series.

Every component is floored at zero and rounded to cents.
"""

from decimal import Decimal
from typing import Dict, List, Optional, Union

from ..money import ZERO, to_cents
from ..schemas import InvalidArgumentError, PayFrequency, TaxResult
from .rules import DEFAULT_TAX_YEAR, load_tax_rules
from .schemas import TaxBracket, TaxRules


def apply_brackets(amount: Decimal, brackets: List[TaxBracket]) -> Decimal:
    """Progressive tax on an amount (unrounded).

    Each bracket taxes the slice of amount between the previous bound and
    its own up_to. The top bracket (up_to None) taxes everything above.

    Example with [(11000, 10%), (44725, 12%)] and 20000:
        11000 * 0.10 + 9000 * 0.12 = 2180
    """
    total = ZERO
    lower = ZERO
    for bracket in brackets:
        if amount <= lower:
            break
        upper = amount if bracket.up_to is None else min(amount, bracket.up_to)
        total += (upper - lower) * bracket.rate
        if bracket.up_to is None:
            break
        lower = bracket.up_to
    return total


def calc_ss_withholding(
    gross: Decimal,
    ytd_gross: Decimal,
    rules: TaxRules,
) -> Decimal:
    """Social Security for a period, stopping once YTD reaches the wage base.

    Args:
        gross: Gross pay for the period
        ytd_gross: Year-to-date gross before this period
        rules: Tax rules for the year

    Returns:
        min(gross * rate, max(0, (wage_base - ytd_gross) * rate)), in cents
    """
    rate = rules.social_security.tax_rate
    remaining = max(ZERO, (rules.social_security.wage_base - ytd_gross) * rate)
    return to_cents(max(ZERO, min(gross * rate, remaining)))


def calc_medicare_withholding(
    gross: Decimal,
    ytd_gross: Decimal,
    rules: TaxRules,
) -> Dict[str, Decimal]:
    """Medicare for a period, including the additional surcharge.

    The surcharge only applies to the part of this period's gross that
    lands above the threshold: all of it once YTD is already over, the
    crossing portion in the period that crosses, nothing below.

    Returns:
        Dict with base_withheld, additional_withheld, withheld (all cents)
    """
    medicare = rules.medicare
    base_withheld = to_cents(max(ZERO, gross * medicare.tax_rate))

    new_ytd = ytd_gross + gross
    if new_ytd > medicare.additional_threshold:
        if ytd_gross >= medicare.additional_threshold:
            additional_wages = gross
        else:
            additional_wages = new_ytd - medicare.additional_threshold
        additional_withheld = to_cents(max(ZERO, additional_wages * medicare.additional_rate))
    else:
        additional_withheld = to_cents(ZERO)

    return {
        "base_withheld": base_withheld,
        "additional_withheld": additional_withheld,
        "withheld": base_withheld + additional_withheld,
    }


class FlatRateTaxModel:
    """Fixed percentages of gross pay."""

    name = "flat"

    def __init__(self, rules: TaxRules):
        self.rules = rules

    def compute(
        self,
        gross_pay: Decimal,
        ytd_gross: Decimal = ZERO,
        jurisdiction: Optional[str] = None,
        frequency: Optional[PayFrequency] = None,
    ) -> TaxResult:
        # ytd_gross, jurisdiction and frequency don't affect a flat model
        rates = self.rules.flat_rates
        return TaxResult(
            federal=to_cents(max(ZERO, gross_pay * rates.federal)),
            state=to_cents(max(ZERO, gross_pay * rates.state)),
            social_security=to_cents(max(ZERO, gross_pay * rates.social_security)),
            medicare=to_cents(max(ZERO, gross_pay * rates.medicare)),
        )


class BracketTaxModel:
    """Progressive federal brackets on YTD gross, state table, SS cap,
    Medicare surcharge."""

    name = "bracket"

    def __init__(self, rules: TaxRules):
        self.rules = rules

    def federal(self, gross_pay: Decimal, ytd_gross: Decimal, frequency: PayFrequency) -> Decimal:
        """Bracket tax on YTD-to-date income, divided by periods per year."""
        annualized = ytd_gross + gross_pay
        tax = apply_brackets(annualized, self.rules.federal.brackets)
        return to_cents(max(ZERO, tax / frequency.periods_per_year))

    def compute(
        self,
        gross_pay: Decimal,
        ytd_gross: Decimal = ZERO,
        jurisdiction: Optional[str] = None,
        frequency: Optional[PayFrequency] = None,
    ) -> TaxResult:
        if frequency is None:
            raise InvalidArgumentError("bracket tax model needs a pay frequency")
        state_rate = self.rules.state.rate_for(jurisdiction)
        medicare = calc_medicare_withholding(gross_pay, ytd_gross, self.rules)
        return TaxResult(
            federal=self.federal(gross_pay, ytd_gross, frequency),
            state=to_cents(max(ZERO, gross_pay * state_rate)),
            social_security=calc_ss_withholding(gross_pay, ytd_gross, self.rules),
            medicare=medicare["withheld"],
        )


TaxModel = Union[FlatRateTaxModel, BracketTaxModel]

TAX_MODELS = {
    FlatRateTaxModel.name: FlatRateTaxModel,
    BracketTaxModel.name: BracketTaxModel,
}


def get_tax_model(name: str, year: Union[int, str] = DEFAULT_TAX_YEAR) -> TaxModel:
    """Build a tax model by name with the rules for a year.

    Args:
        name: "flat" or "bracket"
        year: Tax year whose rules to use

    Raises:
        InvalidArgumentError: Unknown model name or year
    """
    model_cls = TAX_MODELS.get(name)
    if model_cls is None:
        raise InvalidArgumentError(
            f"Unknown tax model '{name}'. Choose from: {', '.join(sorted(TAX_MODELS))}"
        )
    return model_cls(load_tax_rules(year))


def compute_taxes(
    gross_pay: Decimal,
    ytd_gross: Decimal,
    jurisdiction: Optional[str],
    frequency: PayFrequency,
    model: TaxModel,
) -> TaxResult:
    """Withholding for one period under the caller's chosen model."""
    return model.compute(gross_pay, ytd_gross, jurisdiction, frequency)
