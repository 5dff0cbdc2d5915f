"""Paystubs command group - generate a run of pay stubs."""

import json
import logging
from datetime import date
from typing import List, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console

from buelldocs.sdk import (
    DocumentStore,
    HourlyBasis,
    InvalidArgumentError,
    PayFrequency,
    SalaryPeriod,
    SalaryTargetBasis,
    YTDAccumulator,
    generate_pay_dates,
    generate_series,
    get_profile_value,
    get_setting,
    get_tax_model,
    paystub_record,
)
from buelldocs.sdk.schemas import POST_TAX_DEDUCTIONS, PRE_TAX_DEDUCTIONS
from buelldocs.sdk.taxes import TAX_MODELS

from .params import DECIMAL, DEDUCTION, EARNING
from .renderers.paystub_renderer import render_pay_series

logger = logging.getLogger(__name__)

FREQUENCY_CHOICES = [f.value for f in PayFrequency]

DEDUCTION_HELP = (
    "Deduction NAME=AMOUNT[:pretax] (repeatable). "
    f"Common pretax: {', '.join(PRE_TAX_DEDUCTIONS)}. "
    f"Common post-tax: {', '.join(POST_TAX_DEDUCTIONS)}."
)


@click.group()
def paystubs():
    """Generate pay stubs.

    Pay is either hourly (--rate and --hours) or a salary target
    (--salary with --salary-period). Pay dates come from repeated
    --pay-date options, or --count stubs ending on --end-date.
    """
    pass


def _build_basis(rate, hours, salary, salary_period):
    if salary is not None and (rate is not None or hours is not None):
        raise click.UsageError("Use either --rate/--hours or --salary, not both.")
    if salary is None and (rate is None or hours is None):
        raise click.UsageError("Hourly pay needs both --rate and --hours (or use --salary).")
    try:
        if salary is not None:
            return SalaryTargetBasis(amount=salary, salary_period=SalaryPeriod(salary_period))
        return HourlyBasis(rate=rate, hours=hours)
    except ValidationError as e:
        problems = "; ".join(f"{err['loc'][-1]}: {err['msg']}" for err in e.errors())
        raise click.BadParameter(problems, param_hint="--rate/--hours/--salary")


def _resolve_pay_dates(
    pay_dates: Tuple[date, ...],
    count: Optional[int],
    end_date: Optional[date],
    frequency: PayFrequency,
) -> List[date]:
    if pay_dates and count is not None:
        raise click.UsageError("Use either --pay-date or --count, not both.")
    if pay_dates:
        given = [d.date() for d in pay_dates]
        ordered = sorted(given)
        if ordered != given:
            logger.info("pay dates reordered oldest first")
        return ordered
    try:
        return generate_pay_dates(
            1 if count is None else count,
            frequency,
            end_date.date() if end_date else None,
        )
    except InvalidArgumentError as e:
        raise click.BadParameter(str(e), param_hint="--count")


@paystubs.command("generate")
@click.option("--rate", type=DECIMAL, help="Hourly rate")
@click.option("--hours", type=DECIMAL, help="Hours worked per period")
@click.option("--salary", type=DECIMAL, help="Target salary (instead of rate/hours)")
@click.option("--salary-period", type=click.Choice([p.value for p in SalaryPeriod]), default="annual",
              show_default=True, help="Whether --salary is per year or per month")
@click.option("--frequency", "-f", type=click.Choice(FREQUENCY_CHOICES), default="biweekly",
              show_default=True, help="Pay frequency")
@click.option("--pay-date", "pay_dates", type=click.DateTime(formats=["%Y-%m-%d"]), multiple=True,
              help="Pay date (repeatable)")
@click.option("--count", "-n", type=int, help="Number of stubs ending on --end-date")
@click.option("--end-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Most recent pay date (default: today)")
@click.option("--deduction", "deductions", type=DEDUCTION, multiple=True,
              help=DEDUCTION_HELP)
@click.option("--earning", "earnings", type=EARNING, multiple=True,
              help="Extra earning NAME=AMOUNT[:nontaxable] (repeatable)")
@click.option("--jurisdiction", "-j", help="State code for state tax (default: settings)")
@click.option("--tax-model", type=click.Choice(sorted(TAX_MODELS)), help="Tax model (default: settings)")
@click.option("--tax-year", type=int, help="Tax rules year (default: settings)")
@click.option("--initial-ytd-gross", type=DECIMAL, default="0", help="YTD gross before the first stub")
@click.option("--check-number", help="First check number (numeric values increment)")
@click.option("--employee-name", help="Name for saved documents (default: profile account_holder.name)")
@click.option("--pretax-reduces-taxable/--full-gross-taxable", "pretax_reduces", default=None,
              help="Whether pretax deductions lower the tax base (default: settings)")
@click.option("--save", is_flag=True, help="Save each stub to document history")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def paystubs_generate(rate, hours, salary, salary_period, frequency, pay_dates, count, end_date,
                      deductions, earnings, jurisdiction, tax_model, tax_year, initial_ytd_gross,
                      check_number, employee_name, pretax_reduces, save, output_format):
    """Generate pay stubs with running YTD totals.

    \b
    Examples:
      buelldocs paystubs generate --rate 25 --hours 80 --pay-date 2024-01-12
      buelldocs paystubs generate --salary 75000 -n 6 --end-date 2024-03-22 \\
          --tax-model bracket -j NY --deduction 401k=150:pretax
    """
    freq = PayFrequency(frequency)
    basis = _build_basis(rate, hours, salary, salary_period)
    dates = _resolve_pay_dates(pay_dates, count, end_date, freq)

    model_name = tax_model or get_setting("tax_model")
    year = tax_year or get_setting("tax_year")
    try:
        model = get_tax_model(model_name, year)
    except InvalidArgumentError as e:
        raise click.ClickException(str(e))

    if pretax_reduces is None:
        pretax_reduces = bool(get_setting("pretax_reduces_taxable_wages"))

    starting_ytd = YTDAccumulator(gross_pay=initial_ytd_gross)
    series = generate_series(
        basis,
        freq,
        list(deductions),
        starting_ytd,
        dates,
        jurisdiction=jurisdiction or get_setting("jurisdiction"),
        tax_model=model,
        earnings=list(earnings),
        starting_check_number=check_number,
        pretax_reduces_taxable_wages=pretax_reduces,
    )

    name = employee_name or get_profile_value("account_holder.name", "")

    if save:
        store = DocumentStore.default()
        for period, ytd in zip(series.periods, series.ytd_by_period):
            store.save(paystub_record(period, ytd, name))
        click.echo(f"Saved {len(series.periods)} stub(s) to {store.path}", err=True)

    if output_format == "json":
        click.echo(json.dumps(series.model_dump(mode="json"), indent=2))
        return

    render_pay_series(Console(width=120), series, name, basis=basis, frequency=freq)
