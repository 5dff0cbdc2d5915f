"""Statement command group - generate a bank statement."""

import json
import random
from pathlib import Path
from typing import List

import click
from pydantic import ValidationError
from rich.console import Console

from buelldocs.sdk import (
    DocumentStore,
    InvalidArgumentError,
    PayPeriodResult,
    PaySeries,
    build_statement,
    default_statement_window,
    get_profile_value,
    statement_record,
)

from .params import DECIMAL
from .renderers.statement_renderer import render_statement


@click.group()
def statement():
    """Generate bank statements."""
    pass


def load_pay_periods(path: Path) -> List[PayPeriodResult]:
    """Load pay periods from 'paystubs generate --format json' output.

    Accepts the full series object or a bare list of periods.
    """
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{path} is not valid JSON: {e}")
    try:
        if isinstance(data, list):
            return [PayPeriodResult.model_validate(item) for item in data]
        return PaySeries.model_validate(data).periods
    except ValidationError as e:
        raise click.ClickException(f"{path} does not contain pay stubs: {e}")


@statement.command("generate")
@click.option("--opening-balance", type=DECIMAL, default="0", show_default=True, help="Balance before the period")
@click.option("--start", "start_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Statement start date")
@click.option("--end", "end_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Statement end date")
@click.option("--paystubs", "paystubs_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON from 'paystubs generate --format json'; net pay becomes payroll deposits")
@click.option("--random-count", type=int, default=10, show_default=True, help="Random transactions to add")
@click.option("--seed", type=int, help="Seed for reproducible random transactions")
@click.option("--account-holder", help="Account holder name (default: profile account_holder.name)")
@click.option("--bank-name", help="Bank name (default: profile bank.name)")
@click.option("--save", is_flag=True, help="Save the statement to document history")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def statement_generate(opening_balance, start_date, end_date, paystubs_file, random_count, seed,
                       account_holder, bank_name, save, output_format):
    """Generate a statement with running balances.

    Without --start/--end the window is derived from the pay stubs: five
    days before the first period starts to five days after the last pay
    date.

    \b
    Example:
      buelldocs paystubs generate --salary 60000 -n 4 --format json > stubs.json
      buelldocs statement generate --paystubs stubs.json --opening-balance 1500 --seed 7
    """
    periods = load_pay_periods(paystubs_file) if paystubs_file else []

    if start_date is None or end_date is None:
        if not periods:
            raise click.UsageError("Give --start and --end, or --paystubs to derive the window.")
        derived_start, derived_end = default_statement_window(periods)
        start = start_date.date() if start_date else derived_start
        end = end_date.date() if end_date else derived_end
    else:
        start, end = start_date.date(), end_date.date()

    holder = account_holder or get_profile_value("account_holder.name", "")
    bank = bank_name or get_profile_value("bank.name", "")

    try:
        summary = build_statement(
            opening_balance,
            start,
            end,
            periods=periods,
            random_count=random_count,
            rng=random.Random(seed),
            account_holder=holder,
        )
    except InvalidArgumentError as e:
        raise click.ClickException(str(e))

    if save:
        store = DocumentStore.default()
        store.save(statement_record(summary, holder, bank))
        click.echo(f"Saved statement to {store.path}", err=True)

    if output_format == "json":
        click.echo(json.dumps(summary.model_dump(mode="json"), indent=2))
        return

    title = f"Account Statement {start} - {end}"
    if bank:
        title = f"{bank} {title}"
    render_statement(Console(width=120), summary, title)
