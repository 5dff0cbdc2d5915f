"""Rich renderer for generated pay stubs.

Transforms SDK results into formatted Rich tables.
"""

from decimal import Decimal
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from buelldocs.sdk.paystubs import implied_hourly_rate
from buelldocs.sdk.schemas import (
    HourlyBasis,
    PayFrequency,
    PayPeriodResult,
    PaySeries,
    SalaryTargetBasis,
    YTDAccumulator,
)

STANDARD_PERIOD_HOURS = Decimal("40")


def render_pay_series(
    console: Console,
    series: PaySeries,
    employee_name: str = "",
    basis=None,
    frequency: Optional[PayFrequency] = None,
) -> None:
    """Render every stub in a run, then a summary of the final YTD.

    Args:
        console: Rich Console instance
        series: Output of generate_series()
        employee_name: Printed in each stub title
        basis: HourlyBasis or SalaryTargetBasis, for the rate x hours line
        frequency: Pay frequency, printed under each stub
    """
    if not series.periods:
        console.print(Panel("[yellow]No pay dates given.[/yellow]", title="Note", border_style="yellow"))
        return

    for period, ytd in zip(series.periods, series.ytd_by_period):
        render_pay_stub(console, period, ytd, employee_name, basis=basis, frequency=frequency)

    _render_summary(console, series)


def pay_rate_line(basis, frequency: Optional[PayFrequency]) -> Optional[str]:
    """'Regular (80.00 hrs @ $25.00/hr)' style label for the earnings block.

    Salary targets print the implied rate over a standard 40-hour period.
    Returns None when there is nothing to show.
    """
    if isinstance(basis, HourlyBasis):
        return f"Regular ({basis.hours:,.2f} hrs @ {_fmt(basis.rate)}/hr)"
    if isinstance(basis, SalaryTargetBasis) and frequency is not None:
        rate = implied_hourly_rate(basis, frequency, STANDARD_PERIOD_HOURS)
        return f"Salary ({STANDARD_PERIOD_HOURS:,.2f} hrs @ {_fmt(rate)}/hr)"
    return None


def render_pay_stub(
    console: Console,
    period: PayPeriodResult,
    ytd: YTDAccumulator,
    employee_name: str = "",
    basis=None,
    frequency: Optional[PayFrequency] = None,
) -> None:
    """Render one stub with current and YTD columns."""
    title = f"Pay Stub: {period.pay_date.isoformat()}"
    if employee_name:
        title += f" ({employee_name})"
    if period.check_number:
        title += f" - Check #{period.check_number}"

    caption = f"Period {period.period_start} to {period.period_end}"
    if frequency is not None:
        caption += f" ({PayFrequency(frequency).label})"

    table = Table(title=title, caption=caption, box=box.ROUNDED)
    table.add_column("", style="bold", min_width=25)
    table.add_column("Current", justify="right", min_width=12)
    table.add_column("YTD", justify="right", min_width=12)

    table.add_row("[bold]EARNINGS[/bold]", "", "")
    rate_line = pay_rate_line(basis, frequency)
    if rate_line:
        table.add_row(f"  [dim]{rate_line}[/dim]", "", "")
    table.add_row("  Gross Pay", _fmt(period.gross_pay), _fmt(ytd.gross_pay))
    table.add_row("", "", "")

    table.add_row("[bold]TAXES[/bold]", "", "")
    table.add_row("  Federal Tax", _fmt(period.taxes.federal), _fmt(ytd.taxes.federal))
    table.add_row("  State Tax", _fmt(period.taxes.state), _fmt(ytd.taxes.state))
    table.add_row("  Social Security", _fmt(period.taxes.social_security), _fmt(ytd.taxes.social_security))
    table.add_row("  Medicare", _fmt(period.taxes.medicare), _fmt(ytd.taxes.medicare))
    table.add_row("  [dim]Total Taxes[/dim]", f"[dim]{_fmt(period.taxes.total)}[/dim]", "")

    if period.deductions:
        table.add_row("", "", "")
        table.add_row("[bold]DEDUCTIONS[/bold]", "", "")
        for deduction in period.deductions:
            label = f"  {deduction.name}" + (" [dim](pretax)[/dim]" if deduction.pretax else "")
            table.add_row(label, _fmt(deduction.amount), "")

    table.add_row("", "", "")
    table.add_row("Total Deductions", _fmt(period.total_deductions), "", style="dim")
    net_style = "bold green" if period.net_pay >= 0 else "bold red"
    table.add_row(
        f"[{net_style}]NET PAY[/{net_style}]",
        f"[{net_style}]{_fmt(period.net_pay)}[/{net_style}]",
        _fmt(ytd.net_pay),
    )

    console.print(table)


def _render_summary(console: Console, series: PaySeries) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")
    table.add_row("Stubs", str(len(series.periods)))
    table.add_row("YTD Gross", _fmt(series.ytd.gross_pay))
    table.add_row("YTD Taxes", _fmt(series.ytd.taxes.total))
    table.add_row("YTD Net", _fmt(series.ytd.net_pay))
    console.print(Panel(table, title="Year to Date", border_style="dim"))


def _fmt(amount: Optional[Decimal]) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"
