"""Rich renderer for bank statements."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from buelldocs.sdk.schemas import StatementSummary, TransactionKind

from .paystub_renderer import _fmt


def render_statement(console: Console, summary: StatementSummary, title: str = "Account Statement") -> None:
    """Render account summary and the transaction ledger."""
    totals = Table(show_header=False, box=None, padding=(0, 2))
    totals.add_column("key", style="dim")
    totals.add_column("value", justify="right")
    totals.add_row("Opening Balance", _fmt(summary.opening_balance))
    totals.add_row("Total Deposits", f"[green]+{_fmt(summary.total_deposits)}[/green]")
    totals.add_row("Total Withdrawals", f"[red]-{_fmt(summary.total_withdrawals)}[/red]")
    totals.add_row("Closing Balance", f"[bold]{_fmt(summary.closing_balance)}[/bold]")
    console.print(Panel(totals, title=title, border_style="blue"))

    if not summary.transactions:
        console.print("[dim]No transactions in this period.[/dim]")
        return

    ledger = Table(box=box.SIMPLE_HEAD)
    ledger.add_column("Date")
    ledger.add_column("Description")
    ledger.add_column("Category", style="dim")
    ledger.add_column("Amount", justify="right")
    ledger.add_column("Balance", justify="right")

    for txn in summary.transactions:
        if txn.kind is TransactionKind.DEPOSIT:
            amount = f"[green]+{_fmt(txn.amount)}[/green]"
        else:
            amount = f"[red]-{_fmt(txn.amount)}[/red]"
        ledger.add_row(txn.date.isoformat(), txn.description, txn.category, amount, _fmt(txn.running_balance))

    console.print(ledger)
