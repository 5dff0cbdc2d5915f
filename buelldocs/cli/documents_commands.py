"""Documents command group - browse saved document history."""

import json

import click
from rich.console import Console
from rich.table import Table

from buelldocs.sdk import DocumentStore, DocumentStoreError


@click.group()
def documents():
    """Browse saved pay stubs and statements."""
    pass


@documents.command("list")
@click.option("--type", "type_filter", type=click.Choice(["paystub", "bank_statement"]),
              help="Only show one document type")
@click.option("--count", is_flag=True, help="Print only the number of matching documents")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def documents_list(type_filter, count, output_format):
    """List saved documents, newest first."""
    store = DocumentStore.default()
    try:
        records = store.list_all(type_filter)
    except DocumentStoreError as e:
        raise click.ClickException(str(e))

    if count:
        click.echo(len(records))
        return

    if output_format == "json":
        click.echo(json.dumps([r.model_dump(mode="json") for r in records], indent=2))
        return

    if not records:
        click.echo("No saved documents.")
        return

    table = Table(title=f"Documents ({store.path})")
    table.add_column("Created")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("ID", style="dim")
    for record in records:
        table.add_row(
            record.created_at.strftime("%Y-%m-%d %H:%M"),
            record.type,
            record.name,
            record.id,
        )
    Console(width=140).print(table)
