"""Settings CLI commands for BuellDocs.

Manages settings.json (tool defaults, data directory) and profile.yaml
(names printed on documents).
"""

from pathlib import Path

import click

from buelldocs.sdk import (
    get_data_path,
    get_profile_path,
    get_setting,
    get_settings_path,
    load_profile,
    load_settings,
    save_settings,
    set_profile_value,
    set_setting,
)
from buelldocs.sdk.config import DEFAULT_SETTINGS
from buelldocs.sdk.taxes import TAX_MODELS, available_tax_years


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise click.BadParameter(f"'{value}' is not a boolean (use true/false)")


def _coerce_setting(key: str, value: str):
    """Validate and convert a settings value given on the command line."""
    if key == "tax_model":
        if value not in TAX_MODELS:
            raise click.BadParameter(f"tax_model must be one of: {', '.join(sorted(TAX_MODELS))}")
        return value
    if key == "tax_year":
        if not value.isdigit() or len(value) != 4:
            raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.")
        year = int(value)
        if year not in available_tax_years():
            raise click.BadParameter(f"No tax rules for {year}. Available: {available_tax_years()}")
        return year
    if key == "jurisdiction":
        return value.strip().upper()
    if key == "pretax_reduces_taxable_wages":
        return _parse_bool(value)
    raise click.BadParameter(
        f"Unknown setting '{key}'. Known: {', '.join(sorted(DEFAULT_SETTINGS))}, data_dir"
    )


@click.group()
def settings():
    """Manage settings (settings.json) and profile (profile.yaml).

    Available settings:
    - data_dir: custom data directory path
    - tax_model: flat or bracket
    - jurisdiction: default state code (e.g., CA)
    - tax_year: tax rules year
    - pretax_reduces_taxable_wages: true/false
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their effective values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    click.echo("Effective settings:")
    for key in DEFAULT_SETTINGS:
        source = "" if key in current else " (default)"
        click.echo(f"  {key}: {get_setting(key)}{source}")
    data_source = "" if current.get("data_dir") else " (default)"
    click.echo(f"  data_dir: {get_data_path()}{data_source}")

    profile = load_profile(require_exists=False)
    click.echo()
    click.echo(f"Profile file: {get_profile_path()}")
    if not profile:
        click.echo("No profile configured.")
        return
    for section, values in profile.items():
        if isinstance(values, dict):
            for key, value in values.items():
                click.echo(f"  {section}.{key}: {value}")
        else:
            click.echo(f"  {section}: {values}")


@settings.command("set")
@click.argument("key")
@click.argument("value")
def settings_set(key, value):
    """Set a tool default.

    \b
    Examples:
        buelldocs settings set tax_model bracket
        buelldocs settings set jurisdiction NY
    """
    coerced = _coerce_setting(key, value)
    path = set_setting(key, coerced)
    click.echo(f"Set {key}: {coerced}")
    click.echo(f"Saved to: {path}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom data_dir, revert to default")
def settings_data_dir(path, clear):
    """Set or clear the custom data directory.

    PATH is where buelldocs keeps saved documents.
    """
    if clear:
        current = load_settings()
        if "data_dir" in current:
            del current["data_dir"]
            save_settings(current)
            click.echo("Cleared data_dir setting.")
            click.echo(f"Data directory is now: {get_data_path()} (default)")
        else:
            click.echo("data_dir was not set.")
        return

    if not path:
        current_data_dir = load_settings().get("data_dir")
        if current_data_dir:
            click.echo(f"Current data_dir: {current_data_dir}")
        else:
            click.echo(f"No custom data_dir set. Using default: {get_data_path()}")
        return

    data_path = Path(path).expanduser().resolve()
    if data_path.exists() and not data_path.is_dir():
        raise click.ClickException(f"Path exists but is not a directory: {data_path}")
    try:
        data_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise click.ClickException(f"Cannot create directory: {data_path}\n{e}")

    set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("profile-set")
@click.argument("key")
@click.argument("value")
def settings_profile_set(key, value):
    """Set a profile value by dot-notation key.

    \b
    Examples:
        buelldocs settings profile-set account_holder.name "Jane Doe"
        buelldocs settings profile-set bank.name Chase
    """
    path = set_profile_value(key, value)
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")
