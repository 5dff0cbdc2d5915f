"""Tax rules loading.

Rules ship with the package under taxes/rules/<year>.yaml. A file with
the same name under <config_dir>/tax_rules/ takes precedence, so users
can adjust rates without editing the install.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Union

import yaml

from ..config import get_config_dir
from ..schemas import InvalidArgumentError
from .schemas import TaxRules

logger = logging.getLogger(__name__)

PACKAGED_RULES_DIR = Path(__file__).parent / "rules"
DEFAULT_TAX_YEAR = 2024


def get_rules_path(year: Union[int, str]) -> Path:
    """Resolve the rules file for a year (user override first)."""
    filename = f"{year}.yaml"
    override = get_config_dir() / "tax_rules" / filename
    if override.exists():
        return override
    return PACKAGED_RULES_DIR / filename


def available_tax_years() -> List[int]:
    """Years with packaged or user-supplied rules, ascending."""
    years = set()
    for rules_dir in (PACKAGED_RULES_DIR, get_config_dir() / "tax_rules"):
        if rules_dir.exists():
            years.update(int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit())
    return sorted(years)


@lru_cache(maxsize=None)
def _load_rules_file(path: Path) -> TaxRules:
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return TaxRules.model_validate(data)


def load_tax_rules(year: Union[int, str] = DEFAULT_TAX_YEAR) -> TaxRules:
    """Load and validate tax rules for a year.

    Args:
        year: Tax year (e.g., 2024 or "2024")

    Returns:
        Validated TaxRules

    Raises:
        InvalidArgumentError: If no rules exist for the year
        pydantic.ValidationError: If the rules file is malformed
    """
    path = get_rules_path(year)
    if not path.exists():
        raise InvalidArgumentError(
            f"No tax rules for year {year}. Available: {available_tax_years()}"
        )
    logger.debug(f"loading tax rules from {path}")
    rules = _load_rules_file(path)
    if rules.year is None:
        rules = rules.model_copy(update={"year": int(year)})
    return rules


def clear_rules_cache() -> None:
    """Forget cached rules files (after editing an override)."""
    _load_rules_file.cache_clear()
