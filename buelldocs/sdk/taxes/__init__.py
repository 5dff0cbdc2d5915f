"""taxes - Withholding models and tax rules.

Scope:
- Tax rules per year (federal brackets, state table, SS, Medicare, flat rates)
- Two named per-period withholding models: flat and bracket

Constraints:
- Pure calculation - no config beyond locating the rules file
- Year-specific rules loaded from taxes/rules/{year}.yaml, overridable
  from <config_dir>/tax_rules/{year}.yaml

Usage:
    from buelldocs.sdk.taxes import get_tax_model

    model = get_tax_model("bracket", 2024)
    taxes = model.compute(gross, ytd_gross, "CA", PayFrequency.BIWEEKLY)
"""

from .schemas import TaxRules, TaxBracket

from .rules import (
    DEFAULT_TAX_YEAR,
    available_tax_years,
    clear_rules_cache,
    load_tax_rules,
)

from .withholding import (
    BracketTaxModel,
    FlatRateTaxModel,
    TAX_MODELS,
    TaxModel,
    apply_brackets,
    calc_medicare_withholding,
    calc_ss_withholding,
    compute_taxes,
    get_tax_model,
)

__all__ = [
    # Rules
    "TaxRules",
    "TaxBracket",
    "DEFAULT_TAX_YEAR",
    "available_tax_years",
    "clear_rules_cache",
    "load_tax_rules",
    # Models
    "BracketTaxModel",
    "FlatRateTaxModel",
    "TAX_MODELS",
    "TaxModel",
    "apply_brackets",
    "calc_medicare_withholding",
    "calc_ss_withholding",
    "compute_taxes",
    "get_tax_model",
]
