"""BuellDocs SDK - Pay stub and bank statement calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    get_data_path,
    ConfigNotFoundError,
    ProfileNotFoundError,
)

from .schemas import (
    InvalidArgumentError,
    PayFrequency,
    SalaryPeriod,
    TransactionKind,
    HourlyBasis,
    SalaryTargetBasis,
    PayBasis,
    Deduction,
    Earning,
    TaxResult,
    PayPeriod,
    PayPeriodResult,
    YTDAccumulator,
    PaySeries,
    Transaction,
    BalancedTransaction,
    StatementSummary,
)

from .money import to_cents, to_decimal

from .pay_periods import (
    compute_pay_period_dates,
    generate_pay_dates,
    parse_date,
    parse_frequency,
)

from .taxes import (
    FlatRateTaxModel,
    BracketTaxModel,
    get_tax_model,
    compute_taxes,
    load_tax_rules,
)

from .paystubs import (
    compute_gross_pay,
    compute_net_pay,
    compute_total_deductions,
    compute_pay_period,
    taxable_wages,
    fold_ytd,
    generate_series,
)

from .statement import (
    TRANSACTION_CATALOG,
    synthesize_random_transactions,
    derive_deposits_from_pay_periods,
    compute_balances,
    default_statement_window,
    build_statement,
)

from .documents import (
    DocumentRecord,
    DocumentStore,
    DocumentStoreError,
    paystub_record,
    statement_record,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_profile_value",
    "set_profile_value",
    "get_data_path",
    "ConfigNotFoundError",
    "ProfileNotFoundError",
    # Schemas
    "InvalidArgumentError",
    "PayFrequency",
    "SalaryPeriod",
    "TransactionKind",
    "HourlyBasis",
    "SalaryTargetBasis",
    "PayBasis",
    "Deduction",
    "Earning",
    "TaxResult",
    "PayPeriod",
    "PayPeriodResult",
    "YTDAccumulator",
    "PaySeries",
    "Transaction",
    "BalancedTransaction",
    "StatementSummary",
    # Money
    "to_cents",
    "to_decimal",
    # Pay periods
    "compute_pay_period_dates",
    "generate_pay_dates",
    "parse_date",
    "parse_frequency",
    # Taxes
    "FlatRateTaxModel",
    "BracketTaxModel",
    "get_tax_model",
    "compute_taxes",
    "load_tax_rules",
    # Pay stubs
    "compute_gross_pay",
    "compute_net_pay",
    "compute_total_deductions",
    "compute_pay_period",
    "taxable_wages",
    "fold_ytd",
    "generate_series",
    # Statements
    "TRANSACTION_CATALOG",
    "synthesize_random_transactions",
    "derive_deposits_from_pay_periods",
    "compute_balances",
    "default_statement_window",
    "build_statement",
    # Documents
    "DocumentRecord",
    "DocumentStore",
    "DocumentStoreError",
    "paystub_record",
    "statement_record",
]
