"""Click parameter types shared by the command groups."""

from decimal import Decimal, InvalidOperation

import click

from buelldocs.sdk.schemas import Deduction, Earning


class DecimalType(click.ParamType):
    """Exact decimal amount (e.g., 25, 1234.56)."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            amount = Decimal(str(value).replace(",", "").lstrip("$"))
        except InvalidOperation:
            self.fail(f"'{value}' is not a valid amount", param, ctx)
        if not amount.is_finite():
            self.fail(f"'{value}' is not a finite amount", param, ctx)
        return amount


class DeductionType(click.ParamType):
    """NAME=AMOUNT or NAME=AMOUNT:pretax"""

    name = "deduction"

    def convert(self, value, param, ctx):
        if isinstance(value, Deduction):
            return value
        name, amount, flag = _split_line_item(self, value, param, ctx)
        if flag not in ("", "pretax", "posttax"):
            self.fail(f"Unknown deduction flag '{flag}' (use pretax or posttax)", param, ctx)
        return Deduction(name=name, amount=amount, pretax=flag == "pretax")


class EarningType(click.ParamType):
    """NAME=AMOUNT or NAME=AMOUNT:nontaxable"""

    name = "earning"

    def convert(self, value, param, ctx):
        if isinstance(value, Earning):
            return value
        name, amount, flag = _split_line_item(self, value, param, ctx)
        if flag not in ("", "taxable", "nontaxable"):
            self.fail(f"Unknown earning flag '{flag}' (use taxable or nontaxable)", param, ctx)
        return Earning(name=name, amount=amount, taxable=flag != "nontaxable")


def _split_line_item(param_type: click.ParamType, value: str, param, ctx):
    if "=" not in value:
        param_type.fail(f"'{value}' should look like NAME=AMOUNT", param, ctx)
    name, rest = value.rsplit("=", 1)
    amount_text, _, flag = rest.partition(":")
    amount = DECIMAL.convert(amount_text, param, ctx)
    if not name.strip():
        param_type.fail(f"'{value}' is missing a name", param, ctx)
    if amount < 0:
        param_type.fail(f"'{value}' has a negative amount", param, ctx)
    return name.strip(), amount, flag.strip().lower()


DECIMAL = DecimalType()
DEDUCTION = DeductionType()
EARNING = EarningType()
