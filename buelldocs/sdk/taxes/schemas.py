"""Pydantic schemas for tax rules validation.

These schemas validate the taxes/rules/*.yaml files and provide typed
access to tax parameters like the SS wage base, Medicare threshold, and
federal brackets.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaxBracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid")

    up_to: Optional[Decimal] = Field(default=None, description="Upper bound (None for the top bracket)")
    rate: Decimal = Field(..., ge=0, le=1, description="Tax rate as decimal")


class FederalRules(BaseModel):
    """Federal income tax brackets."""
    model_config = ConfigDict(extra="forbid")

    brackets: List[TaxBracket] = Field(..., min_length=1)

    @field_validator("brackets")
    @classmethod
    def check_ascending(cls, brackets: List[TaxBracket]) -> List[TaxBracket]:
        bounds = [b.up_to for b in brackets[:-1]]
        if any(b is None for b in bounds):
            raise ValueError("only the last bracket may omit up_to")
        if bounds != sorted(bounds):
            raise ValueError("bracket bounds must be ascending")
        return brackets


class StateRules(BaseModel):
    """Flat state rates by jurisdiction code."""
    model_config = ConfigDict(extra="forbid")

    default_rate: Decimal = Field(..., ge=0, le=1)
    rates: Dict[str, Decimal] = Field(default_factory=dict)

    def rate_for(self, jurisdiction: Optional[str]) -> Decimal:
        """Rate for a jurisdiction code, or the default when unknown."""
        code = (jurisdiction or "").strip().upper()
        return self.rates.get(code, self.default_rate)


class SocialSecurityRules(BaseModel):
    """Social Security tax rules."""
    model_config = ConfigDict(extra="forbid")

    wage_base: Decimal = Field(..., gt=0, description="SS wage base (max taxable)")
    tax_rate: Decimal = Field(..., ge=0, le=1, description="SS tax rate (employee portion)")


class MedicareRules(BaseModel):
    """Medicare tax rules."""
    model_config = ConfigDict(extra="forbid")

    tax_rate: Decimal = Field(..., ge=0, le=1)
    additional_rate: Decimal = Field(..., ge=0, le=1)
    additional_threshold: Decimal = Field(..., ge=0, description="YTD wages where the surcharge starts")


class FlatRates(BaseModel):
    """Percentages of gross for the flat-rate model."""
    model_config = ConfigDict(extra="forbid")

    federal: Decimal = Field(..., ge=0, le=1)
    state: Decimal = Field(..., ge=0, le=1)
    social_security: Decimal = Field(..., ge=0, le=1)
    medicare: Decimal = Field(..., ge=0, le=1)


class TaxRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore")  # Allow unknown fields for forward compat

    year: Optional[int] = None
    federal: FederalRules
    state: StateRules
    social_security: SocialSecurityRules
    medicare: MedicareRules
    flat_rates: FlatRates

    @field_validator("state", mode="before")
    @classmethod
    def upper_case_codes(cls, value):
        if isinstance(value, dict) and isinstance(value.get("rates"), dict):
            value = dict(value)
            value["rates"] = {str(k).upper(): v for k, v in value["rates"].items()}
        return value
