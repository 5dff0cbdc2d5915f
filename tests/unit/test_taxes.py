"""Tests for tax rules and the flat / bracket withholding models.

Uses an isolated config directory so a user's tax_rules override
never leaks into the expected figures.
"""

from decimal import Decimal

import pytest
import yaml
from pydantic import ValidationError

from buelldocs.sdk.schemas import InvalidArgumentError, PayFrequency, TaxResult
from buelldocs.sdk.taxes import (
    BracketTaxModel,
    FlatRateTaxModel,
    apply_brackets,
    available_tax_years,
    calc_medicare_withholding,
    calc_ss_withholding,
    compute_taxes,
    get_tax_model,
    load_tax_rules,
)


# === FIXTURES ===


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("BUELLDOCS_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir}


@pytest.fixture
def rules():
    return load_tax_rules(2024)


# === RULES ===


class TestTaxRules:

    def test_packaged_2024_rules_load(self, rules):
        assert rules.year == 2024
        assert rules.social_security.wage_base == Decimal("160200")
        assert rules.medicare.additional_threshold == Decimal("200000")
        assert rules.federal.brackets[-1].up_to is None

    def test_available_years_includes_packaged(self):
        assert 2024 in available_tax_years()

    def test_unknown_year_raises(self):
        with pytest.raises(InvalidArgumentError):
            load_tax_rules(1999)

    def test_user_override_takes_precedence(self, isolated_env, rules):
        override = rules.model_dump(mode="json")
        override["flat_rates"]["federal"] = "0.10"
        rules_dir = isolated_env["config_dir"] / "tax_rules"
        rules_dir.mkdir()
        (rules_dir / "2024.yaml").write_text(yaml.dump(override))

        model = get_tax_model("flat", 2024)
        taxes = model.compute(Decimal("2000"))

        assert taxes.federal == Decimal("200.00")

    def test_malformed_override_raises_validation_error(self, isolated_env):
        rules_dir = isolated_env["config_dir"] / "tax_rules"
        rules_dir.mkdir()
        (rules_dir / "2030.yaml").write_text(yaml.dump({"federal": {"brackets": []}}))

        with pytest.raises(ValidationError):
            load_tax_rules(2030)

    def test_state_codes_are_case_insensitive(self, rules):
        assert rules.state.rate_for("ny") == Decimal("0.06")
        assert rules.state.rate_for(" CA ") == Decimal("0.05")


# === FLAT MODEL ===


class TestFlatRateTaxModel:

    def test_scenario_hourly_biweekly(self):
        """$25 x 80h: 12% / 5% / 6.2% / 1.45% of 2000."""
        taxes = get_tax_model("flat").compute(Decimal("2000.00"))

        assert taxes == TaxResult(
            federal=Decimal("240.00"),
            state=Decimal("100.00"),
            social_security=Decimal("124.00"),
            medicare=Decimal("29.00"),
        )
        assert taxes.total == Decimal("493.00")

    def test_ignores_ytd_and_jurisdiction(self):
        model = get_tax_model("flat")

        low = model.compute(Decimal("2000"), Decimal("0"), "CA", PayFrequency.BIWEEKLY)
        high = model.compute(Decimal("2000"), Decimal("500000"), "TX", PayFrequency.WEEKLY)

        assert low == high

    def test_zero_gross_is_zero_tax(self):
        assert get_tax_model("flat").compute(Decimal("0")) == TaxResult.zero()


# === BRACKET MODEL ===


class TestApplyBrackets:

    def test_spans_two_brackets(self, rules):
        assert apply_brackets(Decimal("20000"), rules.federal.brackets) == Decimal("2180.00")

    def test_reaches_top_bracket(self, rules):
        assert apply_brackets(Decimal("600000"), rules.federal.brackets) == Decimal("182336.00")

    def test_zero_amount(self, rules):
        assert apply_brackets(Decimal("0"), rules.federal.brackets) == Decimal("0")


class TestBracketTaxModel:

    def test_federal_prorated_by_periods(self):
        model = get_tax_model("bracket")

        taxes = model.compute(Decimal("2000"), Decimal("0"), "CA", PayFrequency.BIWEEKLY)

        # 2000 * 10% / 26
        assert taxes.federal == Decimal("7.69")

    @pytest.mark.parametrize("jurisdiction,expected", [
        ("CA", "100.00"),
        ("NY", "120.00"),
        ("TX", "0.00"),
        ("ZZ", "80.00"),
        (None, "80.00"),
    ])
    def test_state_table(self, jurisdiction, expected):
        model = get_tax_model("bracket")

        taxes = model.compute(Decimal("2000"), Decimal("0"), jurisdiction, PayFrequency.BIWEEKLY)

        assert taxes.state == Decimal(expected)

    def test_requires_frequency(self):
        with pytest.raises(InvalidArgumentError):
            get_tax_model("bracket").compute(Decimal("2000"), Decimal("0"), "CA", None)

    def test_compute_taxes_dispatches_to_model(self):
        model = get_tax_model("bracket")

        taxes = compute_taxes(Decimal("2000"), Decimal("0"), "NY", PayFrequency.BIWEEKLY, model)

        assert taxes == model.compute(Decimal("2000"), Decimal("0"), "NY", PayFrequency.BIWEEKLY)


class TestSocialSecurityCap:

    def test_below_cap_full_rate(self, rules):
        assert calc_ss_withholding(Decimal("2000"), Decimal("0"), rules) == Decimal("124.00")

    def test_crossing_cap_withholds_remainder(self, rules):
        # (160200 - 160000) * 6.2%
        assert calc_ss_withholding(Decimal("2000"), Decimal("160000"), rules) == Decimal("12.40")

    def test_over_cap_withholds_nothing(self, rules):
        assert calc_ss_withholding(Decimal("2000"), Decimal("170000"), rules) == Decimal("0.00")


class TestMedicareSurcharge:

    def test_below_threshold(self, rules):
        result = calc_medicare_withholding(Decimal("2000"), Decimal("0"), rules)

        assert result["withheld"] == Decimal("29.00")
        assert result["additional_withheld"] == Decimal("0.00")

    def test_crossing_threshold_surcharges_only_excess(self, rules):
        result = calc_medicare_withholding(Decimal("2000"), Decimal("199000"), rules)

        # 1000 over threshold * 0.9%
        assert result["additional_withheld"] == Decimal("9.00")
        assert result["withheld"] == Decimal("38.00")

    def test_already_over_threshold_surcharges_all(self, rules):
        result = calc_medicare_withholding(Decimal("2000"), Decimal("200000"), rules)

        assert result["withheld"] == Decimal("47.00")


class TestGetTaxModel:

    def test_named_models(self):
        assert isinstance(get_tax_model("flat"), FlatRateTaxModel)
        assert isinstance(get_tax_model("bracket"), BracketTaxModel)

    def test_unknown_model_raises(self):
        with pytest.raises(InvalidArgumentError, match="Unknown tax model"):
            get_tax_model("progressive")
