"""
Tests for asset balance evolution.

This module tests growth, periodic and lump-sum cash flows, rate overrides,
flooring at zero and reporting categorization.
"""

import pytest

from app.models.account_evolution import AssetGrowthModel
from app.models.household import Asset, Period


class TestAssetGrowth:
    """Test one-year asset advancement."""

    def test_growth_without_cash_flows(self):
        """Test compounding over ten years with no cash flows."""
        asset = Asset(id="a", initial_value=100000, rate_of_return=6)

        balance = asset.initial_value
        for age in range(60, 70):
            balance = AssetGrowthModel.advance(asset, age, balance).closing_balance

        assert round(balance, 2) == 179084.77

    def test_contribution_applied_before_growth(self):
        """Test that periodic contributions grow in the year they are made."""
        asset = Asset(
            initial_value=1000,
            rate_of_return=10,
            periods=[Period(start_age=60, end_age=65, amount=100)],
        )

        step = AssetGrowthModel.advance(asset, 60, 1000)

        assert step.periodic_net == 100.0
        assert step.closing_balance == pytest.approx(1210.0)
        assert step.growth == pytest.approx(110.0)

    def test_indexed_withdrawal(self):
        """Test that period amounts index from the period start age."""
        asset = Asset(
            initial_value=10000,
            periods=[
                Period(
                    start_age=60,
                    end_age=70,
                    amount=1000,
                    amount_type="withdrawal",
                    indexation_rate=10,
                )
            ],
        )

        step = AssetGrowthModel.advance(asset, 62, 10000)

        assert step.periodic_net == pytest.approx(-1210.0)
        assert step.closing_balance == pytest.approx(8790.0)

    def test_inactive_period_ignored(self):
        """Test that periods outside their age range have no effect."""
        asset = Asset(
            rate_of_return=0,
            periods=[Period(start_age=65, end_age=70, amount=500, rate_of_return=50)],
        )

        step = AssetGrowthModel.advance(asset, 64, 1000)

        assert step.closing_balance == 1000.0
        assert step.rate_of_return == 0.0

    def test_last_active_override_wins(self):
        """Test that the last active period's rate override is used."""
        asset = Asset(
            rate_of_return=5,
            periods=[
                Period(start_age=60, end_age=70, amount=0, rate_of_return=2),
                Period(start_age=60, end_age=70, amount=0, rate_of_return=8),
                Period(start_age=60, end_age=70, amount=0),
            ],
        )

        step = AssetGrowthModel.advance(asset, 65, 1000)

        assert step.rate_of_return == 8.0
        assert step.closing_balance == pytest.approx(1080.0)

    def test_lump_sums_fire_once(self):
        """Test that a lump sum applies only at its age."""
        asset = Asset(
            lump_sums=[
                {"age": 65, "type": "contribution", "amount": 5000},
                {"age": 66, "type": "withdrawal", "amount": 2000},
            ]
        )

        balances = []
        balance = 0.0
        for age in (64, 65, 66, 67):
            balance = AssetGrowthModel.advance(asset, age, balance).closing_balance
            balances.append(balance)

        assert balances == [0.0, 5000.0, 3000.0, 3000.0]

    def test_unknown_age_has_no_cash_flows(self):
        """Test that an unknown client age still grows the balance."""
        asset = Asset(
            rate_of_return=10,
            periods=[Period(amount=1000)],
            lump_sums=[{"age": 0, "amount": 1000}],
        )

        step = AssetGrowthModel.advance(asset, None, 1000)

        assert step.lump_sum_net == 0.0
        assert step.periodic_net == 0.0
        assert step.closing_balance == pytest.approx(1100.0)

    def test_balance_floored_at_zero(self):
        """Test that withdrawals beyond the balance leave zero."""
        asset = Asset(
            rate_of_return=5,
            periods=[Period(amount=5000, amount_type="withdrawal")],
        )

        step = AssetGrowthModel.advance(asset, 70, 1000)

        assert step.closing_balance == 0.0

    def test_negative_rate(self):
        """Test that negative rates are applied literally."""
        asset = Asset(rate_of_return=-10)

        assert AssetGrowthModel.advance(asset, 60, 1000).closing_balance == pytest.approx(900.0)

    def test_unknown_amount_type_has_no_effect(self):
        """Test that a period with an unknown type moves no money."""
        asset = Asset(periods=[Period(amount=500, amount_type="transfer")])

        assert AssetGrowthModel.advance(asset, 60, 1000).closing_balance == 1000.0


class TestCategorize:
    """Test reporting categorization."""

    def test_explicit_category_wins(self):
        """Test that an explicit category overrides the name heuristic."""
        asset = Asset(name="Home savings", category="registered", is_registered=False)

        assert AssetGrowthModel.categorize(asset) == "registered"

    @pytest.mark.parametrize("name", ["Family Home", "Principal residence", "HOME"])
    def test_residence_by_name(self, name):
        """Test that residence names are detected case-insensitively."""
        assert AssetGrowthModel.categorize(Asset(name=name, is_registered=True)) == (
            "primary_residence"
        )

    def test_registered_flag(self):
        """Test that other assets are bucketed by is_registered."""
        assert AssetGrowthModel.categorize(Asset(name="RRSP", is_registered=True)) == (
            "registered"
        )
        assert AssetGrowthModel.categorize(Asset(name="Cash")) == "non_registered"
