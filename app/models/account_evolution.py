"""
Asset balance evolution for household projections.

This module advances one asset's balance by one projected year. Cash flows
are applied before growth, in a fixed order:

1. lump sums firing at the client's current age,
2. every active period's indexed contribution or withdrawal,
3. growth at the effective rate, flooring the result at zero.

The effective rate is the asset's default rate of return unless an active
period overrides it; when several active periods override the rate, the
last one in the asset's period list wins.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .household import Asset, AssetCategory, Period
from .parsing import compound_factor

RESIDENCE_NAME_MARKERS = ("home", "residence")


class AssetYearStep(BaseModel):
    """Breakdown of one asset's movement over one projected year."""

    model_config = ConfigDict(frozen=True)

    asset_id: Optional[str] = Field(default=None, description="Asset identifier")
    age: Optional[float] = Field(default=None, description="Client age used")
    opening_balance: float = Field(..., description="Balance carried into the year")
    lump_sum_net: float = Field(
        default=0.0, description="Net lump-sum contributions (withdrawals negative)"
    )
    periodic_net: float = Field(
        default=0.0, description="Net periodic contributions (withdrawals negative)"
    )
    rate_of_return: float = Field(..., description="Rate applied for growth, in percent")
    closing_balance: float = Field(..., ge=0, description="Balance at year end")

    @property
    def balance_after_cash_flows(self) -> float:
        return self.opening_balance + self.lump_sum_net + self.periodic_net

    @property
    def growth(self) -> float:
        """Growth credited for the year (after flooring at zero)."""
        return self.closing_balance - self.balance_after_cash_flows


class AssetGrowthModel:
    """Model advancing an asset balance by one year."""

    @staticmethod
    def indexed_period_amount(period: Period, age: float) -> float:
        """
        Period amount indexed from the period's start age.

        Args:
            period: Active period
            age: Client age for the year

        Returns:
            amount * (1 + indexation_rate/100) ** max(0, age - start_age)
        """
        years_into_period = max(0.0, age - period.start_age)
        return period.amount * compound_factor(period.indexation_rate, years_into_period)

    @staticmethod
    def apply_lump_sums(asset: Asset, age: Optional[float]) -> float:
        """Net lump-sum cash flow firing at ``age``."""
        net = 0.0
        for lump_sum in asset.lump_sums:
            if not lump_sum.fires_at(age):
                continue
            if lump_sum.type == "contribution":
                net += lump_sum.amount
            elif lump_sum.type == "withdrawal":
                net -= lump_sum.amount
        return net

    @staticmethod
    def apply_periods(asset: Asset, age: Optional[float]) -> Tuple[float, float]:
        """
        Net periodic cash flow and effective rate of return at ``age``.

        Returns:
            Tuple of (net periodic cash flow, rate of return in percent)
        """
        net = 0.0
        rate = asset.rate_of_return
        for period in asset.periods:
            if not period.is_active(age):
                continue
            amount = AssetGrowthModel.indexed_period_amount(period, age)
            if period.amount_type == "contribution":
                net += amount
            elif period.amount_type == "withdrawal":
                net -= amount
            # Last active override wins
            if period.rate_of_return is not None:
                rate = period.rate_of_return
        return net, rate

    @staticmethod
    def advance(
        asset: Asset, age: Optional[float], opening_balance: float
    ) -> AssetYearStep:
        """
        Advance an asset by one year.

        Args:
            asset: Asset definition
            age: Simulated age of the asset's client (None = no cash flows)
            opening_balance: Balance carried from the previous year, or the
                initial value in year 0

        Returns:
            AssetYearStep whose closing_balance is next year's opening balance
        """
        lump_sum_net = AssetGrowthModel.apply_lump_sums(asset, age)
        periodic_net, rate = AssetGrowthModel.apply_periods(asset, age)

        balance = opening_balance + lump_sum_net + periodic_net
        closing_balance = max(0.0, balance * (1 + rate / 100))

        return AssetYearStep(
            asset_id=asset.id,
            age=age,
            opening_balance=opening_balance,
            lump_sum_net=lump_sum_net,
            periodic_net=periodic_net,
            rate_of_return=rate,
            closing_balance=closing_balance,
        )

    @staticmethod
    def categorize(asset: Asset) -> AssetCategory:
        """
        Reporting bucket for an asset.

        An explicit category wins. Otherwise a name containing "home" or
        "residence" marks the primary residence, then is_registered decides.
        """
        if asset.category is not None:
            return asset.category
        name = (asset.name or "").lower()
        if any(marker in name for marker in RESIDENCE_NAME_MARKERS):
            return "primary_residence"
        if asset.is_registered:
            return "registered"
        return "non_registered"
