"""
Estate settlement calculations for household projections.

For every projected year the estate is valued as if settled at year end:
registered (tax-deferred) assets are taxed at a flat rate and probate is
levied on the gross value of all assets.
"""

from typing import TYPE_CHECKING, Dict

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .household import EstateParameters

DEFAULT_PROBATE_PROVINCE = "Ontario"
DEFAULT_PROBATE_RATE = 1.5

# Approximate probate fees by province, in percent of gross estate
PROBATE_RATES: Dict[str, float] = {
    "Ontario": 1.5,
    "British Columbia": 1.4,
    "Alberta": 0.25,
    "Saskatchewan": 0.7,
    "Manitoba": 0.7,
    "Quebec": 0.5,
    "New Brunswick": 0.5,
    "Nova Scotia": 1.0,
    "Prince Edward Island": 0.5,
    "Newfoundland and Labrador": 0.6,
    "Northwest Territories": 0.25,
    "Nunavut": 0.25,
    "Yukon": 0.25,
}


def probate_rate_for_province(province: str) -> float:
    """Probate rate for a province name (case-insensitive), defaulting to 1.5%."""
    if not isinstance(province, str):
        return DEFAULT_PROBATE_RATE
    wanted = province.strip().lower()
    for name, rate in PROBATE_RATES.items():
        if name.lower() == wanted:
            return rate
    return DEFAULT_PROBATE_RATE


class EstateBreakdown(BaseModel):
    """Estate settlement figures for one year."""

    model_config = ConfigDict(frozen=True)

    gross_estate: float = Field(..., description="Gross estate (total assets)")
    tax_on_registered_assets: float = Field(
        ..., description="Tax on registered assets"
    )
    probate_fee: float = Field(..., description="Probate fee on gross estate")
    estate_tax_total: float = Field(
        ..., description="Registered-asset tax plus probate"
    )
    net_estate: float = Field(
        ..., description="Gross estate less liabilities, registered tax and probate"
    )


class EstateTaxCalculator:
    """Calculator for year-end estate settlement values."""

    @staticmethod
    def calculate_tax_on_registered(
        registered_assets: float, tax_on_registered_rate: float
    ) -> float:
        """
        Tax due on registered assets at settlement.

        Args:
            registered_assets: Value of registered assets
            tax_on_registered_rate: Rate in percent

        Returns:
            Tax amount
        """
        return registered_assets * (tax_on_registered_rate / 100)

    @staticmethod
    def calculate_probate_fee(gross_estate: float, probate_rate: float) -> float:
        """
        Probate fee, levied on the gross estate rather than the net estate.

        Args:
            gross_estate: Total value of assets
            probate_rate: Rate in percent

        Returns:
            Probate fee
        """
        return gross_estate * (probate_rate / 100)

    @staticmethod
    def calculate(
        total_assets: float,
        total_liabilities: float,
        registered_assets: float,
        parameters: "EstateParameters",
    ) -> EstateBreakdown:
        """
        Calculate the estate breakdown for one year's totals.

        Args:
            total_assets: Sum of all asset balances
            total_liabilities: Sum of all liability balances
            registered_assets: Sum of registered asset balances
            parameters: Household estate parameters

        Returns:
            EstateBreakdown for the year
        """
        gross_estate = total_assets
        tax_on_registered = EstateTaxCalculator.calculate_tax_on_registered(
            registered_assets, parameters.tax_on_registered_rate
        )
        probate_fee = EstateTaxCalculator.calculate_probate_fee(
            gross_estate, parameters.probate_rate
        )
        net_estate = gross_estate - total_liabilities - tax_on_registered - probate_fee

        return EstateBreakdown(
            gross_estate=gross_estate,
            tax_on_registered_assets=tax_on_registered,
            probate_fee=probate_fee,
            estate_tax_total=tax_on_registered + probate_fee,
            net_estate=net_estate,
        )
