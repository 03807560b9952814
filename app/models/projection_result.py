"""
Projection result models.

This module provides the per-year output record and the result container
returned by the projection engine. The record list is the single contract
consumed by tables, charts and summary cards; the helpers here slice it into
the series those consumers plot.
"""

from typing import Any, Dict, List, Optional

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .summary_metrics import ProjectionSummary, SummaryAggregator


class YearRecord(BaseModel):
    """
    Projected household position for one year.

    Balances are year-end values. Per-entity maps are keyed by entity id.
    Records are immutable once produced.
    """

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., description="Calendar year")
    year_offset: int = Field(..., ge=0, description="Years after year 0")
    client1_age: Optional[int] = Field(default=None, description="Age of client 1")
    client2_age: Optional[int] = Field(default=None, description="Age of client 2")

    # Income
    total_income: float = Field(default=0.0, description="Gross income")
    dynamic_incomes: Dict[str, float] = Field(
        default_factory=dict, description="Income by stream id"
    )
    tax_estimate: float = Field(default=0.0, description="Flat-rate tax on income")
    after_tax_income: float = Field(default=0.0, description="Income after tax")

    # Assets
    total_assets: float = Field(default=0.0, ge=0, description="Sum of asset balances")
    dynamic_assets: Dict[str, float] = Field(
        default_factory=dict, description="Balance by asset id"
    )
    registered_assets: float = Field(default=0.0, ge=0, description="Registered assets")
    non_registered_assets: float = Field(
        default=0.0, ge=0, description="Non-registered assets"
    )
    primary_residence_value: float = Field(
        default=0.0, ge=0, description="Primary residence value"
    )

    # Liabilities
    total_liabilities: float = Field(
        default=0.0, ge=0, description="Sum of liability balances"
    )
    dynamic_liabilities: Dict[str, float] = Field(
        default_factory=dict, description="Balance by liability id"
    )
    net_worth: float = Field(default=0.0, description="Total assets less liabilities")

    # Estate
    gross_estate: float = Field(default=0.0, description="Gross estate")
    tax_on_registered_assets: float = Field(
        default=0.0, description="Tax on registered assets"
    )
    estate_tax: float = Field(default=0.0, description="Probate (estate) tax")
    probate_fee: float = Field(default=0.0, description="Probate fee")
    net_estate: float = Field(default=0.0, description="Net estate")
    estate_tax_total: float = Field(
        default=0.0, description="Registered-asset tax plus probate"
    )


NUMERIC_FIELDS = tuple(
    name
    for name, field in YearRecord.model_fields.items()
    if field.annotation in (int, float, Optional[int])
)


class ProjectionResult(BaseModel):
    """
    Complete output of one projection run.

    Example:
        ```python
        result = ProjectionEngine().run(request)
        result.summary.peak_net_worth
        result.get_series("net_worth")
        ```
    """

    model_config = ConfigDict(frozen=True)

    records: List[YearRecord] = Field(
        default_factory=list, description="One record per year, in year order"
    )
    summary: ProjectionSummary = Field(
        default_factory=ProjectionSummary, description="Summary metrics"
    )
    entity_names: Dict[str, str] = Field(
        default_factory=dict, description="Display name by entity id"
    )

    @classmethod
    def from_records(
        cls, records: List[YearRecord], entity_names: Optional[Dict[str, str]] = None
    ) -> "ProjectionResult":
        """Build a result, deriving the summary from the records."""
        return cls(
            records=records,
            summary=SummaryAggregator.summarize(records),
            entity_names=entity_names or {},
        )

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def years(self) -> List[int]:
        return [record.year for record in self.records]

    def get_record(self, year: int) -> Optional[YearRecord]:
        """Record for a calendar year, if projected."""
        for record in self.records:
            if record.year == year:
                return record
        return None

    def get_series(self, field: str) -> NDArray[np.float64]:
        """
        Values of a numeric record field across all years.

        Unknown client ages come back as NaN.

        Raises:
            ValueError: If the field is not a numeric YearRecord field
        """
        if field not in NUMERIC_FIELDS:
            raise ValueError(f"Unknown numeric field: {field}")
        values = [getattr(record, field) for record in self.records]
        return np.array(
            [np.nan if value is None else value for value in values], dtype=np.float64
        )

    def get_entity_series(self, kind: str, entity_id: str) -> NDArray[np.float64]:
        """
        Values for one income stream, asset or liability across all years.

        Args:
            kind: "income", "asset" or "liability"
            entity_id: Entity identifier

        Raises:
            ValueError: If kind is not recognized
        """
        attribute = {
            "income": "dynamic_incomes",
            "asset": "dynamic_assets",
            "liability": "dynamic_liabilities",
        }.get(kind)
        if attribute is None:
            raise ValueError(f"Unknown entity kind: {kind}")
        return np.array(
            [getattr(record, attribute).get(entity_id, 0.0) for record in self.records],
            dtype=np.float64,
        )

    def income_series(self) -> List[Dict[str, Any]]:
        return [
            {"year": r.year, "total_income": r.total_income} for r in self.records
        ]

    def net_worth_series(self) -> List[Dict[str, Any]]:
        return [{"year": r.year, "value": r.net_worth} for r in self.records]

    def asset_series(self) -> List[Dict[str, Any]]:
        return [
            {
                "year": r.year,
                "registered": r.registered_assets,
                "non_registered": r.non_registered_assets,
                "primary_residence": r.primary_residence_value,
            }
            for r in self.records
        ]

    def liability_series(self) -> List[Dict[str, Any]]:
        return [
            {"year": r.year, "total_liabilities": r.total_liabilities}
            for r in self.records
        ]

    def estate_series(self) -> List[Dict[str, Any]]:
        return [
            {
                "year": r.year,
                "net_estate": r.net_estate,
                "tax_on_registered_assets": r.tax_on_registered_assets,
                "probate": r.probate_fee,
                "estate_tax_total": r.estate_tax_total,
            }
            for r in self.records
        ]

    def to_chart_data(self) -> Dict[str, List[Dict[str, Any]]]:
        """All chart feeds keyed by chart name."""
        return {
            "income": self.income_series(),
            "net_worth": self.net_worth_series(),
            "assets": self.asset_series(),
            "liabilities": self.liability_series(),
            "estate": self.estate_series(),
        }
