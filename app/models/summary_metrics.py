"""
Summary metrics for household projections.

This module reduces a projected year series to the scalar figures shown on
the overview cards: peak net worth and the net estate in the final year,
along with a few supporting totals.
"""

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .projection_result import YearRecord


class ProjectionSummary(BaseModel):
    """Scalar metrics derived from a projection series."""

    model_config = ConfigDict(frozen=True)

    peak_net_worth: float = Field(default=0.0, description="Highest net worth")
    peak_net_worth_year: Optional[int] = Field(
        default=None, description="Calendar year of the highest net worth"
    )
    final_net_estate_value: float = Field(
        default=0.0, description="Net estate in the last projected year"
    )
    final_net_worth: float = Field(
        default=0.0, description="Net worth in the last projected year"
    )
    final_total_assets: float = Field(
        default=0.0, description="Total assets in the last projected year"
    )
    total_income: float = Field(
        default=0.0, description="Income summed over all projected years"
    )


class SummaryAggregator:
    """Aggregator reducing YearRecord series to summary metrics."""

    @staticmethod
    def summarize(records: Sequence["YearRecord"]) -> ProjectionSummary:
        """
        Calculate summary metrics for a projection.

        Args:
            records: Year records ordered by increasing year

        Returns:
            ProjectionSummary; all zeros for an empty series
        """
        if not records:
            return ProjectionSummary()

        net_worth = np.array([record.net_worth for record in records], dtype=np.float64)
        # argmax returns the first maximum, so ties resolve to the earliest year
        peak_index = int(np.argmax(net_worth))
        final = records[-1]

        return ProjectionSummary(
            peak_net_worth=float(net_worth[peak_index]),
            peak_net_worth_year=records[peak_index].year,
            final_net_estate_value=final.net_estate,
            final_net_worth=final.net_worth,
            final_total_assets=final.total_assets,
            total_income=float(sum(record.total_income for record in records)),
        )
