"""
Projection engine for multi-year household projections.

The engine walks year offsets 0..projection_years and, for each year, derives
client ages, evaluates income streams, advances asset and liability balances
and values the estate. Balances are carried from one year to the next through
an explicit ProjectionState; every run recomputes the whole series from the
request, so output always reflects the current inputs.
"""

import logging
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .account_evolution import AssetGrowthModel
from .estate_tax import EstateTaxCalculator
from .household import ProjectionRequest
from .income_engine import IncomeStreamEvaluator, calculate_income_tax
from .liability_amortization import LiabilityAmortizationModel
from .projection_result import ProjectionResult, YearRecord
from .time_grid import ClientAges, ProjectionTimeline

logger = logging.getLogger(__name__)


class ProjectionState(BaseModel):
    """Balances carried into a projected year, keyed by entity id."""

    model_config = ConfigDict(frozen=True)

    asset_balances: Dict[str, float] = Field(
        default_factory=dict, description="Opening balance by asset id"
    )
    liability_balances: Dict[str, float] = Field(
        default_factory=dict, description="Opening balance by liability id"
    )


class ProjectionEngine:
    """
    Engine producing the year-by-year household projection.

    Example:
        ```python
        request = ProjectionRequest.model_validate(payload)
        result = ProjectionEngine().run(request)
        for record in result.records:
            print(record.year, record.net_worth)
        ```
    """

    def run(self, request: ProjectionRequest) -> ProjectionResult:
        """
        Project the household over every year of the configured horizon.

        Args:
            request: Entities, configuration and estate parameters

        Returns:
            ProjectionResult with projection_years + 1 records, or an empty
            result when projection_years is missing or not positive
        """
        timeline = ProjectionTimeline.from_configuration(request.configuration)
        entity_names = self._entity_names(request)
        if timeline.is_empty:
            logger.info("Projection skipped: no projection years configured")
            return ProjectionResult.from_records([], entity_names)

        logger.info(
            f"Projecting {len(timeline)} years from {timeline.start_year} "
            f"({len(request.incomes)} incomes, {len(request.assets)} assets, "
            f"{len(request.liabilities)} liabilities)"
        )

        records = []
        state = self.initial_state(request)
        for year_offset in timeline.get_offsets():
            record, state = self.advance_year(request, state, year_offset)
            records.append(record)

        return ProjectionResult.from_records(records, entity_names)

    @staticmethod
    def initial_state(request: ProjectionRequest) -> ProjectionState:
        """Opening balances for year 0: initial asset values and liability balances."""
        return ProjectionState(
            asset_balances={asset.id: asset.initial_value for asset in request.assets},
            liability_balances={
                liability.id: liability.initial_balance
                for liability in request.liabilities
            },
        )

    @staticmethod
    def advance_year(
        request: ProjectionRequest, state: ProjectionState, year_offset: int
    ) -> Tuple[YearRecord, ProjectionState]:
        """
        Project one year.

        Args:
            request: Entities, configuration and estate parameters
            state: Balances carried into the year
            year_offset: Years after year 0

        Returns:
            Tuple of (record for the year, balances carried into the next year)
        """
        configuration = request.configuration
        ages = ClientAges.for_year(configuration, year_offset)

        # Income
        incomes, total_income = IncomeStreamEvaluator.evaluate_all(request.incomes, ages)
        tax_estimate, after_tax_income = calculate_income_tax(
            total_income, configuration.average_tax_rate
        )

        # Assets
        asset_balances: Dict[str, float] = {}
        buckets = {"registered": 0.0, "non_registered": 0.0, "primary_residence": 0.0}
        total_assets = 0.0
        for asset in request.assets:
            opening = state.asset_balances.get(asset.id, asset.initial_value)
            step = AssetGrowthModel.advance(
                asset, ages.age_for(asset.assigned_client_id), opening
            )
            asset_balances[asset.id] = step.closing_balance
            buckets[AssetGrowthModel.categorize(asset)] += step.closing_balance
            total_assets += step.closing_balance

        # Liabilities
        liability_balances: Dict[str, float] = {}
        total_liabilities = 0.0
        for liability in request.liabilities:
            opening = state.liability_balances.get(
                liability.id, liability.initial_balance
            )
            closing = LiabilityAmortizationModel.advance(liability, opening)
            liability_balances[liability.id] = closing
            total_liabilities += closing

        estate = EstateTaxCalculator.calculate(
            total_assets,
            total_liabilities,
            buckets["registered"],
            request.estate_parameters,
        )

        record = YearRecord(
            year=configuration.start_year + year_offset,
            year_offset=year_offset,
            client1_age=ages.client1_age,
            client2_age=ages.client2_age,
            total_income=total_income,
            dynamic_incomes=incomes,
            tax_estimate=tax_estimate,
            after_tax_income=after_tax_income,
            total_assets=total_assets,
            dynamic_assets=asset_balances,
            registered_assets=buckets["registered"],
            non_registered_assets=buckets["non_registered"],
            primary_residence_value=buckets["primary_residence"],
            total_liabilities=total_liabilities,
            dynamic_liabilities=liability_balances,
            net_worth=total_assets - total_liabilities,
            gross_estate=estate.gross_estate,
            tax_on_registered_assets=estate.tax_on_registered_assets,
            estate_tax=estate.probate_fee,
            probate_fee=estate.probate_fee,
            net_estate=estate.net_estate,
            estate_tax_total=estate.estate_tax_total,
        )
        logger.debug(
            f"Year {record.year}: assets={total_assets:.2f} "
            f"liabilities={total_liabilities:.2f} net_worth={record.net_worth:.2f}"
        )

        next_state = ProjectionState(
            asset_balances=asset_balances, liability_balances=liability_balances
        )
        return record, next_state

    @staticmethod
    def _entity_names(request: ProjectionRequest) -> Dict[str, str]:
        names: Dict[str, str] = {}
        for record in [*request.incomes, *request.assets, *request.liabilities]:
            names[record.id] = record.name
        return names
