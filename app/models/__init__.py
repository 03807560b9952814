"""Data models and calculation engines for household projections."""

from .household import (
    Asset,
    Client,
    EstateParameters,
    IncomeStream,
    Liability,
    LumpSum,
    Period,
    ProjectionConfiguration,
    ProjectionRequest,
)
from .income_engine import IncomeStreamEvaluator, calculate_income_tax
from .account_evolution import AssetGrowthModel, AssetYearStep
from .liability_amortization import LiabilityAmortizationModel
from .estate_tax import (
    PROBATE_RATES,
    EstateBreakdown,
    EstateTaxCalculator,
    probate_rate_for_province,
)
from .time_grid import ClientAges, ProjectionTimeline, resolve_client_slot
from .summary_metrics import ProjectionSummary, SummaryAggregator
from .projection_result import ProjectionResult, YearRecord
from .projection_engine import ProjectionEngine, ProjectionState

__all__ = [
    "Asset",
    "Client",
    "EstateParameters",
    "IncomeStream",
    "Liability",
    "LumpSum",
    "Period",
    "ProjectionConfiguration",
    "ProjectionRequest",
    "IncomeStreamEvaluator",
    "calculate_income_tax",
    "AssetGrowthModel",
    "AssetYearStep",
    "LiabilityAmortizationModel",
    "PROBATE_RATES",
    "EstateBreakdown",
    "EstateTaxCalculator",
    "probate_rate_for_province",
    "ClientAges",
    "ProjectionTimeline",
    "resolve_client_slot",
    "ProjectionSummary",
    "SummaryAggregator",
    "ProjectionResult",
    "YearRecord",
    "ProjectionEngine",
    "ProjectionState",
]
