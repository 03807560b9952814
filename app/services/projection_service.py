"""
Projection service for running household projections.

This service turns a plain request payload into a ProjectionRequest, fills
the values the caller omitted from application settings, runs the projection
engine and shapes the result for JSON responses.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.config import Settings, get_global_settings
from app.models.estate_tax import PROBATE_RATES
from app.models.household import ProjectionRequest
from app.models.projection_engine import ProjectionEngine
from app.models.projection_result import ProjectionResult

logger = logging.getLogger(__name__)


class ProjectionRequestError(ValueError):
    """Raised when a projection payload cannot be turned into a request."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ProjectionService:
    """Service for running household projections from request payloads."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine: Optional[ProjectionEngine] = None,
    ) -> None:
        """Initialize the projection service.

        Args:
            settings: Settings supplying default values (global settings if None)
            engine: Projection engine to use
        """
        self.settings = settings or get_global_settings()
        self.engine = engine or ProjectionEngine()
        self.logger = logging.getLogger(__name__)

    def build_request(self, payload: Any) -> ProjectionRequest:
        """Build a projection request from a payload dictionary.

        Args:
            payload: Request payload with configuration, estate parameters,
                incomes, assets and liabilities

        Returns:
            Validated ProjectionRequest

        Raises:
            ProjectionRequestError: If the payload is structurally invalid or
                asks for more years than allowed
        """
        if not isinstance(payload, dict):
            raise ProjectionRequestError("Projection payload must be a JSON object")

        data = self._apply_defaults(payload)
        try:
            request = ProjectionRequest.model_validate(data)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            raise ProjectionRequestError("Invalid projection payload", errors) from e

        max_years = self.settings.max_projection_years
        years = request.configuration.projection_years
        if years is not None and years > max_years:
            raise ProjectionRequestError(
                f"projection_years cannot exceed {max_years}"
            )
        return request

    def run_projection(self, payload: Any) -> ProjectionResult:
        """Run a projection for a payload.

        Raises:
            ProjectionRequestError: If the payload is invalid
        """
        request = self.build_request(payload)
        self.logger.info(
            f"Starting projection for {request.configuration.projection_years or 0} years"
        )
        result = self.engine.run(request)
        self.logger.info(
            f"Completed projection with {len(result.records)} records, "
            f"peak net worth {result.summary.peak_net_worth:.2f}"
        )
        return result

    def project(self, payload: Any) -> Dict[str, Any]:
        """Run a projection and return a JSON-ready dictionary.

        Returns:
            Dictionary with records, summary, charts and entity names
        """
        result = self.run_projection(payload)
        return {
            "records": [record.model_dump() for record in result.records],
            "summary": result.summary.model_dump(),
            "charts": result.to_chart_data(),
            "entity_names": dict(result.entity_names),
        }

    def summarize(self, payload: Any) -> Dict[str, Any]:
        """Run a projection and return only its summary metrics."""
        return self.run_projection(payload).summary.model_dump()

    @staticmethod
    def probate_rates() -> Dict[str, float]:
        """Probate rates by province, in percent of gross estate."""
        return dict(PROBATE_RATES)

    def _apply_defaults(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Fill omitted configuration and estate values from settings."""
        data = dict(payload)

        configuration = data.get("configuration") or {}
        if isinstance(configuration, dict):
            configuration = dict(configuration)
            configuration.setdefault(
                "average_tax_rate", self.settings.default_average_tax_rate
            )
        data["configuration"] = configuration

        estate_key = "estateParameters" if "estateParameters" in data else "estate_parameters"
        estate = data.get(estate_key) or {}
        if isinstance(estate, dict):
            estate = dict(estate)
            estate.setdefault(
                "tax_on_registered_rate", self.settings.default_tax_on_registered_rate
            )
            estate.setdefault("probate_province", self.settings.default_probate_province)
        data[estate_key] = estate
        return data
