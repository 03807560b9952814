"""
Projection blueprint for household projections.

This module provides API endpoints for running a projection, fetching only
its summary metrics, and listing the provincial probate rates.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from app.services.projection_service import ProjectionRequestError, ProjectionService

projection_bp = Blueprint("projection", __name__, url_prefix="/api")


@projection_bp.route("/projections", methods=["POST"])
def run_projection() -> Any:
    """Run a household projection.

    Returns:
        JSON response with records, summary and chart series
    """
    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({"error": "Request body must be JSON"}), 400

        return jsonify(ProjectionService().project(data)), 200

    except ProjectionRequestError as e:
        return jsonify({"error": str(e), "details": e.errors}), 400
    except Exception as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/projections/summary", methods=["POST"])
def projection_summary() -> Any:
    """Run a household projection and return only its summary metrics.

    Returns:
        JSON response with peak net worth and final net estate value
    """
    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({"error": "Request body must be JSON"}), 400

        return jsonify(ProjectionService().summarize(data)), 200

    except ProjectionRequestError as e:
        return jsonify({"error": str(e), "details": e.errors}), 400
    except Exception as e:
        current_app.logger.error(f"Error summarizing projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projection_bp.route("/probate-rates", methods=["GET"])
def get_probate_rates() -> Any:
    """List probate rates by province."""
    return jsonify({"probate_rates": ProjectionService.probate_rates()}), 200
