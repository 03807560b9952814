"""
Pytest configuration and shared fixtures for the household projection tests.
"""

import pytest

from app import create_app
from app.config import reset_global_settings
from app.models.household import ProjectionRequest


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test load settings from its own environment."""
    reset_global_settings()
    yield
    reset_global_settings()


@pytest.fixture
def app_env(monkeypatch):
    """Minimal valid environment for Settings."""
    monkeypatch.setenv("SECRET_KEY", "test-secret-key-123")
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("MAX_PROJECTION_YEARS", raising=False)


@pytest.fixture
def app(app_env):
    """Flask application configured for testing."""
    return create_app("testing")


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def household_payload():
    """A two-client household with one of each entity kind."""
    return {
        "configuration": {
            "client_ids": ["c1", "c2"],
            "client1_current_age": 60,
            "client2_current_age": 58,
            "average_tax_rate": 30,
            "projection_years": 10,
            "start_year": 2025,
            "as_of": "2025-01-01",
        },
        "estate_parameters": {
            "tax_on_registered_rate": 25,
            "probate_province": "Ontario",
        },
        "incomes": [
            {
                "id": "pension",
                "name": "Pension",
                "assigned_client_id": "c1",
                "start_age": 65,
                "end_age": 90,
                "annual_amount": 20000,
                "indexing_rate": 2,
            },
            {
                "id": "salary",
                "name": "Salary",
                "assigned_client_id": "c2",
                "start_age": 30,
                "end_age": 64,
                "annual_amount": 60000,
            },
        ],
        "assets": [
            {
                "id": "rrsp",
                "name": "RRSP",
                "initial_value": 200000,
                "rate_of_return": 5,
                "is_registered": True,
                "assigned_client_id": "c1",
            },
            {
                "id": "house",
                "name": "Family Home",
                "initial_value": 500000,
                "rate_of_return": 3,
            },
            {
                "id": "tfsa",
                "name": "TFSA",
                "initial_value": 50000,
                "rate_of_return": 4,
                "assigned_client_id": "c2",
                "periods": [
                    {"start_age": 58, "end_age": 64, "amount": 7000, "type": "contribution"}
                ],
            },
        ],
        "liabilities": [
            {
                "id": "mortgage",
                "name": "Mortgage",
                "initial_balance": 150000,
                "interest_rate": 4,
                "payment": 1500,
            }
        ],
    }


@pytest.fixture
def household_request(household_payload):
    """Validated request built from household_payload."""
    return ProjectionRequest.model_validate(household_payload)
