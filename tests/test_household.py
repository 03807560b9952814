"""
Tests for household input models.

This module tests lenient parsing, legacy field aliases, estate defaults,
starting-age resolution and id assignment on the projection request.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from app.models.household import (
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


class TestClient:
    """Test client records and age derivation."""

    def test_age_on_before_and_after_birthday(self):
        """Test that age accounts for whether the birthday has passed."""
        client = Client(id="c1", date_of_birth="1960-06-15")

        assert client.age_on(date(2025, 6, 14)) == 64
        assert client.age_on(date(2025, 6, 15)) == 65

    def test_invalid_date_of_birth(self):
        """Test that an unparseable birth date leaves the age unknown."""
        client = Client(id="c1", date_of_birth="not-a-date")

        assert client.date_of_birth is None
        assert client.age_on(date(2025, 1, 1)) is None

    def test_numeric_id_is_coerced(self):
        """Test that numeric ids become strings."""
        assert Client(id=42).id == "42"


class TestIncomeStream:
    """Test income stream parsing."""

    def test_lenient_amounts(self):
        """Test that blank and formatted amounts parse."""
        stream = IncomeStream(
            name="CPP", start_age="65", end_age="", annual_amount="$12,000", indexing_rate=None
        )

        assert stream.start_age == 65.0
        assert stream.end_age is None
        assert stream.annual_amount == 12000.0
        assert stream.indexing_rate == 0.0

    def test_legacy_assignment_alias(self):
        """Test that assigned_to_client_id populates assigned_client_id."""
        stream = IncomeStream.model_validate({"assigned_to_client_id": "c2"})

        assert stream.assigned_client_id == "c2"

    def test_blank_assignment_is_none(self):
        """Test that a blank assignment means unassigned."""
        assert IncomeStream(assigned_client_id="  ").assigned_client_id is None

    def test_none_name_becomes_blank(self):
        """Test that a missing name is stored as an empty string."""
        assert IncomeStream(name=None).name == ""


class TestPeriodAndLumpSum:
    """Test asset period and lump sum parsing."""

    def test_period_defaults(self):
        """Test default age bounds and no rate override."""
        period = Period()

        assert period.start_age == 0.0
        assert period.end_age == 999.0
        assert period.amount_type == "contribution"
        assert period.rate_of_return is None

    def test_period_aliases(self):
        """Test legacy type, indexation and return_rate keys."""
        period = Period.model_validate(
            {"type": "Withdrawal", "indexation": "2", "return_rate": "3.5"}
        )

        assert period.amount_type == "withdrawal"
        assert period.indexation_rate == 2.0
        assert period.rate_of_return == 3.5

    def test_blank_rate_override_is_none(self):
        """Test that a blank override leaves the asset rate in force."""
        assert Period(rate_of_return="").rate_of_return is None

    def test_unknown_amount_type(self):
        """Test that an unknown type is normalized to None."""
        assert Period(amount_type="transfer").amount_type is None

    def test_period_is_active_inclusive(self):
        """Test inclusive age bounds."""
        period = Period(start_age=60, end_age=65)

        assert period.is_active(60)
        assert period.is_active(65)
        assert not period.is_active(66)
        assert not period.is_active(None)

    def test_lump_sum_fires_only_at_age(self):
        """Test that lump sums fire at exactly one age."""
        lump_sum = LumpSum(age=65, type="withdrawal", amount=10000)

        assert lump_sum.fires_at(65)
        assert not lump_sum.fires_at(64)
        assert not lump_sum.fires_at(None)
        assert not LumpSum(age=None, amount=1).fires_at(65)


class TestAsset:
    """Test asset parsing."""

    def test_is_registered_from_string(self):
        """Test string truthiness for is_registered."""
        assert Asset(is_registered="true").is_registered is True
        assert Asset(is_registered="no").is_registered is False
        assert Asset(is_registered=1).is_registered is True

    def test_category_normalization(self):
        """Test that category labels are normalized and unknown ones dropped."""
        assert Asset(category="Primary Residence").category == "primary_residence"
        assert Asset(category="non-registered").category == "non_registered"
        assert Asset(category="crypto").category is None

    def test_legacy_lump_sum_lists_are_merged(self):
        """Test that separate contribution and withdrawal lists fold into lump_sums."""
        asset = Asset.model_validate(
            {
                "name": "RRSP",
                "lumpSums": [{"age": 61, "type": "contribution", "amount": 100}],
                "lump_sum_contributions": [{"age": 62, "amount": 200}],
                "lump_sum_withdrawals": [{"age": 63, "amount": 300}],
            }
        )

        assert [(ls.age, ls.type, ls.amount) for ls in asset.lump_sums] == [
            (61.0, "contribution", 100.0),
            (62.0, "contribution", 200.0),
            (63.0, "withdrawal", 300.0),
        ]

    def test_null_lists(self):
        """Test that null period and lump sum lists become empty."""
        asset = Asset(periods=None, lump_sums=None)

        assert asset.periods == []
        assert asset.lump_sums == []

    def test_return_rate_alias(self):
        """Test the legacy return_rate key."""
        assert Asset.model_validate({"return_rate": "6"}).rate_of_return == 6.0


class TestLiability:
    """Test liability parsing."""

    def test_payment_monthly_alias(self):
        """Test the legacy payment_monthly key."""
        liability = Liability.model_validate(
            {"initial_balance": "300,000", "interest_rate": "5", "payment_monthly": "2000"}
        )

        assert liability.initial_balance == 300000.0
        assert liability.interest_rate == 5.0
        assert liability.payment == 2000.0


class TestEstateParameters:
    """Test estate parameter defaults."""

    def test_defaults(self):
        """Test that missing values use the Ontario defaults."""
        params = EstateParameters()

        assert params.tax_on_registered_rate == 25.0
        assert params.probate_province == "Ontario"
        assert params.probate_rate == 1.5

    def test_non_numeric_rates_fall_back(self):
        """Test that unparseable rates fall back to their defaults."""
        params = EstateParameters(tax_on_registered_rate="abc", probate_rate="")

        assert params.tax_on_registered_rate == 25.0
        assert params.probate_rate == 1.5

    def test_province_rate_used_when_rate_omitted(self):
        """Test that the province's rate fills an omitted probate rate."""
        assert EstateParameters(probate_province="Alberta").probate_rate == 0.25

    def test_explicit_rate_wins(self):
        """Test that an explicit probate rate overrides the province."""
        params = EstateParameters(probate_province="Alberta", probate_rate=2)

        assert params.probate_rate == 2.0

    def test_zero_rate_is_kept(self):
        """Test that a zero rate is a real value, not a missing one."""
        params = EstateParameters(tax_on_registered_rate=0, probate_rate=0)

        assert params.tax_on_registered_rate == 0.0
        assert params.probate_rate == 0.0


class TestProjectionConfiguration:
    """Test configuration parsing and starting ages."""

    def test_defaults(self):
        """Test default tax rate and a missing horizon."""
        config = ProjectionConfiguration()

        assert config.average_tax_rate == 25.0
        assert config.projection_years is None
        assert config.start_year == date.today().year
        assert config.client_ids == []

    def test_invalid_numbers(self):
        """Test that an invalid tax rate becomes zero and an invalid horizon missing."""
        config = ProjectionConfiguration(average_tax_rate="n/a", projection_years="")

        assert config.average_tax_rate == 0.0
        assert config.projection_years is None

    def test_explicit_age_wins(self):
        """Test that an explicit current age wins over a birth date."""
        config = ProjectionConfiguration(
            client_ids=["c1"],
            client1_current_age=60,
            clients=[{"id": "c1", "date_of_birth": "1950-01-01"}],
            as_of="2025-06-01",
        )

        assert config.starting_age(0) == 60

    def test_age_derived_from_matching_client(self):
        """Test that the age comes from the client record matching the slot id."""
        config = ProjectionConfiguration(
            client_ids=["c1", "c2"],
            clients=[
                {"id": "c2", "date_of_birth": "1970-01-01"},
                {"id": "c1", "date_of_birth": "1960-01-01"},
            ],
            as_of="2025-06-01",
        )

        assert config.starting_age(0) == 65
        assert config.starting_age(1) == 55

    def test_age_zero_is_known(self):
        """Test that a zero age is not treated as missing."""
        assert ProjectionConfiguration(client1_current_age=0).starting_age(0) == 0

    def test_unknown_age(self):
        """Test that a slot with no age source is unknown."""
        assert ProjectionConfiguration().starting_age(1) is None

    def test_client_ids_truncated_to_two(self):
        """Test that only two client slots are kept."""
        config = ProjectionConfiguration(client_ids=["a", "b", "c"])

        assert config.client_ids == ["a", "b"]
        assert config.client_id(1) == "b"
        assert ProjectionConfiguration().client_id(0) is None


class TestProjectionRequest:
    """Test the projection request container."""

    def test_missing_ids_are_assigned(self):
        """Test that records without ids receive positional ids."""
        request = ProjectionRequest.model_validate(
            {
                "incomes": [{"name": "a"}, {"id": "cpp", "name": "b"}],
                "assets": [{"name": "x"}],
                "liabilities": [{"name": "y"}],
            }
        )

        assert [income.id for income in request.incomes] == ["income_1", "cpp"]
        assert request.assets[0].id == "asset_1"
        assert request.liabilities[0].id == "liability_1"

    def test_null_sections(self):
        """Test that null sections fall back to defaults."""
        request = ProjectionRequest.model_validate(
            {"configuration": None, "estateParameters": None, "assets": None}
        )

        assert request.assets == []
        assert request.configuration.projection_years is None
        assert request.estate_parameters.probate_rate == 1.5

    def test_structurally_invalid_input(self):
        """Test that a non-list entity collection is rejected."""
        with pytest.raises(ValidationError):
            ProjectionRequest.model_validate({"assets": "not a list"})
