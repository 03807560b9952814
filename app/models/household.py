"""
Pydantic models for household projection inputs.

This module defines the entity records (clients, income streams, assets,
liabilities, estate parameters) and the projection configuration that the
projection engine consumes. Records are created and edited elsewhere and are
supplied fresh on every projection run.

Numeric fields are parsed leniently: blank or non-numeric values fall back to
an explicit default instead of failing validation, so a half-filled record
still projects. Legacy field names used by saved calculator states are
accepted through validation aliases.
"""

from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from .estate_tax import DEFAULT_PROBATE_PROVINCE, probate_rate_for_province
from .parsing import optional_float, optional_int, safe_float, safe_int

AmountType = Literal["contribution", "withdrawal"]
AssetCategory = Literal["primary_residence", "registered", "non_registered"]

DEFAULT_AVERAGE_TAX_RATE = 25.0
DEFAULT_TAX_ON_REGISTERED_RATE = 25.0


def _amount_type(value: Any) -> Optional[str]:
    """Normalize a contribution/withdrawal marker; unknown markers become None."""
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    if normalized in ("contribution", "withdrawal"):
        return normalized
    return None


def _optional_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_list(value: Any) -> Any:
    return [] if value is None else value


class EntityModel(BaseModel):
    """Base for input records: ignore unknown keys, allow field names and aliases."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def blank_name(cls, v: Any) -> Any:
        return "" if v is None else v


class Client(EntityModel):
    """A household member referenced by id from the other records."""

    id: str = Field(..., min_length=1, description="Client identifier")
    first_name: Optional[str] = Field(default=None, description="First name")
    last_name: Optional[str] = Field(default=None, description="Last name")
    date_of_birth: Optional[date] = Field(
        default=None, description="Date of birth (used to derive current age)"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, v: Any) -> Any:
        if v is None or isinstance(v, date):
            return v
        if isinstance(v, str):
            try:
                return datetime.fromisoformat(v.strip()[:10]).date()
            except ValueError:
                return None
        return None

    def age_on(self, as_of: date) -> Optional[int]:
        """Whole years of age on a given date, or None without a birth date."""
        if self.date_of_birth is None:
            return None
        dob = self.date_of_birth
        had_birthday = (as_of.month, as_of.day) >= (dob.month, dob.day)
        return as_of.year - dob.year - (0 if had_birthday else 1)


class IncomeStream(EntityModel):
    """An age-gated, indexed annual income stream."""

    id: Optional[str] = Field(default=None, description="Income stream identifier")
    name: str = Field(default="", description="Display name")
    category: Optional[str] = Field(
        default=None, description="Income category label (informational)"
    )
    assigned_client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("assigned_client_id", "assigned_to_client_id"),
        description="Client whose age gates the stream (None = first client)",
    )
    start_age: Optional[float] = Field(
        default=None, description="First age (inclusive) the stream pays"
    )
    end_age: Optional[float] = Field(
        default=None, description="Last age (inclusive) the stream pays"
    )
    annual_amount: float = Field(
        default=0.0, description="Annual amount at start_age, before indexing"
    )
    indexing_rate: float = Field(
        default=0.0, description="Annual indexing rate in percent"
    )

    @field_validator("id", "assigned_client_id", mode="before")
    @classmethod
    def normalize_ids(cls, v: Any) -> Optional[str]:
        return _optional_id(v)

    @field_validator("start_age", "end_age", mode="before")
    @classmethod
    def parse_ages(cls, v: Any) -> Optional[float]:
        return optional_float(v)

    @field_validator("annual_amount", "indexing_rate", mode="before")
    @classmethod
    def parse_amounts(cls, v: Any) -> float:
        return safe_float(v)


class Period(EntityModel):
    """
    A recurring contribution or withdrawal rule on an asset.

    A blank or non-numeric rate_of_return means no override: the asset's own
    rate stays in force rather than a 0% rate.
    """

    id: Optional[str] = Field(default=None, description="Period identifier")
    start_age: float = Field(default=0.0, description="First active age (inclusive)")
    end_age: float = Field(default=999.0, description="Last active age (inclusive)")
    amount: float = Field(default=0.0, description="Annual amount at start_age")
    amount_type: Optional[AmountType] = Field(
        default="contribution",
        validation_alias=AliasChoices("amount_type", "type"),
        description="Whether the amount is added or removed",
    )
    indexation_rate: float = Field(
        default=0.0,
        validation_alias=AliasChoices("indexation_rate", "indexation"),
        description="Annual indexation of the amount in percent",
    )
    rate_of_return: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("rate_of_return", "return_rate"),
        description="Growth rate override in percent while the period is active",
    )
    timing: Optional[str] = Field(
        default=None, description="Cash-flow timing label (informational)"
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Optional[str]:
        return _optional_id(v)

    @field_validator("start_age", mode="before")
    @classmethod
    def parse_start_age(cls, v: Any) -> float:
        return safe_float(v, 0.0)

    @field_validator("end_age", mode="before")
    @classmethod
    def parse_end_age(cls, v: Any) -> float:
        return safe_float(v, 999.0)

    @field_validator("amount", "indexation_rate", mode="before")
    @classmethod
    def parse_amounts(cls, v: Any) -> float:
        return safe_float(v)

    @field_validator("rate_of_return", mode="before")
    @classmethod
    def parse_rate_override(cls, v: Any) -> Optional[float]:
        return optional_float(v)

    @field_validator("amount_type", mode="before")
    @classmethod
    def parse_amount_type(cls, v: Any) -> Optional[str]:
        return _amount_type(v)

    def is_active(self, age: Optional[float]) -> bool:
        """Whether the period applies at the given age."""
        return age is not None and self.start_age <= age <= self.end_age


class LumpSum(EntityModel):
    """A one-time contribution or withdrawal at a specific client age."""

    id: Optional[str] = Field(default=None, description="Lump sum identifier")
    age: Optional[float] = Field(default=None, description="Age at which it fires")
    type: Optional[AmountType] = Field(
        default="contribution", description="Whether the amount is added or removed"
    )
    amount: float = Field(default=0.0, description="Amount")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Optional[str]:
        return _optional_id(v)

    @field_validator("age", mode="before")
    @classmethod
    def parse_age(cls, v: Any) -> Optional[float]:
        return optional_float(v)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> float:
        return safe_float(v)

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Optional[str]:
        return _amount_type(v)

    def fires_at(self, age: Optional[float]) -> bool:
        """Whether the lump sum fires at the given age."""
        return age is not None and self.age is not None and self.age == age


class Asset(EntityModel):
    """An asset whose balance grows under cash flows and a rate of return."""

    id: Optional[str] = Field(default=None, description="Asset identifier")
    name: str = Field(default="", description="Display name")
    initial_value: float = Field(default=0.0, description="Balance at projection start")
    rate_of_return: float = Field(
        default=0.0,
        validation_alias=AliasChoices("rate_of_return", "return_rate"),
        description="Default annual rate of return in percent",
    )
    is_registered: bool = Field(
        default=False, description="Tax-deferred account, taxed at estate settlement"
    )
    category: Optional[AssetCategory] = Field(
        default=None,
        description="Reporting bucket; when unset it is inferred from name and is_registered",
    )
    assigned_client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "assigned_client_id", "assigned_to_client_id", "assigned_to"
        ),
        description="Client whose age drives periods and lump sums",
    )
    periods: List[Period] = Field(
        default_factory=list, description="Recurring cash-flow rules"
    )
    lump_sums: List[LumpSum] = Field(
        default_factory=list,
        validation_alias=AliasChoices("lump_sums", "lumpSums"),
        description="One-time cash flows",
    )

    @model_validator(mode="before")
    @classmethod
    def fold_legacy_lump_sums(cls, data: Any) -> Any:
        """Merge separate contribution/withdrawal lump-sum lists into lump_sums."""
        if not isinstance(data, dict):
            return data
        contributions = data.get("lump_sum_contributions") or []
        withdrawals = data.get("lump_sum_withdrawals") or []
        if not contributions and not withdrawals:
            return data

        data = dict(data)
        key = "lumpSums" if "lumpSums" in data else "lump_sums"
        merged = list(data.get(key) or [])
        for entry, lump_type in [(c, "contribution") for c in contributions] + [
            (w, "withdrawal") for w in withdrawals
        ]:
            if isinstance(entry, dict):
                merged.append({**entry, "type": entry.get("type") or lump_type})
        data[key] = merged
        return data

    @field_validator("id", "assigned_client_id", mode="before")
    @classmethod
    def normalize_ids(cls, v: Any) -> Optional[str]:
        return _optional_id(v)

    @field_validator("initial_value", "rate_of_return", mode="before")
    @classmethod
    def parse_amounts(cls, v: Any) -> float:
        return safe_float(v)

    @field_validator("is_registered", mode="before")
    @classmethod
    def parse_is_registered(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("true", "yes", "1", "y")
        return bool(v)

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v: Any) -> Optional[str]:
        if not isinstance(v, str):
            return None
        normalized = v.strip().lower().replace("-", "_").replace(" ", "_")
        if normalized in ("primary_residence", "registered", "non_registered"):
            return normalized
        return None

    @field_validator("periods", "lump_sums", mode="before")
    @classmethod
    def parse_lists(cls, v: Any) -> Any:
        return _as_list(v)


class Liability(EntityModel):
    """A debt amortized by a fixed monthly payment."""

    id: Optional[str] = Field(default=None, description="Liability identifier")
    name: str = Field(default="", description="Display name")
    initial_balance: float = Field(default=0.0, description="Balance at projection start")
    interest_rate: float = Field(default=0.0, description="Annual interest rate in percent")
    payment: float = Field(
        default=0.0,
        validation_alias=AliasChoices("payment", "payment_monthly"),
        description="Monthly payment",
    )
    assigned_client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "assigned_client_id", "assigned_to_client_id", "assigned_to"
        ),
        description="Owning client",
    )

    @field_validator("id", "assigned_client_id", mode="before")
    @classmethod
    def normalize_ids(cls, v: Any) -> Optional[str]:
        return _optional_id(v)

    @field_validator("initial_balance", "interest_rate", "payment", mode="before")
    @classmethod
    def parse_amounts(cls, v: Any) -> float:
        return safe_float(v)


class EstateParameters(EntityModel):
    """Household-wide estate settlement parameters."""

    tax_on_registered_rate: float = Field(
        default=DEFAULT_TAX_ON_REGISTERED_RATE,
        description="Tax on registered assets at death, in percent",
    )
    probate_province: str = Field(
        default=DEFAULT_PROBATE_PROVINCE, description="Province used for probate"
    )
    probate_rate: Optional[float] = Field(
        default=None,
        description="Probate fee in percent of gross estate (None = province rate)",
    )

    @field_validator("tax_on_registered_rate", mode="before")
    @classmethod
    def parse_registered_rate(cls, v: Any) -> float:
        return safe_float(v, DEFAULT_TAX_ON_REGISTERED_RATE)

    @field_validator("probate_province", mode="before")
    @classmethod
    def parse_province(cls, v: Any) -> str:
        if isinstance(v, str) and v.strip():
            return v.strip()
        return DEFAULT_PROBATE_PROVINCE

    @field_validator("probate_rate", mode="before")
    @classmethod
    def parse_probate_rate(cls, v: Any) -> Optional[float]:
        return optional_float(v)

    @model_validator(mode="after")
    def fill_probate_rate(self):
        if self.probate_rate is None:
            self.probate_rate = probate_rate_for_province(self.probate_province)
        return self


class ProjectionConfiguration(EntityModel):
    """Household-level settings for one projection run."""

    client_ids: List[Optional[str]] = Field(
        default_factory=list, description="Ids of client 1 and client 2"
    )
    client1_current_age: Optional[int] = Field(
        default=None, description="Age of client 1 in year 0"
    )
    client2_current_age: Optional[int] = Field(
        default=None, description="Age of client 2 in year 0"
    )
    clients: List[Client] = Field(
        default_factory=list,
        description="Client records, used to derive ages that are not given",
    )
    average_tax_rate: float = Field(
        default=DEFAULT_AVERAGE_TAX_RATE,
        description="Flat average tax rate on income, in percent",
    )
    projection_years: Optional[int] = Field(
        default=None,
        description="Number of years after year 0 to project (missing or <= 0 = no projection)",
    )
    start_year: int = Field(
        default_factory=lambda: date.today().year,
        description="Calendar year of year 0",
    )
    as_of: date = Field(
        default_factory=date.today, description="Date ages are derived on"
    )

    @field_validator("client_ids", mode="before")
    @classmethod
    def parse_client_ids(cls, v: Any) -> List[Optional[str]]:
        if not isinstance(v, (list, tuple)):
            return []
        return [_optional_id(client_id) for client_id in list(v)[:2]]

    @field_validator("client1_current_age", "client2_current_age", mode="before")
    @classmethod
    def parse_ages(cls, v: Any) -> Optional[int]:
        return optional_int(v)

    @field_validator("clients", mode="before")
    @classmethod
    def parse_clients(cls, v: Any) -> Any:
        return _as_list(v)

    @field_validator("average_tax_rate", mode="before")
    @classmethod
    def parse_tax_rate(cls, v: Any) -> float:
        return safe_float(v)

    @field_validator("projection_years", mode="before")
    @classmethod
    def parse_projection_years(cls, v: Any) -> Optional[int]:
        return optional_int(v)

    @field_validator("start_year", mode="before")
    @classmethod
    def parse_start_year(cls, v: Any) -> int:
        return safe_int(v, date.today().year)

    def client_id(self, slot: int) -> Optional[str]:
        """Id of the client in a slot (0 or 1), if any."""
        if slot < len(self.client_ids):
            return self.client_ids[slot]
        return None

    def starting_age(self, slot: int) -> Optional[int]:
        """
        Age of the client in a slot at year 0.

        An explicit current age wins; otherwise the age is derived from the
        matching client record's date of birth on ``as_of``.
        """
        explicit = self.client1_current_age if slot == 0 else self.client2_current_age
        if explicit is not None:
            return explicit

        client_id = self.client_id(slot)
        for client in self.clients:
            if client_id is not None and client.id == client_id:
                return client.age_on(self.as_of)
        if client_id is None and slot < len(self.clients):
            return self.clients[slot].age_on(self.as_of)
        return None


class ProjectionRequest(EntityModel):
    """Everything one projection run needs."""

    configuration: ProjectionConfiguration = Field(
        default_factory=ProjectionConfiguration, description="Run configuration"
    )
    estate_parameters: EstateParameters = Field(
        default_factory=EstateParameters,
        validation_alias=AliasChoices("estate_parameters", "estateParameters"),
        description="Estate settlement parameters",
    )
    incomes: List[IncomeStream] = Field(
        default_factory=list, description="Income streams"
    )
    assets: List[Asset] = Field(default_factory=list, description="Assets")
    liabilities: List[Liability] = Field(
        default_factory=list, description="Liabilities"
    )

    @field_validator("configuration", "estate_parameters", mode="before")
    @classmethod
    def parse_sections(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("incomes", "assets", "liabilities", mode="before")
    @classmethod
    def parse_lists(cls, v: Any) -> Any:
        return _as_list(v)

    @model_validator(mode="after")
    def assign_missing_ids(self):
        """Give records without an id a positional one so per-entity maps stay keyed."""
        for prefix, records in (
            ("income", self.incomes),
            ("asset", self.assets),
            ("liability", self.liabilities),
        ):
            for index, record in enumerate(records, start=1):
                if record.id is None:
                    record.id = f"{prefix}_{index}"
        return self
