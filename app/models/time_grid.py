"""
Time grid and client age resolution for household projections.

This module maps projection year offsets to calendar years and simulated
client ages, and holds the single rule for deciding which client's age gates
an income stream, asset or liability.
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .household import ProjectionConfiguration

# Legacy assignment markers from saved calculator states
_SLOT_MARKERS = {"client1": 0, "client2": 1, "joint": 0}


def resolve_client_slot(
    assigned_client_id: Optional[str], client_ids: Sequence[Optional[str]]
) -> Optional[int]:
    """
    Resolve which household client slot an entity belongs to.

    Unassigned entities (None, blank or "joint") belong to the household's
    first client. "client1"/"client2" markers map to their slots. An id
    matching one of ``client_ids`` maps to that client's slot. Any other id
    refers to a client outside the household.

    Args:
        assigned_client_id: The entity's assigned client id
        client_ids: Ids of client 1 and client 2

    Returns:
        0 or 1 for the resolved slot, or None when the client is unknown
    """
    if assigned_client_id is None or not str(assigned_client_id).strip():
        return 0

    assigned = str(assigned_client_id).strip()
    for slot, client_id in enumerate(list(client_ids)[:2]):
        if client_id is not None and client_id == assigned:
            return slot

    marker = assigned.lower()
    if marker in _SLOT_MARKERS:
        return _SLOT_MARKERS[marker]
    return None


class ClientAges(BaseModel):
    """Simulated ages of both household clients for one projection year."""

    model_config = ConfigDict(frozen=True)

    client1_age: Optional[int] = Field(default=None, description="Age of client 1")
    client2_age: Optional[int] = Field(default=None, description="Age of client 2")
    client_ids: List[Optional[str]] = Field(
        default_factory=list, description="Ids of client 1 and client 2"
    )

    @classmethod
    def for_year(
        cls, configuration: ProjectionConfiguration, year_offset: int
    ) -> "ClientAges":
        """Ages at ``year_offset`` years after year 0 (None if the start age is unknown)."""
        ages = []
        for slot in (0, 1):
            start_age = configuration.starting_age(slot)
            ages.append(None if start_age is None else start_age + year_offset)
        return cls(
            client1_age=ages[0],
            client2_age=ages[1],
            client_ids=list(configuration.client_ids),
        )

    def for_slot(self, slot: Optional[int]) -> Optional[int]:
        """Age of the client in a slot, or None for an unknown slot."""
        if slot == 0:
            return self.client1_age
        if slot == 1:
            return self.client2_age
        return None

    def age_for(self, assigned_client_id: Optional[str]) -> Optional[int]:
        """Age of the client an entity is assigned to."""
        return self.for_slot(resolve_client_slot(assigned_client_id, self.client_ids))


class ProjectionTimeline(BaseModel):
    """Year offsets and calendar years covered by one projection."""

    start_year: int = Field(..., description="Calendar year of year 0")
    projection_years: Optional[int] = Field(
        default=None,
        description="Years after year 0 (missing or <= 0 means nothing is projected)",
    )

    @classmethod
    def from_configuration(
        cls, configuration: ProjectionConfiguration
    ) -> "ProjectionTimeline":
        return cls(
            start_year=configuration.start_year,
            projection_years=configuration.projection_years,
        )

    @property
    def is_empty(self) -> bool:
        return self.projection_years is None or self.projection_years <= 0

    def get_offsets(self) -> List[int]:
        """Year offsets 0..projection_years inclusive, or [] when empty."""
        if self.is_empty:
            return []
        return list(range(self.projection_years + 1))

    def get_years(self) -> List[int]:
        """Calendar years covered by the projection."""
        return [self.calendar_year(offset) for offset in self.get_offsets()]

    def calendar_year(self, year_offset: int) -> int:
        return self.start_year + year_offset

    def __len__(self) -> int:
        return len(self.get_offsets())
