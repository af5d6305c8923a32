from __future__ import annotations

from typing import Optional, Protocol

from .model import OrganizationSchedule


class OrganizationScheduleRepository(Protocol):
    def get_organization_schedule(self, organization_id: int) -> Optional[OrganizationSchedule]:
        """Return the organization's configured hours.

        Returns None when the organization exists but has no hours configured.
        Raises ScheduleNotFoundError when the organization itself is unknown.
        """

        raise NotImplementedError
