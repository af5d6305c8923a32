class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a call violates a documented precondition."""


class ScheduleNotFoundError(DomainError):
    """Raised by a schedule accessor when an organization does not exist at all."""

    def __init__(self, organization_id: int):
        super().__init__(f"Organization {organization_id} not found")
        self.organization_id = organization_id


class ConfigurationError(DomainError):
    """Raised when settings cannot be loaded or are inconsistent."""
