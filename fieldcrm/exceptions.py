"""Domain exceptions raised by services and mapped to HTTP responses by routers."""

from http import HTTPStatus


class FieldCRMError(Exception):
    """Base exception for all domain errors."""

    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class NotFoundError(FieldCRMError):
    """Raised when a referenced record does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class InvalidTransitionError(FieldCRMError):
    """Raised when a status change is not allowed from the current state."""

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(f"Cannot move {entity} from '{current}' to '{target}'")
        self.entity = entity
        self.current = current
        self.target = target


class JobUnavailableError(FieldCRMError):
    """Raised when a pool job was claimed by someone else first."""

    status_code = HTTPStatus.CONFLICT

    def __init__(self, message: str = "Job is no longer available") -> None:
        super().__init__(message)


class NotApprovedForJobTypeError(FieldCRMError):
    """Raised when a technician claims a job outside their approved service types."""

    status_code = HTTPStatus.FORBIDDEN

    def __init__(self, service_type: str) -> None:
        super().__init__(f"Technician is not approved for {service_type} jobs")
        self.service_type = service_type


class CommissionNotApplicableError(FieldCRMError):
    """Raised when a commission cannot be calculated for a job."""


class QuoteNotAcceptableError(FieldCRMError):
    """Raised when a quote cannot be accepted, declined or turned into a job."""
