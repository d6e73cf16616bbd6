"""
Lookup-related domain exceptions.
"""

from .base import RepairDomainError


class NotFoundError(RepairDomainError):
    """Raised when a referenced entity does not exist."""

    error_type = "not_found"

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = str(entity_id)
        super().__init__(f"{entity} {entity_id} not found")


class RepairRequestNotFoundError(NotFoundError):
    """Raised when a repair request does not exist."""

    def __init__(self, repair_request_id):
        super().__init__("Repair request", repair_request_id)


class TechnicianNotFoundError(NotFoundError):
    """Raised when a technician does not exist."""

    def __init__(self, technician_id):
        super().__init__("Technician", technician_id)


class AppointmentNotFoundError(NotFoundError):
    """Raised when an appointment does not exist."""

    def __init__(self, appointment_id):
        super().__init__("Appointment", appointment_id)


class EstimateNotFoundError(NotFoundError):
    """Raised when a repair estimate does not exist."""

    def __init__(self, estimate_id):
        super().__init__("Estimate", estimate_id)
