"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .cancel_appointment import CancelAppointmentRequest, CancelAppointmentUseCase
from .cancel_repair_request import (
    CancelRepairRequestRequest,
    CancelRepairRequestUseCase,
)
from .create_repair_request import (
    CreateRepairRequestRequest,
    CreateRepairRequestUseCase,
)
from .get_appointments import GetAppointmentUseCase, GetUserAppointmentsUseCase
from .get_available_technicians import (
    FindBestTechnicianUseCase,
    GetAvailableTechniciansUseCase,
    GetTechnicianUseCase,
)
from .get_repair_request import GetRepairRequestUseCase, ListUserRepairRequestsUseCase
from .manage_availability import (
    DayAvailability,
    GetAvailableTimeSlotsUseCase,
    SetDayAvailabilityRequest,
    SetDayAvailabilityUseCase,
)
from .repair_estimates import (
    CreateEstimateRequest,
    CreateEstimateUseCase,
    GetEstimateUseCase,
    ListEstimatesUseCase,
    PartInput,
)
from .reschedule_appointment import (
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
)
from .schedule_appointment import (
    ScheduleAppointmentRequest,
    ScheduleAppointmentUseCase,
)
from .schedule_repair import ScheduleRepairRequest, ScheduleRepairUseCase
from .send_reminders import ReminderResult, SendAppointmentRemindersUseCase
from .update_repair_request import (
    UpdateRepairRequestRequest,
    UpdateRepairRequestUseCase,
)
from .update_repair_status import (
    CompleteRepairRequest,
    CompleteRepairUseCase,
    StartRepairUseCase,
)

__all__ = [
    "CancelAppointmentRequest",
    "CancelAppointmentUseCase",
    "CancelRepairRequestRequest",
    "CancelRepairRequestUseCase",
    "CompleteRepairRequest",
    "CompleteRepairUseCase",
    "CreateEstimateRequest",
    "CreateEstimateUseCase",
    "CreateRepairRequestRequest",
    "CreateRepairRequestUseCase",
    "DayAvailability",
    "FindBestTechnicianUseCase",
    "GetAppointmentUseCase",
    "GetAvailableTechniciansUseCase",
    "GetAvailableTimeSlotsUseCase",
    "GetEstimateUseCase",
    "GetRepairRequestUseCase",
    "GetTechnicianUseCase",
    "GetUserAppointmentsUseCase",
    "ListEstimatesUseCase",
    "ListUserRepairRequestsUseCase",
    "PartInput",
    "ReminderResult",
    "RescheduleAppointmentRequest",
    "RescheduleAppointmentUseCase",
    "ScheduleAppointmentRequest",
    "ScheduleAppointmentUseCase",
    "ScheduleRepairRequest",
    "ScheduleRepairUseCase",
    "SendAppointmentRemindersUseCase",
    "SetDayAvailabilityRequest",
    "SetDayAvailabilityUseCase",
    "StartRepairUseCase",
    "UpdateRepairRequestRequest",
    "UpdateRepairRequestUseCase",
]
