"""Appointment read use cases."""

from typing import List
from uuid import UUID

from src.application.interfaces.repositories import AppointmentRepositoryInterface
from src.domain.entities.appointment import Appointment
from src.domain.exceptions.authorization_error import UnauthorizedError
from src.domain.exceptions.not_found_error import AppointmentNotFoundError


class GetUserAppointmentsUseCase:
    """List every appointment the caller booked, cancelled ones included."""

    def __init__(self, appointment_repo: AppointmentRepositoryInterface):
        self.appointment_repo = appointment_repo

    async def execute(self, user_id: str) -> List[Appointment]:
        return await self.appointment_repo.get_by_user_id(user_id)


class GetAppointmentUseCase:
    """Fetch one of the caller's appointments."""

    def __init__(self, appointment_repo: AppointmentRepositoryInterface):
        self.appointment_repo = appointment_repo

    async def execute(self, appointment_id: UUID, user_id: str) -> Appointment:
        appointment = await self.appointment_repo.get_by_id(appointment_id)
        if not appointment:
            raise AppointmentNotFoundError(appointment_id)
        if not appointment.is_owned_by(user_id):
            raise UnauthorizedError("Appointment", appointment_id, user_id)
        return appointment
