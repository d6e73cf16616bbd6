"""
API schemas for the Repair Scheduling Service.
"""

from .appointment import AppointmentCreateRequest, AppointmentResponse
from .common import BaseResponse, ErrorResponse
from .estimate import EstimateCreateRequest, EstimateResponse
from .repair import RepairRequestCreateRequest, RepairRequestResponse
from .technician import TechnicianMatchResponse, TechnicianResponse

__all__ = [
    "BaseResponse",
    "ErrorResponse",
    "AppointmentCreateRequest",
    "AppointmentResponse",
    "EstimateCreateRequest",
    "EstimateResponse",
    "RepairRequestCreateRequest",
    "RepairRequestResponse",
    "TechnicianMatchResponse",
    "TechnicianResponse",
]
