"""Technician directory use cases."""

from typing import List, Optional
from uuid import UUID

from src.application.interfaces.repositories import TechnicianRepositoryInterface
from src.application.services.technician_matcher import (
    TechnicianMatch,
    TechnicianMatcher,
)
from src.application.services.validators import parse_choice, require_text
from src.config.logging import get_logger
from src.domain.entities.technician import Technician
from src.domain.exceptions.not_found_error import TechnicianNotFoundError
from src.domain.value_objects.location import Location
from src.domain.value_objects.technician_specialty import TechnicianSpecialty
from src.infrastructure.monitoring.metrics import record_matcher_score

logger = get_logger(__name__)


def _location(region: str, city: Optional[str]) -> Location:
    return Location(
        region=require_text(region, "region"),
        city=city.strip() if city and city.strip() else None,
    )


class GetAvailableTechniciansUseCase:
    """List available technicians for a specialty around a location."""

    def __init__(self, technician_repo: TechnicianRepositoryInterface):
        self.technician_repo = technician_repo

    async def execute(
        self, specialty: str, region: str, city: Optional[str] = None
    ) -> List[Technician]:
        parsed_specialty = parse_choice(TechnicianSpecialty, specialty, "specialty")
        location = _location(region, city)

        technicians = await self.technician_repo.find_available(
            specialty=parsed_specialty, location=location
        )
        logger.debug(
            "Available technicians listed",
            specialty=parsed_specialty.value,
            region=location.region,
            city=location.city,
            count=len(technicians),
        )
        return technicians


class GetTechnicianUseCase:
    """Fetch a technician with upcoming availability."""

    def __init__(self, technician_repo: TechnicianRepositoryInterface):
        self.technician_repo = technician_repo

    async def execute(self, technician_id: UUID) -> Technician:
        technician = await self.technician_repo.get_by_id(technician_id)
        if not technician:
            raise TechnicianNotFoundError(technician_id)
        return technician


class FindBestTechnicianUseCase:
    """Run the matcher for a specialty and location."""

    def __init__(self, matcher: TechnicianMatcher):
        self.matcher = matcher

    async def execute(
        self, specialty: str, region: str, city: Optional[str] = None
    ) -> Optional[TechnicianMatch]:
        parsed_specialty = parse_choice(TechnicianSpecialty, specialty, "specialty")
        best = await self.matcher.find_best_match(
            parsed_specialty, _location(region, city)
        )
        if best:
            record_matcher_score(best.score)
        return best
