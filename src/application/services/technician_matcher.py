"""
Technician matcher for picking the best technician for a repair.
"""

from dataclasses import dataclass
from typing import List, Optional

from src.application.interfaces.repositories import TechnicianRepositoryInterface
from src.config.logging import get_logger
from src.domain.entities.technician import Technician
from src.domain.value_objects.location import Location
from src.domain.value_objects.technician_specialty import TechnicianSpecialty

logger = get_logger(__name__)

AVAILABILITY_SCORE = 50.0
SPECIALTY_SCORE = 30.0
LOCATION_SCORE = 20.0
RATING_WEIGHT = 2.0


@dataclass
class TechnicianMatch:
    """Technician match result."""
    technician: Technician
    score: float
    is_available: bool
    specialty_match: bool
    location_match: bool


class TechnicianMatcher:
    """Deterministic scoring engine that ranks technicians for a request."""

    def __init__(self, technician_repo: TechnicianRepositoryInterface):
        self.technician_repo = technician_repo
        self.logger = logger

    async def find_best_technician(
        self, specialty: TechnicianSpecialty, location: Location
    ) -> Optional[Technician]:
        """
        Find the single best technician for a specialty and location.

        Args:
            specialty: Requested repair specialty
            location: Requested location; city may be left out

        Returns:
            The highest scoring available technician, or None when nobody
            is available. Ties go to the first technician in directory order.
        """
        best = await self.find_best_match(specialty, location)
        return best.technician if best else None

    async def find_best_match(
        self, specialty: TechnicianSpecialty, location: Location
    ) -> Optional[TechnicianMatch]:
        """Same as find_best_technician but keeps the score breakdown."""
        candidates = await self.technician_repo.find_available()
        ranking = self.rank_technicians(specialty, location, candidates)

        if not ranking:
            self.logger.info(
                "No available technician found",
                specialty=specialty.value,
                region=location.region,
                city=location.city,
            )
            return None

        best = ranking[0]
        self.logger.info(
            "Best technician selected",
            technician_id=str(best.technician.id),
            score=best.score,
            specialty=specialty.value,
            region=location.region,
            candidates=len(ranking),
        )
        return best

    def rank_technicians(
        self,
        specialty: TechnicianSpecialty,
        location: Location,
        candidates: List[Technician],
    ) -> List[TechnicianMatch]:
        """
        Score available candidates and order them best first.

        Returns:
            List of TechnicianMatch sorted by score (highest first); the sort
            is stable so equal scores keep their input order.
        """
        matches = [
            self._score(technician, specialty, location)
            for technician in candidates
            if technician.is_available
        ]
        matches.sort(key=lambda match: match.score, reverse=True)
        return matches

    def _score(
        self,
        technician: Technician,
        specialty: TechnicianSpecialty,
        location: Location,
    ) -> TechnicianMatch:
        is_available = technician.is_available
        specialty_match = technician.has_specialty(specialty)
        location_match = technician.location.matches(location)

        score = 0.0
        if is_available:
            score += AVAILABILITY_SCORE
        if specialty_match:
            score += SPECIALTY_SCORE
        if location_match:
            score += LOCATION_SCORE
        score += technician.rating * RATING_WEIGHT

        self.logger.debug(
            "Technician scored",
            technician_id=str(technician.id),
            score=score,
            specialty_match=specialty_match,
            location_match=location_match,
            rating=technician.rating,
        )

        return TechnicianMatch(
            technician=technician,
            score=score,
            is_available=is_available,
            specialty_match=specialty_match,
            location_match=location_match,
        )
