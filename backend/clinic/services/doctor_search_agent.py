# backend/clinic/services/doctor_search_agent.py

import logging
import re
from typing import List

from clinic.models.directory import (
    DoctorSearchOutput,
    DoctorSearchResult,
    User,
    UserRole,
    UserStatus,
)
from clinic.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

GENERAL_PRACTICE = "general"
DEFAULT_SPECIALIST = "General Practitioner"

# Surface form (Indonesian, English, loanword) -> canonical specialty key.
# A token matches a surface form when it contains it as a substring.
KEYWORD_MAP = {
    "jantung": "cardiology",
    "kardiolog": "cardiology",
    "cardiolog": "cardiology",
    "cardio": "cardiology",
    "heart": "cardiology",
    "anak": "pediatrics",
    "pediatri": "pediatrics",
    "paediatri": "pediatrics",
    "kulit": "dermatology",
    "kelamin": "dermatology",
    "dermatolog": "dermatology",
    "skin": "dermatology",
    "syaraf": "neurology",
    "saraf": "neurology",
    "neurolog": "neurology",
    "mata": "ophthalmology",
    "ophthalmolog": "ophthalmology",
    "umum": GENERAL_PRACTICE,
    "general": GENERAL_PRACTICE,
    "gp": GENERAL_PRACTICE,
}

GENERAL_PRACTICE_MARKERS = ("umum", "general")

_TOKEN_SPLIT = re.compile(r"[\s,\-]+")


def standard_keywords(text: str) -> List[str]:
    """Canonical keys plus every raw token longer than 3 characters.

    The raw-token fallback is deliberately loose: two specializations that
    share a long word ("spesialis") match each other.
    """
    found: List[str] = []
    for word in _TOKEN_SPLIT.split(text.lower()):
        if not word:
            continue
        for surface, canonical in KEYWORD_MAP.items():
            if surface in word:
                found.append(canonical)
        if len(word) > 3:
            found.append(word)
    return list(dict.fromkeys(found))


def _to_result(doctor: User) -> DoctorSearchResult:
    return DoctorSearchResult(
        id=doctor.id,
        name=doctor.name,
        specialist=doctor.specialization or DEFAULT_SPECIALIST,
        experience_years=doctor.experience_years or 0,
        is_verified=bool(doctor.str_number),
        is_active=doctor.status == UserStatus.ACTIVE,
        clinic=doctor.clinic,
    )


class DoctorSearchAgent:
    """Matches a free-text specialist recommendation against the directory."""

    def __init__(self, directory: UserDirectory):
        self.directory = directory

    async def find_matching_doctors(self, specialist: str) -> DoctorSearchOutput:
        logger.info("Searching doctors for specialist=%r", specialist)
        if not specialist or not specialist.strip() or specialist.strip().lower() == "null":
            return DoctorSearchOutput(doctors=[])

        search_keywords = standard_keywords(specialist)
        logger.debug("Search keywords: %s", search_keywords)

        matches: List[User] = []
        for user in await self.directory.get_users():
            if user.role != UserRole.DOCTOR or user.status != UserStatus.ACTIVE:
                continue
            doctor_spec = (user.specialization or "").lower()
            doctor_keywords = standard_keywords(doctor_spec)

            if any(k in doctor_keywords for k in search_keywords):
                matches.append(user)
            elif GENERAL_PRACTICE in search_keywords and any(
                marker in doctor_spec for marker in GENERAL_PRACTICE_MARKERS
            ):
                matches.append(user)

        return DoctorSearchOutput(doctors=[_to_result(doc) for doc in matches])
