"""Audience enums used to pick occupation and health rule sets."""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional


def _normalise(name: str) -> str:
    return "".join(ch for ch in name.strip().lower() if ch not in " _-")


class OccupationType(Enum):
    FARMER = "Farmer"
    OFFICE_WORKER = "OfficeWorker"
    DELIVERY_EXECUTIVE = "DeliveryExecutive"
    CONSTRUCTION_WORKER = "ConstructionWorker"
    OUTDOOR_VENDOR = "OutdoorVendor"
    TOURIST = "Tourist"
    ATHLETE = "Athlete"
    SCHOOL_STUDENT = "SchoolStudent"

    @classmethod
    def parse(cls, name: str) -> Optional["OccupationType"]:
        """Resolve a free-text occupation name, returning ``None`` when unknown."""
        key = _normalise(name)
        for member in cls:
            if _normalise(member.value) == key or _normalise(member.name) == key:
                return member
        return _OCCUPATION_ALIASES.get(key)


# Keys accepted by the older free-text occupation endpoint.
_OCCUPATION_ALIASES: Dict[str, OccupationType] = {
    "traveler": OccupationType.TOURIST,
    "traveller": OccupationType.TOURIST,
    "delivery": OccupationType.DELIVERY_EXECUTIVE,
    "construction": OccupationType.CONSTRUCTION_WORKER,
    "student": OccupationType.SCHOOL_STUDENT,
    "vendor": OccupationType.OUTDOOR_VENDOR,
}


class HealthCondition(Enum):
    ASTHMA = "Asthma"
    HEART_CONDITION = "HeartCondition"
    MIGRAINE = "Migraine"
    HEAT_SENSITIVITY = "HeatSensitivity"
    COLD_SENSITIVITY = "ColdSensitivity"
    ELDERLY = "Elderly"

    @classmethod
    def parse(cls, name: str) -> "HealthCondition":
        key = _normalise(name)
        for member in cls:
            if _normalise(member.value) == key or _normalise(member.name) == key:
                return member
        raise ValueError(f"Unknown health condition: {name!r}")


def available_occupations() -> List[str]:
    return [member.value for member in OccupationType]


def available_health_conditions() -> List[str]:
    return [member.value for member in HealthCondition]


__all__ = [
    "HealthCondition",
    "OccupationType",
    "available_health_conditions",
    "available_occupations",
]
