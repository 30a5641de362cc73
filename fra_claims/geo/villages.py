"""Reference coordinates for villages with forest-rights claims."""

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class VillageLocation:
    """Map center of a village."""

    village: str
    lat: float
    lng: float
    district: str | None = None
    state: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


VILLAGE_COORDINATES: MappingProxyType[str, VillageLocation] = MappingProxyType(
    {
        "kachargaon": VillageLocation(
            "Kachargaon", 20.5937, 78.9629, "Seoni", "Madhya Pradesh"
        ),
        "mendha": VillageLocation(
            "Mendha", 20.1376, 79.2963, "Gadchiroli", "Maharashtra"
        ),
        "bamni": VillageLocation("Bamni", 21.8974, 79.6512, "Gondia", "Maharashtra"),
        "navegaon": VillageLocation(
            "Navegaon", 21.0285, 79.2108, "Wardha", "Maharashtra"
        ),
        "dhamangaon": VillageLocation(
            "Dhamangaon", 20.7476, 77.3463, "Amravati", "Maharashtra"
        ),
        "pench": VillageLocation("Pench", 21.6093, 79.2961, "Seoni", "Madhya Pradesh"),
        "tadoba": VillageLocation(
            "Tadoba", 20.2091, 79.3370, "Chandrapur", "Maharashtra"
        ),
        "chikhaldara": VillageLocation(
            "Chikhaldara", 21.2667, 77.4667, "Amravati", "Maharashtra"
        ),
        "melghat": VillageLocation(
            "Melghat", 21.2500, 77.2500, "Amravati", "Maharashtra"
        ),
        "satpura": VillageLocation(
            "Satpura", 22.5000, 78.0000, "Hoshangabad", "Madhya Pradesh"
        ),
    }
)


def normalize_village_name(name: str) -> str:
    return name.strip().lower()


def lookup_village(name: str) -> VillageLocation | None:
    """Find a village by name.

    Matching is case-insensitive and ignores surrounding whitespace. An
    exact key match wins; otherwise the first key that contains the name,
    or is contained in it, is used. Blank names never match.

    Args:
        name: Village name as written on the claim.

    Returns:
        The matching location, or ``None``.
    """
    key = normalize_village_name(name)
    if not key:
        return None

    location = VILLAGE_COORDINATES.get(key)
    if location is not None:
        return location

    for candidate, location in VILLAGE_COORDINATES.items():
        if key in candidate or candidate in key:
            return location
    return None


def list_villages() -> list[VillageLocation]:
    """Return every known village in table order."""
    return list(VILLAGE_COORDINATES.values())
