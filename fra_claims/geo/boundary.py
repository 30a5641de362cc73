"""Synthetic claim boundary generation.

Produces an irregular GeoJSON polygon around a village center whose size
roughly tracks the claimed area. The shapes are for map display only:
the degrees-per-hectare scale is a placeholder heuristic, not a
projection, so polygon areas are not geodesically meaningful.
"""

import math
from typing import Any

import numpy as np

from fra_claims.utils.config import BoundaryConfig
from fra_claims.utils.logger import get_logger

from .villages import VillageLocation, lookup_village

logger = get_logger(__name__)


class BoundarySynthesizer:
    """Generates map boundaries for claimed land parcels.

    Args:
        config: Geometry scale, jitter, and fallback location settings.
        rng: Random generator; pass a seeded one for reproducible shapes.
    """

    def __init__(
        self,
        config: BoundaryConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or BoundaryConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def resolve_location(self, village_name: str) -> VillageLocation:
        """Look up a village, synthesizing a nearby center when unknown."""
        location = lookup_village(village_name)
        if location is not None:
            return location

        cfg = self.config
        jitter = cfg.fallback_jitter_deg
        logger.debug("Unknown village %r, synthesizing a location", village_name)
        return VillageLocation(
            village=village_name,
            lat=cfg.fallback_lat + float(self.rng.uniform(-jitter, jitter)),
            lng=cfg.fallback_lng + float(self.rng.uniform(-jitter, jitter)),
            district=cfg.fallback_district,
            state=cfg.fallback_state,
        )

    def generate_boundary(
        self, village_name: str, area_hectares: float
    ) -> dict[str, Any]:
        """Generate a closed polygon approximating a claimed parcel.

        Args:
            village_name: Village the parcel belongs to.
            area_hectares: Claimed area; must be positive.

        Returns:
            GeoJSON ``Polygon`` with a single ring of ``[lng, lat]`` pairs
            whose last point repeats the first.

        Raises:
            ValueError: If ``area_hectares`` is not a positive finite number.
        """
        if not math.isfinite(area_hectares) or area_hectares <= 0:
            raise ValueError(f"Area must be a positive number, got {area_hectares}")

        cfg = self.config
        center = self.resolve_location(village_name)

        base_radius = math.sqrt(area_hectares) * cfg.degrees_per_sqrt_hectare
        n = int(self.rng.integers(cfg.min_vertices, cfg.max_vertices + 1))

        angles = 2 * np.pi * np.arange(n) / n + self.rng.uniform(
            -cfg.angle_jitter_rad, cfg.angle_jitter_rad, size=n
        )
        radii = base_radius * (
            1 + self.rng.uniform(-cfg.radius_jitter, cfg.radius_jitter, size=n)
        )
        lats = center.lat + radii * np.cos(angles)
        lngs = center.lng + radii * np.sin(angles)

        ring = np.column_stack((lngs, lats)).tolist()
        ring.append(list(ring[0]))

        return {"type": "Polygon", "coordinates": [ring]}
