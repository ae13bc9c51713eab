# api/geo/geo_service.py

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from api.geo.geo_schema import Coordinate
from api.sessions.sessions_service import SessionService
from config.settings import Settings

EARTH_RADIUS_METERS = 6371000.0
DEFAULT_RADIUS_METERS = 50


@dataclass(frozen=True)
class GeofenceVerdict:
    admitted: bool
    distance_meters: int
    allowed_meters: float


def haversine_distance(a: Coordinate, b: Coordinate) -> int:
    """
    Great-circle distance between two coordinates, in whole meters.

    NaN or infinite input yields NaN instead of raising; coordinates are
    expected to be range-checked by the caller.
    """
    if not all(math.isfinite(v) for v in (a.latitude, a.longitude, b.latitude, b.longitude)):
        return math.nan

    φ1, φ2 = math.radians(a.latitude), math.radians(b.latitude)
    Δφ = math.radians(b.latitude - a.latitude)
    Δλ = math.radians(b.longitude - a.longitude)

    hav = math.sin(Δφ / 2) ** 2 + math.cos(φ1) * math.cos(φ2) * math.sin(Δλ / 2) ** 2
    hav = min(hav, 1.0)  # float error near antipodes
    c = 2 * math.atan2(math.sqrt(hav), math.sqrt(1 - hav))
    # half up, never half to even
    return math.floor(EARTH_RADIUS_METERS * c + 0.5)


def effective_radius(radius_meters: Optional[float]) -> float:
    if radius_meters is None or not radius_meters > 0:
        return DEFAULT_RADIUS_METERS
    return radius_meters


def verify_geofence(
    claimant: Coordinate,
    origin: Coordinate,
    radius_meters: Optional[float] = None,
) -> GeofenceVerdict:
    """
    Admit when the claimant is within ``radius_meters`` of ``origin``
    (boundary inclusive). Missing or non-positive radius falls back to 50 m.
    """
    allowed = effective_radius(radius_meters)
    distance = haversine_distance(claimant, origin)
    return GeofenceVerdict(
        admitted=distance <= allowed,
        distance_meters=distance,
        allowed_meters=allowed,
    )


class GeoService:
    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings

    def validate_proximity(
        self,
        session_id: str,
        location: Coordinate,
    ) -> Optional[Dict[str, Any]]:
        """
        Check a position against a session's geofence without recording
        anything. Returns None for an unknown session.
        """
        session = SessionService(self.db, self.settings).get(session_id)
        if session is None:
            return None

        verdict = verify_geofence(location, session.origin, session.radius_meters)
        return {
            "session_id": session.id,
            "distance_meters": verdict.distance_meters,
            "allowed_meters": verdict.allowed_meters,
            "in_range": verdict.admitted,
            "label": session.label,
        }
