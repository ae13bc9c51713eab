# api/geo/geo_schema.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Coordinate(BaseModel):
    """A WGS84 position in decimal degrees. Immutable."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class GeoValidateIn(BaseModel):
    session_id: str = Field(..., min_length=1, max_length=64, description="Session to validate against")
    location: Coordinate = Field(..., description="Claimant's current position")


class GeoValidateOut(BaseModel):
    session_id: str = Field(..., description="Session validated against")
    distance_meters: int = Field(..., description="Distance in whole meters between claimant and session origin")
    allowed_meters: float = Field(..., description="Effective geofence radius of the session")
    in_range: bool = Field(..., description="Whether the claimant is inside the geofence")
    label: Optional[str] = None
