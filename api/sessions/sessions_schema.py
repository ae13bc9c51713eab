# api/sessions/sessions_schema.py

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import datetime

from api.geo.geo_schema import Coordinate


class SessionCreate(BaseModel):
    """
    Payload for an issuer opening an attendance window.

    Give either ``expires_at`` or ``duration_minutes``; with neither, the
    configured default duration applies.
    """
    session_id: Optional[str] = Field(
        None,
        min_length=1,
        max_length=64,
        pattern=r"^[A-Za-z0-9_\-]+$",
        description="Caller-chosen id; generated when omitted",
    )
    label: str = Field(..., min_length=1, max_length=200, description="Free-text label, e.g. course name")
    origin: Coordinate = Field(..., description="Geofence center")
    radius_meters: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        description="Geofence radius; unset or non-positive means the 50 m default",
    )
    expires_at: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=1)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_expiry_source(self):
        if self.expires_at is not None and self.duration_minutes is not None:
            raise ValueError("Give either expires_at or duration_minutes, not both")
        return self


class SessionOut(BaseModel):
    id: str
    issuer_id: str
    issuer_email: Optional[str] = None
    label: str
    origin: Coordinate
    radius_meters: Optional[float] = None
    created_at: datetime
    expires_at: datetime
    active: bool

    model_config = ConfigDict(from_attributes=True)
