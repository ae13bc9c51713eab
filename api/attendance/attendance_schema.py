# api/attendance/attendance_schema.py

import enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from api.geo.geo_schema import Coordinate


class Claimant(BaseModel):
    """Identity of the person being admitted, as supplied by the identity provider."""
    id: str = Field(..., min_length=1, max_length=128)
    email: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(frozen=True)


class AdmissionEntry(BaseModel):
    """A verified admission about to be written to the ledger."""
    session_id: str = Field(..., min_length=1, max_length=64)
    claimant_id: str = Field(..., min_length=1, max_length=128)
    claimant_email: Optional[str] = None
    reported_position: Coordinate
    accuracy_meters: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    distance_meters: int = Field(..., ge=0)
    recorded_at: datetime
    label: Optional[str] = None


class MarkAttendanceIn(BaseModel):
    """
    Payload for a claimant scanning a session code.
    """
    session_id: str = Field(..., min_length=1, max_length=64, description="Session id read from the QR code")
    location: Coordinate = Field(..., description="Claimant's reported position")
    accuracy_meters: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Reported position accuracy; stored for reference only",
    )

    model_config = ConfigDict(extra="forbid")


class AttendanceOut(BaseModel):
    id: int
    session_id: str
    claimant_id: str
    claimant_email: Optional[str] = None
    label: Optional[str] = None
    reported_position: Coordinate
    accuracy_meters: Optional[float] = None
    distance_meters: int
    recorded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VerificationStatus(str, enum.Enum):
    admitted        = "admitted"
    invalid_session = "invalid_session"
    expired         = "expired"
    inactive        = "inactive"
    out_of_range    = "out_of_range"
    already_marked  = "already_marked"


class VerificationOutcome(BaseModel):
    status: VerificationStatus
    message: str
    session_id: str
    label: Optional[str] = None
    distance_meters: Optional[int] = None
    allowed_meters: Optional[float] = None
    record: Optional[AttendanceOut] = None

    @property
    def admitted(self) -> bool:
        return self.status == VerificationStatus.admitted
