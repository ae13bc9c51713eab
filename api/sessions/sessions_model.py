from sqlalchemy import (
    Column,
    String,
    Text,
    Float,
    Boolean,
    DateTime,
    CheckConstraint,
)
from config.database import Base
from api.geo.geo_schema import Coordinate


class AttendanceSession(Base):
    __tablename__ = "attendance_sessions"
    __table_args__ = (
        CheckConstraint("expires_at > created_at", name="ck_session_expiry_after_creation"),
    )

    id               = Column(String(64), primary_key=True)
    issuer_id        = Column(String(128), nullable=False, index=True)
    issuer_email     = Column(String(255), nullable=True)
    label            = Column(Text, nullable=False)
    origin_latitude  = Column(Float, nullable=False)
    origin_longitude = Column(Float, nullable=False)
    radius_meters    = Column(Float, nullable=True)
    created_at       = Column(DateTime(timezone=True), nullable=False, index=True)
    expires_at       = Column(DateTime(timezone=True), nullable=False)
    active           = Column(Boolean, nullable=False, default=True)

    def __init__(self, id, issuer_id, label, origin, radius_meters, created_at, expires_at,
                 issuer_email=None, active=True):
        self.id               = id
        self.issuer_id        = issuer_id
        self.issuer_email     = issuer_email
        self.label            = label
        self.origin_latitude  = origin.latitude
        self.origin_longitude = origin.longitude
        self.radius_meters    = radius_meters
        self.created_at       = created_at
        self.expires_at       = expires_at
        self.active           = active

    @property
    def origin(self) -> Coordinate:
        return Coordinate(latitude=self.origin_latitude, longitude=self.origin_longitude)
