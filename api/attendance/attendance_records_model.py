from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Float,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from config.database import Base
from api.geo.geo_schema import Coordinate


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("session_id", "claimant_id", name="uq_attendance_session_claimant"),
        Index("ix_attendance_session_recorded", "session_id", "recorded_at"),
    )

    id              = Column(Integer, primary_key=True, autoincrement=True)
    session_id      = Column(String(64), ForeignKey("attendance_sessions.id"), nullable=False)
    claimant_id     = Column(String(128), nullable=False, index=True)
    claimant_email  = Column(String(255), nullable=True)
    label           = Column(Text, nullable=True)
    latitude        = Column(Float, nullable=False)
    longitude       = Column(Float, nullable=False)
    accuracy_meters = Column(Float, nullable=True)
    distance_meters = Column(Integer, nullable=False)
    recorded_at     = Column(DateTime(timezone=True), nullable=False)

    def __init__(self, session_id, claimant_id, reported_position, distance_meters, recorded_at,
                 claimant_email=None, label=None, accuracy_meters=None):
        self.session_id      = session_id
        self.claimant_id     = claimant_id
        self.claimant_email  = claimant_email
        self.label           = label
        self.latitude        = reported_position.latitude
        self.longitude       = reported_position.longitude
        self.accuracy_meters = accuracy_meters
        self.distance_meters = distance_meters
        self.recorded_at     = recorded_at

    @property
    def reported_position(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
