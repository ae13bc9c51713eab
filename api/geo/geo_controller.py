# api/geo/geo_controller.py

from fastapi import HTTPException
from sqlalchemy.orm import Session

from api.geo.geo_service import GeoService
from api.geo.geo_schema import GeoValidateIn, GeoValidateOut
from api.sessions.sessions_controller import storage_unavailable
from config.settings import Settings
from utils.exceptions import StorageUnavailable


class GeoController:
    @staticmethod
    def validate_location(
        payload: GeoValidateIn,
        db: Session,
        settings: Settings,
    ) -> GeoValidateOut:
        svc = GeoService(db, settings)
        try:
            result = svc.validate_proximity(payload.session_id, payload.location)
        except StorageUnavailable as e:
            raise storage_unavailable(e)

        if result is None:
            raise HTTPException(status_code=404, detail="Session not found")
        return GeoValidateOut(**result)
