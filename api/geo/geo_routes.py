# api/geo/geo_routes.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import Settings
from middlewares.auth_middleware import auth_middleware
from api.geo.geo_controller import GeoController
from api.geo.geo_schema import GeoValidateIn, GeoValidateOut
from utils.deps import get_app_settings

router = APIRouter(prefix="/geo", tags=["geo"])


@router.post(
    "/validate",
    response_model=GeoValidateOut,
    summary="Check a position against a session geofence without recording attendance"
)
def validate_location(
    payload: GeoValidateIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(auth_middleware)
) -> GeoValidateOut:
    return GeoController.validate_location(payload, db, settings)
