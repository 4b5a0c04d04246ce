from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from modules.business_settings import schemas, service

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=schemas.BusinessSettings)
def get_settings_endpoint(db: Session = Depends(get_db)):
    return service.resolve_settings(db)


@router.put("", response_model=schemas.BusinessSettings)
def update_settings_endpoint(settings_in: schemas.BusinessSettingsUpdate, db: Session = Depends(get_db)):
    return service.update_settings(db, settings_in)
