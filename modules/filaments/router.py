from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from modules.filaments import schemas, service

router = APIRouter(prefix="/api/filaments", tags=["filaments"])


@router.get("", response_model=list[schemas.FilamentRead])
def list_filaments_endpoint(db: Session = Depends(get_db)):
    return service.list_filaments(db)


@router.post("", response_model=schemas.FilamentRead, status_code=status.HTTP_201_CREATED)
def create_filament_endpoint(filament_in: schemas.FilamentCreate, db: Session = Depends(get_db)):
    return service.create_filament(db, filament_in)


@router.get("/{filament_id}", response_model=schemas.FilamentRead)
def get_filament_endpoint(filament_id: int, db: Session = Depends(get_db)):
    return service.get_filament(db, filament_id)


@router.put("/{filament_id}", response_model=schemas.FilamentRead)
def update_filament_endpoint(filament_id: int, filament_in: schemas.FilamentUpdate, db: Session = Depends(get_db)):
    return service.update_filament(db, filament_id, filament_in)


@router.delete("/{filament_id}")
def delete_filament_endpoint(filament_id: int, db: Session = Depends(get_db)):
    service.delete_filament(db, filament_id)
    return {"message": "Filament deleted successfully"}
