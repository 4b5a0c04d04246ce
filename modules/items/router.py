from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from modules.items import schemas, service

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("", response_model=list[schemas.ItemRead])
def list_items_endpoint(db: Session = Depends(get_db)):
    return service.list_items(db)


@router.post("", response_model=schemas.ItemRead, status_code=status.HTTP_201_CREATED)
def create_item_endpoint(item_in: schemas.ItemCreate, db: Session = Depends(get_db)):
    return service.create_item(db, item_in)


@router.get("/{item_id}", response_model=schemas.ItemRead)
def get_item_endpoint(item_id: int, db: Session = Depends(get_db)):
    return service.get_item(db, item_id)


@router.delete("/{item_id}")
def delete_item_endpoint(item_id: int, db: Session = Depends(get_db)):
    service.delete_item(db, item_id)
    return {"message": "Item deleted successfully"}
