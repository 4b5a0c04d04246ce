from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from modules.orders import schemas, service

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=list[schemas.OrderRead])
def list_orders_endpoint(db: Session = Depends(get_db)):
    return service.list_orders(db)


@router.post("", response_model=schemas.OrderRead, status_code=status.HTTP_201_CREATED)
def create_order_endpoint(order_in: schemas.OrderCreate, db: Session = Depends(get_db)):
    return service.create_order(db, order_in)


@router.get("/{order_id}", response_model=schemas.OrderRead)
def get_order_endpoint(order_id: int, db: Session = Depends(get_db)):
    return service.get_order(db, order_id)


@router.put("/{order_id}", response_model=schemas.OrderRead)
def update_order_endpoint(order_id: int, order_in: schemas.OrderUpdate, db: Session = Depends(get_db)):
    return service.update_order(db, order_id, order_in)


@router.delete("/{order_id}")
def delete_order_endpoint(order_id: int, db: Session = Depends(get_db)):
    service.delete_order(db, order_id)
    return {"message": "Order deleted successfully"}
