from typing import Any, Dict, List

from sqlalchemy.orm import Session

from core.errors import NotFoundException
from core.log import get_logger
from modules.items.models import Item
from modules.orders import models, schemas
from modules.summary.service import compute_order_financials, load_order_rows

log = get_logger("orders")


def _serialize_order(order: models.Order, item: Item) -> Dict[str, Any]:
    return {
        "id": order.id,
        "item_id": order.item_id,
        "quantity": order.quantity,
        "sale_price": order.sale_price,
        "sale_date": order.sale_date,
        "notes": order.notes,
        "paid": order.paid,
        "delivered": order.delivered,
        "created_at": order.created_at,
        "item_name": item.name,
        "color": item.color,
        "material_cost": item.material_cost,
        "labor_cost": item.labor_cost,
        "electricity_cost": item.electricity_cost,
        "build_price": item.build_price,
        "final_price": item.final_price,
        **compute_order_financials(order, item),
    }


def _require_item(db: Session, item_id: int) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise NotFoundException("Item not found")
    return item


def _get_order_model(db: Session, order_id: int) -> models.Order:
    order = db.query(models.Order).filter(models.Order.id == order_id).first()
    if not order:
        raise NotFoundException("Order not found")
    return order


def create_order(db: Session, order_in: schemas.OrderCreate) -> Dict[str, Any]:
    item = _require_item(db, order_in.item_id)
    order = models.Order(**order_in.model_dump())
    db.add(order)
    db.commit()
    db.refresh(order)
    log.info("Created order #%s: %s x item #%s at %s", order.id, order.quantity, item.id, order.sale_price)
    return _serialize_order(order, item)


def list_orders(db: Session) -> List[Dict[str, Any]]:
    return [_serialize_order(order, item) for order, item in load_order_rows(db)]


def get_order(db: Session, order_id: int) -> Dict[str, Any]:
    order = _get_order_model(db, order_id)
    return _serialize_order(order, order.item)


def update_order(db: Session, order_id: int, order_in: schemas.OrderUpdate) -> Dict[str, Any]:
    order = _get_order_model(db, order_id)
    item = _require_item(db, order_in.item_id)
    for key, value in order_in.model_dump().items():
        setattr(order, key, value)
    db.commit()
    db.refresh(order)
    log.info("Updated order #%s", order.id)
    return _serialize_order(order, item)


def delete_order(db: Session, order_id: int) -> None:
    order = _get_order_model(db, order_id)
    db.delete(order)
    db.commit()
    log.info("Deleted order #%s", order_id)
