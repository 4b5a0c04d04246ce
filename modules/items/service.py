from typing import Any, Dict, List

from sqlalchemy.orm import Session, joinedload

from core.errors import NotFoundException
from core.log import get_logger
from modules.business_settings.service import resolve_settings
from modules.filaments import service as filament_service
from modules.items import models, schemas
from modules.pricing.service import PricingService

log = get_logger("items")


def _serialize_item(item: models.Item) -> Dict[str, Any]:
    filament = item.filament
    return {
        "id": item.id,
        "name": item.name,
        "color": item.color,
        "filament_id": item.filament_id,
        "filament_color": filament.color_name if filament else None,
        "filament_brand": filament.brand if filament else None,
        "filament_cost_per_gram": filament.cost_per_gram if filament else None,
        "grams_used": item.grams_used,
        "print_time_hours": item.print_time_hours,
        "hourly_rate": item.hourly_rate,
        "labor_cost": item.labor_cost,
        "electricity_kw": item.electricity_kw,
        "electricity_cost": item.electricity_cost,
        "material_cost": item.material_cost,
        "total_cost_no_labor": item.total_cost_no_labor,
        "build_price": item.build_price,
        "total_cost_no_profit": item.build_price,
        "profit_margin": item.profit_margin,
        "final_price": item.final_price,
        "created_at": item.created_at,
    }


def create_item(db: Session, item_in: schemas.ItemCreate) -> Dict[str, Any]:
    settings = resolve_settings(db)

    cost_per_gram = None
    if item_in.filament_id is not None:
        cost_per_gram = filament_service.get_filament(db, item_in.filament_id).cost_per_gram

    snapshot = PricingService(settings=settings).price_item(item_in, cost_per_gram)

    item = models.Item(
        name=item_in.name,
        color=item_in.color or None,
        filament_id=item_in.filament_id,
        grams_used=item_in.grams_used,
        **snapshot.model_dump(),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    log.info(
        "Created item #%s %r: build %.4f, final %.4f at %.1f%% margin",
        item.id,
        item.name,
        item.build_price,
        item.final_price,
        item.profit_margin,
    )
    return _serialize_item(item)


def list_items(db: Session) -> List[Dict[str, Any]]:
    items = (
        db.query(models.Item)
        .options(joinedload(models.Item.filament))
        .order_by(models.Item.created_at.desc(), models.Item.id.desc())
        .all()
    )
    return [_serialize_item(i) for i in items]


def get_item(db: Session, item_id: int) -> Dict[str, Any]:
    return _serialize_item(_get_item_model(db, item_id))


def _get_item_model(db: Session, item_id: int) -> models.Item:
    item = db.query(models.Item).filter(models.Item.id == item_id).first()
    if not item:
        raise NotFoundException("Item not found")
    return item


def delete_item(db: Session, item_id: int) -> None:
    item = _get_item_model(db, item_id)
    db.delete(item)
    db.commit()
    log.info("Deleted item #%s and its orders", item_id)
