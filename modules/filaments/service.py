from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import ConflictException, NotFoundException
from core.log import get_logger
from core.settings import per_kg_to_per_gram
from modules.filaments import models, schemas

log = get_logger("filaments")


def create_filament(db: Session, filament_in: schemas.FilamentCreate) -> models.Filament:
    data = filament_in.model_dump()
    if data["cost_per_gram"] is None:
        data["cost_per_gram"] = per_kg_to_per_gram(filament_in.price_per_kg)

    filament = models.Filament(**data)
    db.add(filament)
    db.commit()
    db.refresh(filament)
    log.info("Created filament #%s (%s, %s/g)", filament.id, filament.color_name, filament.cost_per_gram)
    return filament


def list_filaments(db: Session) -> List[models.Filament]:
    return db.query(models.Filament).order_by(models.Filament.color_name.asc(), models.Filament.id.asc()).all()


def get_filament(db: Session, filament_id: int) -> models.Filament:
    filament = db.query(models.Filament).filter(models.Filament.id == filament_id).first()
    if not filament:
        raise NotFoundException("Filament not found")
    return filament


def update_filament(db: Session, filament_id: int, filament_in: schemas.FilamentUpdate) -> models.Filament:
    filament = get_filament(db, filament_id)
    data = {
        key: value
        for key, value in filament_in.model_dump(exclude_unset=True).items()
        if value is not None or key in schemas.NULLABLE_UPDATE_FIELDS
    }

    # A new spool price is a new entry: re-derive unless an explicit cost was given
    if "price_per_kg" in data and "cost_per_gram" not in data:
        data["cost_per_gram"] = per_kg_to_per_gram(data["price_per_kg"])

    for key, value in data.items():
        setattr(filament, key, value)

    db.commit()
    db.refresh(filament)
    log.info("Updated filament #%s", filament.id)
    return filament


def delete_filament(db: Session, filament_id: int) -> None:
    filament = get_filament(db, filament_id)
    db.delete(filament)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        log.warning("Refused to delete filament #%s: referenced by items", filament_id)
        raise ConflictException("Filament could not be deleted, it may be in use by existing items") from exc
    log.info("Deleted filament #%s", filament_id)
