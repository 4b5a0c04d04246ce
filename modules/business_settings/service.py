from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.log import get_logger
from modules.business_settings import models, schemas

log = get_logger("settings")


def _parse_rows(rows) -> Dict[str, Any]:
    defaults = schemas.BusinessSettings()
    values: Dict[str, Any] = {}
    for row in rows:
        if row.key not in schemas.BusinessSettings.model_fields:
            continue
        if row.key in schemas.NUMERIC_KEYS:
            try:
                values[row.key] = float(row.value)
            except (TypeError, ValueError):
                log.warning(
                    "Stored setting %s=%r is not numeric, using default %s",
                    row.key,
                    row.value,
                    getattr(defaults, row.key),
                )
        else:
            values[row.key] = row.value
    return values


def resolve_settings(db: Session) -> schemas.BusinessSettings:
    """Read persisted settings and merge the hard-coded defaults.

    A failed read degrades to the defaults so that pricing and the settings
    page keep working while the store is unavailable.
    """
    try:
        rows = db.query(models.Setting).all()
    except SQLAlchemyError:
        log.warning("Could not read business settings, falling back to defaults", exc_info=True)
        db.rollback()
        return schemas.BusinessSettings()
    return schemas.BusinessSettings(**_parse_rows(rows))


def update_settings(db: Session, settings_in: schemas.BusinessSettingsUpdate) -> schemas.BusinessSettings:
    updates = settings_in.model_dump(exclude_none=True)
    for key, value in updates.items():
        row = db.get(models.Setting, key)
        if row is None:
            db.add(models.Setting(key=key, value=str(value)))
        else:
            row.value = str(value)
    db.commit()
    if updates:
        log.info("Updated business settings: %s", ", ".join(sorted(updates)))
    return resolve_settings(db)


def seed_default_settings(db: Session) -> None:
    """Insert rows for defaults that have never been stored (idempotent)."""
    existing = {row.key for row in db.query(models.Setting.key).all()}
    created = 0
    for key, value in schemas.BusinessSettings().model_dump().items():
        if key in existing:
            continue
        db.add(models.Setting(key=key, value=str(value)))
        created += 1
    if created:
        db.commit()
        log.info("Seeded %d default business settings", created)
