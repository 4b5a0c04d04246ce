"""Database engine and session management."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from core.log import get_logger
from core.models import Base
from core.settings import get_settings
from modules.business_settings import service as business_settings_service
from modules.filaments import models as filament_models  # noqa: F401
from modules.items import models as item_models  # noqa: F401
from modules.notes import models as note_models  # noqa: F401
from modules.orders import models as order_models  # noqa: F401

log = get_logger("db")

settings = get_settings()
database_url = settings.sqlalchemy_url
is_sqlite = database_url.startswith("sqlite")

if is_sqlite:
    engine = create_engine(database_url, connect_args={"check_same_thread": False})
else:
    engine = create_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=0,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )


if is_sqlite:

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # RESTRICT / CASCADE on filaments, items and orders rely on this
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    log.info("Initialising database at %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        business_settings_service.seed_default_settings(session)
    finally:
        session.close()
