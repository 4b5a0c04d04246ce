from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.database import init_db
from core.errors import register_exception_handlers
from core.log import configure_logging
from core.settings import get_settings
from modules.business_settings.router import router as settings_router
from modules.filaments.router import router as filaments_router
from modules.items.router import router as items_router
from modules.notes.router import router as notes_router
from modules.orders.router import router as orders_router
from modules.pricing.router import router as pricing_router
from modules.summary.router import router as summary_router


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(settings_router)
    app.include_router(filaments_router)
    app.include_router(items_router)
    app.include_router(pricing_router)
    app.include_router(orders_router)
    app.include_router(summary_router)
    app.include_router(notes_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


@app.on_event("startup")
def on_startup():
    init_db()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000)
