import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from petdesk.config import Settings, get_settings
from petdesk.core.logging import setup_logging
from petdesk.database import Base, engine, session_scope
from petdesk.models import import_all_models
from petdesk.routers import (
    assistant_router,
    dashboard_router,
    directories_router,
    expenses_router,
    health_router,
    orders_router,
    products_router,
    settings_router,
    settlements_router,
    warehouse_router,
)
from petdesk.services.seed_service import seed_mock_data

logger = logging.getLogger(__name__)

setup_logging()
settings: Settings = get_settings()

import_all_models()
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.SEED_MOCK_DATA:
        with session_scope() as db:
            seed_mock_data(db, bank_commission=settings.BANK_COMMISSION_PERCENT)
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(health_router)
app.include_router(products_router)
app.include_router(orders_router)
app.include_router(warehouse_router)
app.include_router(settlements_router)
app.include_router(directories_router)
app.include_router(expenses_router)
app.include_router(dashboard_router)
app.include_router(settings_router)
app.include_router(assistant_router)


@app.get("/")
def root():
    return RedirectResponse(url="/docs", status_code=302)


def run():
    # One worker: the default in-memory database lives inside the process.
    uvicorn.run("petdesk.main:app", host=settings.API_HOST, port=settings.API_PORT)


__all__ = ["app", "root", "run"]


if __name__ == "__main__":
    run()
