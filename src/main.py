from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from routers.api import router as api_router
from routers.dashboard import router as dashboard_router
from schemas import AppHealthOK
from core.service_manager import service_manager
from core.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup/shutdown without deprecated on_event."""
    logger.info("Starting background services (map autoload: %s)", settings.map_autoload)
    await service_manager.start_services(autoload_map=settings.map_autoload)

    try:
        yield
    finally:
        logger.info("Stopping background services")
        service_manager.stop_services()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)


@app.get("/health", tags=["meta"], response_model=AppHealthOK)
async def healthcheck() -> AppHealthOK:
    return AppHealthOK(status="ok", app=settings.app_name)


app.include_router(dashboard_router)
# mount API router under /api
app.include_router(api_router, prefix="/api")
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
