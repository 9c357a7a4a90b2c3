from fastapi import APIRouter

from routers import maps, report, sensor, shell

router = APIRouter()

# include sub-routers
router.include_router(sensor.router)
router.include_router(shell.router)
router.include_router(maps.router)
router.include_router(report.router)
