from fastapi import APIRouter
from workday_zen.api import health
from workday_zen.features.timer import api as timer

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(timer.router)
