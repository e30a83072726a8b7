from fastapi import APIRouter

from azfinance.api.routes import analytics, forecast, health, investments, projections


api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(analytics.router)
api_router.include_router(forecast.router)
api_router.include_router(projections.router)
api_router.include_router(investments.router)
