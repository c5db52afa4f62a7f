"""API v1 router aggregation."""

from fastapi import APIRouter

from wodlog.api.v1.endpoints import (
    admin,
    health,
    movements,
    performance,
    pr,
    templates,
    tools,
    wods,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(movements.router, prefix="/movements", tags=["movements"])
api_router.include_router(wods.router, prefix="/wods", tags=["wods"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])

api_router.include_router(pr.router, prefix="/pr", tags=["pr"])
api_router.include_router(performance.router, prefix="/performance", tags=["performance"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"])
