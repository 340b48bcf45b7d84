"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from habit_tracker.api.v1.endpoints import habits

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    habits.router, prefix="/habits", tags=["Habits"]
)
