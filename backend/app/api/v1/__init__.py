"""
API v1 Router

All API endpoints for the mobile client.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import analysis, indicators

router = APIRouter()

# Include all endpoint routers
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
router.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
