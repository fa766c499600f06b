from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.deps import get_settings
from app.api.v1.routes_activity import router as activity_router
from app.api.v1.routes_admin import router as admin_router
from app.api.v1.routes_assets import router as assets_router
from app.api.v1.routes_auth import router as auth_router
from app.api.v1.routes_kyc import router as kyc_router
from app.api.v1.routes_market import liquidity_router, marketplace_router
from app.core.config import Settings
from app.schemas.common import HealthResponse


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(kyc_router, prefix="/kyc", tags=["kyc"])
api_router.include_router(assets_router, prefix="/assets", tags=["assets"])
api_router.include_router(marketplace_router, prefix="/marketplace", tags=["marketplace"])
api_router.include_router(liquidity_router, prefix="/liquidity", tags=["liquidity"])
api_router.include_router(activity_router, prefix="/activity", tags=["activity"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])


@api_router.get("/health", response_model=HealthResponse, tags=["health"])
def health(settings: Settings = Depends(get_settings)):
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.VERSION,
        environment=settings.environment,
    )
