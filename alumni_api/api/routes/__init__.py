"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from alumni_api.api.routes.auth_routes import router as auth_router
from alumni_api.api.routes.alumni_routes import router as alumni_router
from alumni_api.api.routes.pekerjaan_routes import router as pekerjaan_router
from alumni_api.api.routes.trash_routes import router as trash_router
from alumni_api.api.routes.user_routes import router as user_router
from alumni_api.api.routes.file_routes import router as file_router
from alumni_api.schemas.schemas import ErrorResponse

# Main API router; every failure shares the error envelope
api_router = APIRouter(
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)}
)

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(alumni_router)
api_router.include_router(pekerjaan_router)
api_router.include_router(trash_router)
api_router.include_router(user_router)
api_router.include_router(file_router)
