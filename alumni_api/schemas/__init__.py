"""
Schemas module - Request/Response schemas for API endpoints.

- Request schemas (what API accepts)
- Response schemas (what API returns)
"""

from alumni_api.schemas.schemas import (
    UserRole, FileKind, CurrentUser,
    AlumniCreate, AlumniUpdate, AlumniResponse,
    PekerjaanCreate, PekerjaanUpdate, PekerjaanResponse,
    FileAssetResponse, UserResponse, MetaInfo,
)

__all__ = [
    "UserRole", "FileKind", "CurrentUser",
    "AlumniCreate", "AlumniUpdate", "AlumniResponse",
    "PekerjaanCreate", "PekerjaanUpdate", "PekerjaanResponse",
    "FileAssetResponse", "UserResponse", "MetaInfo",
]
