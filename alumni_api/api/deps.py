"""
Route dependencies - services wired to the request's database and settings.
"""

from typing import Optional

from fastapi import Depends, Query
from pymongo.database import Database

from alumni_api.core.auth import TokenManager, get_token_manager
from alumni_api.core.config import Settings, get_settings
from alumni_api.db.mongodb import get_mongo_db
from alumni_api.services.alumni_service import AlumniService
from alumni_api.services.auth_service import AuthService
from alumni_api.services.file_service import FileService
from alumni_api.services.pekerjaan_service import PekerjaanService
from alumni_api.services.user_service import UserService
from alumni_api.utils.pagination import ListQuery, parse_list_query


def list_query(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
) -> ListQuery:
    # page / limit are taken as strings so junk falls back to defaults instead of 400
    return parse_list_query(page, limit, sort_by, order, search)


def get_alumni_service(db: Database = Depends(get_mongo_db)) -> AlumniService:
    return AlumniService(db)


def get_pekerjaan_service(db: Database = Depends(get_mongo_db)) -> PekerjaanService:
    return PekerjaanService(db)


def get_user_service(db: Database = Depends(get_mongo_db)) -> UserService:
    return UserService(db)


def get_auth_service(
    tokens: TokenManager = Depends(get_token_manager),
    db: Database = Depends(get_mongo_db),
) -> AuthService:
    return AuthService(tokens, db)


def get_file_service(
    settings: Settings = Depends(get_settings),
    db: Database = Depends(get_mongo_db),
) -> FileService:
    return FileService(settings.upload_dir, db)
