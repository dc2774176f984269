"""
User Routes (admin only)

GET /users - Paginated list of accounts
GET /users/{id} - Get one account
DELETE /users/{id} - Soft delete an account
"""

from fastapi import APIRouter, Depends

from alumni_api.api.deps import get_user_service, list_query
from alumni_api.core.auth import require_admin
from alumni_api.schemas.schemas import (
    CurrentUser, DataResponse, MessageResponse, PageResponse, UserResponse
)
from alumni_api.services.user_service import UserService
from alumni_api.utils.pagination import ListQuery

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=PageResponse[UserResponse])
def list_users(
    query: ListQuery = Depends(list_query),
    admin: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    data, meta = service.get_all(query)
    return PageResponse(data=data, meta=meta)


@router.get("/{user_id}", response_model=DataResponse[UserResponse])
def get_user(
    user_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return DataResponse(data=service.get_by_id(user_id))


@router.delete("/{user_id}", response_model=MessageResponse)
def soft_delete_user(
    user_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    service.soft_delete(user_id)
    return MessageResponse(message="User deleted")
