"""
Alumni Routes

GET /alumni - Paginated list (page, limit, sortBy, order, search)
GET /alumni/tanpa-pekerjaan - Alumni without any employment record
GET /alumni/{id} - Get one alumni
POST /alumni - Create alumni (admin)
PUT /alumni/{id} - Update alumni (admin)
DELETE /alumni/{id} - Soft delete alumni and its employment records (admin)
DELETE /alumni/{id}/permanent - Permanently delete alumni (admin)
"""

from typing import List

from fastapi import APIRouter, Depends

from alumni_api.api.deps import get_alumni_service, list_query
from alumni_api.core.auth import get_current_user, require_admin
from alumni_api.schemas.schemas import (
    AlumniCreate, AlumniResponse, AlumniUpdate, CountedListResponse, CurrentUser,
    DataResponse, MessageResponse, PageResponse
)
from alumni_api.services.alumni_service import AlumniService
from alumni_api.utils.pagination import ListQuery

router = APIRouter(prefix="/alumni", tags=["Alumni"])


@router.get("", response_model=PageResponse[AlumniResponse])
def list_alumni(
    query: ListQuery = Depends(list_query),
    user: CurrentUser = Depends(get_current_user),
    service: AlumniService = Depends(get_alumni_service),
):
    data, meta = service.get_all(query)
    return PageResponse(data=data, meta=meta)


# Must stay above /{alumni_id}
@router.get("/tanpa-pekerjaan", response_model=CountedListResponse[AlumniResponse])
def list_without_pekerjaan(
    user: CurrentUser = Depends(get_current_user),
    service: AlumniService = Depends(get_alumni_service),
):
    """Alumni that have no live employment record."""
    data: List[AlumniResponse] = service.get_without_pekerjaan()
    return CountedListResponse(jumlah=len(data), data=data)


@router.get("/{alumni_id}", response_model=DataResponse[AlumniResponse])
def get_alumni(
    alumni_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: AlumniService = Depends(get_alumni_service),
):
    return DataResponse(data=service.get_by_id(alumni_id))


@router.post("", response_model=DataResponse[AlumniResponse], status_code=201)
def create_alumni(
    request: AlumniCreate,
    admin: CurrentUser = Depends(require_admin),
    service: AlumniService = Depends(get_alumni_service),
):
    return DataResponse(message="Alumni created", data=service.create(request))


@router.put("/{alumni_id}", response_model=DataResponse[AlumniResponse])
def update_alumni(
    alumni_id: str,
    request: AlumniUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: AlumniService = Depends(get_alumni_service),
):
    return DataResponse(message="Alumni updated", data=service.update(alumni_id, request))


@router.delete("/{alumni_id}", response_model=MessageResponse)
def soft_delete_alumni(
    alumni_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: AlumniService = Depends(get_alumni_service),
):
    """Moves the alumni and all of its employment records to the trash."""
    cascaded = service.soft_delete(alumni_id)
    return MessageResponse(message=f"Alumni deleted along with {cascaded} employment record(s)")


@router.delete("/{alumni_id}/permanent", response_model=MessageResponse)
def delete_alumni_permanently(
    alumni_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: AlumniService = Depends(get_alumni_service),
):
    service.delete(alumni_id)
    return MessageResponse(message="Alumni permanently deleted")
