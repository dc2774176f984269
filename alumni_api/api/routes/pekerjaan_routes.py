"""
Pekerjaan (Employment) Routes

GET /pekerjaan - Paginated list
GET /pekerjaan/alumni/{alumni_id} - Records of one alumni (admin or owner)
GET /pekerjaan/{id} - Get one record
POST /pekerjaan - Create record (admin)
PUT /pekerjaan/{id} - Update record (admin)
DELETE /pekerjaan/{id} - Move record to trash (admin or owner)
"""

from fastapi import APIRouter, Depends

from alumni_api.api.deps import get_pekerjaan_service, list_query
from alumni_api.core.auth import get_current_user, require_admin
from alumni_api.schemas.schemas import (
    CountedListResponse, CurrentUser, DataResponse, MessageResponse, PageResponse,
    PekerjaanCreate, PekerjaanResponse, PekerjaanUpdate
)
from alumni_api.services.pekerjaan_service import PekerjaanService
from alumni_api.utils.pagination import ListQuery

router = APIRouter(prefix="/pekerjaan", tags=["Pekerjaan"])


@router.get("", response_model=PageResponse[PekerjaanResponse])
def list_pekerjaan(
    query: ListQuery = Depends(list_query),
    user: CurrentUser = Depends(get_current_user),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    data, meta = service.get_all(query)
    return PageResponse(data=data, meta=meta)


@router.get("/alumni/{alumni_id}", response_model=CountedListResponse[PekerjaanResponse])
def list_pekerjaan_by_alumni(
    alumni_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    data = service.get_by_alumni_id(alumni_id, user)
    return CountedListResponse(jumlah=len(data), data=data)


@router.get("/{record_id}", response_model=DataResponse[PekerjaanResponse])
def get_pekerjaan(
    record_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    return DataResponse(data=service.get_by_id(record_id))


@router.post("", response_model=DataResponse[PekerjaanResponse], status_code=201)
def create_pekerjaan(
    request: PekerjaanCreate,
    admin: CurrentUser = Depends(require_admin),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    return DataResponse(message="Pekerjaan created", data=service.create(request))


@router.put("/{record_id}", response_model=DataResponse[PekerjaanResponse])
def update_pekerjaan(
    record_id: str,
    request: PekerjaanUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    return DataResponse(message="Pekerjaan updated", data=service.update(record_id, request))


@router.delete("/{record_id}", response_model=MessageResponse)
def soft_delete_pekerjaan(
    record_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    service.soft_delete(record_id, user)
    return MessageResponse(message="Pekerjaan moved to trash")
