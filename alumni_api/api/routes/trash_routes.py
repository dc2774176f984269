"""
Trash Routes

GET /trash/pekerjaan - Trashed employment records (admin: all, user: own)
PUT /trash/pekerjaan/{id}/restore - Restore a trashed record
DELETE /trash/pekerjaan/{id}/permanent - Permanently delete a trashed record
"""

from fastapi import APIRouter, Depends

from alumni_api.api.deps import get_pekerjaan_service
from alumni_api.core.auth import get_current_user
from alumni_api.schemas.schemas import (
    CountedListResponse, CurrentUser, MessageResponse, PekerjaanResponse
)
from alumni_api.services.pekerjaan_service import PekerjaanService

router = APIRouter(prefix="/trash", tags=["Trash"])


@router.get("/pekerjaan", response_model=CountedListResponse[PekerjaanResponse])
def list_trashed_pekerjaan(
    user: CurrentUser = Depends(get_current_user),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    data = service.get_trashed(user)
    return CountedListResponse(jumlah=len(data), data=data)


@router.put("/pekerjaan/{record_id}/restore", response_model=MessageResponse)
def restore_pekerjaan(
    record_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    service.restore(record_id, user)
    return MessageResponse(message="Pekerjaan restored")


@router.delete("/pekerjaan/{record_id}/permanent", response_model=MessageResponse)
def delete_pekerjaan_permanently(
    record_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PekerjaanService = Depends(get_pekerjaan_service),
):
    service.hard_delete(record_id, user)
    return MessageResponse(message="Pekerjaan permanently deleted")
