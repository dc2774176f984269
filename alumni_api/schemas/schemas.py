"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names follow the stored documents (nim, nama, jurusan, ...).
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Generic, List, Optional, TypeVar
from datetime import date, datetime
from enum import Enum


T = TypeVar("T")


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    admin = "admin"
    user = "user"


class FileKind(str, Enum):
    photo = "photo"
    certificate = "certificate"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class CurrentUser(BaseModel):
    """Identity decoded from a bearer token."""
    user_id: str
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None

class LoginRequest(BaseModel):
    # username or email
    username: str
    password: str

class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    role: UserRole
    deleted: bool = False
    created_at: Optional[datetime] = None

class TokenResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    user: UserResponse


# ============================================================
# ALUMNI SCHEMAS
# ============================================================

class AlumniCreate(BaseModel):
    nim: str = ""
    nama: str = ""
    jurusan: str = ""
    angkatan: int = 0
    tahun_lulus: int = 0
    email: str = ""
    no_telepon: str = ""
    alamat: Optional[str] = None
    # Owning user account; links the profile for ownership checks
    user_id: Optional[str] = None

class AlumniUpdate(BaseModel):
    nama: str = ""
    jurusan: str = ""
    angkatan: int = 0
    tahun_lulus: int = 0
    email: str = ""
    no_telepon: str = ""
    alamat: Optional[str] = None

class AlumniResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    nim: str
    nama: str
    jurusan: str
    angkatan: int
    tahun_lulus: int
    email: str
    no_telepon: str
    alamat: Optional[str] = None
    deleted: bool = False
    created_at: datetime
    updated_at: datetime


# ============================================================
# PEKERJAAN (EMPLOYMENT) SCHEMAS
# Dates arrive as YYYY-MM-DD strings and are validated by the service
# ============================================================

class PekerjaanUpdate(BaseModel):
    nama_perusahaan: str = ""
    posisi_jabatan: str = ""
    bidang_industri: str = ""
    lokasi_kerja: str = ""
    gaji_range: str = ""
    tanggal_mulai_kerja: str = ""
    tanggal_selesai_kerja: Optional[str] = None
    status_pekerjaan: str = ""
    deskripsi_pekerjaan: str = ""

class PekerjaanCreate(PekerjaanUpdate):
    alumni_id: str = ""

class PekerjaanResponse(BaseModel):
    id: str
    alumni_id: str
    nama_perusahaan: str
    posisi_jabatan: str
    bidang_industri: str
    lokasi_kerja: str
    gaji_range: str = ""
    tanggal_mulai_kerja: date
    tanggal_selesai_kerja: Optional[date] = None
    status_pekerjaan: str
    deskripsi_pekerjaan: str = ""
    deleted: bool = False
    created_at: datetime
    updated_at: datetime


# ============================================================
# FILE SCHEMAS
# ============================================================

class FileAssetResponse(BaseModel):
    id: str
    alumni_id: str
    user_id: str
    file_name: str
    file_path: str
    file_size: int
    file_type: str
    uploaded_at: datetime


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MetaInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    pages: int
    sort_by: str = Field(alias="sortBy")
    order: str
    search: str

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: T

class PageResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    meta: MetaInfo

class CountedListResponse(BaseModel, Generic[T]):
    success: bool = True
    jumlah: int
    data: List[T]

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
