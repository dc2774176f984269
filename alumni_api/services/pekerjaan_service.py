"""
Pekerjaan Service - employment history of alumni, including the trash.

Lifecycle of a record (see services.lifecycle):
    ACTIVE -> SOFT_DELETED -> ACTIVE (restore) | removed (permanent delete)

Admins may trash / restore / purge any record. A regular user may only
touch records of the alumni profile linked to their account. For those
users the restore / purge write is additionally filtered by alumni_id,
so a record that changed hands in between is left alone.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from bson import ObjectId
from pymongo.database import Database

from alumni_api.core.errors import ForbiddenError, NotFoundError, ValidationError
from alumni_api.core.permissions import ensure_allowed
from alumni_api.db.mongodb import db_operation
from alumni_api.schemas.schemas import (
    CurrentUser, MetaInfo, PekerjaanCreate, PekerjaanResponse, PekerjaanUpdate
)
from alumni_api.services.lifecycle import Transition, check_transition
from alumni_api.services.mongo_service import (
    AlumniCollection, PekerjaanCollection, serialize_doc, to_object_id, utcnow
)
from alumni_api.utils.pagination import ListQuery, build_meta

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

# Checked in this order; the first empty one is reported
REQUIRED_FIELDS = (
    "nama_perusahaan",
    "posisi_jabatan",
    "bidang_industri",
    "lokasi_kerja",
    "tanggal_mulai_kerja",
    "status_pekerjaan",
)


def parse_date(value: str, field: str) -> datetime:
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must use the YYYY-MM-DD format")


def check_required(request: PekerjaanUpdate) -> None:
    for field in REQUIRED_FIELDS:
        if not getattr(request, field):
            raise ValidationError(f"{field} is required")


def parse_dates(request: PekerjaanUpdate) -> Tuple[datetime, Optional[datetime]]:
    """Returns (start, end); end stays None when the request leaves it empty."""
    start = parse_date(request.tanggal_mulai_kerja, "tanggal_mulai_kerja")
    end = None
    if request.tanggal_selesai_kerja:
        end = parse_date(request.tanggal_selesai_kerja, "tanggal_selesai_kerja")
    return start, end


def to_pekerjaan_response(doc: dict) -> PekerjaanResponse:
    data = serialize_doc(doc)
    for field in ("tanggal_mulai_kerja", "tanggal_selesai_kerja"):
        if isinstance(data.get(field), datetime):
            data[field] = data[field].date()
    return PekerjaanResponse(**data)


class PekerjaanService:

    def __init__(self, db: Optional[Database] = None):
        self.pekerjaan = PekerjaanCollection(db)
        self.alumni = AlumniCollection(db)

    # --------------------------------------------------------
    # Ownership
    # --------------------------------------------------------

    def _owner_of(self, record: dict) -> Optional[str]:
        """User id owning the alumni a record belongs to (None if unlinked)."""
        alumni = self.alumni.find_by_id(record["alumni_id"], include_deleted=True)
        if alumni is None or alumni.get("user_id") is None:
            return None
        return str(alumni["user_id"])

    def _own_alumni_id(self, actor: CurrentUser) -> ObjectId:
        alumni = self.alumni.find_by_user_id(ObjectId(actor.user_id))
        if alumni is None:
            raise ForbiddenError("No alumni profile is linked to this account")
        return alumni["_id"]

    def _load_for(self, record_id: str, actor: CurrentUser, transition: Transition) -> dict:
        """
        Fetch a record, check that ``actor`` may touch it, then that its state allows ``transition``.

        Ownership goes first so a stranger learns nothing about the trash state of a record.
        """
        oid = to_object_id(record_id, "pekerjaan ID")
        record = self.pekerjaan.find_by_id(oid, include_deleted=True)
        if record is not None and not actor.is_admin:
            ensure_allowed(actor, self._owner_of(record), "You may only modify your own employment records")
        check_transition(record, transition)
        return record

    # --------------------------------------------------------
    # Reads
    # --------------------------------------------------------

    def get_all(self, query: ListQuery) -> Tuple[List[PekerjaanResponse], MetaInfo]:
        with db_operation():
            docs = self.pekerjaan.find_page(
                query.search, query.sort_by, query.direction, query.offset, query.limit
            )
            total = self.pekerjaan.count(query.search)
        return [to_pekerjaan_response(d) for d in docs], build_meta(query, total)

    def get_by_id(self, record_id: str) -> PekerjaanResponse:
        oid = to_object_id(record_id, "pekerjaan ID")
        with db_operation():
            doc = self.pekerjaan.find_by_id(oid)
        if doc is None:
            raise NotFoundError("Pekerjaan not found")
        return to_pekerjaan_response(doc)

    def get_by_alumni_id(self, alumni_id: str, actor: CurrentUser) -> List[PekerjaanResponse]:
        oid = to_object_id(alumni_id, "alumni ID")
        with db_operation():
            if not actor.is_admin:
                alumni = self.alumni.find_by_id(oid, include_deleted=True)
                owner = str(alumni["user_id"]) if alumni and alumni.get("user_id") else None
                ensure_allowed(actor, owner, "You may only view your own employment records")
            docs = self.pekerjaan.find_by_alumni(oid)
        return [to_pekerjaan_response(d) for d in docs]

    def get_trashed(self, actor: CurrentUser) -> List[PekerjaanResponse]:
        """Admins see the whole trash, users only their own alumni's records."""
        with db_operation():
            if actor.is_admin:
                docs = self.pekerjaan.find_trashed()
            else:
                docs = self.pekerjaan.find_trashed(self._own_alumni_id(actor))
        return [to_pekerjaan_response(d) for d in docs]

    # --------------------------------------------------------
    # Writes
    # --------------------------------------------------------

    def create(self, request: PekerjaanCreate) -> PekerjaanResponse:
        if not request.alumni_id:
            raise ValidationError("alumni_id is required")
        check_required(request)
        alumni_oid = to_object_id(request.alumni_id, "alumni_id")
        start, end = parse_dates(request)

        now = utcnow()
        doc = request.model_dump(exclude={"alumni_id"})
        doc.update({
            "alumni_id": alumni_oid,
            "tanggal_mulai_kerja": start,
            "tanggal_selesai_kerja": end,
            "deleted": False,
            "created_at": now,
            "updated_at": now,
        })
        with db_operation():
            if self.alumni.find_by_id(alumni_oid) is None:
                raise NotFoundError("Alumni not found")
            self.pekerjaan.insert(doc)
        logger.info("Pekerjaan %s created for alumni %s", doc["_id"], alumni_oid)
        return to_pekerjaan_response(doc)

    def update(self, record_id: str, request: PekerjaanUpdate) -> PekerjaanResponse:
        oid = to_object_id(record_id, "pekerjaan ID")
        check_required(request)
        start, end = parse_dates(request)
        fields = request.model_dump()
        fields.update({
            "tanggal_mulai_kerja": start,
            "tanggal_selesai_kerja": end,
            "updated_at": utcnow(),
        })
        with db_operation():
            doc = self.pekerjaan.replace_fields(oid, fields)
        if doc is None:
            raise NotFoundError("Pekerjaan not found")
        return to_pekerjaan_response(doc)

    def soft_delete(self, record_id: str, actor: CurrentUser) -> None:
        with db_operation():
            record = self._load_for(record_id, actor, Transition.SOFT_DELETE)
            self.pekerjaan.set_deleted(record["_id"], True)
        logger.info("Pekerjaan %s moved to trash by %s", record["_id"], actor.username)

    def restore(self, record_id: str, actor: CurrentUser) -> None:
        with db_operation():
            record = self._load_for(record_id, actor, Transition.RESTORE)
            scope = None if actor.is_admin else record["alumni_id"]
            if not self.pekerjaan.restore(record["_id"], scope):
                raise NotFoundError("Data not found or not in trash")
        logger.info("Pekerjaan %s restored by %s", record["_id"], actor.username)

    def hard_delete(self, record_id: str, actor: CurrentUser) -> None:
        with db_operation():
            record = self._load_for(record_id, actor, Transition.PURGE)
            scope = None if actor.is_admin else record["alumni_id"]
            if not self.pekerjaan.hard_delete(record["_id"], scope):
                raise NotFoundError("Data not found or not in trash")
        logger.info("Pekerjaan %s permanently deleted by %s", record["_id"], actor.username)
