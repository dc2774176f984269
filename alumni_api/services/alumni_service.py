"""
Alumni Service - business rules around alumni profiles.

Soft deleting an alumni also soft deletes its employment history.
The two writes are separate single-collection updates (no transaction):
if the second one fails the alumni stays trashed while its records
remain visible, and the caller gets a StorageError.
"""

import logging
from typing import List, Optional, Tuple

from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from alumni_api.core.errors import NotFoundError, StorageError, ValidationError
from alumni_api.db.mongodb import db_operation
from alumni_api.schemas.schemas import AlumniCreate, AlumniUpdate, AlumniResponse, MetaInfo
from alumni_api.services.mongo_service import (
    AlumniCollection, PekerjaanCollection, UserCollection, serialize_doc, to_object_id, utcnow
)
from alumni_api.utils.pagination import ListQuery, build_meta

logger = logging.getLogger(__name__)


def to_alumni_response(doc: dict) -> AlumniResponse:
    return AlumniResponse(**serialize_doc(doc))


class AlumniService:

    def __init__(self, db: Optional[Database] = None):
        self.alumni = AlumniCollection(db)
        self.pekerjaan = PekerjaanCollection(db)
        self.users = UserCollection(db)

    def get_all(self, query: ListQuery) -> Tuple[List[AlumniResponse], MetaInfo]:
        """Page of live alumni matching ``query.search`` over nim / nama / jurusan / email."""
        with db_operation():
            docs = self.alumni.find_page(
                query.search, query.sort_by, query.direction, query.offset, query.limit
            )
            total = self.alumni.count(query.search)
        return [to_alumni_response(d) for d in docs], build_meta(query, total)

    def get_by_id(self, alumni_id: str) -> AlumniResponse:
        oid = to_object_id(alumni_id, "alumni ID")
        with db_operation():
            doc = self.alumni.find_by_id(oid)
        if doc is None:
            raise NotFoundError("Alumni not found")
        return to_alumni_response(doc)

    def create(self, request: AlumniCreate) -> AlumniResponse:
        """
        Insert a new profile; fields are stored exactly as sent.

        A user account owns at most one profile, soft deleted ones included.
        """
        owner = to_object_id(request.user_id, "user ID") if request.user_id else None
        now = utcnow()
        doc = request.model_dump(exclude={"user_id"})
        doc.update({"user_id": owner, "deleted": False, "created_at": now, "updated_at": now})
        with db_operation():
            if owner is not None:
                self._check_owner_free(owner)
            try:
                self.alumni.insert(doc)
            except DuplicateKeyError:
                # lost a race against another profile for the same user
                raise ValidationError("This user already has an alumni profile")
        logger.info("Alumni %s created (nim=%s)", doc["_id"], request.nim)
        return to_alumni_response(doc)

    def _check_owner_free(self, owner: ObjectId) -> None:
        if self.users.find_by_id(owner) is None:
            raise NotFoundError("User not found")
        if self.alumni.find_by_user_id(owner) is not None:
            raise ValidationError("This user already has an alumni profile")

    def update(self, alumni_id: str, request: AlumniUpdate) -> AlumniResponse:
        oid = to_object_id(alumni_id, "alumni ID")
        fields = request.model_dump()
        fields["updated_at"] = utcnow()
        with db_operation():
            doc = self.alumni.replace_fields(oid, fields)
        if doc is None:
            raise NotFoundError("Alumni not found")
        return to_alumni_response(doc)

    def delete(self, alumni_id: str) -> None:
        """Permanent removal. Employment records are left untouched."""
        oid = to_object_id(alumni_id, "alumni ID")
        with db_operation():
            removed = self.alumni.delete(oid)
        if not removed:
            raise NotFoundError("Alumni not found")
        logger.info("Alumni %s permanently deleted", oid)

    def soft_delete(self, alumni_id: str) -> int:
        """
        Trash an alumni and every employment record pointing at it.

        Returns the number of employment records newly flagged.
        """
        oid = to_object_id(alumni_id, "alumni ID")
        with db_operation():
            found = self.alumni.set_deleted(oid, True)
        if not found:
            raise NotFoundError("Alumni not found")

        try:
            with db_operation():
                cascaded = self.pekerjaan.soft_delete_by_alumni(oid)
        except StorageError as e:
            logger.error("Alumni %s trashed but its employment records were not: %s", oid, e)
            raise StorageError(
                "Alumni was deleted but its employment records could not be deleted"
            ) from e

        logger.info("Alumni %s soft deleted, %d employment record(s) cascaded", oid, cascaded)
        return cascaded

    def get_without_pekerjaan(self) -> List[AlumniResponse]:
        """Live alumni that have no live employment record."""
        with db_operation():
            employed = self.pekerjaan.alumni_ids_with_records()
            docs = self.alumni.find_all_active()
        return [to_alumni_response(d) for d in docs if d["_id"] not in employed]
