"""
MongoDB Service - typed accessors for document collections.

Collections in this database:
1. alumni            - Alumni profiles, each optionally owned by a user
2. pekerjaan_alumni  - Employment history entries, one alumni each
3. users             - Accounts (admin / user)
4. photos            - Metadata of uploaded alumni photos
5. certificates      - Metadata of uploaded alumni certificates

Every document carries a ``deleted`` flag. Normal reads only see
``deleted: False``; the trash reads the opposite.

These classes only talk to MongoDB. Validation, authorization and
deadlines are the job of the entity services.
"""

import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from alumni_api.core.errors import ValidationError
from alumni_api.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPERS
# ============================================================

def to_object_id(value: Any, label: str = "ID") -> ObjectId:
    """Parse a hex string into an ObjectId, or raise ValidationError."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValidationError(f"Invalid {label}")
    return ObjectId(value)


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict (``_id`` -> ``id``)."""
    if doc is None:
        return None
    out = {}
    for key, value in doc.items():
        if key == "_id":
            out["id"] = str(value)
        elif isinstance(value, ObjectId):
            out[key] = str(value)
        else:
            out[key] = value
    return out


def search_filter(search: str, fields: Iterable[str], base: Optional[dict] = None) -> dict:
    """Case-insensitive substring match of ``search`` over any of ``fields``."""
    query = dict(base or {})
    if search:
        pattern = re.escape(search)
        query["$or"] = [{field: {"$regex": pattern, "$options": "i"}} for field in fields]
    return query


def sort_spec(sort_by: str, direction: int) -> list:
    # _id as tie-breaker keeps page boundaries stable
    spec = [(sort_by, direction)]
    if sort_by != "_id":
        spec.append(("_id", direction))
    return spec


class _BaseCollection:
    name: str = ""
    search_fields: tuple = ()

    def __init__(self, db: Optional[Database] = None):
        self.collection: Collection = get_collection(COLLECTIONS[self.name], db)

    def find_by_id(self, oid: ObjectId, include_deleted: bool = False) -> Optional[dict]:
        query: Dict[str, Any] = {"_id": oid}
        if not include_deleted:
            query["deleted"] = False
        return self.collection.find_one(query)

    def find_page(self, search: str, sort_by: str, direction: int, skip: int, limit: int) -> List[dict]:
        cursor = (
            self.collection.find(search_filter(search, self.search_fields, {"deleted": False}))
            .sort(sort_spec(sort_by, direction))
            .skip(skip)
            .limit(limit)
        )
        return list(cursor)

    def count(self, search: str = "") -> int:
        return self.collection.count_documents(
            search_filter(search, self.search_fields, {"deleted": False})
        )

    def insert(self, doc: dict) -> dict:
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def set_deleted(self, oid: ObjectId, deleted: bool = True) -> bool:
        """Flip the deleted flag. Returns False when no document has this id."""
        result = self.collection.update_one({"_id": oid}, {"$set": {"deleted": deleted}})
        return result.matched_count > 0


# ============================================================
# ALUMNI COLLECTION
# ============================================================

class AlumniCollection(_BaseCollection):
    name = "alumni"
    search_fields = ("nim", "nama", "jurusan", "email")

    def find_by_user_id(self, user_id: ObjectId) -> Optional[dict]:
        """Alumni profile owned by a user. Ignores the deleted flag: ownership outlives the profile."""
        return self.collection.find_one({"user_id": user_id})

    def find_all_active(self) -> List[dict]:
        return list(self.collection.find({"deleted": False}).sort("created_at", -1))

    def replace_fields(self, oid: ObjectId, fields: dict) -> Optional[dict]:
        """Overwrite mutable fields of a live profile; returns the new document."""
        return self.collection.find_one_and_update(
            {"_id": oid, "deleted": False},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )

    def delete(self, oid: ObjectId) -> bool:
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0


# ============================================================
# PEKERJAAN (EMPLOYMENT) COLLECTION
# ============================================================

class PekerjaanCollection(_BaseCollection):
    name = "pekerjaan"
    search_fields = ("nama_perusahaan", "posisi_jabatan", "bidang_industri", "lokasi_kerja")

    def find_by_alumni(self, alumni_id: ObjectId) -> List[dict]:
        cursor = self.collection.find({"alumni_id": alumni_id, "deleted": False}).sort("created_at", -1)
        return list(cursor)

    def alumni_ids_with_records(self) -> Set[ObjectId]:
        """Alumni ids referenced by at least one live employment record."""
        return set(self.collection.distinct("alumni_id", {"deleted": False}))

    def replace_fields(self, oid: ObjectId, fields: dict) -> Optional[dict]:
        return self.collection.find_one_and_update(
            {"_id": oid, "deleted": False},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )

    def soft_delete_by_alumni(self, alumni_id: ObjectId) -> int:
        result = self.collection.update_many({"alumni_id": alumni_id}, {"$set": {"deleted": True}})
        return result.modified_count

    def _trashed_query(self, oid: ObjectId, alumni_id: Optional[ObjectId]) -> dict:
        query: Dict[str, Any] = {"_id": oid, "deleted": True}
        if alumni_id is not None:
            query["alumni_id"] = alumni_id
        return query

    def restore(self, oid: ObjectId, alumni_id: Optional[ObjectId] = None) -> bool:
        """Clear the flag of a trashed record, optionally only if it still belongs to ``alumni_id``."""
        result = self.collection.update_one(
            self._trashed_query(oid, alumni_id), {"$set": {"deleted": False}}
        )
        return result.matched_count > 0

    def hard_delete(self, oid: ObjectId, alumni_id: Optional[ObjectId] = None) -> bool:
        result = self.collection.delete_one(self._trashed_query(oid, alumni_id))
        return result.deleted_count > 0

    def find_trashed(self, alumni_id: Optional[ObjectId] = None) -> List[dict]:
        query: Dict[str, Any] = {"deleted": True}
        if alumni_id is not None:
            query["alumni_id"] = alumni_id
        return list(self.collection.find(query).sort("updated_at", -1))


# ============================================================
# USERS COLLECTION
# ============================================================

class UserCollection(_BaseCollection):
    name = "users"
    search_fields = ("username", "email")

    def find_by_username(self, username: str) -> Optional[dict]:
        return self.collection.find_one({"username": username})

    def find_by_email(self, email: str) -> Optional[dict]:
        return self.collection.find_one({"email": email})


# ============================================================
# FILE METADATA COLLECTIONS
# ============================================================

class FileCollection(_BaseCollection):
    """Metadata of uploaded files; ``kind`` is "photos" or "certificates"."""

    def __init__(self, kind: str, db: Optional[Database] = None):
        self.name = kind
        super().__init__(db)

    def find_latest_by_alumni(self, alumni_id: ObjectId) -> Optional[dict]:
        return self.collection.find_one(
            {"alumni_id": alumni_id, "deleted": False},
            sort=[("uploaded_at", -1)]
        )


def utcnow() -> datetime:
    # BSON keeps millisecond precision; truncate so stored and returned values match
    now = datetime.utcnow()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
