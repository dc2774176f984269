"""
File Service - photo and certificate uploads for alumni profiles.

Upload flow:
1. Validate the request (file present, alumni_id, size, MIME)
2. Alumni must exist; non-admins must own it
3. Write the file to disk
4. Insert metadata; on failure the written file is removed again
"""

import logging
from typing import Optional

from pymongo.database import Database

from alumni_api.core.errors import NotFoundError, StorageError, ValidationError
from alumni_api.core.permissions import ensure_allowed
from alumni_api.db.mongodb import db_operation
from alumni_api.schemas.schemas import CurrentUser, FileAssetResponse, FileKind
from alumni_api.services.mongo_service import (
    AlumniCollection, FileCollection, serialize_doc, to_object_id, utcnow
)
from alumni_api.utils.file_upload import (
    UPLOAD_RULES, remove_file, save_file, unique_filename, validate_upload
)

logger = logging.getLogger(__name__)


def to_file_response(doc: dict) -> FileAssetResponse:
    return FileAssetResponse(**serialize_doc(doc))


class FileService:

    def __init__(self, upload_dir: str, db: Optional[Database] = None):
        self.upload_dir = upload_dir
        self.db = db
        self.alumni = AlumniCollection(db)

    def _files(self, kind: FileKind) -> FileCollection:
        return FileCollection(UPLOAD_RULES[kind].subdir, self.db)

    def upload(
        self,
        kind: FileKind,
        filename: Optional[str],
        content_type: Optional[str],
        content: Optional[bytes],
        alumni_id: str,
        actor: CurrentUser,
    ) -> FileAssetResponse:
        if not filename or content is None:
            raise ValidationError("File is required")
        if not alumni_id:
            raise ValidationError("alumni_id is required")
        alumni_oid = to_object_id(alumni_id, "alumni ID")
        rule = validate_upload(kind, len(content), content_type)

        with db_operation():
            alumni = self.alumni.find_by_id(alumni_oid)
        if alumni is None:
            raise NotFoundError("Alumni not found")
        if not actor.is_admin:
            owner = str(alumni["user_id"]) if alumni.get("user_id") else None
            ensure_allowed(actor, owner, f"You may only upload a {kind.value} for your own alumni profile")

        new_name = unique_filename(filename)
        try:
            path = save_file(self.upload_dir, rule, new_name, content)
        except OSError as e:
            logger.error("Could not write %s upload %s: %s", kind.value, new_name, e)
            raise StorageError("Failed to save file") from e

        doc = {
            "alumni_id": alumni_oid,
            "user_id": to_object_id(actor.user_id, "user ID"),
            "file_name": new_name,
            "file_path": path,
            "file_size": len(content),
            "file_type": content_type,
            "uploaded_at": utcnow(),
            "deleted": False,
        }
        try:
            with db_operation():
                self._files(kind).insert(doc)
        except StorageError:
            # orphaned file on disk, undo the write
            logger.error("Metadata insert failed, removing orphan file %s", path)
            remove_file(path)
            raise

        logger.info("Stored %s %s for alumni %s", kind.value, new_name, alumni_oid)
        return to_file_response(doc)

    def get_by_alumni_id(self, kind: FileKind, alumni_id: str) -> FileAssetResponse:
        oid = to_object_id(alumni_id, "alumni ID")
        with db_operation():
            doc = self._files(kind).find_latest_by_alumni(oid)
        if doc is None:
            raise NotFoundError(f"No {kind.value} found for this alumni")
        return to_file_response(doc)

    def delete(self, kind: FileKind, file_id: str, actor: CurrentUser) -> None:
        oid = to_object_id(file_id, f"{kind.value} ID")
        files = self._files(kind)
        with db_operation():
            doc = files.find_by_id(oid)
        if doc is None:
            raise NotFoundError(f"{kind.value.capitalize()} not found")
        ensure_allowed(actor, str(doc["user_id"]), f"You may only delete a {kind.value} you uploaded")

        # a missing file on disk does not block removing the metadata
        remove_file(doc["file_path"])
        with db_operation():
            files.set_deleted(oid, True)
        logger.info("%s %s deleted by %s", kind.value.capitalize(), oid, actor.username)
