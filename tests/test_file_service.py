"""Tests for FileService uploads, lookups and deletes."""

import io
import os
from datetime import datetime
from unittest.mock import patch

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from alumni_api.core.errors import ForbiddenError, NotFoundError, StorageError, ValidationError
from alumni_api.schemas.schemas import FileKind
from alumni_api.services.file_service import FileService
from alumni_api.services.mongo_service import FileCollection
from alumni_api.utils.file_upload import (
    MB, UPLOAD_RULES, get_file_extension, read_upload, validate_upload
)

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 512
PDF = b"%PDF-1.4\n" + b"0" * 512


@pytest.fixture
def service(db, settings):
    return FileService(settings.upload_dir, db)


def _stored_files(settings, subdir):
    directory = os.path.join(settings.upload_dir, subdir)
    if not os.path.isdir(directory):
        return []
    return os.listdir(directory)


class TestUpload:

    def test_photo(self, service, db, settings, make_alumni, alice):
        alumni = make_alumni(owner=alice)
        asset = service.upload(FileKind.photo, "me.png", "image/png", PNG, alumni.id, alice)

        assert asset.file_name.endswith(".png")
        assert asset.file_name != "me.png"
        assert asset.file_size == len(PNG)
        assert asset.user_id == alice.user_id
        assert os.path.isfile(asset.file_path)
        assert os.path.dirname(asset.file_path) == os.path.join(settings.upload_dir, "photos")
        assert db["photos"].count_documents({}) == 1

    def test_oversized_photo_leaves_nothing_behind(self, service, db, settings, make_alumni, admin):
        alumni = make_alumni()
        content = b"\x00" * int(1.5 * MB)

        with pytest.raises(ValidationError) as exc:
            service.upload(FileKind.photo, "big.jpg", "image/jpeg", content, alumni.id, admin)

        assert exc.value.status_code == 400
        assert _stored_files(settings, "photos") == []
        assert db["photos"].count_documents({}) == 0

    def test_certificate_allows_two_megabytes(self, service, make_alumni, admin):
        alumni = make_alumni()
        content = PDF + b"0" * int(1.5 * MB)
        asset = service.upload(FileKind.certificate, "ijazah.pdf", "application/pdf", content, alumni.id, admin)
        assert asset.file_type == "application/pdf"

    @pytest.mark.parametrize("kind, content_type", [
        (FileKind.photo, "image/gif"),
        (FileKind.photo, "application/pdf"),
        (FileKind.certificate, "image/png"),
        (FileKind.certificate, None),
    ])
    def test_rejected_mime_types(self, service, make_alumni, admin, kind, content_type):
        with pytest.raises(ValidationError):
            service.upload(kind, "file.bin", content_type, PNG, make_alumni().id, admin)

    def test_missing_inputs(self, service, make_alumni, admin):
        alumni = make_alumni()
        with pytest.raises(ValidationError):
            service.upload(FileKind.photo, None, None, None, alumni.id, admin)
        with pytest.raises(ValidationError):
            service.upload(FileKind.photo, "a.png", "image/png", PNG, "", admin)
        with pytest.raises(ValidationError):
            service.upload(FileKind.photo, "a.png", "image/png", PNG, "123", admin)

    def test_unknown_alumni(self, service, admin):
        with pytest.raises(NotFoundError):
            service.upload(FileKind.photo, "a.png", "image/png", PNG, str(ObjectId()), admin)

    def test_only_owner_may_upload(self, service, settings, make_alumni, alice, bob):
        alumni = make_alumni(owner=alice)
        with pytest.raises(ForbiddenError):
            service.upload(FileKind.photo, "a.png", "image/png", PNG, alumni.id, bob)
        assert _stored_files(settings, "photos") == []

    def test_failed_metadata_insert_removes_file(self, service, db, settings, make_alumni, admin):
        alumni = make_alumni()
        with patch.object(FileCollection, "insert", side_effect=PyMongoError("write failed")):
            with pytest.raises(StorageError):
                service.upload(FileKind.photo, "a.png", "image/png", PNG, alumni.id, admin)

        assert _stored_files(settings, "photos") == []
        assert db["photos"].count_documents({}) == 0


class TestLookupAndDelete:

    def test_latest_upload_is_returned(self, service, db, make_alumni, admin):
        alumni = make_alumni()
        old = service.upload(FileKind.photo, "old.png", "image/png", PNG, alumni.id, admin)
        db["photos"].update_one({"_id": ObjectId(old.id)}, {"$set": {"uploaded_at": datetime(2020, 1, 1)}})
        newest = service.upload(FileKind.photo, "new.jpg", "image/jpeg", PNG, alumni.id, admin)

        found = service.get_by_alumni_id(FileKind.photo, alumni.id)
        assert found.id == newest.id
        assert found.file_name.endswith(".jpg")

    def test_nothing_uploaded(self, service, make_alumni):
        with pytest.raises(NotFoundError):
            service.get_by_alumni_id(FileKind.certificate, make_alumni().id)

    def test_uploader_can_delete(self, service, db, make_alumni, alice):
        alumni = make_alumni(owner=alice)
        asset = service.upload(FileKind.photo, "a.png", "image/png", PNG, alumni.id, alice)

        service.delete(FileKind.photo, asset.id, alice)

        assert not os.path.exists(asset.file_path)
        assert db["photos"].find_one({"_id": ObjectId(asset.id)})["deleted"] is True
        with pytest.raises(NotFoundError):
            service.get_by_alumni_id(FileKind.photo, alumni.id)

    def test_other_user_cannot_delete(self, service, make_alumni, alice, bob):
        asset = service.upload(FileKind.photo, "a.png", "image/png", PNG, make_alumni(owner=alice).id, alice)
        with pytest.raises(ForbiddenError):
            service.delete(FileKind.photo, asset.id, bob)
        assert os.path.exists(asset.file_path)

    def test_missing_file_on_disk_does_not_block_delete(self, service, db, make_alumni, admin):
        asset = service.upload(FileKind.certificate, "c.pdf", "application/pdf", PDF, make_alumni().id, admin)
        os.remove(asset.file_path)

        service.delete(FileKind.certificate, asset.id, admin)
        assert db["certificates"].find_one({"_id": ObjectId(asset.id)})["deleted"] is True

    def test_delete_unknown(self, service, admin):
        with pytest.raises(NotFoundError):
            service.delete(FileKind.photo, str(ObjectId()), admin)


def test_get_file_extension():
    assert get_file_extension("photo.JPG") == ".JPG"
    assert get_file_extension("archive.tar.gz") == ".gz"
    assert get_file_extension("noext") == ""


@pytest.mark.parametrize("kind", [FileKind.photo, FileKind.certificate])
def test_read_upload_stops_one_byte_past_the_limit(kind):
    limit = UPLOAD_RULES[kind].max_bytes
    stream = io.BytesIO(b"0" * (limit * 3))

    content = read_upload(stream, kind)

    assert len(content) == limit + 1
    assert stream.tell() == limit + 1
    with pytest.raises(ValidationError):
        validate_upload(kind, len(content), next(iter(UPLOAD_RULES[kind].allowed_types)))
