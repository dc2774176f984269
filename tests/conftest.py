"""Shared fixtures: in-memory MongoDB, seeded accounts, tokens and a test client."""

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from alumni_api.core.auth import TokenManager, hash_password
from alumni_api.core.config import Settings, get_settings
from alumni_api.db.mongodb import get_mongo_db
from alumni_api.schemas.schemas import AlumniCreate, CurrentUser, PekerjaanCreate, UserRole
from alumni_api.services.alumni_service import AlumniService
from alumni_api.services.mongo_service import utcnow
from alumni_api.services.pekerjaan_service import PekerjaanService

PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret_key="test-jwt-secret",
        upload_dir=str(tmp_path / "uploads"),
        log_level="WARNING",
    )


@pytest.fixture
def db():
    return mongomock.MongoClient()["alumni_test"]


@pytest.fixture
def tokens(settings):
    return TokenManager.from_settings(settings)


def _seed_user(db, username, role):
    doc = {
        "_id": ObjectId(),
        "username": username,
        "email": f"{username}@example.com",
        "password": hash_password(PASSWORD),
        "role": role.value,
        "deleted": False,
        "created_at": utcnow(),
    }
    db["users"].insert_one(doc)
    return CurrentUser(user_id=str(doc["_id"]), username=username, role=role)


@pytest.fixture
def admin(db):
    return _seed_user(db, "admin", UserRole.admin)


@pytest.fixture
def alice(db):
    return _seed_user(db, "alice", UserRole.user)


@pytest.fixture
def bob(db):
    return _seed_user(db, "bob", UserRole.user)


@pytest.fixture
def make_alumni(db):
    """Create an alumni profile, optionally owned by a user."""
    service = AlumniService(db)

    def _make(owner=None, **fields):
        data = {
            "nim": "2100001",
            "nama": "Budi Santoso",
            "jurusan": "Informatika",
            "angkatan": 2017,
            "tahun_lulus": 2021,
            "email": "budi@example.com",
            "no_telepon": "08123456789",
        }
        data.update(fields)
        if owner is not None:
            data["user_id"] = owner.user_id
        return service.create(AlumniCreate(**data))

    return _make


@pytest.fixture
def make_pekerjaan(db):
    service = PekerjaanService(db)

    def _make(alumni_id, **fields):
        data = {
            "alumni_id": alumni_id,
            "nama_perusahaan": "PT Maju Jaya",
            "posisi_jabatan": "Backend Engineer",
            "bidang_industri": "Teknologi",
            "lokasi_kerja": "Jakarta",
            "gaji_range": "10-15 juta",
            "tanggal_mulai_kerja": "2021-08-01",
            "status_pekerjaan": "aktif",
        }
        data.update(fields)
        return service.create(PekerjaanCreate(**data))

    return _make


@pytest.fixture
def app(db, settings):
    from alumni_api.main import create_app

    application = create_app(settings)
    application.dependency_overrides[get_mongo_db] = lambda: db
    application.dependency_overrides[get_settings] = lambda: settings
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create test client (startup events are not run)."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_header(tokens):
    def _header(user: CurrentUser) -> dict:
        token = tokens.create_access_token(user.user_id, user.username, user.role.value)
        return {"Authorization": f"Bearer {token}"}

    return _header
