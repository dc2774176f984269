"""Tests for PekerjaanService: validation, ownership and the trash."""

from datetime import date

import pytest
from bson import ObjectId

from alumni_api.core.errors import ForbiddenError, NotFoundError, ValidationError
from alumni_api.schemas.schemas import PekerjaanCreate, PekerjaanUpdate
from alumni_api.services.alumni_service import AlumniService
from alumni_api.services.pekerjaan_service import PekerjaanService
from alumni_api.utils.pagination import parse_list_query


@pytest.fixture
def service(db):
    return PekerjaanService(db)


def _request(alumni_id, **overrides):
    data = {
        "alumni_id": alumni_id,
        "nama_perusahaan": "PT Maju Jaya",
        "posisi_jabatan": "Analyst",
        "bidang_industri": "Keuangan",
        "lokasi_kerja": "Bandung",
        "tanggal_mulai_kerja": "2022-01-15",
        "status_pekerjaan": "aktif",
    }
    data.update(overrides)
    return PekerjaanCreate(**data)


class TestCreate:

    def test_create(self, service, make_alumni):
        alumni = make_alumni()
        record = service.create(_request(alumni.id, tanggal_selesai_kerja="2023-02-01"))
        assert record.alumni_id == alumni.id
        assert record.tanggal_mulai_kerja == date(2022, 1, 15)
        assert record.tanggal_selesai_kerja == date(2023, 2, 1)
        assert record.deleted is False

    def test_empty_end_date_is_stored_as_none(self, service, make_alumni):
        record = service.create(_request(make_alumni().id, tanggal_selesai_kerja=""))
        assert record.tanggal_selesai_kerja is None

    def test_missing_alumni_id(self, service):
        with pytest.raises(ValidationError) as exc:
            service.create(_request("", nama_perusahaan=""))
        assert exc.value.message == "alumni_id is required"

    def test_first_missing_field_is_reported(self, service, make_alumni):
        with pytest.raises(ValidationError) as exc:
            service.create(_request(make_alumni().id, posisi_jabatan="", lokasi_kerja=""))
        assert exc.value.message == "posisi_jabatan is required"

    @pytest.mark.parametrize("value", ["15-01-2022", "2022/01/15", "2022-13-01", "yesterday"])
    def test_bad_start_date(self, service, make_alumni, value):
        with pytest.raises(ValidationError) as exc:
            service.create(_request(make_alumni().id, tanggal_mulai_kerja=value))
        assert "tanggal_mulai_kerja" in exc.value.message

    def test_bad_end_date(self, service, make_alumni):
        with pytest.raises(ValidationError) as exc:
            service.create(_request(make_alumni().id, tanggal_selesai_kerja="soon"))
        assert "tanggal_selesai_kerja" in exc.value.message

    def test_unknown_alumni(self, service):
        with pytest.raises(NotFoundError):
            service.create(_request(str(ObjectId())))

    def test_soft_deleted_alumni_cannot_get_new_records(self, service, db, make_alumni):
        alumni = make_alumni()
        AlumniService(db).soft_delete(alumni.id)
        with pytest.raises(NotFoundError):
            service.create(_request(alumni.id))


class TestUpdateAndRead:

    def test_update(self, service, make_alumni, make_pekerjaan):
        record = make_pekerjaan(make_alumni().id)
        update = PekerjaanUpdate(**_request("").model_dump(exclude={"alumni_id"}))
        update.posisi_jabatan = "Lead Analyst"
        updated = service.update(record.id, update)
        assert updated.posisi_jabatan == "Lead Analyst"
        assert updated.nama_perusahaan == "PT Maju Jaya"

    def test_update_validates(self, service, make_alumni, make_pekerjaan):
        record = make_pekerjaan(make_alumni().id)
        with pytest.raises(ValidationError):
            service.update(record.id, PekerjaanUpdate(nama_perusahaan="X"))

    def test_get_by_alumni_id_for_owner_and_admin(self, service, make_alumni, make_pekerjaan, alice, admin):
        alumni = make_alumni(owner=alice)
        make_pekerjaan(alumni.id)
        assert len(service.get_by_alumni_id(alumni.id, alice)) == 1
        assert len(service.get_by_alumni_id(alumni.id, admin)) == 1

    def test_get_by_alumni_id_forbidden_for_others(self, service, make_alumni, alice, bob):
        alumni = make_alumni(owner=alice)
        with pytest.raises(ForbiddenError):
            service.get_by_alumni_id(alumni.id, bob)


class TestTrash:

    def test_owner_can_soft_delete(self, service, make_alumni, make_pekerjaan, alice):
        record = make_pekerjaan(make_alumni(owner=alice).id)
        service.soft_delete(record.id, alice)
        with pytest.raises(NotFoundError):
            service.get_by_id(record.id)

    def test_other_user_cannot_soft_delete(self, service, make_alumni, make_pekerjaan, alice, bob):
        make_alumni(owner=bob, nim="2100009")
        record = make_pekerjaan(make_alumni(owner=alice).id)
        with pytest.raises(ForbiddenError):
            service.soft_delete(record.id, bob)

    def test_soft_delete_twice_is_not_found(self, service, make_alumni, make_pekerjaan, admin):
        record = make_pekerjaan(make_alumni().id)
        service.soft_delete(record.id, admin)
        with pytest.raises(NotFoundError):
            service.soft_delete(record.id, admin)

    def test_restore_and_purge_need_a_trashed_record(self, service, make_alumni, make_pekerjaan, admin):
        record = make_pekerjaan(make_alumni().id)
        with pytest.raises(NotFoundError):
            service.restore(record.id, admin)
        with pytest.raises(NotFoundError):
            service.hard_delete(record.id, admin)
        # still there and untouched
        assert service.get_by_id(record.id).deleted is False

    def test_restore(self, service, make_alumni, make_pekerjaan, alice):
        record = make_pekerjaan(make_alumni(owner=alice).id)
        service.soft_delete(record.id, alice)
        service.restore(record.id, alice)
        assert service.get_by_id(record.id).deleted is False

    def test_hard_delete(self, service, db, make_alumni, make_pekerjaan, alice):
        record = make_pekerjaan(make_alumni(owner=alice).id)
        service.soft_delete(record.id, alice)
        service.hard_delete(record.id, alice)
        assert db["pekerjaan_alumni"].find_one({"_id": ObjectId(record.id)}) is None

    def test_other_user_cannot_restore(self, service, make_alumni, make_pekerjaan, alice, bob, admin):
        make_alumni(owner=bob, nim="2100009")
        record = make_pekerjaan(make_alumni(owner=alice).id)
        service.soft_delete(record.id, admin)
        with pytest.raises(ForbiddenError):
            service.restore(record.id, bob)
        with pytest.raises(ForbiddenError):
            service.hard_delete(record.id, bob)

    def test_stranger_gets_forbidden_whatever_the_state(self, service, make_alumni, make_pekerjaan, alice, bob, admin):
        record = make_pekerjaan(make_alumni(owner=alice).id)
        # active record: restore / purge are refused for ownership, not state
        with pytest.raises(ForbiddenError):
            service.restore(record.id, bob)
        service.soft_delete(record.id, admin)
        # already trashed record: soft delete is refused for ownership, not state
        with pytest.raises(ForbiddenError):
            service.soft_delete(record.id, bob)
        assert [r.id for r in service.get_trashed(admin)] == [record.id]

    def test_trash_listing_is_scoped(self, service, make_alumni, make_pekerjaan, alice, bob, admin):
        mine = make_pekerjaan(make_alumni(owner=alice).id)
        theirs = make_pekerjaan(make_alumni(owner=bob, nim="2100009").id)
        service.soft_delete(mine.id, admin)
        service.soft_delete(theirs.id, admin)

        assert [r.id for r in service.get_trashed(alice)] == [mine.id]
        assert {r.id for r in service.get_trashed(admin)} == {mine.id, theirs.id}

    def test_trash_listing_needs_an_alumni_profile(self, service, alice):
        with pytest.raises(ForbiddenError):
            service.get_trashed(alice)

    def test_owner_keeps_access_after_alumni_is_trashed(self, service, db, make_alumni, alice):
        alumni = make_alumni(owner=alice)
        record = service.create(_request(alumni.id))

        AlumniService(db).soft_delete(alumni.id)

        trashed = service.get_trashed(alice)
        assert [r.id for r in trashed] == [record.id]

        service.restore(record.id, alice)
        records = service.get_by_alumni_id(alumni.id, alice)
        assert [r.id for r in records] == [record.id]
        assert records[0].deleted is False


class TestListing:

    def test_pages(self, service, make_alumni, make_pekerjaan):
        alumni = make_alumni()
        for i in range(12):
            make_pekerjaan(alumni.id, nama_perusahaan=f"PT {i:02d}")

        data, meta = service.get_all(parse_list_query("2", "5", "nama_perusahaan", "asc"))
        assert [r.nama_perusahaan for r in data] == [f"PT {i:02d}" for i in range(5, 10)]
        assert meta.total == 12
        assert meta.pages == 3

        data, _ = service.get_all(parse_list_query("1", "5", "nama_perusahaan", "desc"))
        assert data[0].nama_perusahaan == "PT 11"

    def test_search_covers_company_position_industry_and_location(self, service, make_alumni, make_pekerjaan):
        alumni_id = make_alumni().id
        make_pekerjaan(alumni_id, nama_perusahaan="Bank Sentral")
        make_pekerjaan(alumni_id, posisi_jabatan="BANK Teller", nama_perusahaan="A")
        make_pekerjaan(alumni_id, bidang_industri="Perbankan", nama_perusahaan="B")
        make_pekerjaan(alumni_id, lokasi_kerja="Bankok", nama_perusahaan="C")
        make_pekerjaan(alumni_id, nama_perusahaan="Toko Roti", deskripsi_pekerjaan="bank")

        data, meta = service.get_all(parse_list_query(search="bank"))
        assert meta.total == 4
        assert "Toko Roti" not in {r.nama_perusahaan for r in data}

    def test_trashed_records_are_left_out(self, service, make_alumni, make_pekerjaan, admin):
        alumni_id = make_alumni().id
        keep = make_pekerjaan(alumni_id)
        gone = make_pekerjaan(alumni_id)
        service.soft_delete(gone.id, admin)

        data, meta = service.get_all(parse_list_query())
        assert meta.total == 1
        assert [r.id for r in data] == [keep.id]
