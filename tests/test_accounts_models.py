import pytest

from englishapp.accounts.models import Admin, Pakar, Siswa


def test_admin_merged_applies_non_empty_fields():
    old = Admin(email="a@example.com", nama_lengkap="Old Name", alamat="Street 1")
    new = Admin(nama_lengkap="New Name")
    result = old.merged(new)
    assert result.nama_lengkap == "New Name"
    assert result.alamat == "Street 1"
    assert result.email == "a@example.com"


def test_merged_leaves_original_untouched():
    old = Pakar(email="p@example.com", nama_lengkap="Before")
    result = old.merged(Pakar(nama_lengkap="After"))
    assert old.nama_lengkap == "Before"
    assert result.nama_lengkap == "After"


def test_merged_with_empty_changes_is_equal_copy():
    old = Siswa(email="s@example.com", nis="1", kelas="X", tanggal_lahir="2001-02-03")
    result = old.merged(Siswa())
    assert result == old
    assert result is not old


def test_siswa_merged_many_fields():
    old = Siswa(email="s@example.com", kelas="X", agama="A")
    result = old.merged(Siswa(kelas="XI", tempat_lahir="Town"))
    assert (result.kelas, result.tempat_lahir, result.agama) == ("XI", "Town", "A")


def test_merged_rejects_other_kind():
    with pytest.raises(TypeError):
        Admin(email="a@example.com").merged(Pakar(nama_lengkap="x"))