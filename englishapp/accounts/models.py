"""Profile records for the three account kinds: admin, pakar (expert) and siswa (student)."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any


def _merge(record: Any, changes: Any) -> Any:
    """Return a copy of ``record`` with every non-empty field of ``changes`` applied."""
    if type(changes) is not type(record):
        raise TypeError(
            f"cannot merge {type(changes).__name__} into {type(record).__name__}"
        )
    updates = {
        field.name: getattr(changes, field.name)
        for field in fields(changes)
        if getattr(changes, field.name) != ""
    }
    return replace(record, **updates)


@dataclass
class Admin:
    """Profile of an administrator, keyed by e-mail address."""

    email: str = ""
    nama_lengkap: str = ""
    alamat: str = ""
    no_telepon: str = ""
    foto_profil: str = ""

    def merged(self, changes: Admin) -> Admin:
        """Return a copy with every non-empty field of ``changes`` applied."""
        return _merge(self, changes)


@dataclass
class Pakar:
    """Profile of an expert, keyed by e-mail address."""

    email: str = ""
    nama_lengkap: str = ""
    alamat: str = ""
    no_telepon: str = ""
    foto_profil: str = ""

    def merged(self, changes: Pakar) -> Pakar:
        """Return a copy with every non-empty field of ``changes`` applied."""
        return _merge(self, changes)


@dataclass
class Siswa:
    """Profile of a student, keyed by e-mail address."""

    email: str = ""
    nis: str = ""
    nama_lengkap: str = ""
    tempat_lahir: str = ""
    tanggal_lahir: str = ""
    alamat: str = ""
    no_telepon: str = ""
    kelas: str = ""
    agama: str = ""
    foto_profil: str = ""

    def merged(self, changes: Siswa) -> Siswa:
        """Return a copy with every non-empty field of ``changes`` applied."""
        return _merge(self, changes)