"""SQLite storage for admin, pakar and siswa profiles."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import astuple, fields
from os import PathLike
from typing import Any, ClassVar

from englishapp.accounts.models import Admin, Pakar, Siswa
from englishapp.errors import (
    bad_request,
    internal_server_error,
    not_found,
    unprocessable_entity,
)

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS admin (
    email TEXT PRIMARY KEY,
    nama_lengkap TEXT NOT NULL DEFAULT '',
    alamat TEXT NOT NULL DEFAULT '',
    no_telepon TEXT NOT NULL DEFAULT '',
    foto_profil TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS pakar (
    email TEXT PRIMARY KEY,
    nama_lengkap TEXT NOT NULL DEFAULT '',
    alamat TEXT NOT NULL DEFAULT '',
    no_telepon TEXT NOT NULL DEFAULT '',
    foto_profil TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS siswa (
    email TEXT PRIMARY KEY,
    nis TEXT NOT NULL DEFAULT '',
    nama_lengkap TEXT NOT NULL DEFAULT '',
    tempat_lahir TEXT NOT NULL DEFAULT '',
    tanggal_lahir TEXT DEFAULT NULL,
    alamat TEXT NOT NULL DEFAULT '',
    no_telepon TEXT NOT NULL DEFAULT '',
    kelas TEXT NOT NULL DEFAULT '',
    agama TEXT NOT NULL DEFAULT '',
    foto_profil TEXT NOT NULL DEFAULT ''
);
"""


def open_database(path: str | PathLike) -> sqlite3.Connection:
    """Open (creating if needed) an accounts database at ``path``."""
    connection = sqlite3.connect(path)
    connection.row_factory = sqlite3.Row
    connection.executescript(_SCHEMA)
    return connection


class _ProfileRepository:
    _record: ClassVar[type]
    _table: ClassVar[str]
    _title: ClassVar[str]
    _label: ClassVar[str]
    _nullable: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    @property
    def _columns(self) -> list[str]:
        return [field.name for field in fields(self._record)]

    def _stored(self, column: str, value: str) -> str | None:
        return None if column in self._nullable and value == "" else value

    def _from_row(self, row: sqlite3.Row) -> Any:
        return self._record(**{column: row[column] or "" for column in self._columns})

    def _create(self, record: Any) -> Any:
        columns = self._columns
        values = [self._stored(c, v) for c, v in zip(columns, astuple(record))]
        try:
            with self._db:
                self._db.execute(
                    f"INSERT INTO {self._table} ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)})",
                    values,
                )
        except sqlite3.Error as exc:
            logger.error("Error: %s", exc)
            raise internal_server_error(f"Failed to create {self._label} ") from exc
        return record

    def _update(self, old: Any, new: Any) -> Any:
        result = old.merged(new)
        changes = {
            column: getattr(new, column)
            for column in self._columns
            if getattr(new, column) != ""
        }
        if changes:
            assignments = ", ".join(f"{column} = ?" for column in changes)
            values = [self._stored(c, v) for c, v in changes.items()]
            try:
                with self._db:
                    self._db.execute(
                        f"UPDATE {self._table} SET {assignments} WHERE email = ?",
                        (*values, old.email),
                    )
            except sqlite3.Error as exc:
                logger.error("Error: %s", exc)
                raise unprocessable_entity(
                    f"Failed to update email {old.email}"
                ) from exc
        return result

    def _get_by_email(self, email: str) -> Any:
        try:
            row = self._db.execute(
                f"SELECT {', '.join(self._columns)} FROM {self._table} "
                "WHERE email = ? LIMIT 1",
                (email,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise bad_request(f"cannot get {self._label}") from exc
        if row is None:
            raise not_found(f"{self._title} with email {email} is not found")
        return self._from_row(row)


class AdminRepository(_ProfileRepository):
    """Storage of administrator profiles."""

    _record = Admin
    _table = "admin"
    _title = "Admin"
    _label = "Admin"

    def create(self, admin: Admin) -> Admin:
        """Store a new administrator profile."""
        return self._create(admin)

    def update(self, old: Admin, new: Admin) -> Admin:
        """Write the non-empty fields of ``new`` onto the stored ``old`` record."""
        return self._update(old, new)

    def get_by_email(self, email: str) -> Admin:
        """Fetch the administrator profile stored under ``email``."""
        return self._get_by_email(email)


class PakarRepository(_ProfileRepository):
    """Storage of expert profiles."""

    _record = Pakar
    _table = "pakar"
    _title = "Pakar"
    _label = "Pakar"

    def create(self, pakar: Pakar) -> Pakar:
        """Store a new expert profile."""
        return self._create(pakar)

    def update(self, old: Pakar, new: Pakar) -> Pakar:
        """Write the non-empty fields of ``new`` onto the stored ``old`` record."""
        return self._update(old, new)

    def get_by_email(self, email: str) -> Pakar:
        """Fetch the expert profile stored under ``email``."""
        return self._get_by_email(email)


class SiswaRepository(_ProfileRepository):
    """Storage of student profiles; an empty birth date is stored as NULL."""

    _record = Siswa
    _table = "siswa"
    _title = "Siswa"
    _label = "siswa"
    _nullable = frozenset({"tanggal_lahir"})

    def create(self, siswa: Siswa) -> Siswa:
        """Store a new student profile."""
        return self._create(siswa)

    def update(self, old: Siswa, new: Siswa) -> Siswa:
        """Write the non-empty fields of ``new`` onto the stored ``old`` record."""
        return self._update(old, new)

    def get_by_email(self, email: str) -> Siswa:
        """Fetch the student profile stored under ``email``."""
        return self._get_by_email(email)