"""SQLite storage for lesson and course progress."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from os import PathLike
from uuid import UUID, uuid4

from englishapp.errors import (
    bad_request,
    internal_server_error,
    not_found,
    unprocessable_entity,
)
from englishapp.progress.models import NIL_UUID, CourseProgress, LessonProgress

_SCHEMA = """
CREATE TABLE IF NOT EXISTS course_progress (
    course_progress_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    course_id TEXT NOT NULL,
    progress_percentage INTEGER NOT NULL DEFAULT 0,
    is_completed INTEGER NOT NULL DEFAULT 0,
    created_at TEXT,
    updated_at TEXT
);
CREATE TABLE IF NOT EXISTS lesson_progress (
    lesson_progress_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    lesson_id TEXT NOT NULL,
    course_id TEXT,
    progress_percentage INTEGER NOT NULL DEFAULT 0,
    is_completed INTEGER NOT NULL DEFAULT 0,
    is_video_completed INTEGER NOT NULL DEFAULT 0,
    is_exercise_completed INTEGER NOT NULL DEFAULT 0,
    is_summary_completed INTEGER NOT NULL DEFAULT 0,
    created_at TEXT,
    updated_at TEXT
);
"""

_LESSON_COLUMNS = (
    "lesson_progress_id, user_id, lesson_id, course_id, progress_percentage, "
    "is_completed, is_video_completed, is_exercise_completed, is_summary_completed, "
    "created_at, updated_at"
)
_COURSE_COLUMNS = (
    "course_progress_id, user_id, course_id, progress_percentage, is_completed, "
    "created_at, updated_at"
)


def open_database(path: str | PathLike) -> sqlite3.Connection:
    """Open (creating if needed) a progress database at ``path``."""
    connection = sqlite3.connect(path)
    connection.row_factory = sqlite3.Row
    connection.executescript(_SCHEMA)
    return connection


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _time_to_text(value: datetime | None) -> str | None:
    """Store times as UTC ISO text of fixed width so that they sort correctly."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _text_to_time(value: str | None) -> datetime | None:
    return None if value is None else datetime.fromisoformat(value)


def _text_to_uuid(value: str | None) -> UUID:
    return NIL_UUID if value is None else UUID(value)


def _lesson_from_row(row: sqlite3.Row) -> LessonProgress:
    return LessonProgress(
        id=UUID(row["lesson_progress_id"]),
        user_id=UUID(row["user_id"]),
        lesson_id=UUID(row["lesson_id"]),
        course_id=_text_to_uuid(row["course_id"]),
        progress_percentage=row["progress_percentage"],
        is_completed=bool(row["is_completed"]),
        is_video_completed=bool(row["is_video_completed"]),
        is_exercise_completed=bool(row["is_exercise_completed"]),
        is_summary_completed=bool(row["is_summary_completed"]),
        created_at=_text_to_time(row["created_at"]),
        updated_at=_text_to_time(row["updated_at"]),
    )


def _course_from_row(row: sqlite3.Row) -> CourseProgress:
    return CourseProgress(
        id=UUID(row["course_progress_id"]),
        user_id=UUID(row["user_id"]),
        course_id=UUID(row["course_id"]),
        progress_percentage=row["progress_percentage"],
        is_completed=bool(row["is_completed"]),
        created_at=_text_to_time(row["created_at"]),
        updated_at=_text_to_time(row["updated_at"]),
    )


def _lesson_values(progress: LessonProgress) -> tuple:
    return (
        str(progress.id),
        str(progress.user_id),
        str(progress.lesson_id),
        str(progress.course_id),
        progress.progress_percentage,
        int(progress.is_completed),
        int(progress.is_video_completed),
        int(progress.is_exercise_completed),
        int(progress.is_summary_completed),
        _time_to_text(progress.created_at),
        _time_to_text(progress.updated_at),
    )


def _stamp_new(record: LessonProgress | CourseProgress) -> None:
    """Fill in the id and timestamps a fresh row gets when they are unset."""
    if record.id == NIL_UUID:
        record.id = uuid4()
    now = _now()
    if record.created_at is None:
        record.created_at = now
    if record.updated_at is None:
        record.updated_at = now


class CourseProgressRepository:
    """Read access to per-course progress."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def get_by_user_and_course(self, user_id: UUID, course_id: UUID) -> CourseProgress:
        try:
            row = self._db.execute(
                f"SELECT {_COURSE_COLUMNS} FROM course_progress "
                "WHERE user_id = ? AND course_id = ? ORDER BY course_progress_id LIMIT 1",
                (str(user_id), str(course_id)),
            ).fetchone()
        except sqlite3.Error as exc:
            raise not_found("users or course not found") from exc
        if row is None:
            raise not_found("users or course not found")
        return _course_from_row(row)

    def get_all_by_user(self, user_id: UUID) -> list[CourseProgress]:
        try:
            rows = self._db.execute(
                f"SELECT {_COURSE_COLUMNS} FROM course_progress "
                "WHERE user_id = ? ORDER BY rowid",
                (str(user_id),),
            ).fetchall()
        except sqlite3.Error as exc:
            raise bad_request("Progress not found") from exc
        return [_course_from_row(row) for row in rows]


class LessonProgressRepository:
    """Storage of per-lesson progress; updates keep course progress in step."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def get_by_user_and_lesson(self, user_id: UUID, lesson_id: UUID) -> LessonProgress:
        try:
            row = self._db.execute(
                f"SELECT {_LESSON_COLUMNS} FROM lesson_progress "
                "WHERE user_id = ? AND lesson_id = ? ORDER BY lesson_progress_id LIMIT 1",
                (str(user_id), str(lesson_id)),
            ).fetchone()
        except sqlite3.Error as exc:
            raise bad_request("Cannot find lesson progress") from exc
        if row is None:
            raise not_found("Lesson progress not found")
        return _lesson_from_row(row)

    def get_all_by_user(self, user_id: UUID) -> list[LessonProgress]:
        try:
            rows = self._db.execute(
                f"SELECT {_LESSON_COLUMNS} FROM lesson_progress "
                "WHERE user_id = ? ORDER BY rowid",
                (str(user_id),),
            ).fetchall()
        except sqlite3.Error as exc:
            raise bad_request("Progress not found") from exc
        return [_lesson_from_row(row) for row in rows]

    def create(self, progress: LessonProgress) -> LessonProgress:
        """Insert ``progress``, filling in its id and timestamps when unset."""
        _stamp_new(progress)
        try:
            with self._db:
                self._db.execute(
                    f"INSERT INTO lesson_progress ({_LESSON_COLUMNS}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    _lesson_values(progress),
                )
        except sqlite3.Error as exc:
            raise bad_request("Cannot add lesson") from exc
        return progress

    def update_lesson_progress(
        self, old_progress: LessonProgress, new_progress: LessonProgress
    ) -> LessonProgress:
        """Merge the parts finished in ``new_progress`` into ``old_progress`` and save it.

        Parts already finished stay finished. The lesson's percentage is
        recomputed and the course progress for the same user and course is
        set to the average over all of that user's lessons in the course.
        """
        old_progress.is_video_completed = (
            old_progress.is_video_completed or new_progress.is_video_completed
        )
        old_progress.is_exercise_completed = (
            old_progress.is_exercise_completed or new_progress.is_exercise_completed
        )
        old_progress.is_summary_completed = (
            old_progress.is_summary_completed or new_progress.is_summary_completed
        )
        old_progress.updated_at = _now()
        try:
            with self._db:
                if old_progress.id == NIL_UUID:
                    _stamp_new(old_progress)
                    self._db.execute(
                        f"INSERT INTO lesson_progress ({_LESSON_COLUMNS}) "
                        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                        _lesson_values(old_progress),
                    )
                else:
                    old_progress.refresh_completion()
                    self._save(old_progress)
                    self._sync_course_progress(old_progress)
        except sqlite3.Error as exc:
            raise unprocessable_entity(
                f"Failed to update lesson, lesson id : {old_progress.id}"
            ) from exc
        return old_progress

    def get_latest_by_user(self, user_id: UUID) -> LessonProgress:
        try:
            row = self._db.execute(
                f"SELECT {_LESSON_COLUMNS} FROM lesson_progress "
                "WHERE user_id = ? ORDER BY updated_at DESC LIMIT 1",
                (str(user_id),),
            ).fetchone()
        except sqlite3.Error as exc:
            raise internal_server_error("Failed to fetch latest progress") from exc
        if row is None:
            raise not_found("No progress found for the given user ID")
        return _lesson_from_row(row)

    def _save(self, progress: LessonProgress) -> None:
        if progress.created_at is None:
            progress.created_at = progress.updated_at
        self._db.execute(
            f"INSERT INTO lesson_progress ({_LESSON_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?) "
            "ON CONFLICT(lesson_progress_id) DO UPDATE SET "
            "user_id = excluded.user_id, lesson_id = excluded.lesson_id, "
            "course_id = excluded.course_id, "
            "progress_percentage = excluded.progress_percentage, "
            "is_completed = excluded.is_completed, "
            "is_video_completed = excluded.is_video_completed, "
            "is_exercise_completed = excluded.is_exercise_completed, "
            "is_summary_completed = excluded.is_summary_completed, "
            "created_at = excluded.created_at, updated_at = excluded.updated_at",
            _lesson_values(progress),
        )

    def _sync_course_progress(self, lesson: LessonProgress) -> None:
        key = (str(lesson.user_id), str(lesson.course_id))
        percentages = [
            row[0]
            for row in self._db.execute(
                "SELECT progress_percentage FROM lesson_progress "
                "WHERE user_id = ? AND course_id = ?",
                key,
            )
        ]
        average = sum(percentages) // len(percentages) if percentages else 0
        now = _time_to_text(_now())
        existing = self._db.execute(
            "SELECT course_progress_id FROM course_progress "
            "WHERE user_id = ? AND course_id = ? ORDER BY course_progress_id LIMIT 1",
            key,
        ).fetchone()
        if existing is None:
            self._db.execute(
                f"INSERT INTO course_progress ({_COURSE_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (str(uuid4()), *key, average, int(average == 100), now, now),
            )
        else:
            self._db.execute(
                "UPDATE course_progress SET progress_percentage = ?, is_completed = ?, "
                "updated_at = ? WHERE course_progress_id = ?",
                (average, int(average == 100), now, existing[0]),
            )