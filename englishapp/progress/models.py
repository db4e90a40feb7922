"""Progress records, the requests that change them and the views sent to clients."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

NIL_UUID = UUID(int=0)


class EventType(str, Enum):
    """The part of a lesson that a progress event marks as done."""

    VIDEO = "video"
    EXERCISE = "exercise"
    SUMMARY = "summary"


@dataclass
class CourseProgress:
    """How far a user has come through one course."""

    id: UUID = NIL_UUID
    user_id: UUID = NIL_UUID
    course_id: UUID = NIL_UUID
    progress_percentage: int = 0
    is_completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class LessonProgress:
    """How far a user has come through one lesson of a course."""

    id: UUID = NIL_UUID
    user_id: UUID = NIL_UUID
    lesson_id: UUID = NIL_UUID
    course_id: UUID = NIL_UUID
    progress_percentage: int = 0
    is_completed: bool = False
    is_video_completed: bool = False
    is_exercise_completed: bool = False
    is_summary_completed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def refresh_completion(self) -> None:
        """Recompute the percentage and completion flag from the three parts."""
        done = sum(
            (self.is_video_completed, self.is_exercise_completed, self.is_summary_completed)
        )
        self.progress_percentage = done * 100 // 3
        self.is_completed = self.progress_percentage == 100


@dataclass
class CourseProgressDTO:
    """Course progress as shown to a client."""

    id: UUID
    course_id: UUID
    progress_percentage: int
    is_completed: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, progress: CourseProgress) -> CourseProgressDTO:
        return cls(
            id=progress.id,
            course_id=progress.course_id,
            progress_percentage=progress.progress_percentage,
            is_completed=progress.is_completed,
            created_at=progress.created_at,
            updated_at=progress.updated_at,
        )


def _uuid_field(data: dict, key: str) -> UUID:
    value = data.get(key)
    if value is None:
        return NIL_UUID
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a UUID string")
    try:
        return UUID(value)
    except ValueError:
        raise ValueError(f"{key} is not a valid UUID: {value!r}") from None


def _int_field(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


def _str_field(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass
class LessonProgressRequest:
    """An event reporting that a user finished part of a lesson."""

    user_id: UUID = NIL_UUID
    lesson_id: UUID = NIL_UUID
    course_id: UUID = NIL_UUID
    event_type: str = ""
    exp: int = 0
    point: int = 0
    video_duration: int = 0

    @classmethod
    def from_json(cls, raw: str | bytes) -> LessonProgressRequest:
        """Decode a JSON object; absent fields take their zero values.

        Raises ValueError on malformed JSON or on fields of the wrong type.
        """
        data: Any = json.loads(raw)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("lesson progress request must be a JSON object")
        return cls(
            user_id=_uuid_field(data, "user_id"),
            lesson_id=_uuid_field(data, "lesson_id"),
            course_id=_uuid_field(data, "course_id"),
            event_type=_str_field(data, "event_type"),
            exp=_int_field(data, "exp"),
            point=_int_field(data, "point"),
            video_duration=_int_field(data, "video_duration"),
        )


def _time_text(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


@dataclass
class LessonProgressResponse:
    """Lesson progress as shown to a client."""

    id: UUID
    user_id: UUID
    lesson_id: UUID
    course_id: UUID
    progress_percentage: int
    is_completed: bool
    is_video_completed: bool
    is_exercise_completed: bool
    is_summary_completed: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, progress: LessonProgress) -> LessonProgressResponse:
        return cls(
            id=progress.id,
            user_id=progress.user_id,
            lesson_id=progress.lesson_id,
            course_id=progress.course_id,
            progress_percentage=progress.progress_percentage,
            is_completed=progress.is_completed,
            is_video_completed=progress.is_video_completed,
            is_exercise_completed=progress.is_exercise_completed,
            is_summary_completed=progress.is_summary_completed,
            created_at=progress.created_at,
            updated_at=progress.updated_at,
        )

    def to_dict(self) -> dict:
        """Return the JSON-ready body."""
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "lesson_id": str(self.lesson_id),
            "course_id": str(self.course_id),
            "progress_percentage": self.progress_percentage,
            "is_completed": self.is_completed,
            "is_video_completed": self.is_video_completed,
            "is_exercise_completed": self.is_exercise_completed,
            "is_summary_completed": self.is_summary_completed,
            "created_at": _time_text(self.created_at),
            "updated_at": _time_text(self.updated_at),
        }