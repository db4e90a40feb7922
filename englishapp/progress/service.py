"""Progress service: reads progress and applies lesson events to it."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from englishapp.errors import MessageError, bad_request
from englishapp.progress.models import (
    CourseProgress,
    EventType,
    LessonProgress,
    LessonProgressRequest,
    LessonProgressResponse,
)
from englishapp.progress.repository import (
    CourseProgressRepository,
    LessonProgressRepository,
)

_EVENT_FLAGS = {
    EventType.VIDEO.value: "is_video_completed",
    EventType.EXERCISE.value: "is_exercise_completed",
    EventType.SUMMARY.value: "is_summary_completed",
}


class ProgressService:
    """Business rules around lesson and course progress."""

    def __init__(
        self,
        course_progress_repo: CourseProgressRepository,
        lesson_progress_repo: LessonProgressRepository,
    ) -> None:
        self._courses = course_progress_repo
        self._lessons = lesson_progress_repo

    def get_course_progress(self, user_id: UUID, course_id: UUID) -> CourseProgress:
        return self._courses.get_by_user_and_course(user_id, course_id)

    def get_lesson_progress(self, user_id: UUID, lesson_id: UUID) -> LessonProgress:
        """Return the user's progress on a lesson, or an empty record at 0%."""
        try:
            return self._lessons.get_by_user_and_lesson(user_id, lesson_id)
        except MessageError:
            return LessonProgress(progress_percentage=0)

    def get_all_progress_by_user(self, user_id: UUID) -> list[LessonProgress]:
        return self._lessons.get_all_by_user(user_id)

    def get_all_course_progress_by_user(self, user_id: UUID) -> list[CourseProgress]:
        return self._courses.get_all_by_user(user_id)

    def create_lesson_progress(
        self, user_id: UUID, lesson_id: UUID, course_id: UUID
    ) -> LessonProgress:
        progress = LessonProgress(user_id=user_id, lesson_id=lesson_id, course_id=course_id)
        return self._lessons.create(progress)

    def update_lesson_progress(self, payload: LessonProgressRequest) -> LessonProgress:
        """Mark the part of the lesson named by the event as done.

        A progress record is created first when the user has none for the
        lesson. Raises a bad-request error for an unknown event type.
        """
        try:
            old_progress = self._lessons.get_by_user_and_lesson(
                payload.user_id, payload.lesson_id
            )
        except MessageError:
            try:
                old_progress = self.create_lesson_progress(
                    payload.user_id, payload.lesson_id, payload.course_id
                )
            except MessageError as exc:
                raise bad_request(exc.error) from exc

        new_progress = LessonProgress(
            id=old_progress.id,
            lesson_id=payload.lesson_id,
            user_id=payload.user_id,
            updated_at=datetime.now(timezone.utc),
        )
        flag = _EVENT_FLAGS.get(payload.event_type)
        if flag is None:
            raise bad_request("invalid event type")
        setattr(new_progress, flag, True)

        return self._lessons.update_lesson_progress(old_progress, new_progress)

    def get_latest_progress(self, user_id: UUID) -> LessonProgressResponse:
        progress = self._lessons.get_latest_by_user(user_id)
        return LessonProgressResponse.from_entity(progress)