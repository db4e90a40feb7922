import json
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from englishapp.progress.models import (
    NIL_UUID,
    CourseProgress,
    CourseProgressDTO,
    EventType,
    LessonProgress,
    LessonProgressRequest,
    LessonProgressResponse,
)

STAMP = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


def test_event_type_lookup_by_wire_value():
    assert EventType("video") is EventType.VIDEO
    assert EventType("exercise") is EventType.EXERCISE
    assert EventType("summary") is EventType.SUMMARY


def test_event_type_rejects_unknown_value():
    with pytest.raises(ValueError):
        EventType("quiz")


def test_refresh_with_nothing_done():
    progress = LessonProgress()
    progress.refresh_completion()
    assert progress.progress_percentage == 0
    assert progress.is_completed is False


def test_refresh_with_everything_done():
    progress = LessonProgress(
        is_video_completed=True, is_exercise_completed=True, is_summary_completed=True
    )
    progress.refresh_completion()
    assert progress.progress_percentage == 100
    assert progress.is_completed is True


def test_refresh_with_one_part_done():
    progress = LessonProgress(is_summary_completed=True)
    progress.refresh_completion()
    assert progress.progress_percentage == 33
    assert progress.is_completed is False


def test_refresh_with_two_parts_done():
    progress = LessonProgress(is_video_completed=True, is_exercise_completed=True)
    progress.refresh_completion()
    assert progress.progress_percentage == 66
    assert progress.is_completed is False


def test_refresh_overwrites_stale_values():
    progress = LessonProgress(progress_percentage=100, is_completed=True)
    progress.refresh_completion()
    assert progress.progress_percentage == 0
    assert progress.is_completed is False


def test_course_dto_copies_entity():
    entity = CourseProgress(
        id=uuid4(),
        user_id=uuid4(),
        course_id=uuid4(),
        progress_percentage=40,
        is_completed=False,
        created_at=STAMP,
        updated_at=STAMP,
    )
    dto = CourseProgressDTO.from_entity(entity)
    assert (dto.id, dto.course_id, dto.progress_percentage, dto.is_completed) == (
        entity.id,
        entity.course_id,
        entity.progress_percentage,
        entity.is_completed,
    )
    assert dto.created_at == entity.created_at
    assert dto.updated_at == entity.updated_at


def test_request_from_json_round_trip():
    user_id, lesson_id, course_id = uuid4(), uuid4(), uuid4()
    raw = json.dumps(
        {
            "user_id": str(user_id),
            "lesson_id": str(lesson_id),
            "course_id": str(course_id),
            "event_type": "video",
            "exp": 10,
            "point": 5,
            "video_duration": 120,
        }
    ).encode()
    request = LessonProgressRequest.from_json(raw)
    assert request == LessonProgressRequest(
        user_id=user_id,
        lesson_id=lesson_id,
        course_id=course_id,
        event_type="video",
        exp=10,
        point=5,
        video_duration=120,
    )


def test_request_missing_fields_take_zero_values():
    request = LessonProgressRequest.from_json("{}")
    assert request.user_id == NIL_UUID
    assert request.event_type == ""
    assert request.exp == 0
    assert request == LessonProgressRequest()


def test_request_from_null_is_empty():
    assert LessonProgressRequest.from_json("null") == LessonProgressRequest()


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2]",
        '{"user_id": "abc"}',
        '{"user_id": 5}',
        '{"exp": 1.5}',
        '{"exp": "10"}',
        '{"point": true}',
        '{"event_type": 3}',
    ],
)
def test_request_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        LessonProgressRequest.from_json(raw)


def test_response_from_entity_and_to_dict():
    entity = LessonProgress(
        id=uuid4(),
        user_id=uuid4(),
        lesson_id=uuid4(),
        course_id=uuid4(),
        is_video_completed=True,
        created_at=STAMP,
        updated_at=STAMP,
    )
    entity.refresh_completion()
    body = LessonProgressResponse.from_entity(entity).to_dict()
    assert body["id"] == str(entity.id)
    assert body["lesson_id"] == str(entity.lesson_id)
    assert body["course_id"] == str(entity.course_id)
    assert body["progress_percentage"] == entity.progress_percentage
    assert body["is_video_completed"] is True
    assert body["is_exercise_completed"] is False
    assert body["created_at"] == STAMP.isoformat()
    assert json.loads(json.dumps(body)) == body


def test_response_without_timestamps():
    body = LessonProgressResponse.from_entity(LessonProgress()).to_dict()
    assert body["created_at"] is None
    assert body["updated_at"] is None
    assert body["user_id"] == str(NIL_UUID)