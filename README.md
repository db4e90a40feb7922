# englishapp

Building blocks for an English learning service. The package tracks how far
each learner has got through lessons and courses. It turns experience points
into levels. It also stores the account records of admins, experts (*pakar*)
and students (*siswa*). Storage uses SQLite from the standard library, and the
package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Errors

Every failure is raised as `englishapp.errors.MessageError`. It carries a
`message`, an HTTP `status_code` and an `error` label. These helpers build one:

| Helper | Status | Label |
| --- | --- | --- |
| `bad_request` | 400 | `BAD_REQUEST` |
| `unauthenticated` | 401 | `UNAUTHENTICATED` |
| `unauthorized` | 403 | `UNAUTHORIZED` |
| `not_found` | 404 | `DATA_NOT_FOUND` |
| `foreign_key_violated` | 409 | `Foreign key Violated` |
| `unprocessable_entity` | 422 | `INVALID_REQUEST_BODY` |
| `internal_server_error` | 500 | `INTERNAL_SERVER_ERROR` |

`MessageError.to_dict()` returns the JSON body as
`{"message": ..., "status_code": ..., "data"...}`. Specifically, the keys are
`message`, `status_code` and `error`.

## Common helpers

```python
from englishapp.common import build_response, calculate_level, lowercase_and_remove_punctuation

calculate_level(120)                            # (3, 150): level 3, next level at 150 exp
lowercase_and_remove_punctuation("Hi, there!")  # "hi there"
status, body = build_response(200, {"ok": True})
body.to_dict()   # {"message": "Success", "status_code": 200, "data": {"ok": True}}
```

Every 50 experience points adds one level, starting from level 1.

## Validators

`englishapp.validators` provides these checks:

- `validate_date(value)` is true for a `YYYY-MM-DD` date string.
- `validate_account_type(value)` is true for `"admin"`, `"siswa"` or `"pakar"`.
- `validate_status_alarm(value)` is true for `"1"` or `"0"`.

`check_fields(values, rules)` checks a mapping of values against named rules.
The rules are `"required"`, `"date"`, `"jenisAkunValidator"` and
`"statusAlarm"`. A field may be given one rule name or several.

- An empty field passes every rule except `"required"`.
- All failures are collected and raised together as one bad-request error, separated by `;`.
- An unknown rule name raises `ValueError`.

```python
from englishapp.validators import check_fields

check_fields({"birth": "2024-02-30"}, {"birth": "date"})
# MessageError: birth: 2024-02-30 does not validate as date
```

## Lesson and course progress

```python
from englishapp.progress.repository import (
    open_database, CourseProgressRepository, LessonProgressRepository,
)
from englishapp.progress.service import ProgressService
from englishapp.progress.models import LessonProgressRequest

db = open_database(":memory:")
service = ProgressService(CourseProgressRepository(db), LessonProgressRepository(db))

request = LessonProgressRequest.from_json(
    '{"user_id": "...", "lesson_id": "...", "course_id": "...", "event_type": "video"}'
)
progress = service.update_lesson_progress(request)
progress.progress_percentage   # 33: one of video, exercise and summary done
```

Each lesson has three parts: video, exercise and summary, named by the
`EventType` values.

- Completing a part raises the lesson's percentage in thirds (33, 66, 100). A lesson is complete at 100.
- Parts already done stay done.
- After each update, the learner's course progress is set to the integer average of their lessons in that course. The course progress row is created if it does not exist yet.
- `update_lesson_progress` creates the lesson record first when the learner has none.
- An unknown `event_type` raises a bad-request error.

`ProgressService` also offers these reads:

- `get_course_progress` returns the progress on one course.
- `get_lesson_progress` returns an empty record at 0% when there is none.
- `get_all_progress_by_user` returns all lesson records of a learner.
- `get_all_course_progress_by_user` returns all course records of a learner.
- `get_latest_progress` returns a `LessonProgressResponse` for the most recently updated lesson. Its `to_dict()` gives the JSON body.

`englishapp.progress.consumer.consume_lesson_updates(messages, service)`
applies a stream of events. A message is either a raw JSON payload (`str` or
`bytes`) or an object with a `value` attribute holding one. Each message is
passed to `handle_message`. Messages that fail to decode or apply are logged
and skipped. The function returns how many messages succeeded.

## Account records

```python
from englishapp.accounts.repository import open_database, SiswaRepository
from englishapp.accounts.models import Siswa

db = open_database(":memory:")
students = SiswaRepository(db)
students.create(Siswa(email="student@example.com", nama_lengkap="Budi"))
students.get_by_email("student@example.com")
```

`AdminRepository` and `PakarRepository` work the same way with `Admin` and
`Pakar` records. All three repositories behave as follows:

- Records are keyed by e-mail address.
- `update(old, new)` writes only the non-empty fields of `new` and returns the merged record, the same as `old.merged(new)`.
- A missing record raises a not-found error.
- A student's empty `tanggal_lahir` (birth date) is stored as NULL.

## What this package does not do

This package holds the domain logic and storage only. It does not provide:

- an HTTP server or API routes;
- user registration, login or authentication;
- a message-broker client: events must be fed to `consume_lesson_updates` by the caller;
- file or video upload handling.

It has no command-line entry point.