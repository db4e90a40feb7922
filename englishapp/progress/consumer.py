"""Applies lesson-progress events arriving from a message stream."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from englishapp.errors import MessageError
from englishapp.progress.models import LessonProgress, LessonProgressRequest
from englishapp.progress.service import ProgressService

logger = logging.getLogger(__name__)


def _payload_text(value: str | bytes) -> str:
    return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value


def handle_message(value: str | bytes, service: ProgressService) -> LessonProgress | None:
    """Apply one JSON event; return the updated progress, or None if it failed.

    Failures are logged rather than raised so that a stream keeps flowing.
    """
    logger.info("Message received: %s", _payload_text(value))
    try:
        payload = LessonProgressRequest.from_json(value)
    except ValueError as exc:
        logger.error("Error unmarshalling message: %s", exc)
        return None
    try:
        progress = service.update_lesson_progress(payload)
    except MessageError as exc:
        logger.error("Error creating lesson progress: %s", exc.message)
        return None
    logger.info("Lesson progress created successfully")
    return progress


def consume_lesson_updates(messages: Iterable[Any], service: ProgressService) -> int:
    """Apply every message in ``messages``; return how many succeeded.

    A message is either the raw value or an object with a ``value`` attribute.
    """
    handled = 0
    for message in messages:
        value = getattr(message, "value", message)
        if handle_message(value, service) is not None:
            handled += 1
    return handled