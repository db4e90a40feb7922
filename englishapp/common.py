"""Shared helpers: API response envelope, level calculation and text cleanup."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any

EXP_PER_LEVEL = 50


@dataclass
class APIResponse:
    """Envelope wrapped around successful API payloads."""

    message: str
    status_code: int
    data: Any

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "status_code": self.status_code,
            "data": self.data,
        }


def build_response(status_code: int, data: Any) -> tuple[int, APIResponse]:
    """Return the status code together with a success envelope for ``data``."""
    return status_code, APIResponse(message="Success", status_code=status_code, data=data)


def calculate_level(total_exp: int) -> tuple[int, int]:
    """Return ``(level, next_level_exp)`` for the given total experience."""
    level = 1
    if total_exp >= EXP_PER_LEVEL:
        level += total_exp // EXP_PER_LEVEL
    return level, EXP_PER_LEVEL * level


def lowercase_and_remove_punctuation(text: str) -> str:
    """Lower-case ``text`` and drop every Unicode punctuation character."""
    return "".join(
        char for char in text.lower() if not unicodedata.category(char).startswith("P")
    )