"""Application errors carrying an HTTP status code and a short error label."""

from __future__ import annotations

from http import HTTPStatus


class MessageError(Exception):
    """An error with a human-readable message, an HTTP status and a label."""

    def __init__(self, message: str, status_code: int, error: str) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error = error

    def to_dict(self) -> dict:
        """Return the JSON body sent to clients."""
        return {
            "message": self.message,
            "status_code": self.status_code,
            "error": self.error,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code}, error={self.error!r})"
        )


def internal_server_error(message: str) -> MessageError:
    return MessageError(
        message, HTTPStatus.INTERNAL_SERVER_ERROR.value, "INTERNAL_SERVER_ERROR"
    )


def unprocessable_entity(message: str) -> MessageError:
    return MessageError(
        message, HTTPStatus.UNPROCESSABLE_ENTITY.value, "INVALID_REQUEST_BODY"
    )


def bad_request(message: str) -> MessageError:
    return MessageError(message, HTTPStatus.BAD_REQUEST.value, "BAD_REQUEST")


def not_found(message: str) -> MessageError:
    return MessageError(message, HTTPStatus.NOT_FOUND.value, "DATA_NOT_FOUND")


def unauthenticated(message: str) -> MessageError:
    return MessageError(message, HTTPStatus.UNAUTHORIZED.value, "UNAUTHENTICATED")


def unauthorized(message: str) -> MessageError:
    return MessageError(message, HTTPStatus.FORBIDDEN.value, "UNAUTHORIZED")


def foreign_key_violated(message: str) -> MessageError:
    return MessageError(message, HTTPStatus.CONFLICT.value, "Foreign key Violated")