from __future__ import annotations

from typing import Any


class SalaryApiError(Exception):
    """Request-terminating failure carrying the HTTP status and client message."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None, detail: Any = None):
        if message:
            self.message = message
        self.detail = detail
        super().__init__(self.message)

    def to_body(self, expose: bool = False) -> dict:
        body: dict[str, Any] = {"message": self.message}
        if expose and self.detail is not None:
            body["error"] = self.detail
        return body


class InvalidYearError(SalaryApiError):
    # existing clients expect 500 here
    status_code = 500
    message = "Invalid Year Supplied"


class InvalidSortColumnError(SalaryApiError):
    status_code = 400
    message = "Invalid sortby column"


class QueryTimeoutError(SalaryApiError):
    status_code = 500
    message = "Query timed out"


class DatabaseError(SalaryApiError):
    status_code = 500
    message = "Database error"
