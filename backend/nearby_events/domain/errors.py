from __future__ import annotations

from typing import Any, Optional


class EventsApiError(Exception):
    """Base for failures talking to the events directory.

    Carries the request URL, the HTTP status and the raw body so the caller
    can log what the directory actually sent back.
    """

    code = "api-error"

    def __init__(
        self,
        message: str,
        *,
        request_url: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.request_url = request_url
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "error": self.message,
            "request_url": self.request_url,
            "response_code": self.status_code,
        }


class ApiError(EventsApiError):
    """The directory answered with a non-2xx status, or could not be reached."""

    def __init__(self, *, request_url: str, status_code: Optional[int], body: Any = None) -> None:
        super().__init__(
            f"Invalid API response code ({status_code})",
            request_url=request_url,
            status_code=status_code,
            body=body,
        )


class ApiInvalidResponse(EventsApiError):
    code = "api-invalid-response"
