"""Typed errors for non-success API responses, keyed by HTTP status."""

from typing import Optional

import httpx


class ApiError(Exception):
    status_code: int = 0

    def __init__(self, message: str, status_code: Optional[int] = None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        payload = None
        message = response.text or response.reason_phrase
        try:
            payload = response.json()
            if isinstance(payload, dict) and payload.get("error"):
                message = str(payload["error"])
        except ValueError:
            pass

        error_cls = error_class_for(response.status_code)
        return error_cls(
            f"API error ({response.status_code}): {message}",
            status_code=response.status_code,
            payload=payload,
        )


class ValidationApiError(ApiError):
    status_code = 400


class AuthenticationApiError(ApiError):
    status_code = 401


class AuthorizationApiError(ApiError):
    status_code = 403


class NotFoundApiError(ApiError):
    status_code = 404


class ConflictApiError(ApiError):
    status_code = 409


class ServerApiError(ApiError):
    status_code = 500


_BY_STATUS = {
    400: ValidationApiError,
    401: AuthenticationApiError,
    403: AuthorizationApiError,
    404: NotFoundApiError,
    409: ConflictApiError,
    422: ValidationApiError,
}


def error_class_for(status_code: int) -> type:
    if status_code >= 500:
        return ServerApiError
    return _BY_STATUS.get(status_code, ApiError)
