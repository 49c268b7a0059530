"""
Response envelope helpers.

Successful responses carry the payload as-is; every error response has
the body ``{"error": "<message>"}`` (validation failures may add a
``details`` field).  Views and the exception handler both build their
responses here so the envelope stays uniform.
"""
from __future__ import annotations

from typing import Any, Optional

from rest_framework import status as http_status
from rest_framework.response import Response

from .utils.pagination import PaginationParams, page_metadata


def ok(data: Any, status: int = http_status.HTTP_200_OK) -> Response:
    return Response(data, status=status)


def created(data: Any) -> Response:
    return Response(data, status=http_status.HTTP_201_CREATED)


def no_content() -> Response:
    return Response(status=http_status.HTTP_204_NO_CONTENT)


def paginated(data: list, total: int, pagination: PaginationParams) -> Response:
    return ok({'data': data, 'metadata': page_metadata(total, pagination)})


def error(message: str, status: int, details: Optional[Any] = None) -> Response:
    body: dict = {'error': message}
    if details is not None:
        body['details'] = details
    return Response(body, status=status)


def bad_request(message: str = 'Bad Request', details: Optional[Any] = None) -> Response:
    return error(message, http_status.HTTP_400_BAD_REQUEST, details)


def unauthorized(message: str = 'Unauthorized') -> Response:
    return error(message, http_status.HTTP_401_UNAUTHORIZED)


def forbidden(message: str = 'Forbidden') -> Response:
    return error(message, http_status.HTTP_403_FORBIDDEN)


def not_found(message: str = 'Not Found') -> Response:
    return error(message, http_status.HTTP_404_NOT_FOUND)


def method_not_allowed(message: str = 'Method Not Allowed') -> Response:
    return error(message, http_status.HTTP_405_METHOD_NOT_ALLOWED)


def conflict(message: str = 'Conflict') -> Response:
    return error(message, http_status.HTTP_409_CONFLICT)


def too_many_requests(message: str = 'Too Many Requests') -> Response:
    return error(message, http_status.HTTP_429_TOO_MANY_REQUESTS)


def internal_error(message: str = 'Internal Server Error') -> Response:
    return error(message, http_status.HTTP_500_INTERNAL_SERVER_ERROR)
