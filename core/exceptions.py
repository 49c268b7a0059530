"""
Typed API errors and the DRF exception handler.

The typed errors subclass DRF's ``APIException`` so that services, the
data-access layer and views can simply raise them.  The handler below is
installed as ``REST_FRAMEWORK['EXCEPTION_HANDLER']`` and turns every
exception (ours, DRF's own, or an unexpected one) into the
``{"error": ...}`` envelope built by :mod:`core.responses`.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.views import exception_handler as drf_exception_handler

from . import responses

logger = logging.getLogger(__name__)


class ApiError(drf_exceptions.APIException):
    """Base class for errors raised deliberately by the application."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal Server Error'

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or str(self.default_detail)
        self.details = details
        super().__init__(detail=self.message)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad Request'


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not Found'


class AuthorizationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'


class ForbiddenError(AuthorizationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden'


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'


class StorageUnavailableError(ApiError):
    """The storage engine could not be reached or failed mid-operation."""
    default_detail = 'Internal Server Error'


_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: responses.bad_request,
    status.HTTP_401_UNAUTHORIZED: responses.unauthorized,
    status.HTTP_403_FORBIDDEN: responses.forbidden,
    status.HTTP_404_NOT_FOUND: responses.not_found,
    status.HTTP_405_METHOD_NOT_ALLOWED: responses.method_not_allowed,
    status.HTTP_409_CONFLICT: responses.conflict,
    status.HTTP_429_TOO_MANY_REQUESTS: responses.too_many_requests,
}


def _message_from(data: Any) -> str:
    if isinstance(data, dict) and 'detail' in data:
        return str(data['detail'])
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def _with_headers(resp, source):
    for header in ('WWW-Authenticate', 'Retry-After', 'Allow'):
        if source is not None and source.has_header(header):
            resp[header] = source[header]
    return resp


def api_exception_handler(exc, context):
    if isinstance(exc, StorageUnavailableError):
        logger.warning("storage unavailable: %s", exc.message)
        return responses.internal_error()
    if isinstance(exc, ValidationError):
        return responses.bad_request(exc.message, exc.details)
    if isinstance(exc, ApiError):
        return _BY_STATUS.get(exc.status_code, responses.internal_error)(exc.message)
    if isinstance(exc, DjangoValidationError):
        details = exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
        return responses.bad_request('Validation failed', details)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view') if context else None
        logger.exception("unhandled error in %s", type(view).__name__ if view else 'view', exc_info=exc)
        return responses.internal_error()

    if isinstance(exc, drf_exceptions.ValidationError):
        return responses.bad_request('Validation failed', resp.data)
    builder = _BY_STATUS.get(resp.status_code)
    if builder is None:
        return _with_headers(responses.error(_message_from(resp.data), resp.status_code), resp)
    return _with_headers(builder(_message_from(resp.data)), resp)
