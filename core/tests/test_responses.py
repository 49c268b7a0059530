from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions as drf_exceptions

from core import responses
from core.exceptions import (
    AuthorizationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
    api_exception_handler,
)
from core.utils import get_pagination_params


def handle(exc):
    return api_exception_handler(exc, {'view': None})


def test_paginated_envelope():
    p = get_pagination_params({'page': '2', 'limit': '2'})
    resp = responses.paginated([{'id': 3}], 3, p)
    assert resp.status_code == 200
    assert resp.data == {
        'data': [{'id': 3}],
        'metadata': {'total': 3, 'page': 2, 'limit': 2, 'totalPages': 2},
    }


def test_error_envelope():
    assert responses.not_found('Client not found').data == {'error': 'Client not found'}
    resp = responses.bad_request('Validation failed', {'name': ['required']})
    assert resp.status_code == 400
    assert resp.data == {'error': 'Validation failed', 'details': {'name': ['required']}}
    assert responses.conflict().status_code == 409
    assert responses.no_content().status_code == 204
    assert responses.created({'id': 1}).status_code == 201


def test_typed_errors_map_to_status():
    cases = [
        (ValidationError('Bad input'), 400, 'Bad input'),
        (NotFoundError('Client not found'), 404, 'Client not found'),
        (AuthorizationError(), 401, 'Unauthorized'),
        (ForbiddenError(), 403, 'Forbidden'),
        (ConflictError('Taken'), 409, 'Taken'),
    ]
    for exc, status, message in cases:
        resp = handle(exc)
        assert resp.status_code == status
        assert resp.data == {'error': message}


def test_validation_error_keeps_details():
    resp = handle(ValidationError('Bad input', {'rating': ['too high']}))
    assert resp.data == {'error': 'Bad input', 'details': {'rating': ['too high']}}


def test_storage_failure_hides_detail():
    resp = handle(StorageUnavailableError('connection refused'))
    assert resp.status_code == 500
    assert resp.data == {'error': 'Internal Server Error'}


def test_unexpected_exception_is_internal_error():
    resp = handle(RuntimeError('boom'))
    assert resp.status_code == 500
    assert resp.data == {'error': 'Internal Server Error'}


def test_drf_errors_use_the_envelope():
    resp = handle(drf_exceptions.ValidationError({'name': ['This field is required.']}))
    assert resp.status_code == 400
    assert resp.data['error'] == 'Validation failed'
    assert resp.data['details']['name'] == ['This field is required.']

    resp = handle(drf_exceptions.NotAuthenticated())
    assert resp.status_code == 401
    assert resp.data == {'error': 'Authentication credentials were not provided.'}

    resp = handle(drf_exceptions.MethodNotAllowed('PATCH'))
    assert resp.status_code == 405


def test_django_validation_error_is_bad_request():
    resp = handle(DjangoValidationError({'email': ['Enter a valid email address.']}))
    assert resp.status_code == 400
    assert resp.data['details'] == {'email': ['Enter a valid email address.']}
