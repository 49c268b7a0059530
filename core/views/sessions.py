"""
Session booking endpoints.

Listing supports a date window on ``scheduledAt`` (``startDate`` and
``endDate``; a bare ``endDate`` date includes that whole day) plus
provider, client, service and recipient filters.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import SESSION_STATUS_CHOICES
from core.responses import created, ok
from core.serializers.sessions import SessionSerializer
from core.services.audit import audit
from core.services.sessions import create_session, update_session
from core.services.stats import session_counts
from core.utils import get_pagination_params, merge_filters, nullable_filter, parse_datetime_param, range_filter, sort_params

from ._common import ADMIN, get_or_404, id_param, page, search_filter, status_filter, validated

SORTABLE = {
    'scheduledAt': 'scheduled_at',
    'status': 'status',
    'createdAt': 'created_at',
    'provider': 'provider__name',
    'service': 'service__name',
}


def _scope(params) -> dict:
    return merge_filters(
        range_filter(
            'scheduled_at',
            parse_datetime_param(params.get('startDate')),
            parse_datetime_param(params.get('endDate'), end_of_day=True),
        ),
        nullable_filter('provider_id', id_param(params, 'providerId')),
        nullable_filter('client_id', id_param(params, 'clientId')),
        nullable_filter('service_id', id_param(params, 'serviceId')),
        nullable_filter('staff_id', id_param(params, 'staffId')),
        nullable_filter('beneficiary_id', id_param(params, 'beneficiaryId')),
    )


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def sessions(request):
    if request.method == 'POST':
        data = validated(SessionSerializer, request)
        row = create_session(data)
        audit(request, 'CREATE', 'session', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        _scope(params),
        status_filter(pagination.status, SESSION_STATUS_CHOICES),
        search_filter(pagination.search, ('notes', 'location', 'service__name', 'provider__name')),
    )
    return page(repo.sessions, where, pagination, sort_params(params, SORTABLE, ('scheduled_at', 'desc')))


@api_view(['GET'])
@permission_classes(ADMIN)
def sessions_counts(request):
    return ok(session_counts(_scope(request.query_params)))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def session_detail(request, session_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.sessions, {'id': session_id}, 'Session', sf.SESSION_WITH_RELATIONS))

    if request.method == 'PUT':
        data = validated(SessionSerializer, request, partial=True)
        row = update_session(session_id, data)
        audit(request, 'UPDATE', 'session', session_id, fields=data.keys())
        return ok(row)

    snapshot = repo.sessions.delete({'id': session_id})
    audit(request, 'DELETE', 'session', session_id)
    return ok(snapshot)
