"""
Client organisation endpoints.

Administrators list, create, inspect, update and (soft) delete clients
and view aggregate statistics.  E-mail and tax ID are unique among live
clients; a duplicate answers 409.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import BASE_STATUS_CHOICES, CONTACT_METHOD_CHOICES
from core.responses import conflict, created, ok
from core.serializers.clients import ClientSerializer
from core.services.audit import audit
from core.services.stats import TIME_RANGES, client_stats
from core.exceptions import ValidationError
from core.utils import (
    get_pagination_params,
    merge_filters,
    nullable_filter,
    parse_bool,
    parse_datetime_param,
    range_filter,
    sort_params,
)

from ._common import ADMIN, enum_param, get_or_404, has_filter, id_param, page, search_filter, status_filter, validated

SORTABLE = {
    'name': 'name',
    'email': 'email',
    'status': 'status',
    'createdAt': 'created_at',
    'updatedAt': 'updated_at',
    'isVerified': 'is_verified',
}


def _duplicate(data: dict, exclude_id=None) -> bool:
    clauses = []
    if data.get('email'):
        clauses.append({'email': {'equals': data['email'], 'mode': 'insensitive'}})
    if data.get('tax_id'):
        clauses.append({'tax_id': data['tax_id']})
    if not clauses:
        return False
    where = {'OR': clauses}
    if exclude_id is not None:
        where['NOT'] = {'id': exclude_id}
    return repo.clients.exists(where)


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def clients(request):
    if request.method == 'POST':
        data = validated(ClientSerializer, request)
        if _duplicate(data):
            return conflict('A client with this email or tax ID already exists')
        row = repo.clients.create(data, select=sf.CLIENT_WITH_RELATIONS)
        audit(request, 'CREATE', 'client', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        status_filter(pagination.status, BASE_STATUS_CHOICES),
        search_filter(pagination.search, ('name', 'email', 'contact_person', 'tax_id')),
        nullable_filter('industry_id', id_param(params, 'industryId')),
        nullable_filter('is_verified', parse_bool(params.get('isVerified'))),
        nullable_filter('preferred_contact_method', enum_param(params, 'preferredContactMethod', CONTACT_METHOD_CHOICES)),
        range_filter(
            'created_at',
            parse_datetime_param(params.get('createdAfter')),
            parse_datetime_param(params.get('createdBefore'), end_of_day=True),
        ),
        has_filter('staff', params.get('hasStaff')),
    )
    return page(repo.clients, where, pagination, sort_params(params, SORTABLE, ('created_at', 'desc')))


@api_view(['GET'])
@permission_classes(ADMIN)
def clients_stats(request):
    time_range = request.query_params.get('timeRange')
    if time_range and time_range not in TIME_RANGES:
        raise ValidationError(f"Invalid timeRange '{time_range}'")
    return ok(client_stats(time_range, id_param(request.query_params, 'industryId')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def client_detail(request, client_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.clients, {'id': client_id}, 'Client', sf.CLIENT_WITH_RELATIONS))

    if request.method == 'PUT':
        get_or_404(repo.clients, {'id': client_id}, 'Client', {'id': True})
        data = validated(ClientSerializer, request, partial=True)
        if _duplicate(data, exclude_id=client_id):
            return conflict('A client with this email or tax ID already exists')
        row = repo.clients.update({'id': client_id}, data, select=sf.CLIENT_WITH_RELATIONS)
        audit(request, 'UPDATE', 'client', client_id, fields=data.keys())
        return ok(row)

    snapshot = repo.clients.delete({'id': client_id})
    audit(request, 'DELETE', 'client', client_id)
    return ok(snapshot)
