"""
Service-assignment endpoints.

``/services/assignments`` lists every assignment; the same records are
reachable per client under ``/clients/<id>/services``, where a missing
``contractId`` falls back to the client's active contract.
"""
from __future__ import annotations

from typing import Optional

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import ASSIGNMENT_STATUS_CHOICES, FREQUENCY_CHOICES
from core.responses import created, ok
from core.serializers.contracts import ClientServiceAssignmentSerializer, ServiceAssignmentSerializer
from core.services.audit import audit
from core.services.contracts import create_assignment, delete_assignment, update_assignment
from core.utils import get_pagination_params, merge_filters, nullable_filter, sort_params

from ._common import ADMIN, enum_param, get_or_404, id_param, page, search_filter, status_filter, validated

SORTABLE = {
    'startDate': 'start_date',
    'endDate': 'end_date',
    'status': 'status',
    'frequency': 'frequency',
    'serviceName': 'service__name',
    'createdAt': 'created_at',
}


def _list(request, client_id: Optional[int] = None):
    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        {'client_id': client_id} if client_id is not None else nullable_filter('client_id', id_param(params, 'clientId')),
        status_filter(pagination.status, ASSIGNMENT_STATUS_CHOICES),
        search_filter(pagination.search, ('service__name', 'service__description')),
        nullable_filter('service_id', id_param(params, 'serviceId')),
        nullable_filter('contract_id', id_param(params, 'contractId')),
        nullable_filter('frequency', enum_param(params, 'frequency', FREQUENCY_CHOICES)),
    )
    return page(repo.assignments, where, pagination, sort_params(params, SORTABLE, ('start_date', 'desc')))


def _detail(request, assignment_id: int, client_id: Optional[int] = None):
    where = {'id': assignment_id}
    if client_id is not None:
        where['client_id'] = client_id
    if request.method == 'GET':
        return ok(get_or_404(repo.assignments, where, 'Service assignment', sf.ASSIGNMENT_WITH_RELATIONS))

    if request.method == 'PUT':
        current = get_or_404(repo.assignments, where, 'Service assignment', sf.fields('start_date', 'end_date'))
        data = validated(ServiceAssignmentSerializer, request, partial=True, current=current)
        row = update_assignment(assignment_id, data, client_id)
        audit(request, 'UPDATE', 'service_assignment', assignment_id, fields=data.keys())
        return ok(row)

    snapshot = delete_assignment(assignment_id, client_id)
    audit(request, 'DELETE', 'service_assignment', assignment_id)
    return ok(snapshot)


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def assignments(request):
    if request.method == 'POST':
        data = validated(ServiceAssignmentSerializer, request)
        row = create_assignment(data)
        audit(request, 'CREATE', 'service_assignment', row['id'], fields=data.keys(), clientId=row['clientId'])
        return created(row)
    return _list(request)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def assignment_detail(request, assignment_id: int):
    return _detail(request, assignment_id)


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def client_services(request, client_id: int):
    get_or_404(repo.clients, {'id': client_id}, 'Client', {'id': True})

    if request.method == 'POST':
        data = validated(ClientServiceAssignmentSerializer, request)
        row = create_assignment(data, client_id)
        audit(request, 'CREATE', 'service_assignment', row['id'], fields=data.keys(), clientId=client_id)
        return created(row)
    return _list(request, client_id)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def client_service_detail(request, client_id: int, assignment_id: int):
    return _detail(request, assignment_id, client_id)
