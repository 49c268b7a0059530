"""
Contract endpoints, both top-level and nested under a client.

A contract with open service assignments cannot be deleted, and one
with any assignments cannot be moved to another client.
"""
from __future__ import annotations

from typing import Optional

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import CONTRACT_STATUS_CHOICES, PAYMENT_STATUS_CHOICES
from core.responses import created, no_content, ok
from core.serializers.contracts import ClientContractSerializer, ContractSerializer
from core.services.audit import audit
from core.services.contracts import create_contract, delete_contract, update_contract
from core.utils import get_pagination_params, merge_filters, nullable_filter, parse_bool, sort_params

from ._common import ADMIN, enum_param, get_or_404, id_param, page, search_filter, status_filter, validated

SORTABLE = {
    'startDate': 'start_date',
    'endDate': 'end_date',
    'billingRate': 'billing_rate',
    'status': 'status',
    'paymentStatus': 'payment_status',
    'createdAt': 'created_at',
}


def _list(request, client_id: Optional[int] = None):
    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        {'client_id': client_id} if client_id is not None else nullable_filter('client_id', id_param(params, 'clientId')),
        status_filter(pagination.status, CONTRACT_STATUS_CHOICES),
        search_filter(pagination.search, ('client__name', 'signed_by', 'notes')),
        nullable_filter('payment_status', enum_param(params, 'paymentStatus', PAYMENT_STATUS_CHOICES)),
        nullable_filter('is_renewable', parse_bool(params.get('isRenewable'))),
    )
    return page(repo.contracts, where, pagination, sort_params(params, SORTABLE, ('start_date', 'desc')))


def _detail(request, contract_id: int, client_id: Optional[int] = None):
    where = {'id': contract_id}
    if client_id is not None:
        where['client_id'] = client_id
    if request.method == 'GET':
        return ok(get_or_404(repo.contracts, where, 'Contract', sf.CONTRACT_WITH_RELATIONS))

    if request.method == 'PUT':
        current = get_or_404(repo.contracts, where, 'Contract', sf.fields(
            'start_date', 'end_date', 'renewal_date', 'termination_reason',
        ))
        serializer = ClientContractSerializer if client_id is not None else ContractSerializer
        data = validated(serializer, request, partial=True, current=current)
        row = update_contract(contract_id, data, client_id)
        audit(request, 'UPDATE', 'contract', contract_id, fields=data.keys())
        return ok(row)

    delete_contract(contract_id, client_id)
    audit(request, 'DELETE', 'contract', contract_id)
    return no_content()


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def contracts(request):
    if request.method == 'POST':
        data = validated(ContractSerializer, request)
        row = create_contract(data)
        audit(request, 'CREATE', 'contract', row['id'], fields=data.keys(), clientId=row['clientId'])
        return created(row)
    return _list(request)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def contract_detail(request, contract_id: int):
    return _detail(request, contract_id)


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def client_contracts(request, client_id: int):
    get_or_404(repo.clients, {'id': client_id}, 'Client', {'id': True})

    if request.method == 'POST':
        data = validated(ClientContractSerializer, request)
        row = create_contract(data, client_id)
        audit(request, 'CREATE', 'contract', row['id'], fields=data.keys(), clientId=client_id)
        return created(row)
    return _list(request, client_id)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def client_contract_detail(request, client_id: int, contract_id: int):
    return _detail(request, contract_id, client_id)
