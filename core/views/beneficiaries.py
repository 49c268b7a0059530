from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import BASE_STATUS_CHOICES, RELATION_CHOICES
from core.responses import created, ok
from core.serializers.beneficiaries import BeneficiarySerializer
from core.services.audit import audit
from core.services.staff import create_beneficiary, update_beneficiary
from core.utils import get_pagination_params, merge_filters, nullable_filter, sort_params

from ._common import ADMIN, enum_param, get_or_404, has_filter, page, search_filter, status_filter, validated

SORTABLE = {
    'relation': 'relation',
    'status': 'status',
    'createdAt': 'created_at',
    'fullName': 'profile__full_name',
    'lastServiceDate': 'last_service_date',
}


def _staff_or_404(client_id: int, staff_id: int) -> None:
    get_or_404(repo.staff, {'id': staff_id, 'client_id': client_id}, 'Staff', {'id': True})


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def staff_beneficiaries(request, client_id: int, staff_id: int):
    _staff_or_404(client_id, staff_id)

    if request.method == 'POST':
        data = validated(BeneficiarySerializer, request)
        row = create_beneficiary(staff_id, data)
        audit(request, 'CREATE', 'beneficiary', row['id'], fields=data.keys(), staffId=staff_id)
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        {'staff_id': staff_id},
        status_filter(pagination.status, BASE_STATUS_CHOICES),
        search_filter(pagination.search, ('profile__full_name', 'profile__email', 'relationship_details')),
        nullable_filter('relation', enum_param(params, 'relation', RELATION_CHOICES)),
        has_filter('sessions', params.get('hasSessions')),
    )
    return page(repo.beneficiaries, where, pagination, sort_params(params, SORTABLE, ('created_at', 'desc')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def staff_beneficiary_detail(request, client_id: int, staff_id: int, beneficiary_id: int):
    _staff_or_404(client_id, staff_id)
    where = {'id': beneficiary_id, 'staff_id': staff_id}
    if request.method == 'GET':
        return ok(get_or_404(repo.beneficiaries, where, 'Beneficiary', sf.BENEFICIARY_WITH_RELATIONS))

    if request.method == 'PUT':
        data = validated(BeneficiarySerializer, request, partial=True)
        row = update_beneficiary(staff_id, beneficiary_id, data)
        audit(request, 'UPDATE', 'beneficiary', beneficiary_id, fields=data.keys())
        return ok(row)

    snapshot = repo.beneficiaries.delete(where)
    audit(request, 'DELETE', 'beneficiary', beneficiary_id)
    return ok(snapshot)
