"""
Staff endpoints nested under a client.

Creating a staff member writes the personal profile and the staff row
in one transaction; a profile with the same e-mail is reused.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import WORK_STATUS_CHOICES
from core.responses import created, ok
from core.serializers.staff import StaffSerializer
from core.services.audit import audit
from core.services.staff import create_staff, update_staff
from core.utils import get_pagination_params, merge_filters, sort_params

from ._common import ADMIN, get_or_404, has_filter, page, search_filter, status_filter, validated

SORTABLE = {
    'jobTitle': 'job_title',
    'status': 'status',
    'startDate': 'start_date',
    'createdAt': 'created_at',
    'fullName': 'profile__full_name',
}


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def client_staff(request, client_id: int):
    get_or_404(repo.clients, {'id': client_id}, 'Client', {'id': True})

    if request.method == 'POST':
        data = validated(StaffSerializer, request)
        row = create_staff(client_id, data)
        audit(request, 'CREATE', 'staff', row['id'], fields=data.keys(), clientId=client_id)
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    role = params.get('role')
    where = merge_filters(
        {'client_id': client_id},
        status_filter(pagination.status, WORK_STATUS_CHOICES),
        search_filter(pagination.search, ('profile__full_name', 'profile__email', 'job_title', 'company_staff_id')),
        {'job_title': {'contains': role, 'mode': 'insensitive'}} if role and role != 'all' else {},
        has_filter('beneficiaries', params.get('hasBeneficiaries')),
    )
    return page(repo.staff, where, pagination, sort_params(params, SORTABLE, ('created_at', 'desc')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def client_staff_detail(request, client_id: int, staff_id: int):
    where = {'id': staff_id, 'client_id': client_id}
    if request.method == 'GET':
        return ok(get_or_404(repo.staff, where, 'Staff', sf.STAFF_WITH_RELATIONS))

    if request.method == 'PUT':
        data = validated(StaffSerializer, request, partial=True)
        row = update_staff(client_id, staff_id, data)
        audit(request, 'UPDATE', 'staff', staff_id, fields=data.keys())
        return ok(row)

    snapshot = repo.staff.delete(where)
    audit(request, 'DELETE', 'staff', staff_id)
    return ok(snapshot)
