from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import BASE_STATUS_CHOICES
from core.responses import created, ok
from core.serializers.services import ServiceSerializer
from core.services.audit import audit
from core.utils import get_pagination_params, merge_filters, nullable_filter, parse_bool, sort_params

from ._common import ADMIN, get_or_404, id_param, page, search_filter, status_filter, validated

SORTABLE = {'name': 'name', 'price': 'price', 'status': 'status', 'createdAt': 'created_at'}


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def services(request):
    if request.method == 'POST':
        data = validated(ServiceSerializer, request)
        row = repo.services.create(data, select=sf.SERVICE_WITH_RELATIONS)
        audit(request, 'CREATE', 'service', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        status_filter(pagination.status, BASE_STATUS_CHOICES),
        search_filter(pagination.search, ('name', 'description')),
        nullable_filter('category_id', id_param(params, 'categoryId')),
        nullable_filter('is_public', parse_bool(params.get('isPublic'))),
    )
    return page(repo.services, where, pagination, sort_params(params, SORTABLE, ('name', 'asc')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def service_detail(request, service_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.services, {'id': service_id}, 'Service', sf.SERVICE_WITH_RELATIONS))

    if request.method == 'PUT':
        get_or_404(repo.services, {'id': service_id}, 'Service', {'id': True})
        data = validated(ServiceSerializer, request, partial=True)
        row = repo.services.update({'id': service_id}, data, select=sf.SERVICE_WITH_RELATIONS)
        audit(request, 'UPDATE', 'service', service_id, fields=data.keys())
        return ok(row)

    snapshot = repo.services.delete({'id': service_id})
    audit(request, 'DELETE', 'service', service_id)
    return ok(snapshot)
