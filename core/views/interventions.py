from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import BASE_STATUS_CHOICES
from core.responses import created, not_found, ok
from core.serializers.services import InterventionSerializer
from core.services.audit import audit
from core.utils import get_pagination_params, merge_filters, nullable_filter, sort_params

from ._common import ADMIN, get_or_404, id_param, page, search_filter, status_filter, validated

SORTABLE = {'name': 'name', 'price': 'price', 'status': 'status', 'createdAt': 'created_at'}


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def interventions(request):
    if request.method == 'POST':
        data = validated(InterventionSerializer, request)
        if not repo.services.exists({'id': data['service_id']}):
            return not_found('Service not found')
        row = repo.interventions.create(data)
        audit(request, 'CREATE', 'intervention', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        status_filter(pagination.status, BASE_STATUS_CHOICES),
        search_filter(pagination.search, ('name', 'description')),
        nullable_filter('service_id', id_param(params, 'serviceId')),
        nullable_filter('provider_id', id_param(params, 'providerId')),
    )
    return page(repo.interventions, where, pagination, sort_params(params, SORTABLE, ('name', 'asc')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def intervention_detail(request, intervention_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.interventions, {'id': intervention_id}, 'Intervention', sf.INTERVENTION))

    if request.method == 'PUT':
        get_or_404(repo.interventions, {'id': intervention_id}, 'Intervention', {'id': True})
        data = validated(InterventionSerializer, request, partial=True)
        if 'service_id' in data and not repo.services.exists({'id': data['service_id']}):
            return not_found('Service not found')
        row = repo.interventions.update({'id': intervention_id}, data)
        audit(request, 'UPDATE', 'intervention', intervention_id, fields=data.keys())
        return ok(row)

    snapshot = repo.interventions.delete({'id': intervention_id})
    audit(request, 'DELETE', 'intervention', intervention_id)
    return ok(snapshot)
