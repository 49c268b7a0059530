from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.models import PROVIDER_ENTITY_TYPE_CHOICES, PROVIDER_TYPE_CHOICES, WORK_STATUS_CHOICES
from core.responses import bad_request, created, ok
from core.serializers.providers import ProviderSerializer
from core.services.audit import audit
from core.services.stats import provider_stats
from core.utils import get_pagination_params, merge_filters, nullable_filter, parse_bool, parse_float, range_filter, sort_params

from ._common import ADMIN, enum_param, get_or_404, page, search_filter, status_filter, validated

SORTABLE = {
    'name': 'name',
    'rating': 'rating',
    'status': 'status',
    'createdAt': 'created_at',
}


def _name_taken(name, exclude_id=None) -> bool:
    where: dict = {'name': {'equals': name, 'mode': 'insensitive'}}
    if exclude_id is not None:
        where['NOT'] = {'id': exclude_id}
    return repo.providers.exists(where)


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def providers(request):
    if request.method == 'POST':
        data = validated(ProviderSerializer, request)
        if _name_taken(data['name']):
            return bad_request('A provider with this name already exists')
        row = repo.providers.create(data, select=sf.PROVIDER_WITH_RELATIONS)
        audit(request, 'CREATE', 'provider', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        status_filter(pagination.status, WORK_STATUS_CHOICES),
        search_filter(pagination.search, ('name', 'contact_email', 'location')),
        nullable_filter('is_verified', parse_bool(params.get('isVerified'))),
        nullable_filter('type', enum_param(params, 'type', PROVIDER_TYPE_CHOICES)),
        nullable_filter('entity_type', enum_param(params, 'entityType', PROVIDER_ENTITY_TYPE_CHOICES)),
        range_filter('rating', parse_float(params.get('minRating')), parse_float(params.get('maxRating'))),
    )
    return page(repo.providers, where, pagination, sort_params(params, SORTABLE, ('name', 'asc')))


@api_view(['GET'])
@permission_classes(ADMIN)
def providers_stats(request):
    return ok(provider_stats())


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def provider_detail(request, provider_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.providers, {'id': provider_id}, 'Provider', sf.PROVIDER_WITH_RELATIONS))

    if request.method == 'PUT':
        get_or_404(repo.providers, {'id': provider_id}, 'Provider', {'id': True})
        data = validated(ProviderSerializer, request, partial=True)
        if data.get('name') and _name_taken(data['name'], exclude_id=provider_id):
            return bad_request('A provider with this name already exists')
        row = repo.providers.update({'id': provider_id}, data, select=sf.PROVIDER_WITH_RELATIONS)
        audit(request, 'UPDATE', 'provider', provider_id, fields=data.keys())
        return ok(row)

    snapshot = repo.providers.delete({'id': provider_id})
    audit(request, 'DELETE', 'provider', provider_id)
    return ok(snapshot)
