"""
Industry classification endpoints.

Industries form a two-level tree.  Names are unique among live
industries (a duplicate is a 400, as the dashboard shows it inline) and
an industry still referenced by child industries or clients cannot be
deleted.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.responses import bad_request, created, no_content, ok
from core.serializers.industries import IndustrySerializer
from core.services.audit import audit
from core.utils import get_pagination_params, merge_filters, sort_params

from ._common import ADMIN, get_or_404, id_param, page, search_filter, validated

SORTABLE = {'name': 'name', 'code': 'code', 'createdAt': 'created_at'}


def _name_taken(name, exclude_id=None) -> bool:
    where: dict = {'name': {'equals': name, 'mode': 'insensitive'}}
    if exclude_id is not None:
        where['NOT'] = {'id': exclude_id}
    return repo.industries.exists(where)


def _parent_filter(params) -> dict:
    raw = params.get('parentId')
    if raw in (None, '', 'all'):
        return {}
    if raw in ('root', 'null', 'none'):
        return {'parent_id': None}
    return {'parent_id': id_param(params, 'parentId')}


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def industries(request):
    if request.method == 'POST':
        data = validated(IndustrySerializer, request)
        if _name_taken(data['name']):
            return bad_request('Industry with this name already exists')
        row = repo.industries.create(data, select=sf.INDUSTRY_WITH_RELATIONS)
        audit(request, 'CREATE', 'industry', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        search_filter(pagination.search, ('name', 'code', 'description')),
        _parent_filter(params),
    )
    return page(repo.industries, where, pagination, sort_params(params, SORTABLE, ('name', 'asc')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def industry_detail(request, industry_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.industries, {'id': industry_id}, 'Industry', sf.INDUSTRY_WITH_RELATIONS))

    get_or_404(repo.industries, {'id': industry_id}, 'Industry', {'id': True})

    if request.method == 'PUT':
        data = validated(IndustrySerializer, request, partial=True, industry_id=industry_id)
        if data.get('name') and _name_taken(data['name'], exclude_id=industry_id):
            return bad_request('Industry with this name already exists')
        row = repo.industries.update({'id': industry_id}, data, select=sf.INDUSTRY_WITH_RELATIONS)
        audit(request, 'UPDATE', 'industry', industry_id, fields=data.keys())
        return ok(row)

    if repo.industries.exists({'parent_id': industry_id}) or repo.clients.exists({'industry_id': industry_id}):
        return bad_request('Cannot delete an industry that has child industries or clients')
    repo.industries.delete({'id': industry_id})
    audit(request, 'DELETE', 'industry', industry_id)
    return no_content()
