from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core import select_fields as sf
from core.responses import created, no_content, ok
from core.serializers.services import CategorySerializer
from core.services.audit import audit
from core.utils import get_pagination_params, sort_params

from ._common import ADMIN, get_or_404, page, search_filter, validated

SORTABLE = {'name': 'name', 'createdAt': 'created_at'}


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def categories(request):
    if request.method == 'POST':
        data = validated(CategorySerializer, request)
        row = repo.categories.create(data, select=sf.CATEGORY_WITH_SERVICES)
        audit(request, 'CREATE', 'category', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = search_filter(pagination.search, ('name', 'description'))
    return page(repo.categories, where, pagination, sort_params(params, SORTABLE, ('name', 'asc')))


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes(ADMIN)
def category_detail(request, category_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.categories, {'id': category_id}, 'Category', sf.CATEGORY_WITH_SERVICES))

    if request.method == 'PUT':
        get_or_404(repo.categories, {'id': category_id}, 'Category', {'id': True})
        data = validated(CategorySerializer, request, partial=True)
        row = repo.categories.update({'id': category_id}, data, select=sf.CATEGORY_WITH_SERVICES)
        audit(request, 'UPDATE', 'category', category_id, fields=data.keys())
        return ok(row)

    repo.categories.delete({'id': category_id})
    audit(request, 'DELETE', 'category', category_id)
    return no_content()
