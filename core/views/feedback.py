from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core.responses import created, not_found, ok
from core.serializers.feedback import FeedbackSerializer
from core.services.audit import audit
from core.utils import get_pagination_params, merge_filters, nullable_filter, parse_float, range_filter, sort_params

from ._common import ADMIN, get_or_404, id_param, page, search_filter, validated

SORTABLE = {'rating': 'rating', 'createdAt': 'created_at'}


@api_view(['GET', 'POST'])
@permission_classes(ADMIN)
def feedback(request):
    if request.method == 'POST':
        data = validated(FeedbackSerializer, request)
        if not repo.sessions.exists({'id': data['session_id']}):
            return not_found('Session not found')
        row = repo.feedback.create(data)
        audit(request, 'CREATE', 'feedback', row['id'], fields=data.keys())
        return created(row)

    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        search_filter(pagination.search, ('comment',)),
        nullable_filter('session_id', id_param(params, 'sessionId')),
        range_filter('rating', parse_float(params.get('minRating')), parse_float(params.get('maxRating'))),
    )
    return page(repo.feedback, where, pagination, sort_params(params, SORTABLE, ('created_at', 'desc')))


@api_view(['GET', 'DELETE'])
@permission_classes(ADMIN)
def feedback_detail(request, feedback_id: int):
    if request.method == 'GET':
        return ok(get_or_404(repo.feedback, {'id': feedback_id}, 'Feedback'))

    snapshot = repo.feedback.delete({'id': feedback_id}, hard=True)
    audit(request, 'DELETE', 'feedback', feedback_id)
    return ok(snapshot)
