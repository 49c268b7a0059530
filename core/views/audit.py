from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes

from core import repositories as repo
from core.models import AuditEvent
from core.utils import get_pagination_params, merge_filters, nullable_filter, parse_datetime_param, range_filter

from ._common import ADMIN, enum_param, id_param, page


@api_view(['GET'])
@permission_classes(ADMIN)
def audit_logs(request):
    params = request.query_params
    pagination = get_pagination_params(params)
    where = merge_filters(
        nullable_filter('user_id', id_param(params, 'userId')),
        nullable_filter('entity_type', params.get('entityType') or None),
        nullable_filter('entity_id', params.get('entityId') or None),
        nullable_filter('action', enum_param(params, 'action', AuditEvent.ACTION_CHOICES)),
        range_filter(
            'created_at',
            parse_datetime_param(params.get('startDate')),
            parse_datetime_param(params.get('endDate'), end_of_day=True),
        ),
    )
    return page(repo.audit_events, where, pagination, [{'created_at': 'desc'}, {'id': 'desc'}])
