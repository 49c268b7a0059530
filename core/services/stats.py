from datetime import timedelta
from typing import Optional

from django.utils import timezone

from core import repositories as repo
from core.utils import merge_filters, nullable_filter

TIME_RANGES = {'7d': 7, '30d': 30, '90d': 90, '1y': 365}
DEFAULT_TIME_RANGE = '30d'


def range_start(time_range: Optional[str]):
    days = TIME_RANGES.get(time_range or DEFAULT_TIME_RANGE, TIME_RANGES[DEFAULT_TIME_RANGE])
    return timezone.now() - timedelta(days=days)


def _tally(rows, key, label=lambda v: v) -> dict:
    return {str(label(row[key])): row['_count'] for row in rows}


def client_stats(time_range: Optional[str] = None, industry_id: Optional[int] = None) -> dict:
    where = merge_filters(nullable_filter('industry_id', industry_id))
    clients = repo.clients
    return {
        'total': clients.count(where),
        'active': clients.count({**where, 'status': 'ACTIVE'}),
        'verified': clients.count({**where, 'is_verified': True}),
        'newInTimeRange': clients.count({**where, 'created_at': {'gte': range_start(time_range)}}),
        'byStatus': _tally(clients.group_by(['status'], where), 'status'),
        'byIndustry': _tally(
            clients.group_by(['industry_id'], where), 'industryId',
            lambda v: v if v is not None else 'unknown',
        ),
        'byVerification': _tally(
            clients.group_by(['is_verified'], where), 'isVerified',
            lambda v: 'verified' if v else 'unverified',
        ),
    }


def provider_stats() -> dict:
    providers = repo.providers
    ratings = providers.aggregate(avg=['rating'], min=['rating'], max=['rating'], count=['rating'])
    return {
        'total': providers.count(),
        'verified': providers.count({'is_verified': True}),
        'rating': {
            'average': ratings['_avg']['rating'],
            'min': ratings['_min']['rating'],
            'max': ratings['_max']['rating'],
            'rated': ratings['_count']['rating'],
        },
        'byType': _tally(providers.group_by(['type']), 'type', lambda v: v or 'unknown'),
        'byStatus': _tally(providers.group_by(['status']), 'status'),
    }


def session_counts(where: Optional[dict] = None) -> dict:
    counts = _tally(repo.sessions.group_by(['status'], where), 'status')
    counts['total'] = sum(counts.values())
    return counts
