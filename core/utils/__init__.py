from .filters import merge_filters, nullable_filter, parse_bool, parse_datetime_param, parse_float, range_filter
from .pagination import MAX_LIMIT, PaginationParams, get_pagination_params, page_metadata
from .sorting import build_order_by, sort_params

__all__ = [
    'MAX_LIMIT',
    'PaginationParams',
    'build_order_by',
    'get_pagination_params',
    'merge_filters',
    'nullable_filter',
    'page_metadata',
    'parse_bool',
    'parse_datetime_param',
    'parse_float',
    'range_filter',
    'sort_params',
]
