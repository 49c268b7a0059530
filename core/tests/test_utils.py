from datetime import time

import pytest
from django.utils import timezone

from core.utils import (
    PaginationParams,
    get_pagination_params,
    merge_filters,
    nullable_filter,
    page_metadata,
    parse_bool,
    parse_datetime_param,
    parse_float,
    range_filter,
    sort_params,
)
from core.utils.pagination import MAX_INT, parse_int


def test_pagination_defaults():
    p = get_pagination_params({})
    assert p == PaginationParams(page=1, limit=10, offset=0, search=None, status=None)


def test_pagination_clamps_out_of_range_values():
    p = get_pagination_params({'page': '0', 'limit': '500'})
    assert (p.page, p.limit, p.offset) == (1, 100, 0)
    p = get_pagination_params({'page': '-3', 'limit': '0'})
    assert (p.page, p.limit) == (1, 1)


def test_pagination_tolerates_garbage():
    p = get_pagination_params({'page': 'abc', 'limit': '12abc', 'search': '', 'status': 'ACTIVE'})
    assert (p.page, p.limit) == (1, 12)
    assert p.search is None
    assert p.status == 'ACTIVE'


def test_pagination_offset():
    p = get_pagination_params({'page': '3', 'limit': '20', 'search': 'acme'})
    assert p.offset == 40
    assert p.search == 'acme'


@pytest.mark.parametrize('raw, expected', [(None, 7), ('', 7), ('42', 42), (' 5 ', 5), (True, 7), (9, 9)])
def test_parse_int(raw, expected):
    assert parse_int(raw, 7) == expected


def test_parse_int_saturates_huge_numbers():
    assert parse_int('9' * 5000, 7) == MAX_INT + 1
    assert parse_int('-' + '9' * 5000, 7) == -MAX_INT - 1
    assert parse_int('0' * 40 + '12', 7) == 12
    assert parse_int(10 ** 30, 7) == MAX_INT + 1


def test_pagination_bounds_huge_page():
    p = get_pagination_params({'page': '9' * 5000, 'limit': '20'})
    assert p.page == MAX_INT // 20
    assert p.offset + p.limit <= MAX_INT
    p = get_pagination_params({'page': '1' + '0' * 25, 'limit': ''})
    assert p.offset + p.limit <= MAX_INT


def test_page_metadata():
    p = get_pagination_params({'limit': '10'})
    assert page_metadata(25, p) == {'total': 25, 'page': 1, 'limit': 10, 'totalPages': 3}
    assert page_metadata(0, p)['totalPages'] == 0


def test_nullable_and_range_filters():
    assert nullable_filter('status', None) == {}
    assert nullable_filter('status', 'ACTIVE') == {'status': 'ACTIVE'}
    assert range_filter('rating') == {}
    assert range_filter('rating', 0, None) == {'rating': {'gte': 0}}
    assert range_filter('rating', None, 4.5) == {'rating': {'lte': 4.5}}
    assert range_filter('rating', 1, 5) == {'rating': {'gte': 1, 'lte': 5}}


def test_merge_filters_rejects_duplicate_keys():
    assert merge_filters({'a': 1}, {}, {'b': 2}) == {'a': 1, 'b': 2}
    with pytest.raises(ValueError):
        merge_filters({'a': 1}, {'a': 2})


def test_parse_bool_and_float():
    assert parse_bool('TRUE') is True
    assert parse_bool('false') is False
    assert parse_bool('yes') is None
    assert parse_bool(None) is None
    assert parse_float('4.5') == 4.5
    assert parse_float('') is None
    assert parse_float('high') is None


def test_parse_datetime_param():
    start = parse_datetime_param('2024-03-01')
    end = parse_datetime_param('2024-03-01', end_of_day=True)
    assert timezone.is_aware(start) and timezone.is_aware(end)
    assert start.time() == time.min
    assert end.time() == time.max
    assert parse_datetime_param('2024-03-01T08:30:00Z').hour == 8
    assert parse_datetime_param('not-a-date') is None
    assert parse_datetime_param(None) is None


def test_sort_params():
    allowed = {'name': 'name', 'fullName': 'profile__full_name'}
    fallback = ('created_at', 'desc')
    assert sort_params({}, allowed, fallback) == {'created_at': 'desc'}
    assert sort_params({'sortBy': 'fullName', 'sortOrder': 'DESC'}, allowed, fallback) == {'profile__full_name': 'desc'}
    assert sort_params({'sortBy': 'name', 'sortOrder': 'sideways'}, allowed, fallback) == {'name': 'asc'}
    assert sort_params({'sortBy': 'password'}, allowed, fallback) == {'created_at': 'desc'}
    assert sort_params({'sortBy': 'name'}, ['name'], fallback) == {'name': 'asc'}
