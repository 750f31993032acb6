import math

from django.conf import settings
from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _positive_int(value, default, cap=None):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    if cap is not None:
        number = min(number, cap)
    return number


class PagePagination(BasePagination):
    """Page/limit pagination producing ``{items, pagination}``.

    Unlike DRF's PageNumberPagination, a page past the end is not an error:
    it yields an empty item list with the real total.
    """
    page_query_param = 'page'
    limit_query_param = 'limit'

    def __init__(self):
        config = getattr(settings, 'DISHMATCH', {})
        self.default_limit = config.get('PAGE_SIZE', 10)
        self.max_limit = config.get('MAX_PAGE_SIZE', 100)

    def paginate_queryset(self, queryset, request, view=None):
        params = request.query_params
        self.page = _positive_int(params.get(self.page_query_param), 1)
        self.limit = _positive_int(
            params.get(self.limit_query_param), self.default_limit, self.max_limit)
        self.total = queryset.count()

        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return Response({
            'items': data,
            'pagination': {
                'page': self.page,
                'limit': self.limit,
                'total': self.total,
                'pages': math.ceil(self.total / self.limit),
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'items': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'total': {'type': 'integer'},
                        'pages': {'type': 'integer'},
                    },
                },
            },
        }
