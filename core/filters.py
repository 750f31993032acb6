from rest_framework import filters


class SubstringSearchFilter(filters.SearchFilter):
    """Match the whole ``search`` value as one case-insensitive substring.

    DRF's SearchFilter splits the value into words and ANDs them across all
    search fields; here a multi-word query must appear verbatim in one field.
    """

    def get_search_terms(self, request):
        value = request.query_params.get(self.search_param, '')
        value = value.replace('\x00', '').strip()
        return [value] if value else []
