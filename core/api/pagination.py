"""
Paginación por defecto del API.
"""
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.settings import api_settings


class DefaultPageNumberPagination(PageNumberPagination):
    """
    Paginación por número de página. El cliente ajusta el tamaño con
    ``?page_size=N`` (máximo 100).

    Respuesta:
        {"count", "page", "pages", "page_size", "next", "previous", "results"}
    """
    page_size = api_settings.PAGE_SIZE or 20
    page_size_query_param = "page_size"
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            "count": self.page.paginator.count,
            "page": self.page.number,
            "pages": self.page.paginator.num_pages,
            "page_size": self.page.paginator.per_page,
            "next": self.get_next_link(),
            "previous": self.get_previous_link(),
            "results": data,
        })
