"""
Paquete API de Core.

Infraestructura DRF compartida: permisos por rol y paginación.
"""
from core.api.permissions import (
    IsAdmin,
    IsStaff,
    RoleAllowed,
)
from core.api.pagination import DefaultPageNumberPagination


__all__ = [
    "IsAdmin",
    "IsStaff",
    "RoleAllowed",
    "DefaultPageNumberPagination",
]
