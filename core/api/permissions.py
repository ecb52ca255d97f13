"""
Permisos por rol del API de StockWatch.

Los roles son ADMIN, STAFF y USER. ADMIN hereda todo lo que puede hacer STAFF.
"""
import logging

from rest_framework.permissions import BasePermission

logger = logging.getLogger(__name__)

ALL_ROLES = frozenset({"ADMIN", "STAFF", "USER"})


def _authenticated_role(request):
    user = request.user
    if not user or not user.is_authenticated:
        return None
    return getattr(user, "role", None)


class _HasRole(BasePermission):
    roles = frozenset()

    def has_permission(self, request, view):
        return _authenticated_role(request) in self.roles


class IsAdmin(_HasRole):
    message = "Se requieren permisos de administrador."
    roles = frozenset({"ADMIN"})


class IsStaff(_HasRole):
    message = "Se requieren permisos de staff."
    roles = frozenset({"STAFF", "ADMIN"})


class RoleAllowed(BasePermission):
    """
    Roles declarados por la vista en ``required_roles``. Sin roles declarados
    basta con estar autenticado.
    """
    message = "Tu rol no está autorizado para esta operación."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        required = getattr(view, "required_roles", None)
        if not required:
            return True

        if not isinstance(required, (set, list, tuple, frozenset)):
            logger.error("required_roles debe ser una colección, recibido: %s", type(required))
            return False

        unknown = set(required) - ALL_ROLES
        if unknown:
            logger.error("Roles inválidos en required_roles: %s", unknown)
            return False

        return _authenticated_role(request) in required
