from rest_framework.permissions import BasePermission

from .models import CustomUser


class IsAdminOrSelf(BasePermission):
    """
    Acceso a nivel de objeto: ADMIN sobre cualquier cuenta, el resto solo
    sobre la propia.
    """
    message = 'Solo puedes acceder a tu propio perfil.'

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not user.is_authenticated:
            return False
        return user.role == CustomUser.Role.ADMIN or obj.pk == user.pk


class IsStaffOrSelf(BasePermission):
    """STAFF y ADMIN ven cualquier cuenta; un USER solo la suya."""
    message = 'Solo puedes acceder a tu propio perfil.'

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not user.is_authenticated:
            return False
        return user.role in (CustomUser.Role.STAFF, CustomUser.Role.ADMIN) or obj.pk == user.pk
