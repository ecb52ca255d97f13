import logging

from django.contrib.auth import get_user_model
from rest_framework import generics, mixins, status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.api.permissions import IsAdmin, IsStaff
from core.exceptions import BusinessLogicError
from .permissions import IsAdminOrSelf, IsStaffOrSelf
from .serializers import (
    AdminAccountSerializer,
    CustomTokenObtainPairSerializer,
    SimpleUserSerializer,
    StaffSelfUpdateSerializer,
    StaffSerializer,
    UserRegistrationSerializer,
    UserSelfUpdateSerializer,
    UserUpdateSerializer,
)

CustomUser = get_user_model()
logger = logging.getLogger(__name__)


class UserRegistrationView(generics.CreateAPIView):
    """Registro público de usuarios con rol USER."""

    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_scope = "auth_register"

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info("Usuario registrado: %s", user.id)


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer
    throttle_scope = "auth_login"


class CustomTokenRefreshView(TokenRefreshView):
    throttle_scope = "auth_login"


class CurrentUserView(generics.RetrieveAPIView):
    """Obtiene información del usuario actual autenticado."""

    permission_classes = [IsAuthenticated]
    serializer_class = SimpleUserSerializer

    def get_object(self):
        return self.request.user


class CheckEmailView(APIView):
    """Indica si un correo ya está en uso (para el formulario de registro)."""

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_scope = "auth_register"

    def get(self, request):
        email = (request.query_params.get("email") or "").strip().lower()
        if not email:
            return Response(
                {"detail": "El parámetro 'email' es obligatorio."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        exists = CustomUser.objects.filter(email__iexact=email).exists()
        return Response({"email": email, "exists": exists, "available": not exists})


class StaffViewSet(viewsets.ModelViewSet):
    """
    CRUD de personal.

    - ADMIN: listar, crear, ver, editar y eliminar.
    - STAFF: ver y editar su propio perfil (nombre, teléfono, contraseña).
    """

    serializer_class = StaffSerializer
    queryset = CustomUser.objects.filter(role=CustomUser.Role.STAFF).order_by("name")
    filterset_fields = ["department", "status"]

    def get_permissions(self):
        if self.action in ("retrieve", "update", "partial_update"):
            return [IsStaff(), IsAdminOrSelf()]
        return [IsAdmin()]

    def get_serializer_class(self):
        if self.action in ("update", "partial_update") and self.request.user.role != CustomUser.Role.ADMIN:
            return StaffSelfUpdateSerializer
        return StaffSerializer

    def perform_create(self, serializer):
        staff = serializer.save()
        logger.info("Personal creado: %s por admin %s", staff.id, self.request.user.id)

    def perform_destroy(self, instance):
        logger.info("Personal eliminado: %s por admin %s", instance.id, self.request.user.id)
        instance.delete()


class AdminAccountViewSet(viewsets.ModelViewSet):
    """CRUD de cuentas de administrador. Solo ADMIN."""

    serializer_class = AdminAccountSerializer
    queryset = CustomUser.objects.filter(role=CustomUser.Role.ADMIN).order_by("name")
    permission_classes = [IsAdmin]
    filterset_fields = ["status"]

    def perform_create(self, serializer):
        admin = serializer.save()
        logger.info("Administrador creado: %s por admin %s", admin.id, self.request.user.id)

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            raise BusinessLogicError(
                "No puedes eliminar tu propia cuenta de administrador.",
                internal_code="USR-SELF-DELETE",
                status_code=status.HTTP_409_CONFLICT,
            )
        logger.info("Administrador eliminado: %s por admin %s", instance.id, self.request.user.id)
        instance.delete()


class UserViewSet(mixins.ListModelMixin,
                  mixins.RetrieveModelMixin,
                  mixins.UpdateModelMixin,
                  mixins.DestroyModelMixin,
                  viewsets.GenericViewSet):
    """
    Clientes (rol USER).

    - ADMIN y STAFF: listar y ver cualquier cliente.
    - USER: ver y editar su propio perfil (sin cambiar su estado).
    - ADMIN: editar y eliminar cualquier cliente.
    """

    serializer_class = SimpleUserSerializer
    queryset = CustomUser.objects.filter(role=CustomUser.Role.USER).order_by("-created_at")
    filterset_fields = ["status"]

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAdmin()]
        if self.action == "retrieve":
            return [IsAuthenticated(), IsStaffOrSelf()]
        if self.action in ("update", "partial_update"):
            return [IsAuthenticated(), IsAdminOrSelf()]
        return [IsStaff()]

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            if self.request.user.role == CustomUser.Role.ADMIN:
                return UserUpdateSerializer
            return UserSelfUpdateSerializer
        return SimpleUserSerializer

    def perform_update(self, serializer):
        user = serializer.save()
        logger.info("Usuario actualizado: %s por %s", user.id, self.request.user.id)

    def perform_destroy(self, instance):
        logger.info("Usuario eliminado: %s por admin %s", instance.id, self.request.user.id)
        instance.delete()
