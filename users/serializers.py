import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

CustomUser = get_user_model()
logger = logging.getLogger(__name__)


class SimpleUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = (
            "id",
            "email",
            "name",
            "phone_number",
            "role",
            "designation",
            "department",
            "status",
            "created_at",
        )
        read_only_fields = fields


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Registro público: siempre crea cuentas con rol USER."""

    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    class Meta:
        model = CustomUser
        fields = ["id", "email", "password", "name", "phone_number"]
        read_only_fields = ["id"]
        extra_kwargs = {
            "email": {"validators": []},
        }

    def validate_email(self, value):
        value = value.lower()
        if CustomUser.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Este correo electrónico ya está registrado.")
        return value

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        """Crea el usuario usando create_user para hashear la contraseña correctamente."""
        return CustomUser.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            name=validated_data.get("name", ""),
            phone_number=validated_data.get("phone_number", ""),
            role=CustomUser.Role.USER,
        )


class AccountSerializer(serializers.ModelSerializer):
    """
    Base de las cuentas que administra un ADMIN (personal, administradores y
    clientes). Las altas usan ``role_on_create``; la contraseña es obligatoria
    solo al crear.
    """

    role_on_create = None
    create_defaults = {}

    password = serializers.CharField(write_only=True, required=False, min_length=6)

    def validate_email(self, value):
        value = value.lower()
        others = CustomUser.objects.filter(email__iexact=value)
        if self.instance is not None:
            others = others.exclude(pk=self.instance.pk)
        if others.exists():
            raise serializers.ValidationError("Este correo electrónico ya está registrado.")
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "La contraseña es obligatoria."})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        return CustomUser.objects.create_user(
            password=password,
            role=self.role_on_create,
            **self.create_defaults,
            **validated_data,
        )

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class StaffSerializer(AccountSerializer):
    """
    Serializer para el CRUD de personal (solo ADMIN).
    Cargo, departamento y teléfono son obligatorios para el personal.
    """

    role_on_create = CustomUser.Role.STAFF

    class Meta:
        model = CustomUser
        fields = [
            "id",
            "email",
            "password",
            "name",
            "phone_number",
            "designation",
            "department",
            "status",
            "role",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "role", "created_at", "updated_at"]
        extra_kwargs = {
            "email": {"validators": []},
            "designation": {"required": True, "allow_blank": False, "min_length": 2},
            "department": {"required": True, "allow_blank": False, "min_length": 2},
            "phone_number": {"required": True, "allow_blank": False},
        }


class StaffSelfUpdateSerializer(StaffSerializer):
    """El propio personal solo puede editar nombre, teléfono y contraseña."""

    class Meta(StaffSerializer.Meta):
        read_only_fields = [
            "id", "email", "designation", "department", "status", "role", "created_at", "updated_at",
        ]
        extra_kwargs = {}


class AdminAccountSerializer(AccountSerializer):
    """Cuentas de administrador. Quedan con acceso al admin de Django."""

    role_on_create = CustomUser.Role.ADMIN
    create_defaults = {"is_staff": True}

    class Meta:
        model = CustomUser
        fields = [
            "id",
            "email",
            "password",
            "name",
            "phone_number",
            "status",
            "role",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "role", "created_at", "updated_at"]
        extra_kwargs = {"email": {"validators": []}}


class UserUpdateSerializer(AccountSerializer):
    """Edición de clientes por un ADMIN. Los clientes se crean con el registro público."""

    class Meta:
        model = CustomUser
        fields = ["id", "email", "password", "name", "phone_number", "status", "role", "created_at"]
        read_only_fields = ["id", "role", "created_at"]
        extra_kwargs = {"email": {"validators": []}}

    def validate_password(self, value):
        validate_password(value, self.instance)
        return value


class UserSelfUpdateSerializer(UserUpdateSerializer):
    """El cliente edita sus datos pero no su estado."""

    class Meta(UserUpdateSerializer.Meta):
        read_only_fields = ["id", "status", "role", "created_at"]


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        token["name"] = user.name
        return token

    def validate(self, attrs):
        data = super().validate(attrs)

        logger.info(
            "Login successful",
            extra={
                "user_id": str(self.user.id),
                "role": self.user.role,
                "event": "auth.login_success",
            },
        )

        data["role"] = self.user.role
        data["user"] = SimpleUserSerializer(self.user).data
        return data
