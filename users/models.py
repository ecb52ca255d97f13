from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.validators import MinLengthValidator, RegexValidator

from core.models import BaseModel


class CustomUserManager(BaseUserManager):
    def create_user(self, email, password=None, name="", **extra_fields):
        if not email:
            raise ValueError('El correo electrónico es obligatorio.')

        email = self.normalize_email(email).lower()
        user = self.model(email=email, name=name, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, name, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', self.model.Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('El superusuario debe tener is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('El superusuario debe tener is_superuser=True.')

        return self.create_user(email, password, name, **extra_fields)


PHONE_NUMBER_REGEX = RegexValidator(
    regex=r"^\+?[0-9]{10,15}$",
    message="El número de teléfono debe tener entre 10 y 15 dígitos.",
)


class CustomUser(BaseModel, AbstractBaseUser, PermissionsMixin):
    class Role(models.TextChoices):
        ADMIN = 'ADMIN', 'Administrador'
        STAFF = 'STAFF', 'Personal'
        USER = 'USER', 'Usuario'

    class Status(models.TextChoices):
        ACTIVE = 'ACTIVE', 'Activo'
        INACTIVE = 'INACTIVE', 'Inactivo'

    email = models.EmailField(
        max_length=255, unique=True, verbose_name='Correo Electrónico')
    name = models.CharField(
        max_length=50, validators=[MinLengthValidator(2)], verbose_name='Nombre')
    phone_number = models.CharField(
        max_length=16,
        blank=True,
        validators=[PHONE_NUMBER_REGEX],
        verbose_name='Número de Teléfono',
    )
    role = models.CharField(
        max_length=10, choices=Role.choices, default=Role.USER, verbose_name='Rol')

    # Solo aplica al personal
    designation = models.CharField(max_length=50, blank=True, verbose_name='Cargo')
    department = models.CharField(max_length=50, blank=True, verbose_name='Departamento')

    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.ACTIVE, verbose_name='Estado')
    is_active = models.BooleanField(default=True, verbose_name='Activo')
    is_staff = models.BooleanField(
        default=False, verbose_name='Acceso al admin de Django')

    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        verbose_name = 'Usuario'
        verbose_name_plural = 'Usuarios'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['role', 'status'], name='users_role_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.email})"

    def save(self, *args, **kwargs):
        # Un usuario INACTIVE no puede autenticarse
        self.is_active = self.status == self.Status.ACTIVE
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'status' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'is_active'}
        super().save(*args, **kwargs)

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(" ")[0] if self.name else self.email

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    @property
    def is_staff_member(self):
        return self.role in (self.Role.STAFF, self.Role.ADMIN)
