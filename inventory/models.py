from decimal import Decimal

from django.core.validators import (
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
    RegexValidator,
)
from django.db import models

from core.models import BaseModel

PRODUCT_NAME_REGEX = r'^[a-zA-Z0-9\s\-\.,&()+]*$'
PRODUCT_MODEL_REGEX = r'^[a-zA-Z0-9\s\-\.,]+$'

MAX_STOCK_QUANTITY = 100_000
MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("1000000.00")

CENT = Decimal("0.01")


def compute_total_price(price, quantity):
    """Valor total del stock redondeado a centavos."""
    if price is None or quantity is None:
        return Decimal("0.00")
    return (Decimal(price) * quantity).quantize(CENT)


class ProductQuerySet(models.QuerySet):
    def low_stock(self, threshold):
        return self.filter(unit_stock_quantity__lte=threshold)

    def by_name_and_model(self, product_name, model):
        return self.filter(product_name=product_name, model=model)


class Product(BaseModel):
    class Status(models.TextChoices):
        ACTIVE = 'ACTIVE', 'Activo'
        INACTIVE = 'INACTIVE', 'Inactivo'
        DISCONTINUED = 'DISCONTINUED', 'Descontinuado'

    product_name = models.CharField(
        max_length=100,
        unique=True,
        validators=[
            MinLengthValidator(2),
            RegexValidator(
                PRODUCT_NAME_REGEX,
                message="El nombre contiene caracteres no permitidos.",
            ),
        ],
        verbose_name="Nombre del Producto",
    )
    model = models.CharField(
        max_length=50,
        validators=[
            RegexValidator(
                PRODUCT_MODEL_REGEX,
                message="El modelo contiene caracteres no permitidos.",
            ),
        ],
        verbose_name="Modelo",
    )
    price_per_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(MIN_PRICE), MaxValueValidator(MAX_PRICE)],
        verbose_name="Precio Unitario",
    )
    unit_stock_quantity = models.PositiveIntegerField(
        default=0,
        validators=[MaxValueValidator(MAX_STOCK_QUANTITY)],
        verbose_name="Stock",
    )
    total_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
        verbose_name="Valor Total",
        help_text="Precio unitario por stock. Se recalcula en cada guardado.",
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        verbose_name="Estado",
    )

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = "Producto"
        verbose_name_plural = "Productos"
        ordering = ['product_name']
        indexes = [
            models.Index(fields=['product_name', 'model'], name='inv_name_model_idx'),
            models.Index(fields=['unit_stock_quantity'], name='inv_stock_idx'),
        ]

    def __str__(self):
        return f"{self.product_name} ({self.model})"

    def refresh_total_price(self):
        self.total_price = compute_total_price(self.price_per_quantity, self.unit_stock_quantity)
        return self.total_price

    def save(self, *args, **kwargs):
        self.refresh_total_price()
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'total_price' not in update_fields:
            kwargs['update_fields'] = list(update_fields) + ['total_price']
        super().save(*args, **kwargs)
