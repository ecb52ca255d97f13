"""
Errores de dominio del inventario.

Todos heredan de BusinessLogicError, así que el handler de DRF los
serializa con su status HTTP y su código interno.
"""
from rest_framework import status

from core.exceptions import BusinessLogicError


class InventoryError(BusinessLogicError):
    default_detail = "Operación de inventario inválida."


class DuplicateNameError(InventoryError):
    default_detail = "Ya existe un producto con ese nombre."

    def __init__(self, product_name):
        self.product_name = product_name
        super().__init__(
            detail=f"Ya existe un producto con el nombre '{product_name}'.",
            internal_code="INV-DUPLICATE",
            status_code=status.HTTP_409_CONFLICT,
            extra={"product_name": product_name},
        )


class NotFoundError(InventoryError):
    default_detail = "Producto no encontrado."

    def __init__(self, product_id=None, *, product_name=None, model=None):
        self.product_id = product_id
        self.product_name = product_name
        self.model = model
        if product_id is not None:
            detail = f"Producto no encontrado con id: {product_id}"
            extra = {"product_id": str(product_id)}
        else:
            detail = f"Producto no encontrado: {product_name} (modelo {model})"
            extra = {"product_name": product_name, "model": model}
        super().__init__(
            detail=detail,
            internal_code="INV-NOT-FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            extra=extra,
        )


class InsufficientStockError(InventoryError):
    default_detail = "Stock insuficiente."

    def __init__(self, product_name, available, requested):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            detail=(
                f"Stock insuficiente para '{product_name}'. "
                f"Disponible: {available}, solicitado: {requested}"
            ),
            internal_code="INV-STOCK",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            extra={
                "product_name": product_name,
                "available": available,
                "requested": requested,
            },
        )


class InvalidQuantityError(InventoryError):
    default_detail = "La cantidad debe ser mayor que cero."

    def __init__(self, quantity, detail=None):
        self.quantity = quantity
        super().__init__(
            detail=detail or f"La cantidad debe ser mayor que cero. Recibido: {quantity}",
            internal_code="INV-QUANTITY",
            status_code=status.HTTP_400_BAD_REQUEST,
            extra={"quantity": quantity},
        )
