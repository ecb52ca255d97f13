import os

from .core import DEBUG

# --------------------------------------------------------------------------------------
# DRF
# --------------------------------------------------------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "core.exceptions.drf_exception_handler",
    "DEFAULT_PAGINATION_CLASS": "core.api.pagination.DefaultPageNumberPagination",
    "PAGE_SIZE": int(os.getenv("API_PAGE_SIZE", "20")),
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.UserRateThrottle",
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.ScopedRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "user": os.getenv("THROTTLE_USER", "1000/min"),
        "anon": os.getenv("THROTTLE_ANON", "300/min"),

        # Scopes específicos de autenticación
        "auth_login": os.getenv("THROTTLE_AUTH_LOGIN", "30/min"),
        "auth_register": os.getenv("THROTTLE_AUTH_REGISTER", "20/hour"),

        # Pedidos y exportaciones
        "orders": os.getenv("THROTTLE_ORDERS", "120/min"),
        "inventory_export": os.getenv("THROTTLE_INVENTORY_EXPORT", "20/minute"),
    },
}

# Browsable API solo en debug
if DEBUG:
    REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = (
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    )
else:
    REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = (
        "rest_framework.renderers.JSONRenderer",
    )

SPECTACULAR_SETTINGS = {
    "TITLE": "StockWatch API",
    "DESCRIPTION": "Inventario, pedidos y alertas de stock bajo.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}
