import os

import dj_database_url

from .core import DEBUG

# --------------------------------------------------------------------------------------
# Base de datos
# --------------------------------------------------------------------------------------
DATABASES = {}

if os.getenv("DATABASE_URL"):
    # Producción / contenedores (con URL completa)
    DATABASES["default"] = dj_database_url.config(
        conn_max_age=60,
        conn_health_checks=True,
        ssl_require=not DEBUG and os.getenv("DATABASE_URL", "").startswith("postgres"),
    )
    if DATABASES["default"].get("ENGINE") == "django.db.backends.postgresql":
        # Timeouts para evitar conexiones colgadas
        DATABASES["default"]["OPTIONS"] = DATABASES["default"].get("OPTIONS", {})
        DATABASES["default"]["OPTIONS"].update({
            "connect_timeout": 10,
            "options": "-c statement_timeout=30000",  # 30 segundos max por query
        })
else:
    # Desarrollo local (variables individuales)
    DATABASES["default"] = {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "stockwatch"),
        "USER": os.getenv("DB_USER", "postgres"),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": os.getenv("DB_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", "60")),
        "OPTIONS": {
            "sslmode": os.getenv("DB_SSLMODE", "require" if not DEBUG else "disable"),
            "connect_timeout": 10,
            "client_encoding": "UTF8",
        },
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
