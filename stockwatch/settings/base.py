"""
Settings base de StockWatch.

Los bloques viven en ``partials`` y se reexportan aquí para que
``stockwatch.settings`` exponga un único namespace.
"""
import os

from .partials.core import *  # noqa: F401,F403
from .partials.core import BASE_DIR, DEBUG
from .partials.hosts import *  # noqa: F401,F403
from .partials.apps import *  # noqa: F401,F403
from .partials.templates import *  # noqa: F401,F403
from .partials.database import *  # noqa: F401,F403
from .partials.cache import *  # noqa: F401,F403
from .partials.rest_framework import *  # noqa: F401,F403
from .partials.jwt import *  # noqa: F401,F403
from .partials.passwords import *  # noqa: F401,F403
from .partials.email import *  # noqa: F401,F403
from .partials.inventory import *  # noqa: F401,F403

# --------------------------------------------------------------------------------------
# Internacionalización
# --------------------------------------------------------------------------------------
LANGUAGE_CODE = "es-co"
TIME_ZONE = os.getenv("TZ", "America/Bogota")
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# --------------------------------------------------------------------------------------
# Seguridad en producción
# --------------------------------------------------------------------------------------
if not DEBUG:
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
    SECURE_SSL_REDIRECT = os.getenv("SECURE_SSL_REDIRECT", "1") in ("1", "true", "True")
    SECURE_HSTS_SECONDS = int(os.getenv("SECURE_HSTS_SECONDS", "31536000"))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
