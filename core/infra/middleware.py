import logging
import time
import uuid

from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

from core.infra.request_context import reset_request_id, set_request_id

logger = logging.getLogger(__name__)

_REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"
_RESPONSE_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(MiddlewareMixin):
    """
    Inyecta un X-Request-ID para trazar peticiones en logs/errores.
    """
    def process_request(self, request):
        rid = request.META.get(_REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.request_id = rid
        request._request_id_token = set_request_id(rid)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[_RESPONSE_ID_HEADER] = rid
        token = getattr(request, "_request_id_token", None)
        if token is not None:
            reset_request_id(token)
            request._request_id_token = None
        return response


class PerformanceLoggingMiddleware(MiddlewareMixin):
    """
    Loggea tiempos de respuesta y detecta endpoints lentos.

    Configuración en settings:
        SLOW_REQUEST_THRESHOLD = 1.0  # segundos
    """

    def process_request(self, request):
        request._start_time = time.monotonic()
        return None

    def process_response(self, request, response):
        if not hasattr(request, "_start_time"):
            return response

        duration = time.monotonic() - request._start_time
        slow_threshold = getattr(settings, "SLOW_REQUEST_THRESHOLD", 1.0)

        if duration > slow_threshold:
            user = getattr(request, "user", None)
            logger.warning(
                "Slow request detected: %s %s - %.2fs",
                request.method,
                request.path,
                duration,
                extra={
                    "duration": duration,
                    "status_code": response.status_code,
                    "user_id": str(user.id) if user is not None and user.is_authenticated else None,
                },
            )

        response["X-Response-Time"] = f"{duration:.3f}s"
        return response

    def process_exception(self, request, exception):
        if hasattr(request, "_start_time"):
            duration = time.monotonic() - request._start_time
            logger.error(
                "Request failed: %s %s - %.2fs - %s",
                request.method,
                request.path,
                duration,
                exception,
            )
        return None
