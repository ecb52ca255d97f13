"""
Core Infra - Logging Filters.

Sanitización de información sensible en logs y propagación del request id.
"""
import logging
import re

from core.infra.request_context import get_request_id


class _PatternSanitizingFilter(logging.Filter):
    """Aplica ``PATTERNS`` al mensaje y a los argumentos de cada registro."""

    PATTERNS = []

    def _sanitize(self, value):
        if not isinstance(value, str):
            return value
        for pattern, replacement in self.PATTERNS:
            value = pattern.sub(replacement, value)
        return value

    def filter(self, record):
        try:
            record.msg = self._sanitize(record.msg)
            if isinstance(record.args, dict):
                record.args = {key: self._sanitize(value) for key, value in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._sanitize(arg) for arg in record.args)
        except re.error:
            # Un patrón roto no debe impedir que el log se emita
            pass
        return True


class SanitizeAPIKeyFilter(_PatternSanitizingFilter):
    """
    Remueve tokens y credenciales de los logs.

    Patrones detectados:
    - Variables sensibles en formato VARIABLE=valor o VARIABLE: valor
    - Tokens en query params
    - Bearer tokens (JWT y OAuth de Google Sheets)
    - Claves genéricas en formato JSON
    """

    PATTERNS = [
        (
            re.compile(
                r'((?:SECRET_KEY|JWT_SIGNING_KEY|EMAIL_HOST_PASSWORD|GOOGLE_SHEETS_ACCESS_TOKEN)'
                r'["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_.\-]{8,})'
            ),
            r'\1***REDACTED***'
        ),
        (
            re.compile(r'([?&](?:key|api_key|access_token)=)([A-Za-z0-9_.\-]{8,})'),
            r'\1***REDACTED***'
        ),
        (
            re.compile(r'(Bearer\s+)([A-Za-z0-9_.\-]{20,})'),
            r'\1***REDACTED***'
        ),
        (
            re.compile(r'(["\'](?:api_key|apiKey|token|access|refresh|secret|password)["\']:\s*["\'])([^"\']{8,})(["\'])'),
            r'\1***REDACTED***\3'
        ),
    ]


class SanitizePIIFilter(_PatternSanitizingFilter):
    """Remueve emails y teléfonos de los logs."""

    PATTERNS = [
        (
            re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'),
            '***EMAIL***'
        ),
        (
            re.compile(r'\+\d{1,3}[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}'),
            '***PHONE***'
        ),
    ]


class RequestIDFilter(logging.Filter):
    """Adjunta ``record.request_id`` (o "-" fuera de un request)."""

    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id() or "-"
        return True
