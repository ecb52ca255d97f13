import logging
from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, override_settings

from core.infra.middleware import (
    PerformanceLoggingMiddleware,
    RequestIDMiddleware,
    _RESPONSE_ID_HEADER,
)
from core.infra.request_context import get_request_id


class MiddlewareTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_request_id_middleware(self):
        middleware = RequestIDMiddleware(lambda r: HttpResponse("OK"))
        request = self.factory.get("/")

        middleware.process_request(request)
        self.assertIsNotNone(request.request_id)
        self.assertEqual(get_request_id(), request.request_id)

        response = middleware.process_response(request, HttpResponse("OK"))
        self.assertEqual(response[_RESPONSE_ID_HEADER], request.request_id)
        self.assertIsNone(get_request_id())

    def test_request_id_middleware_existing_header(self):
        middleware = RequestIDMiddleware(lambda r: HttpResponse("OK"))
        request = self.factory.get("/", HTTP_X_REQUEST_ID="existing-uuid")

        middleware.process_request(request)
        middleware.process_response(request, HttpResponse("OK"))

        self.assertEqual(request.request_id, "existing-uuid")

    @override_settings(SLOW_REQUEST_THRESHOLD=0.0)
    def test_performance_middleware_logs_slow_requests(self):
        middleware = PerformanceLoggingMiddleware(lambda r: HttpResponse("OK"))
        request = self.factory.get("/api/v1/inventory/products/")
        request.user = AnonymousUser()

        middleware.process_request(request)
        with self.assertLogs("core.infra.middleware", level=logging.WARNING) as logs:
            response = middleware.process_response(request, HttpResponse("OK"))

        self.assertIn("Slow request detected", logs.output[0])
        self.assertTrue(response.has_header("X-Response-Time"))

    @override_settings(SLOW_REQUEST_THRESHOLD=60.0)
    def test_performance_middleware_fast_request_not_logged(self):
        middleware = PerformanceLoggingMiddleware(lambda r: HttpResponse("OK"))
        request = self.factory.get("/")

        middleware.process_request(request)
        with patch("core.infra.middleware.logger") as mock_logger:
            middleware.process_response(request, HttpResponse("OK"))

        mock_logger.warning.assert_not_called()

    def test_performance_middleware_without_start_time(self):
        middleware = PerformanceLoggingMiddleware(lambda r: HttpResponse("OK"))
        request = self.factory.get("/")

        response = middleware.process_response(request, HttpResponse("OK"))

        self.assertFalse(response.has_header("X-Response-Time"))

    def test_performance_middleware_logs_exceptions(self):
        middleware = PerformanceLoggingMiddleware(lambda r: HttpResponse("OK"))
        request = self.factory.get("/boom/")
        middleware.process_request(request)

        with patch("core.infra.middleware.logger") as mock_logger:
            middleware.process_exception(request, ValueError("boom"))

        mock_logger.error.assert_called_once()
