"""
Exportación best-effort del inventario a Google Sheets (API REST v4).

El token OAuth se obtiene fuera de la aplicación y llega por configuración.
Ningún método público lanza excepciones: ante cualquier fallo se registra
el error y se devuelve None.
"""
import logging
from datetime import timedelta

import requests
from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

logger = logging.getLogger(__name__)

SHEET_RANGE_COLUMNS = ("A", "G")
HEADER_ROW = [
    "Product Name", "Model", "Stock Quantity", "Price Per Unit",
    "Total Value", "Status", "Last Updated",
]


def product_to_row(product, timestamp=None):
    timestamp = timestamp or timezone.localtime().strftime("%Y-%m-%d %H:%M:%S")
    return [
        product.product_name,
        product.model or "N/A",
        product.unit_stock_quantity or 0,
        "%.2f" % (product.price_per_quantity or 0),
        "%.2f" % (product.total_price or 0),
        product.status,
        timestamp,
    ]


class GoogleSheetsExporter:
    _CIRCUIT_CACHE_KEY = "inventory:sheets:circuit"

    def __init__(self, spreadsheet_id=None, access_token=None, base_url=None, timeout=None, sheet_name="Sheet1"):
        config = settings.INVENTORY
        self.spreadsheet_id = spreadsheet_id if spreadsheet_id is not None else config["SHEETS_SPREADSHEET_ID"]
        self.access_token = access_token if access_token is not None else config["SHEETS_ACCESS_TOKEN"]
        self.base_url = (base_url or config["SHEETS_BASE_URL"]).rstrip("/")
        self.timeout = timeout or config["SHEETS_TIMEOUT"]
        self.sheet_name = sheet_name

    @property
    def is_configured(self):
        return bool(self.spreadsheet_id and self.access_token)

    def csv_download_link(self):
        if not self.spreadsheet_id:
            return None
        return f"https://docs.google.com/spreadsheets/d/{self.spreadsheet_id}/export?format=csv"

    # ------------------------------------------------------------------
    # Circuit breaker simple: tras varios fallos seguidos deja de llamar
    # a la API durante un tiempo.
    # ------------------------------------------------------------------
    @classmethod
    def _circuit_allows(cls):
        state = cache.get(cls._CIRCUIT_CACHE_KEY, {"failures": 0, "open_until": None})
        open_until = state.get("open_until")
        return not (open_until and open_until > timezone.now())

    @classmethod
    def _record_failure(cls, max_failures=5, cooldown_seconds=300):
        state = cache.get(cls._CIRCUIT_CACHE_KEY, {"failures": 0, "open_until": None})
        failures = state.get("failures", 0) + 1
        open_until = state.get("open_until")
        if failures >= max_failures:
            open_until = timezone.now() + timedelta(seconds=cooldown_seconds)
            failures = 0
            logger.warning("Circuito de Google Sheets abierto por %s segundos", cooldown_seconds)
        cache.set(cls._CIRCUIT_CACHE_KEY, {"failures": failures, "open_until": open_until}, timeout=cooldown_seconds)

    @classmethod
    def _record_success(cls):
        cache.delete(cls._CIRCUIT_CACHE_KEY)

    def _headers(self):
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def _values_url(self, cell_range, suffix=""):
        return f"{self.base_url}/spreadsheets/{self.spreadsheet_id}/values/{self.sheet_name}!{cell_range}{suffix}"

    def _request(self, method, url, **kwargs):
        response = requests.request(
            method=method,
            url=url,
            headers=self._headers(),
            timeout=self.timeout,
            **kwargs,
        )
        response.raise_for_status()
        return response

    def _next_row(self):
        start, _ = SHEET_RANGE_COLUMNS
        response = self._request("GET", self._values_url(f"{start}:{start}"))
        values = response.json().get("values", [])
        # La fila 1 es el encabezado
        return max(len(values), 1) + 1

    def _write_rows(self, first_row, rows):
        start, end = SHEET_RANGE_COLUMNS
        last_row = first_row + len(rows) - 1
        self._request(
            "PUT",
            self._values_url(f"{start}{first_row}:{end}{last_row}"),
            params={"valueInputOption": "RAW"},
            json={"values": rows},
        )

    def _run(self, label, func):
        if not self.is_configured:
            logger.debug("Google Sheets no configurado; se omite %s", label)
            return None
        if not self._circuit_allows():
            logger.warning("Circuito de Google Sheets abierto; se omite %s", label)
            return None
        try:
            func()
        except requests.Timeout:
            self._record_failure()
            logger.warning("Timeout exportando a Google Sheets (%s)", label)
            return None
        except requests.RequestException as exc:
            self._record_failure()
            logger.error("Error exportando a Google Sheets (%s): %s", label, exc)
            return None
        except (ValueError, KeyError) as exc:
            self._record_failure()
            logger.error("Respuesta inválida de Google Sheets (%s): %s", label, exc)
            return None
        self._record_success()
        return self.csv_download_link()

    def export_one(self, product):
        """Agrega una fila con el estado actual del producto."""
        def _export():
            self._write_rows(self._next_row(), [product_to_row(product)])
            logger.info("Producto %s exportado a Google Sheets", product.product_name)

        return self._run("export_one", _export)

    def export_all(self, products):
        """Reemplaza el contenido de la hoja con el catálogo completo."""
        def _export():
            start, end = SHEET_RANGE_COLUMNS
            self._request("POST", self._values_url(f"{start}2:{end}", ":clear"), json={})
            timestamp = timezone.localtime().strftime("%Y-%m-%d %H:%M:%S")
            rows = [product_to_row(product, timestamp) for product in products]
            self._write_rows(1, [HEADER_ROW] + rows)
            logger.info("Exportados %d productos a Google Sheets", len(rows))

        return self._run("export_all", _export)
