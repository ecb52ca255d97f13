"""
Descargas locales del catálogo: CSV y Excel.
"""
import csv
import io

from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Font

from .sheets_exporter import HEADER_ROW, product_to_row

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _rows(products):
    timestamp = timezone.localtime().strftime("%Y-%m-%d %H:%M:%S")
    for product in products:
        yield product_to_row(product, timestamp)


def export_filename(extension):
    return f"inventory_{timezone.localdate().isoformat()}.{extension}"


def build_products_csv(products) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(HEADER_ROW)
    writer.writerows(_rows(products))
    return buffer.getvalue().encode("utf-8")


def build_products_workbook(products) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Inventario"

    ws.append(HEADER_ROW)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in _rows(products):
        # Stock y montos como números en Excel
        row[3] = float(row[3])
        row[4] = float(row[4])
        ws.append(row)

    for column, width in zip("ABCDEFG", (30, 20, 14, 14, 14, 14, 20)):
        ws.column_dimensions[column].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
