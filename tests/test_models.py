from datetime import date, datetime

import pytest
from pydantic import ValidationError

from backoffice.models import (
    Book, Employee, InventoryForm, InventoryRecord, Sale, SaleForm, StockStatus, Supplier, stock_status,
)


def test_book_reads_wire_names():
    book = Book.model_validate({
        "id": 7,
        "titulo": "Cien años de soledad",
        "autor": "García Márquez",
        "anio": 1967,
        "categoria": "Novela",
        "precio": "42000",
        "id_proveedor": 3,
    })

    assert book.title == "Cien años de soledad"
    assert book.price == 42000
    assert book.supplier_id == 3


def test_payload_uses_wire_names_and_drops_id_on_create():
    book = Book(title="Dune", author="Herbert", year=1965, category="Sci-Fi", price=25000, supplier_id=1)

    payload = book.to_payload(include_id=False)

    assert payload == {
        "titulo": "Dune",
        "autor": "Herbert",
        "anio": 1965,
        "categoria": "Sci-Fi",
        "precio": 25000,
        "id_proveedor": 1,
    }


def test_blank_select_values_become_none():
    book = Book.model_validate({"titulo": "X", "anio": "", "precio": "", "id_proveedor": ""})
    assert book.year is None
    assert book.price is None
    assert book.supplier_id is None


@pytest.mark.parametrize("raw", [
    "2023-04-01T05:00:00.000Z",
    "2023-04-01",
    datetime(2023, 4, 1, 22, 30),
])
def test_dates_are_normalized_to_calendar_dates(raw):
    employee = Employee.model_validate({"nombre": "Marta", "cargo": "Cajera", "fecha_ingreso": raw})
    assert employee.hire_date == date(2023, 4, 1)


def test_sale_serializes_plain_date():
    sale = Sale.model_validate({"id_cliente": 1, "id_libro": 2, "id_empleado": 3,
                                "fecha_compra": "2024-05-02T00:00:00Z", "cantidad": 2})
    assert sale.to_payload()["fecha_compra"] == "2024-05-02"


def test_server_rows_are_read_as_sent():
    # les bornes du formulaire ne s'appliquent pas aux lignes du serveur
    assert Sale.model_validate({"cantidad": 0}).quantity == 0
    row = InventoryRecord.model_validate({"id_libro": 1, "stock": -2})
    assert row.status is StockStatus.OUT


def test_null_text_fields_are_accepted():
    book = Book.model_validate({"id": 1, "titulo": "X", "autor": None, "categoria": "c"})
    assert book.author is None
    assert Supplier.model_validate({"id": 3, "nombre": None}).name is None


def test_form_quantity_minimum_is_one():
    with pytest.raises(ValidationError):
        SaleForm.model_validate({"cantidad": 0})


def test_form_stock_cannot_be_negative():
    with pytest.raises(ValidationError):
        InventoryForm.model_validate({"id_libro": 1, "stock": -1})


@pytest.mark.parametrize("stock, status, variant", [
    (0, StockStatus.OUT, "danger"),
    (-2, StockStatus.OUT, "danger"),
    (3, StockStatus.LOW, "warning"),
    (4, StockStatus.LOW, "warning"),
    (5, StockStatus.AVAILABLE, "success"),
    (10, StockStatus.AVAILABLE, "success"),
])
def test_stock_status_thresholds(stock, status, variant):
    assert stock_status(stock) is status
    assert status.variant == variant


def test_inventory_status_property():
    assert InventoryRecord(book_id=1, stock=3).status.label == "Bajo"
