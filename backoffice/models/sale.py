# backoffice/models/sale.py
from datetime import date
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field

from .base import Record, blank_to_none, calendar_date, wire_names


class Sale(Record):
    model_config = wire_names({
        "customer_id": "id_cliente",
        "book_id": "id_libro",
        "employee_id": "id_empleado",
        "purchase_date": "fecha_compra",
        "quantity": "cantidad",
    })

    customer_id: Optional[int] = None
    book_id: Optional[int] = None
    employee_id: Optional[int] = None
    purchase_date: Optional[date] = None
    quantity: int = 1

    @field_validator("customer_id", "book_id", "employee_id", mode="before")
    @classmethod
    def empty_as_none(cls, value):
        return blank_to_none(value)

    @field_validator("purchase_date", mode="before")
    @classmethod
    def strip_time(cls, value):
        return calendar_date(value)


class SaleForm(Sale):
    """Saisie du formulaire: au moins un exemplaire."""

    quantity: int = Field(default=1, ge=1)
