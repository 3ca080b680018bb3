# backoffice/models/book.py
from typing import Optional

from pydantic import field_validator

from .base import Record, blank_to_none, wire_names


class Book(Record):
    """Libro."""

    model_config = wire_names({
        "title": "titulo",
        "author": "autor",
        "year": "anio",
        "category": "categoria",
        "price": "precio",
        "supplier_id": "id_proveedor",
    })

    title: Optional[str] = ""
    author: Optional[str] = ""
    year: Optional[int] = None
    category: Optional[str] = ""
    price: Optional[float] = None
    supplier_id: Optional[int] = None

    @field_validator("year", "price", "supplier_id", mode="before")
    @classmethod
    def empty_as_none(cls, value):
        return blank_to_none(value)
