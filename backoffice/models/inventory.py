# backoffice/models/inventory.py
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field

from .base import Record, blank_to_none, calendar_date, wire_names

LOW_STOCK_THRESHOLD = 5


class StockStatus(str, Enum):
    OUT = "out"
    LOW = "low"
    AVAILABLE = "available"

    @property
    def variant(self) -> str:
        return {
            StockStatus.OUT: "danger",
            StockStatus.LOW: "warning",
            StockStatus.AVAILABLE: "success",
        }[self]

    @property
    def label(self) -> str:
        return {
            StockStatus.OUT: "Agotado",
            StockStatus.LOW: "Bajo",
            StockStatus.AVAILABLE: "Disponible",
        }[self]


def stock_status(stock: int) -> StockStatus:
    if stock <= 0:
        return StockStatus.OUT
    if stock < LOW_STOCK_THRESHOLD:
        return StockStatus.LOW
    return StockStatus.AVAILABLE


class InventoryRecord(Record):
    """
    Ligne d'inventaire d'un livre.
    Jamais créée ni supprimée ici: c'est le serveur qui la lie au livre.
    """

    model_config = wire_names({"book_id": "id_libro", "last_updated": "ultima_actualizacion"})

    book_id: Optional[int] = None
    stock: int = 0
    last_updated: Optional[date] = None

    @field_validator("book_id", mode="before")
    @classmethod
    def empty_as_none(cls, value):
        return blank_to_none(value)

    @field_validator("last_updated", mode="before")
    @classmethod
    def strip_time(cls, value):
        return calendar_date(value)

    @property
    def status(self) -> StockStatus:
        return stock_status(self.stock)


class InventoryForm(InventoryRecord):
    """Saisie du formulaire: le stock ne descend pas sous zéro."""

    stock: int = Field(default=0, ge=0)
