# backoffice/services/lookup.py
from typing import Any, Iterable, Optional, Union

from backoffice.models import Record

NA = "N/A"


class _NotAvailable:
    """Sentinelle d'une clé étrangère qui ne pointe sur rien."""

    _instance: Optional["_NotAvailable"] = None

    def __new__(cls) -> "_NotAvailable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_AVAILABLE"


NOT_AVAILABLE = _NotAvailable()


def resolve(collection: Iterable[Record], key: Any) -> Union[Record, _NotAvailable]:
    """
    Cherche l'enregistrement dont l'id == key (scan linéaire, égalité stricte).
    Une clé absente ou orpheline donne NOT_AVAILABLE, jamais d'exception.
    """
    if key is None:
        return NOT_AVAILABLE
    for record in collection:
        if record.id == key:
            return record
    return NOT_AVAILABLE


def label(record: Union[Record, _NotAvailable], attr: str) -> str:
    if record is NOT_AVAILABLE:
        return NA
    value = getattr(record, attr, None)
    if value is None or value == "":
        return NA
    return str(value)
