# backoffice/models/supplier.py
from typing import Optional

from .base import Record, wire_names


class Supplier(Record):
    model_config = wire_names({"name": "nombre", "contact": "contacto", "phone": "telefono"})

    name: Optional[str] = ""
    contact: Optional[str] = ""  # personne de contact
    phone: Optional[str] = ""
    email: Optional[str] = ""
