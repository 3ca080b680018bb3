# backoffice/models/customer.py
from typing import Optional

from .base import Record, wire_names


class Customer(Record):
    model_config = wire_names({"name": "nombre", "phone": "telefono", "address": "direccion"})

    name: Optional[str] = ""
    email: Optional[str] = ""
    phone: Optional[str] = ""
    address: Optional[str] = ""
