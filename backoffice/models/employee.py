# backoffice/models/employee.py
from datetime import date
from typing import Optional

from pydantic import field_validator

from .base import Record, calendar_date, wire_names


class Employee(Record):
    model_config = wire_names({"name": "nombre", "role": "cargo", "hire_date": "fecha_ingreso"})

    name: Optional[str] = ""
    role: Optional[str] = ""
    email: Optional[str] = ""
    hire_date: Optional[date] = None

    @field_validator("hire_date", mode="before")
    @classmethod
    def strip_time(cls, value):
        return calendar_date(value)
