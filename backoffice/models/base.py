# backoffice/models/base.py
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import ConfigDict
from sqlmodel import SQLModel


def calendar_date(value: Any) -> Any:
    """
    Ramène une date ISO à sa date calendaire.
    "2024-03-05T00:00:00.000Z" → "2024-03-05" ; datetime → date.
    Le reste est laissé à pydantic.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


def blank_to_none(value: Any) -> Any:
    # les <select> vides arrivent en ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def today() -> date:
    return date.today()


def wire_names(mapping: Dict[str, str]) -> ConfigDict:
    """Noms JSON de l'API (espagnol) pour les attributs Python."""
    return ConfigDict(populate_by_name=True, alias_generator=lambda name: mapping.get(name, name))


class Record(SQLModel):
    """
    Champs communs: l'id est attribué par le serveur.
    Les attributs Python sont en anglais, le JSON utilise les noms de l'API.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None

    def to_payload(self, include_id: bool = True) -> dict:
        exclude = None if include_id else {"id"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
