# backoffice/errors.py
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    NETWORK = "network"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


class ApiError(Exception):
    """Erreur remontée par l'API distante, déjà classée."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class NetworkFailure(ApiError):
    kind = ErrorKind.NETWORK


class NotFound(ApiError):
    kind = ErrorKind.NOT_FOUND


class ValidationError(ApiError):
    """Payload refusé par le serveur (400 / 422)."""

    kind = ErrorKind.VALIDATION


class UnknownError(ApiError):
    kind = ErrorKind.UNKNOWN


class UnsupportedAction(Exception):
    """Action absente de l'écran (ex: créer une ligne d'inventaire)."""
