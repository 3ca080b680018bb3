# backoffice/services/api_client.py
import asyncio
import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import requests
from pydantic import ValidationError as SchemaError

from backoffice import config
from backoffice.errors import ApiError, NetworkFailure, NotFound, UnknownError, ValidationError
from backoffice.models import Book, Customer, Employee, InventoryRecord, Record, Sale, Supplier

log = logging.getLogger("uvicorn.error")

R = TypeVar("R", bound=Record)


def _raise_api(resp: requests.Response, context: str) -> None:
    """
    Classe une réponse HTTP en erreur typée.
    Le corps est tronqué pour ne pas exploser les logs.
    """
    if resp.status_code < 400:
        return

    try:
        detail: Any = resp.json()
    except ValueError:
        detail = (resp.text or "")[:1200]

    message = f"Erreur API {context}: {resp.status_code}"
    if resp.status_code == 404:
        raise NotFound(message, resp.status_code, detail)
    if resp.status_code in (400, 422):
        raise ValidationError(message, resp.status_code, detail)
    raise UnknownError(message, resp.status_code, detail)


class ApiClient:
    """
    Transport HTTP vers l'API librería (JSON, base /api).
    Construit explicitement et passé aux clients de ressource.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url or config.resolve_api_base_url()).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.api_timeout()

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        context = f"{method} {path}"

        try:
            resp = self.session.request(
                method,
                url,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise NetworkFailure(f"Erreur API {context}: {e}") from e
        except requests.RequestException as e:
            raise UnknownError(f"Erreur API {context}: {e}") from e

        _raise_api(resp, context)

        # DELETE peut répondre 204 sans corps
        if resp.status_code == 204 or not (resp.content or b"").strip():
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise UnknownError(f"Erreur API {context}: réponse non JSON", resp.status_code) from e

    async def arequest(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        # requests est bloquant: on le sort de la boucle d'événements
        return await asyncio.to_thread(self.request, method, path, payload)

    def close(self) -> None:
        self.session.close()


class ReadUpdateClient(Generic[R]):
    """Lecture + mise à jour d'une ressource (list / get / update)."""

    def __init__(self, api: ApiClient, path: str, model: Type[R], label: str) -> None:
        self.api = api
        self.path = path
        self.model = model
        self.label = label  # pour les logs: "libros", "ventas"...

    def _parse(self, data: Any) -> R:
        try:
            return self.model.model_validate(data)
        except SchemaError as e:
            raise UnknownError(f"Erreur API {self.path}: enregistrement illisible", detail=e.errors()) from e

    async def _call(self, method: str, path: str, what: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        try:
            return await self.api.arequest(method, path, payload)
        except ApiError as e:
            log.error("Error al %s %s: %s", what, self.label, e)
            raise

    async def list_all(self) -> List[R]:
        data = await self._call("GET", self.path, "obtener")
        if not isinstance(data, list):
            raise UnknownError(f"Erreur API GET {self.path}: liste attendue")
        return [self._parse(item) for item in data]

    async def get_by_id(self, record_id: int) -> R:
        data = await self._call("GET", f"{self.path}/{record_id}", f"obtener id {record_id} de")
        return self._parse(data)

    async def update(self, record_id: int, draft: R) -> R:
        data = await self._call(
            "PUT", f"{self.path}/{record_id}", f"actualizar id {record_id} de", draft.to_payload()
        )
        # certaines API renvoient juste un message: on garde le brouillon envoyé
        if not isinstance(data, dict) or "id" not in data:
            return draft.model_copy(update={"id": record_id})
        return self._parse(data)


class ResourceClient(ReadUpdateClient[R]):
    """CRUD complet: ajoute create / delete."""

    async def create(self, draft: R) -> R:
        data = await self._call("POST", self.path, "crear", draft.to_payload(include_id=False))
        return self._parse(data)

    async def delete(self, record_id: int) -> None:
        await self._call("DELETE", f"{self.path}/{record_id}", f"eliminar id {record_id} de")


class Clients:
    """Les six clients de ressource, branchés sur le même transport."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.books: ResourceClient[Book] = ResourceClient(api, "/libros", Book, "libros")
        self.customers: ResourceClient[Customer] = ResourceClient(api, "/clientes", Customer, "clientes")
        self.sales: ResourceClient[Sale] = ResourceClient(api, "/ventas", Sale, "ventas")
        self.inventory: ReadUpdateClient[InventoryRecord] = ReadUpdateClient(
            api, "/inventario", InventoryRecord, "inventario"
        )
        self.suppliers: ResourceClient[Supplier] = ResourceClient(api, "/proveedores", Supplier, "proveedores")
        self.employees: ResourceClient[Employee] = ResourceClient(api, "/empleados", Employee, "empleados")

    def for_kind(self, kind: str) -> ReadUpdateClient:
        return getattr(self, kind)
