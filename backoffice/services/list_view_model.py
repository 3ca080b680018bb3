# backoffice/services/list_view_model.py
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type

from backoffice import config
from backoffice.errors import ApiError, ErrorKind, UnsupportedAction
from backoffice.models import Record
from backoffice.services.api_client import Clients

log = logging.getLogger("uvicorn.error")

Related = Mapping[str, Sequence[Record]]


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ModalKind(str, Enum):
    NONE = "none"
    EDIT = "edit"
    CONFIRM_DELETE = "confirm_delete"


@dataclass(frozen=True)
class Banner:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Messages:
    load: str
    save: str
    delete: str = ""
    created: str = ""
    updated: str = ""
    deleted: str = ""


@dataclass(frozen=True)
class RelatedCollection:
    kind: str
    error: str  # bannière si la collection ne charge pas


@dataclass(frozen=True)
class ScreenConfig:
    """
    Tout ce qui distingue un écran d'un autre.
    Un seul ListViewModel, paramétré six fois.
    """

    name: str
    route: str
    title: str
    kind: str
    model: Type[Record]
    new_title: str
    edit_title: str
    messages: Messages
    search_fields: Callable[[Record, Related], Iterable[Any]]
    empty_draft: Callable[[], Record]
    row: Callable[[Record, Related], Dict[str, Any]]
    related: Tuple[RelatedCollection, ...] = ()
    required: Tuple[str, ...] = ()
    can_create: bool = True
    can_delete: bool = True
    prepare_submit: Optional[Callable[[Record], Record]] = None
    options: Dict[str, str] = field(default_factory=dict)  # kind → attribut affiché dans les <select>
    form_model: Optional[Type[Record]] = None  # schéma de saisie, s'il diffère de la lecture

    @property
    def form_schema(self) -> Type[Record]:
        return self.form_model or self.model


def filter_records(
    records: Sequence[Record],
    term: Optional[str],
    fields: Callable[[Record], Iterable[Any]],
) -> List[Record]:
    """
    Sous-chaîne insensible à la casse sur les champs désignés.
    Terme vide → la collection telle quelle.
    """
    needle = (term or "").lower()
    if not needle:
        return list(records)

    matches: List[Record] = []
    for record in records:
        for value in fields(record):
            if value is None:
                continue
            if needle in str(value).lower():
                matches.append(record)
                break
    return matches


def _banner(exc: BaseException, message: str) -> Banner:
    kind = exc.kind if isinstance(exc, ApiError) else ErrorKind.UNKNOWN
    return Banner(kind=kind, message=message)


class ListViewModel:
    """
    État d'un écran liste: chargement, filtre, sélection, modales,
    et orchestration create / update / delete suivie d'un rechargement complet.
    """

    def __init__(
        self,
        screen: ScreenConfig,
        clients: Clients,
        notice_seconds: Optional[float] = None,
    ) -> None:
        self.screen = screen
        self.client = clients.for_kind(screen.kind)
        self._related_clients = {rel.kind: clients.for_kind(rel.kind) for rel in screen.related}
        self.notice_seconds = notice_seconds if notice_seconds is not None else config.notice_seconds()

        self.state = LoadState.IDLE
        self.records: List[Record] = []
        self.related: Dict[str, List[Record]] = {rel.kind: [] for rel in screen.related}
        self.related_errors: Dict[str, Banner] = {}
        self.filter_term = ""
        self.selected_record: Record = screen.empty_draft()
        self.modal = ModalKind.NONE
        self.last_error: Optional[Banner] = None
        self.notice: Optional[str] = None
        self.saving = False

        self._notice_task: Optional[asyncio.Task] = None
        self._disposed = False

    # ----------------------------
    #  État dérivé
    # ----------------------------

    @property
    def loading(self) -> bool:
        return self.state == LoadState.LOADING or self.saving

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def filtered_records(self) -> List[Record]:
        return filter_records(
            self.records,
            self.filter_term,
            lambda r: self.screen.search_fields(r, self.related),
        )

    def set_filter_term(self, term: Optional[str]) -> None:
        self.filter_term = term or ""

    # ----------------------------
    #  Chargement
    # ----------------------------

    async def load(self) -> None:
        """
        Montage de l'écran: collection principale + collections liées en parallèle.
        La principale est indispensable, les liées sont au mieux.
        """
        if self._disposed:
            return
        self.state = LoadState.LOADING
        self.last_error = None

        collections = self.screen.related
        results = await asyncio.gather(
            self.client.list_all(),
            *(self._related_clients[rel.kind].list_all() for rel in collections),
            return_exceptions=True,
        )

        if self._disposed:
            log.info("[%s] chargement terminé après fermeture de l'écran, ignoré", self.screen.name)
            return

        primary, *others = results
        for rel, result in zip(collections, others):
            if isinstance(result, BaseException):
                self._reraise_if_cancelled(result)
                self._log_failure(result, rel.error)
                self.related[rel.kind] = []
                self.related_errors[rel.kind] = _banner(result, rel.error)
            else:
                self.related[rel.kind] = list(result)
                self.related_errors.pop(rel.kind, None)

        if isinstance(primary, BaseException):
            self._reraise_if_cancelled(primary)
            self._log_failure(primary, self.screen.messages.load)
            self.state = LoadState.FAILED
            self.last_error = _banner(primary, self.screen.messages.load)
            return

        self.records = list(primary)
        self.state = LoadState.READY
        if self.related_errors:
            self.last_error = next(iter(self.related_errors.values()))

    async def reload(self) -> None:
        """Recharge la collection principale seulement (après une mutation)."""
        if self._disposed:
            return
        self.state = LoadState.LOADING
        try:
            records = await self.client.list_all()
        except Exception as e:
            if self._disposed:
                return
            self._log_failure(e, self.screen.messages.load)
            self.state = LoadState.FAILED
            self.last_error = _banner(e, self.screen.messages.load)
            return

        if self._disposed:
            return
        self.records = list(records)
        self.state = LoadState.READY

    # ----------------------------
    #  Modales
    # ----------------------------

    def begin_create(self) -> None:
        if not self.screen.can_create:
            raise UnsupportedAction(f"{self.screen.name}: création non disponible")
        self.selected_record = self.screen.empty_draft()
        self.modal = ModalKind.EDIT

    def begin_edit(self, record: Record) -> None:
        # copie superficielle, les dates repassent par la normalisation
        self.selected_record = self.screen.model.model_validate(record.model_dump())
        self.modal = ModalKind.EDIT

    def begin_delete(self, record: Record) -> None:
        if not self.screen.can_delete:
            raise UnsupportedAction(f"{self.screen.name}: suppression non disponible")
        self.selected_record = record
        self.modal = ModalKind.CONFIRM_DELETE

    def cancel(self) -> None:
        self.selected_record = self.screen.empty_draft()
        self.modal = ModalKind.NONE

    def dismiss_error(self) -> None:
        self.last_error = None

    @property
    def modal_title(self) -> Optional[str]:
        if self.modal == ModalKind.EDIT:
            return self.screen.edit_title if self.selected_record.id is not None else self.screen.new_title
        if self.modal == ModalKind.CONFIRM_DELETE:
            return "Confirmar eliminación"
        return None

    # ----------------------------
    #  Mutations
    # ----------------------------

    async def submit(self, draft: Optional[Record] = None) -> bool:
        """
        Enregistre le formulaire: sans id → create, avec id → update.
        L'id vient toujours de l'enregistrement sélectionné.
        """
        if self._disposed:
            return False

        record = self.selected_record
        if draft is not None:
            record = draft.model_copy(update={"id": self.selected_record.id})
        if self.screen.prepare_submit is not None:
            record = self.screen.prepare_submit(record)
        self.selected_record = record

        creating = record.id is None
        if creating and not self.screen.can_create:
            raise UnsupportedAction(f"{self.screen.name}: création non disponible")

        self.saving = True
        self.last_error = None
        try:
            if creating:
                await self.client.create(record)
            else:
                await self.client.update(record.id, record)
        except Exception as e:
            if not self._disposed:
                self._log_failure(e, self.screen.messages.save)
                self.last_error = _banner(e, self.screen.messages.save)
            return False
        finally:
            self.saving = False

        if self._disposed:
            return True

        self.modal = ModalKind.NONE
        self.selected_record = self.screen.empty_draft()
        self._show_notice(self.screen.messages.created if creating else self.screen.messages.updated)
        await self.reload()
        return True

    async def confirm_delete(self) -> bool:
        if self._disposed:
            return False
        if not self.screen.can_delete:
            raise UnsupportedAction(f"{self.screen.name}: suppression non disponible")

        record_id = self.selected_record.id
        if record_id is None:
            self.cancel()
            return False

        self.saving = True
        self.last_error = None
        try:
            await self.client.delete(record_id)
        except Exception as e:
            if not self._disposed:
                self._log_failure(e, self.screen.messages.delete)
                self.last_error = _banner(e, self.screen.messages.delete)
            return False
        finally:
            self.saving = False

        if self._disposed:
            return True

        self.modal = ModalKind.NONE
        self.selected_record = self.screen.empty_draft()
        self._show_notice(self.screen.messages.deleted)
        await self.reload()
        return True

    # ----------------------------
    #  Notice (bandeau succès)
    # ----------------------------

    def _show_notice(self, message: str) -> None:
        self._cancel_notice()
        self.notice = message
        self._notice_task = asyncio.get_running_loop().create_task(self._clear_notice_later())

    async def _clear_notice_later(self) -> None:
        await asyncio.sleep(self.notice_seconds)
        if not self._disposed:
            self.notice = None
        self._notice_task = None

    def _cancel_notice(self) -> None:
        if self._notice_task is not None and not self._notice_task.done():
            self._notice_task.cancel()
        self._notice_task = None

    # ----------------------------
    #  Cycle de vie
    # ----------------------------

    def dispose(self) -> None:
        """L'écran quitte la navigation: plus aucune écriture d'état après ça."""
        self._disposed = True
        self._cancel_notice()

    def _log_failure(self, exc: BaseException, message: str) -> None:
        if isinstance(exc, ApiError):
            log.error("[%s] %s: %s", self.screen.name, message, exc)
        else:
            log.error("[%s] %s", self.screen.name, message, exc_info=exc)

    @staticmethod
    def _reraise_if_cancelled(exc: BaseException) -> None:
        if not isinstance(exc, Exception):
            raise exc
