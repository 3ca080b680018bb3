# backoffice/routes/screens.py
from typing import Any, Dict, List

from fastapi import APIRouter, Body, HTTPException
from pydantic import ValidationError as SchemaError
from sqlmodel import SQLModel

from backoffice.errors import UnsupportedAction
from backoffice.models import Record
from backoffice.routes.deps import NavigatorDep
from backoffice.services.list_view_model import ListViewModel, LoadState, ModalKind
from backoffice.services.lookup import label
from backoffice.services.navigator import Navigator
from backoffice.services.screens import SCREENS

router = APIRouter(prefix="/screens", tags=["screens"])


class FilterPayload(SQLModel):
    term: str = ""


# ----------------------------
#  Rendu
# ----------------------------

def screen_state(vm: ListViewModel) -> Dict[str, Any]:
    """Ce que la page affiche: bandeaux, tableau filtré, modale ouverte."""
    screen = vm.screen

    # échec du chargement initial: seulement le bandeau, pas de tableau
    rows: List[Dict[str, Any]] = []
    if vm.state != LoadState.FAILED:
        rows = [screen.row(record, vm.related) for record in vm.filtered_records]

    options = {
        kind: [{"id": r.id, "label": label(r, attr)} for r in vm.related.get(kind, [])]
        for kind, attr in screen.options.items()
    }

    return {
        "screen": screen.name,
        "route": screen.route,
        "title": screen.title,
        "state": vm.state.value,
        "loading": vm.loading,
        "error": vm.last_error.message if vm.last_error else None,
        "error_kind": vm.last_error.kind.value if vm.last_error else None,
        "notice": vm.notice,
        "modal": vm.modal.value,
        "modal_title": vm.modal_title,
        "selected": vm.selected_record.model_dump(mode="json"),
        "filter": vm.filter_term,
        "rows": rows,
        "count": len(rows),
        "options": options,
        "can_create": screen.can_create,
        "can_delete": screen.can_delete,
    }


# ----------------------------
#  Garde-fous
# ----------------------------

def _mounted(screen_name: str, navigator: Navigator) -> ListViewModel:
    if screen_name not in SCREENS:
        raise HTTPException(status_code=404, detail="Pantalla desconocida")
    if not navigator.is_mounted(screen_name):
        raise HTTPException(status_code=409, detail="Pantalla no montada")
    return navigator.current


def _not_loading(vm: ListViewModel) -> None:
    # pas de double envoi pendant un chargement ou un enregistrement
    if vm.loading:
        raise HTTPException(status_code=409, detail="Operación en curso")


def _find(vm: ListViewModel, record_id: int) -> Record:
    for record in vm.records:
        if record.id == record_id:
            return record
    raise HTTPException(status_code=404, detail="Registro introuvable")


def _draft_from_form(vm: ListViewModel, payload: Dict[str, Any]) -> Record:
    """
    Valide le formulaire avec le schéma de l'écran.
    Les champs absents du formulaire gardent la valeur de l'enregistrement sélectionné.
    """
    try:
        form = vm.screen.form_schema.model_validate(payload)
    except SchemaError as e:
        detail = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()]
        raise HTTPException(status_code=422, detail=detail)

    changes = {name: getattr(form, name) for name in form.model_fields_set if name != "id"}
    draft = vm.selected_record.model_copy(update=changes)

    missing = [name for name in vm.screen.required if getattr(draft, name) in (None, "")]
    if missing:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": ["body", name], "msg": "Campo obligatorio", "type": "missing"} for name in missing],
        )
    return draft


# ----------------------------
#  Endpoints
# ----------------------------

@router.get("/{screen_name}", summary="Monter un écran (ou relire son état)")
async def open_screen(screen_name: str, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    if screen_name not in SCREENS:
        raise HTTPException(status_code=404, detail="Pantalla desconocida")
    vm = await navigator.open(screen_name)
    return screen_state(vm)


@router.post("/{screen_name}/filter", summary="Filtrer le tableau")
async def set_filter(screen_name: str, payload: FilterPayload, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    vm.set_filter_term(payload.term)
    return screen_state(vm)


@router.post("/{screen_name}/new", summary="Ouvrir le formulaire de création")
async def begin_create(screen_name: str, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    _not_loading(vm)
    try:
        vm.begin_create()
    except UnsupportedAction as e:
        raise HTTPException(status_code=405, detail=str(e))
    return screen_state(vm)


@router.post("/{screen_name}/records/{record_id}/edit", summary="Ouvrir le formulaire d'édition")
async def begin_edit(screen_name: str, record_id: int, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    _not_loading(vm)
    vm.begin_edit(_find(vm, record_id))
    return screen_state(vm)


@router.post("/{screen_name}/records/{record_id}/delete", summary="Demander confirmation de suppression")
async def begin_delete(screen_name: str, record_id: int, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    _not_loading(vm)
    record = _find(vm, record_id)
    try:
        vm.begin_delete(record)
    except UnsupportedAction as e:
        raise HTTPException(status_code=405, detail=str(e))
    return screen_state(vm)


@router.post("/{screen_name}/submit", summary="Enregistrer le formulaire")
async def submit(
    screen_name: str,
    payload: Dict[str, Any] = Body(...),
    navigator: Navigator = NavigatorDep,
) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    _not_loading(vm)
    if vm.modal != ModalKind.EDIT:
        raise HTTPException(status_code=409, detail="No hay formulario abierto")

    draft = _draft_from_form(vm, payload)
    try:
        await vm.submit(draft)
    except UnsupportedAction as e:
        raise HTTPException(status_code=405, detail=str(e))
    return screen_state(vm)


@router.post("/{screen_name}/confirm-delete", summary="Confirmer la suppression")
async def confirm_delete(screen_name: str, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    _not_loading(vm)
    if vm.modal != ModalKind.CONFIRM_DELETE:
        raise HTTPException(status_code=409, detail="No hay eliminación pendiente")
    try:
        await vm.confirm_delete()
    except UnsupportedAction as e:
        raise HTTPException(status_code=405, detail=str(e))
    return screen_state(vm)


@router.post("/{screen_name}/cancel", summary="Fermer la modale sans rien envoyer")
async def cancel(screen_name: str, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    vm.cancel()
    return screen_state(vm)


@router.post("/{screen_name}/dismiss-error", summary="Fermer le bandeau d'erreur")
async def dismiss_error(screen_name: str, navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    vm = _mounted(screen_name, navigator)
    vm.dismiss_error()
    return screen_state(vm)
