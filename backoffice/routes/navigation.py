# backoffice/routes/navigation.py
from typing import Any, Dict

from fastapi import APIRouter

from backoffice.routes.deps import NavigatorDep
from backoffice.services.navigator import Navigator

router = APIRouter(tags=["navigation"])


@router.get("/nav", summary="Barre de navigation (six écrans)")
async def navigation(navigator: Navigator = NavigatorDep) -> Dict[str, Any]:
    current = navigator.current
    return {
        "brand": "Librería Gestión",
        "links": navigator.links(),
        "active": current.screen.name if current is not None and not current.disposed else None,
    }
