# backoffice/services/navigator.py
import logging
from typing import Dict, List, Optional

from backoffice.services.api_client import Clients
from backoffice.services.list_view_model import ListViewModel
from backoffice.services.screens import SCREENS, get_screen

log = logging.getLogger("uvicorn.error")


class Navigator:
    """
    Un seul écran monté à la fois.
    Changer d'écran ferme l'ancien view model et en monte un neuf (rechargement complet).
    """

    def __init__(self, clients: Clients, notice_seconds: Optional[float] = None) -> None:
        self.clients = clients
        self.notice_seconds = notice_seconds
        self.current: Optional[ListViewModel] = None

    def links(self) -> List[Dict[str, str]]:
        return [
            {"name": screen.name, "route": screen.route, "title": screen.title}
            for screen in SCREENS.values()
        ]

    def is_mounted(self, name: str) -> bool:
        return self.current is not None and self.current.screen.name == name and not self.current.disposed

    async def open(self, name: str) -> ListViewModel:
        screen = get_screen(name)  # KeyError si écran inconnu
        if self.is_mounted(name):
            return self.current

        if self.current is not None:
            log.info("[NAV] %s → %s", self.current.screen.name, name)
            self.current.dispose()

        vm = ListViewModel(screen, self.clients, notice_seconds=self.notice_seconds)
        self.current = vm
        await vm.load()
        return vm

    def close(self) -> None:
        if self.current is not None:
            self.current.dispose()
            self.current = None
