# backoffice/routes/deps.py
from fastapi import Depends, Request

from backoffice.services.navigator import Navigator


def get_navigator(request: Request) -> Navigator:
    return request.app.state.navigator


NavigatorDep = Depends(get_navigator)
