from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from backoffice import config
from backoffice.routes import navigation, screens
from backoffice.services.api_client import ApiClient, Clients
from backoffice.services.navigator import Navigator


def create_app(clients: Optional[Clients] = None, notice_seconds: Optional[float] = None) -> FastAPI:
    app = FastAPI(
        title="Librería Gestión",
        version="1.0.0",
    )

    if clients is None:
        api = ApiClient()
        print(f"[BOOT] API URL = {api.base_url}", flush=True)
        clients = Clients(api)

    app.state.navigator = Navigator(clients, notice_seconds=notice_seconds)

    # ----------------------------
    #  CORS
    # ----------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ----------------------------
    #  ROUTES
    # ----------------------------
    app.include_router(navigation.router)
    app.include_router(screens.router)

    @app.get("/")
    def root():
        return {
            "ok": True,
            "service": "Librería Gestión",
            "docs": "/docs",
            "health": "/health",
            "nav": "/nav",
        }

    @app.head("/")
    def root_head():
        return Response(status_code=200)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.head("/health")
    def health_head():
        return Response(status_code=200)

    # ----------------------------
    #  SHUTDOWN
    # ----------------------------
    @app.on_event("shutdown")
    def on_shutdown() -> None:
        app.state.navigator.close()
        api = getattr(clients, "api", None)
        if api is not None:
            api.close()

    return app


app = create_app()
