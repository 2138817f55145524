from __future__ import annotations

from fastapi import FastAPI

from ..api.routes import snapshot, stations
from ..ingest.config import Settings, load_settings


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title="Bikeflow Snapshot API")
    app.state.settings = settings if settings is not None else load_settings()
    app.include_router(snapshot.router)
    app.include_router(stations.router)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"status": "ok", "service": "bikeflow"}

    return app


app = create_app()
