from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nearby_events.api.routers import events
from nearby_events.config import configure_logging
from nearby_events.infra.database import engine_from_env
from nearby_events.services.events_lookup import EventsLookupService, build_events_service


def create_app(service: EventsLookupService | None = None) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Nearby Events API", version="0.1.0")
    if service is None:
        service = build_events_service(engine_from_env())
    app.state.events_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[os.getenv("FRONTEND_ORIGIN", "http://localhost:5174")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(events.router, prefix="/api")
    return app


app = create_app()
