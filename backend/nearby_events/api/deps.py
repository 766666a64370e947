from __future__ import annotations

from fastapi import HTTPException, Request

from nearby_events.services.events_lookup import EventsLookupService


def get_events_service(request: Request) -> EventsLookupService:
    service = getattr(request.app.state, "events_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Events service not configured")
    return service
