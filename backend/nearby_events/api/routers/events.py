from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from nearby_events.api.deps import get_events_service
from nearby_events.config import DEFAULT_DISPLAY_TZ, DEFAULT_LOCALE
from nearby_events.domain.errors import EventsApiError
from nearby_events.domain.models import RequestContext
from nearby_events.domain.normalize import resolve_locale
from nearby_events.services.events_lookup import EventsLookupService

router = APIRouter(tags=["events"])


def _request_context(
    request: Request,
    user_id: str,
    locale: Optional[str],
    display_timezone: Optional[str],
) -> RequestContext:
    if not locale:
        accept = request.headers.get("accept-language", "")
        locale = accept.split(",")[0].split(";")[0].strip() or DEFAULT_LOCALE
    # The directory wants WordPress-style tags: de_DE, not de-DE
    locale = str(resolve_locale(locale))
    headers = dict(request.headers)
    if request.client is not None:
        headers["remote-addr"] = request.client.host
    return RequestContext(
        user_id=user_id,
        locale=locale,
        display_timezone=display_timezone or DEFAULT_DISPLAY_TZ,
        headers=headers,
    )


@router.get("/events")
def get_events(
    request: Request,
    search: str = Query("", description="Free-text place to look around"),
    timezone: str = Query("", description="Caller's timezone, sent to the directory as a hint"),
    locale: Optional[str] = Query(None),
    display_timezone: Optional[str] = Query(None),
    user_id: str = Header(..., alias="X-User-Id"),
    service: EventsLookupService = Depends(get_events_service),
):
    context = _request_context(request, user_id, locale, display_timezone)
    try:
        result = service.get_events(context, search=search.strip(), timezone=timezone.strip())
    except EventsApiError as exc:
        return JSONResponse(status_code=502, content=exc.to_dict())
    return result.to_dict()


@router.get("/events/cached")
def get_cached_events(
    request: Request,
    locale: Optional[str] = Query(None),
    display_timezone: Optional[str] = Query(None),
    user_id: str = Header(..., alias="X-User-Id"),
    service: EventsLookupService = Depends(get_events_service),
):
    context = _request_context(request, user_id, locale, display_timezone)
    cached = service.get_cached_events(context)
    if cached is None:
        raise HTTPException(status_code=404, detail="No cached events for this location")
    return cached.to_dict()
