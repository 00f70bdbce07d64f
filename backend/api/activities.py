from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import Client

from api.deps import get_db
from services.activity_feed_service import ActivityFeedService
from services.applets_service import AppletNotFoundError

router = APIRouter(tags=["activities"])


async def _load_feed(db: Client, applet_id: int) -> ActivityFeedService:
    try:
        return await ActivityFeedService.for_applet(db, applet_id)
    except AppletNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None


# Pagination and filter params stay raw strings: bad values fall back to
# defaults inside the service instead of failing validation.


@router.get("/activities")
async def list_activities(
    applet_id: int = Query(..., alias="appletId"),
    page: str | None = None,
    per_page: str | None = Query(None, alias="perPage"),
    since_time: str | None = Query(None, alias="sinceTime"),
    before_time: str | None = Query(None, alias="beforeTime"),
    status: str | None = None,
    search: str | None = None,
    db: Client = Depends(get_db),  # noqa: B008
) -> dict[str, Any]:
    """Paginated mock activity feed for an applet. Public."""
    feed = await _load_feed(db, applet_id)
    result = feed.fetch_page(
        page=page,
        per_page=per_page,
        since=since_time,
        before=before_time,
        status=status,
        search=search,
    )
    return result.model_dump(by_alias=True, mode="json")


@router.get("/applets/{applet_id}/activities")
async def list_applet_activities(
    applet_id: int,
    page: str | None = None,
    per_page: str | None = Query(None, alias="perPage"),
    since_time: str | None = Query(None, alias="sinceTime"),
    before_time: str | None = Query(None, alias="beforeTime"),
    status: str | None = None,
    search: str | None = None,
    db: Client = Depends(get_db),  # noqa: B008
) -> dict[str, Any]:
    """Same feed as /activities, addressed by path."""
    feed = await _load_feed(db, applet_id)
    result = feed.fetch_page(
        page=page,
        per_page=per_page,
        since=since_time,
        before=before_time,
        status=status,
        search=search,
    )
    return result.model_dump(by_alias=True, mode="json")


@router.get("/applets/{applet_id}/activities/latest")
async def latest_applet_activities(
    applet_id: int,
    since: str | None = None,
    limit: str | None = None,
    db: Client = Depends(get_db),  # noqa: B008
) -> list[dict[str, Any]]:
    """Newest activities after ``since``. Used for polling."""
    feed = await _load_feed(db, applet_id)
    activities = feed.fetch_since(since, limit=limit)
    return [a.model_dump(by_alias=True, mode="json") for a in activities]
