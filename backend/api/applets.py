from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from api.deps import get_admin_db, get_db
from services.applets_service import AppletNotFoundError, AppletsService

router = APIRouter(prefix="/applets", tags=["applets"])


@router.get("/")
async def list_applets(
    enabled: bool | None = None,
    db: Client = Depends(get_db),  # noqa: B008
) -> list[dict[str, Any]]:
    """List applets with their trigger and action services. Public."""
    service = AppletsService(db=db)
    results = await service.list_applets(enabled=enabled)
    return [r.model_dump(mode="json") for r in results]


@router.get("/{applet_id}")
async def get_applet(
    applet_id: int,
    db: Client = Depends(get_db),  # noqa: B008
) -> dict[str, Any]:
    service = AppletsService(db=db)
    try:
        result = await service.get(applet_id)
    except AppletNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return result.model_dump(mode="json")


@router.post("/{applet_id}/toggle")
async def toggle_applet(
    applet_id: int,
    db: Client = Depends(get_admin_db),  # noqa: B008
) -> dict[str, Any]:
    """Enable a disabled applet or disable an enabled one."""
    service = AppletsService(db=db)
    try:
        result = await service.toggle(applet_id)
    except AppletNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return result.model_dump(mode="json")
