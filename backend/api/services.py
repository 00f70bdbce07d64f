from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from api.deps import get_db
from services.applets_service import AppletsService, ServiceNotFoundError

router = APIRouter(prefix="/services", tags=["services"])


@router.get("/")
async def list_services(
    db: Client = Depends(get_db),  # noqa: B008
) -> list[dict[str, Any]]:
    """List connectable services (Instagram, Dropbox, ...). Public."""
    results = await AppletsService(db=db).list_services()
    return [r.model_dump(mode="json") for r in results]


@router.get("/{service_id}")
async def get_service(
    service_id: int,
    db: Client = Depends(get_db),  # noqa: B008
) -> dict[str, Any]:
    try:
        result = await AppletsService(db=db).get_service(service_id)
    except ServiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return result.model_dump(mode="json")
