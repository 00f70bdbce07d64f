from typing import Any, cast

from supabase import Client

from models.types import Applet, Service

# Both foreign keys point at services, so each embed names its column.
_APPLET_SELECT = (
    "*, "
    "trigger_service:services!trigger_service_id(*), "
    "action_service:services!action_service_id(*)"
)


class NotFoundError(ValueError):
    """Raised when a catalog record does not exist."""


class AppletNotFoundError(NotFoundError):
    def __init__(self, applet_id: int | str):
        super().__init__("Applet not found")
        self.applet_id = applet_id


class ServiceNotFoundError(NotFoundError):
    def __init__(self, service_id: int | str):
        super().__init__("Service not found")
        self.service_id = service_id


class AppletsService:
    def __init__(self, db: Client):
        self._db = db

    async def list_applets(self, enabled: bool | None = None) -> list[Applet]:
        query = self._db.table("applets").select(_APPLET_SELECT)
        if enabled is not None:
            query = query.eq("enabled", enabled)
        response = query.order("id").execute()
        rows = cast("list[dict[str, Any]]", response.data)
        return [Applet(**row) for row in rows]

    async def get(self, applet_id: int) -> Applet:
        """Load one applet with both services. Raises AppletNotFoundError if absent."""
        response = (
            self._db.table("applets")
            .select(_APPLET_SELECT)
            .eq("id", applet_id)
            .limit(1)
            .execute()
        )
        rows = cast("list[dict[str, Any]]", response.data)
        if not rows:
            raise AppletNotFoundError(applet_id)
        return Applet(**rows[0])

    async def toggle(self, applet_id: int) -> Applet:
        """Flip the enabled flag and return the updated applet."""
        applet = await self.get(applet_id)
        enabled = not applet.enabled
        response = (
            self._db.table("applets")
            .update({"enabled": enabled})
            .eq("id", applet_id)
            .execute()
        )
        rows = cast("list[dict[str, Any]]", response.data)
        if not rows:
            raise AppletNotFoundError(applet_id)
        changes: dict[str, Any] = {"enabled": enabled}
        if rows[0].get("updated_at"):
            changes["updated_at"] = rows[0]["updated_at"]
        return Applet(**{**applet.model_dump(), **changes})

    async def list_services(self) -> list[Service]:
        response = self._db.table("services").select("*").order("id").execute()
        rows = cast("list[dict[str, Any]]", response.data)
        return [Service(**row) for row in rows]

    async def get_service(self, service_id: int) -> Service:
        response = (
            self._db.table("services")
            .select("*")
            .eq("id", service_id)
            .limit(1)
            .execute()
        )
        rows = cast("list[dict[str, Any]]", response.data)
        if not rows:
            raise ServiceNotFoundError(service_id)
        return Service(**rows[0])
