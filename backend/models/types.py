from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Service(BaseModel):
    id: int
    name: str
    slug: str
    icon_url: str | None = None
    brand_color: str | None = None
    created_at: datetime
    updated_at: datetime


class Applet(BaseModel):
    id: int
    name: str
    description: str | None = None
    enabled: bool = True
    trigger_service: Service
    action_service: Service
    created_at: datetime
    updated_at: datetime


# --- Activity feed types ---


class ActivityStatus(StrEnum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class _CamelModel(BaseModel):
    """Serialized with camelCase keys for the feed consumers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Activity(_CamelModel):
    """One synthetic execution of an applet. Generated per request, never stored."""

    id: str
    applet_id: int
    status: ActivityStatus
    ran_at: datetime
    trigger_data: dict[str, Any]
    action_data: dict[str, Any]
    error_message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == ActivityStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == ActivityStatus.FAILED

    @property
    def is_skipped(self) -> bool:
        return self.status == ActivityStatus.SKIPPED


class ActivityPage(_CamelModel):
    activities: list[Activity]
    total_count: int
    page: int
    per_page: int
    total_pages: int
