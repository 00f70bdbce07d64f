"""Seed the demo catalog: ten services and five applets linking them.

Safe to re-run. Services are matched by slug and applets by name; existing
rows are left untouched.
"""

import asyncio
from typing import Any, cast

import structlog
from supabase import Client

logger = structlog.get_logger()

_ICON_URL = "https://assets.ifttt.com/images/channels/{channel}/icons/monochrome_regular.webp"

SERVICES: list[dict[str, str]] = [
    {"name": "Instagram", "slug": "instagram", "channel": "28", "brand_color": "#E1306C"},
    {"name": "Dropbox", "slug": "dropbox", "channel": "440404753", "brand_color": "#0061FF"},
    {"name": "RSS Feed", "slug": "feed", "channel": "4", "brand_color": "#FF6600"},
    {"name": "Gmail", "slug": "gmail", "channel": "33", "brand_color": "#EA4335"},
    {"name": "WordPress", "slug": "wordpress", "channel": "30", "brand_color": "#21759B"},
    {"name": "X (Twitter)", "slug": "twitter", "channel": "2", "brand_color": "#1DA1F2"},
    {"name": "Spotify", "slug": "spotify", "channel": "51464135", "brand_color": "#1DB954"},
    {
        "name": "Google Sheets",
        "slug": "google_sheets",
        "channel": "799977804",
        "brand_color": "#0F9D58",
    },
    {"name": "iOS Photos", "slug": "ios_photos", "channel": "78", "brand_color": "#FF9500"},
    {
        "name": "Google Drive",
        "slug": "google_drive",
        "channel": "142226432",
        "brand_color": "#4285F4",
    },
]

APPLETS: list[dict[str, str]] = [
    {
        "name": "Save Instagram photos to Dropbox",
        "description": (
            "Automatically backup every new photo you post on Instagram to your Dropbox "
            "account. Never lose a memory again."
        ),
        "trigger": "instagram",
        "action": "dropbox",
    },
    {
        "name": "Email me new RSS items",
        "description": (
            "Get an email notification whenever there's a new item in an RSS feed you "
            "follow. Stay on top of your favorite blogs and news sources."
        ),
        "trigger": "feed",
        "action": "gmail",
    },
    {
        "name": "Tweet my new blog posts",
        "description": (
            "Automatically share your new WordPress blog posts to Twitter. Grow your "
            "audience without the manual work."
        ),
        "trigger": "wordpress",
        "action": "twitter",
    },
    {
        "name": "Save Spotify tracks to a spreadsheet",
        "description": (
            "Keep a record of every song you save on Spotify in a Google Sheets "
            "spreadsheet. Perfect for music lovers who want to track their listening history."
        ),
        "trigger": "spotify",
        "action": "google_sheets",
    },
    {
        "name": "Backup phone photos to Google Drive",
        "description": (
            "Automatically save every new photo from your iPhone to Google Drive. Your "
            "memories are safely stored in the cloud."
        ),
        "trigger": "ios_photos",
        "action": "google_drive",
    },
]


def _find_or_create(db: Client, table: str, key: str, row: dict[str, Any]) -> tuple[int, bool]:
    """Return (id, created) for the row matching ``row[key]``."""
    existing = db.table(table).select("id").eq(key, row[key]).execute()
    rows = cast("list[dict[str, Any]]", existing.data)
    if rows:
        return rows[0]["id"], False
    inserted = db.table(table).insert(row).execute()
    rows = cast("list[dict[str, Any]]", inserted.data)
    return rows[0]["id"], True


async def seed_catalog(db: Client) -> dict[str, int]:
    """Create missing services and applets. Returns how many of each were created."""
    service_ids: dict[str, int] = {}
    created = {"services": 0, "applets": 0}

    for data in SERVICES:
        row = {
            "name": data["name"],
            "slug": data["slug"],
            "icon_url": _ICON_URL.format(channel=data["channel"]),
            "brand_color": data["brand_color"],
        }
        service_id, was_created = _find_or_create(db, "services", "slug", row)
        service_ids[data["slug"]] = service_id
        if was_created:
            created["services"] += 1
            logger.info("Created service", name=data["name"], slug=data["slug"])

    for data in APPLETS:
        row = {
            "name": data["name"],
            "description": data["description"],
            "trigger_service_id": service_ids[data["trigger"]],
            "action_service_id": service_ids[data["action"]],
            "enabled": True,
        }
        _, was_created = _find_or_create(db, "applets", "name", row)
        if was_created:
            created["applets"] += 1
            logger.info("Created applet", name=data["name"])

    logger.info("Catalog seed complete", **created)
    return created


if __name__ == "__main__":
    from db.supabase_client import get_service_role_client

    asyncio.run(seed_catalog(get_service_role_client()))
