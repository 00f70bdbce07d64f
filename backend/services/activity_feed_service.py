import hashlib
import math
import random
from collections.abc import Callable, Iterator, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog
from supabase import Client

from models.types import Activity, ActivityPage, ActivityStatus, Applet
from services import activity_catalog as catalog
from services.applets_service import AppletsService

logger = structlog.get_logger()

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100
MAX_ACTIVITIES = 200
DEFAULT_WINDOW = timedelta(days=30)
MIN_INTERVAL_MINUTES = 5
MAX_INTERVAL_MINUTES = 360

Timestamp = datetime | str | None
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value: Any) -> datetime | None:
    """Accept a datetime or an ISO-8601 string. Anything unparsable is None."""
    if isinstance(value, str) and value.strip():
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    try:
        return _as_utc(value)
    except OverflowError:
        # offset pushes the instant outside the representable range
        return None


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_page(page: Any) -> int:
    return max(_to_int(page, 1), 1)


def normalize_per_page(per_page: Any) -> int:
    return min(max(_to_int(per_page, DEFAULT_PER_PAGE), 1), MAX_PER_PAGE)


def parse_status(value: Any) -> ActivityStatus | None:
    """Map a filter value onto ActivityStatus; unknown values mean no filter."""
    if value is None:
        return None
    try:
        return ActivityStatus(str(value).strip().lower())
    except ValueError:
        return None


def activity_id(applet_id: int, ran_at: datetime) -> str:
    """UUID-shaped SHA-256 of the applet id and the whole-second timestamp."""
    digest = hashlib.sha256(f"{applet_id}-{math.floor(ran_at.timestamp())}".encode()).hexdigest()
    return f"{digest[0:8]}-{digest[8:12]}-{digest[12:16]}-{digest[16:20]}-{digest[20:32]}"


# --- Mock content draws ---


def _email(rng: random.Random) -> str:
    name = rng.choice(catalog.EMAIL_NAMES)
    number = rng.randint(100, 999)
    domain = rng.choice(catalog.EMAIL_DOMAINS)
    return f"{name}.{number}@{domain}"


def _filename(rng: random.Random) -> str:
    number = rng.randint(1000, 9999)
    return f"file_{number}.{rng.choice(catalog.FILE_EXTENSIONS)}"


def _instagram_details(rng: random.Random, ran_at: datetime) -> dict[str, Any]:
    return {
        "photo_id": str(rng.randint(1000000, 9999999)),
        "caption": rng.choice(catalog.CAPTIONS),
    }


def _feed_details(rng: random.Random, ran_at: datetime) -> dict[str, Any]:
    return {
        "title": rng.choice(catalog.FEED_TITLES),
        "url": f"https://example.com/article-{rng.randint(1, 1000)}",
    }


def _gmail_details(rng: random.Random, ran_at: datetime) -> dict[str, Any]:
    return {"from": _email(rng), "subject": rng.choice(catalog.EMAIL_SUBJECTS)}


def _wordpress_details(rng: random.Random, ran_at: datetime) -> dict[str, Any]:
    return {
        "post_title": rng.choice(catalog.BLOG_TITLES),
        "url": f"https://blog.example.com/{rng.randint(1, 1000)}",
    }


def _twitter_details(rng: random.Random, ran_at: datetime) -> dict[str, Any]:
    return {
        "tweet_text": rng.choice(catalog.TWEETS),
        "username": f"@user{rng.randint(100, 999)}",
    }


def _spotify_details(rng: random.Random, ran_at: datetime) -> dict[str, Any]:
    return {"track": rng.choice(catalog.TRACKS), "artist": rng.choice(catalog.ARTISTS)}


def _ios_photos_details(rng: random.Random, ran_at: datetime) -> dict[str, Any]:
    # taken_at follows the activity time so regenerated windows stay identical.
    return {"photo_id": f"IMG_{rng.randint(1000, 9999)}.jpg", "taken_at": ran_at.isoformat()}


_TRIGGER_DETAILS: dict[str, Callable[[random.Random, datetime], dict[str, Any]]] = {
    "instagram": _instagram_details,
    "feed": _feed_details,
    "gmail": _gmail_details,
    "wordpress": _wordpress_details,
    "twitter": _twitter_details,
    "spotify": _spotify_details,
    "ios_photos": _ios_photos_details,
}

# Substitution order is part of the draw sequence.
_PLACEHOLDERS: tuple[tuple[str, Callable[[random.Random], str]], ...] = (
    ("{{filename}}", _filename),
    ("{{email}}", _email),
    ("{{title}}", lambda rng: rng.choice(catalog.BLOG_TITLES)),
    ("{{text}}", lambda rng: rng.choice(catalog.TWEETS)[:51]),
    ("{{track}}", lambda rng: rng.choice(catalog.TRACKS)),
    ("{{sheet}}", lambda rng: f"Sheet{rng.randint(1, 5)}"),
)


def _draw_status(rng: random.Random) -> ActivityStatus:
    roll = rng.randrange(100)
    if roll < 80:
        return ActivityStatus.SUCCESS
    if roll < 90:
        return ActivityStatus.FAILED
    return ActivityStatus.SKIPPED


def _fill_placeholders(template: str, rng: random.Random) -> str:
    for token, draw in _PLACEHOLDERS:
        if token in template:
            template = template.replace(token, draw(rng))
    return template


# --- Filters ---


def _leaf_strings(data: Mapping[str, Any]) -> Iterator[str]:
    for value in data.values():
        if isinstance(value, Mapping):
            yield from _leaf_strings(value)
        elif isinstance(value, bool):
            yield "true" if value else "false"
        elif value is not None:
            yield str(value)


def _matches_search(activity: Activity, term: str) -> bool:
    fields = [
        *_leaf_strings(activity.trigger_data),
        *_leaf_strings(activity.action_data),
        activity.status.value,
    ]
    if activity.error_message:
        fields.append(activity.error_message)
    return any(term in field.lower() for field in fields)


def filter_by_status(activities: list[Activity], status: Any) -> list[Activity]:
    wanted = parse_status(status)
    if wanted is None:
        return activities
    return [activity for activity in activities if activity.status == wanted]


def filter_by_search(activities: list[Activity], search: Any) -> list[Activity]:
    if not isinstance(search, str) or not search.strip():
        return activities
    term = search.lower()
    return [activity for activity in activities if _matches_search(activity, term)]


class ActivityFeedService:
    """Deterministic mock activity log for one applet.

    Nothing is stored. Every call re-derives the window from a random stream
    seeded by the applet id alone, then filters and slices it, so pages of the
    same window always line up with each other and with count().
    """

    def __init__(self, applet: Applet, clock: Clock | None = None):
        self._applet = applet
        self._clock = clock or _utc_now

    @classmethod
    async def for_applet(
        cls, db: Client, applet_id: int, clock: Clock | None = None
    ) -> "ActivityFeedService":
        """Resolve the applet first. Raises AppletNotFoundError if it doesn't exist."""
        applet = await AppletsService(db=db).get(applet_id)
        return cls(applet, clock=clock)

    @property
    def applet(self) -> Applet:
        return self._applet

    def fetch(
        self,
        page: Any = 1,
        per_page: Any = DEFAULT_PER_PAGE,
        since: Timestamp = None,
        before: Timestamp = None,
        status: Any = None,
        search: Any = None,
    ) -> list[Activity]:
        page = normalize_page(page)
        per_page = normalize_per_page(per_page)
        activities = self._filtered(since, before, status, search)
        offset = (page - 1) * per_page
        return activities[offset : offset + per_page]

    def fetch_since(self, timestamp: Timestamp, limit: Any = DEFAULT_PER_PAGE) -> list[Activity]:
        """Latest activities after ``timestamp``, for polling clients."""
        return self.fetch(page=1, per_page=limit, since=timestamp)

    def count(
        self,
        since: Timestamp = None,
        before: Timestamp = None,
        status: Any = None,
        search: Any = None,
    ) -> int:
        return len(self._filtered(since, before, status, search))

    def fetch_page(
        self,
        page: Any = 1,
        per_page: Any = DEFAULT_PER_PAGE,
        since: Timestamp = None,
        before: Timestamp = None,
        status: Any = None,
        search: Any = None,
    ) -> ActivityPage:
        """One page plus totals, generating the window only once."""
        page = normalize_page(page)
        per_page = normalize_per_page(per_page)
        activities = self._filtered(since, before, status, search)
        offset = (page - 1) * per_page
        total_count = len(activities)
        return ActivityPage(
            activities=activities[offset : offset + per_page],
            total_count=total_count,
            page=page,
            per_page=per_page,
            total_pages=math.ceil(total_count / per_page),
        )

    def resolve_window(self, since: Timestamp, before: Timestamp) -> tuple[datetime, datetime]:
        now = _as_utc(self._clock()).replace(microsecond=0)
        since_time = parse_timestamp(since) or now - DEFAULT_WINDOW
        before_time = parse_timestamp(before) or now
        return since_time, before_time

    def _filtered(
        self, since: Timestamp, before: Timestamp, status: Any, search: Any
    ) -> list[Activity]:
        since_time, before_time = self.resolve_window(since, before)
        activities = self._generate(since_time, before_time)
        activities = filter_by_status(activities, status)
        return filter_by_search(activities, search)

    def _generate(self, since_time: datetime, before_time: datetime) -> list[Activity]:
        rng = random.Random(self._applet.id)
        activities: list[Activity] = []
        current = before_time
        while current > since_time and len(activities) < MAX_ACTIVITIES:
            interval = timedelta(minutes=rng.randint(MIN_INTERVAL_MINUTES, MAX_INTERVAL_MINUTES))
            try:
                current -= interval
            except OverflowError:
                break
            if current < since_time:
                break
            activities.append(self._build_activity(current, rng))

        activities.sort(key=lambda activity: activity.ran_at, reverse=True)
        logger.debug(
            "Generated activity window",
            applet_id=self._applet.id,
            since=since_time.isoformat(),
            before=before_time.isoformat(),
            generated=len(activities),
        )
        return activities

    def _build_activity(self, ran_at: datetime, rng: random.Random) -> Activity:
        status = _draw_status(rng)
        trigger_data = self._trigger_data(ran_at, rng)
        action_data = self._action_data(status, rng)
        error_message = (
            rng.choice(catalog.ERROR_MESSAGES) if status == ActivityStatus.FAILED else None
        )
        return Activity(
            id=activity_id(self._applet.id, ran_at),
            applet_id=self._applet.id,
            status=status,
            ran_at=ran_at,
            trigger_data=trigger_data,
            action_data=action_data,
            error_message=error_message,
        )

    def _trigger_data(self, ran_at: datetime, rng: random.Random) -> dict[str, Any]:
        service = self._applet.trigger_service
        events = catalog.TRIGGER_EVENTS.get(service.slug, (catalog.FALLBACK_TRIGGER_EVENT,))
        event = rng.choice(events)
        build_details = _TRIGGER_DETAILS.get(service.slug)
        details = build_details(rng, ran_at) if build_details else dict(catalog.FALLBACK_TRIGGER_DETAILS)
        return {"service": service.name, "event": event, "details": details}

    def _action_data(self, status: ActivityStatus, rng: random.Random) -> dict[str, Any]:
        service = self._applet.action_service
        templates = catalog.ACTION_TEMPLATES.get(service.slug, (catalog.FALLBACK_ACTION_RESULT,))
        result = _fill_placeholders(rng.choice(templates), rng)
        if status == ActivityStatus.SKIPPED:
            result = catalog.SKIPPED_ACTION_RESULT
        return {
            "service": service.name,
            "result": result,
            "completed": status == ActivityStatus.SUCCESS,
        }
