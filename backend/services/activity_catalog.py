"""Static phrase tables used to synthesize mock applet activity.

Keyed by service slug. Action templates may contain ``{{token}}`` placeholders
that the feed generator fills from the content pools below.
"""

TRIGGER_EVENTS: dict[str, tuple[str, ...]] = {
    "instagram": (
        "New photo posted by you",
        "New photo with specific hashtag",
        "New video posted by you",
        "You're tagged in a photo",
    ),
    "dropbox": (
        "New file in folder",
        "File shared with you",
        "File updated",
    ),
    "feed": (
        "New feed item",
        "New feed item matches",
        "Feed updated",
    ),
    "gmail": (
        "New email received",
        "New email from sender",
        "New email with label",
        "New email matching search",
    ),
    "wordpress": (
        "New post published",
        "Post updated",
        "New comment received",
    ),
    "twitter": (
        "New tweet by you",
        "New tweet from search",
        "New follower",
        "You're mentioned",
    ),
    "spotify": (
        "New saved track",
        "New playlist created",
        "Track added to playlist",
    ),
    "google_sheets": (
        "New row added",
        "Row updated",
        "Cell updated",
    ),
    "ios_photos": (
        "New photo taken",
        "New screenshot",
        "New photo in album",
    ),
    "google_drive": (
        "New file in folder",
        "File shared with you",
        "File updated",
    ),
}

ACTION_TEMPLATES: dict[str, tuple[str, ...]] = {
    "instagram": (
        "Posted photo",
        "Added photo to collection",
        "Liked photo",
    ),
    "dropbox": (
        "Uploaded file: {{filename}}",
        "Created text file: {{filename}}",
        "Moved file to folder",
    ),
    "gmail": (
        "Sent email to {{email}}",
        "Created draft email",
        "Added label to email",
    ),
    "wordpress": (
        "Created post: {{title}}",
        "Updated post",
        "Added tag to post",
    ),
    "twitter": (
        "Posted tweet: {{text}}",
        "Retweeted",
        "Liked tweet",
    ),
    "spotify": (
        "Saved track: {{track}}",
        "Added to playlist",
        "Created playlist",
    ),
    "google_sheets": (
        "Added row to spreadsheet",
        "Updated cell in {{sheet}}",
        "Created new sheet",
    ),
    "ios_photos": (
        "Saved photo to album",
        "Shared photo",
        "Deleted photo",
    ),
    "google_drive": (
        "Uploaded file: {{filename}}",
        "Created folder",
        "Shared file with {{email}}",
    ),
}

FALLBACK_TRIGGER_EVENT = "Trigger event occurred"
FALLBACK_ACTION_RESULT = "Action completed"
FALLBACK_TRIGGER_DETAILS = {"data": "Trigger data"}
SKIPPED_ACTION_RESULT = "Skipped - conditions not met"

ERROR_MESSAGES: tuple[str, ...] = (
    "Authentication failed - please reconnect your account",
    "Rate limit exceeded - waiting to retry",
    "Service temporarily unavailable",
    "Invalid credentials",
    "Network timeout",
    "File not found",
    "Permission denied",
    "Quota exceeded",
    "Invalid request format",
)

# --- Mock content pools ---

CAPTIONS = (
    "Beautiful sunset today! 🌅",
    "Amazing view from the top! 🏔️",
    "Loving this moment ❤️",
    "Good vibes only ✨",
    "Adventure awaits! 🌍",
)

FEED_TITLES = (
    "New Features in Ruby on Rails 8.0",
    "10 Tips for Better Code Reviews",
    "Understanding GraphQL Schema Design",
    "The Future of Web Development",
    "Building Scalable APIs with Ruby",
)

EMAIL_NAMES = ("john", "sarah", "mike", "emma", "alex")
EMAIL_DOMAINS = ("gmail.com", "example.com", "company.com")

EMAIL_SUBJECTS = (
    "Weekly Newsletter",
    "Important Update",
    "Meeting Reminder",
    "Your Order Has Shipped",
    "New Comment on Your Post",
)

BLOG_TITLES = (
    "Getting Started with React Hooks",
    "My Journey Learning Ruby",
    "10 Must-Have VS Code Extensions",
    "Building a REST API from Scratch",
    "Why I Switched to TypeScript",
)

TWEETS = (
    "Just deployed a new feature! 🚀 #webdev #coding",
    "Learning something new every day 💡",
    "Great article on software architecture",
    "Coffee + Code = Perfect morning ☕️",
    "Excited about this new project! 🎉",
)

TRACKS = (
    "Bohemian Rhapsody",
    "Imagine",
    "Stairway to Heaven",
    "Sweet Child O' Mine",
    "Billie Jean",
)

ARTISTS = (
    "Queen",
    "John Lennon",
    "Led Zeppelin",
    "Guns N' Roses",
    "Michael Jackson",
)

FILE_EXTENSIONS = ("jpg", "png", "pdf", "docx", "txt")
