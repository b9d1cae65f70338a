"""Display helpers for post metadata"""

from datetime import datetime

from mdblog.core.models import PostMetadata
from mdblog.core.utils.dates import to_human, to_iso


TOPIC_NAMES = {
    "css": "CSS",
    "wezterm": "WezTerm",
    "typescript": "TypeScript",
    "web-development": "Web Development",
}


def format_post_date(date: datetime) -> str:
    return to_human(date)


def format_post_datetime(date: datetime) -> str:
    return to_iso(date)


def format_reading_time(minutes: int) -> str:
    return f"{minutes} min read"


def topic_display_name(topic: str) -> str:
    """Known topics get their proper casing; others are capitalized."""
    return TOPIC_NAMES.get(topic, topic[:1].upper() + topic[1:])


def post_display_metadata(post: PostMetadata) -> dict[str, str]:
    return {
        "date": format_post_date(post.date),
        "date_time": format_post_datetime(post.date),
        "reading_time": format_reading_time(post.reading_time),
        "topic": topic_display_name(post.topic),
    }
