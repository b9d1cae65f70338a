"""RSS 2.0 feed and browser preview generation"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from markupsafe import Markup

from mdblog.core.formatting import format_reading_time
from mdblog.core.models import Post
from mdblog.core.utils.dates import to_human, to_rfc822


logger = structlog.get_logger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
MAX_RSS_ITEMS = 20
RSS_FILENAME = "rss.xml"
PREVIEW_FILENAME = "rss-viewer.html"


def cdata(value: str) -> Markup:
    """Wrap value in a CDATA section, splitting any embedded ']]>'."""
    return Markup("<![CDATA[" + str(value).replace("]]>", "]]]]><![CDATA[>") + "]]>")


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["cdata"] = cdata
    return env


@dataclass(frozen=True)
class Channel:
    base_url:    str
    title:       str
    description: str
    generator:   str

    @property
    def feed_url(self) -> str:
        return f"{self.base_url}/{RSS_FILENAME}"


@dataclass(frozen=True)
class FeedItem:
    title:        str
    description:  str
    link:         str
    pub_date:     str      # RFC 822, GMT
    human_date:   str
    reading_time: str
    tags:         list[str]


def make_channel(base_url: str, title: str, description: str, generator: Optional[str] = None) -> Channel:
    return Channel(base_url.rstrip("/"), title, description, generator or title)


def post_url(base_url: str, post: Post) -> str:
    return f"{base_url.rstrip('/')}/blog/{post.topic}/{post.slug}"


def select_feed_posts(posts: list[Post], max_items: int = MAX_RSS_ITEMS) -> list[Post]:
    """Newest first, at most max_items. Equal dates keep discovery order."""
    return sorted(posts, key=lambda p: p.date, reverse=True)[:max_items]


def feed_items(posts: list[Post], base_url: str, max_items: int = MAX_RSS_ITEMS) -> list[FeedItem]:
    return [
        FeedItem(
            title=post.title,
            description=post.description,
            link=post_url(base_url, post),
            pub_date=to_rfc822(post.date),
            human_date=to_human(post.date),
            reading_time=format_reading_time(post.reading_time),
            tags=list(post.tags),
        )
        for post in select_feed_posts(posts, max_items)
    ]


def render_rss(channel: Channel, items: list[FeedItem], now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return _environment().get_template("rss.xml.j2").render(
        channel=channel, items=items, last_build_date=to_rfc822(now),
    )


def read_stylesheets(paths: list[str]) -> str:
    """Concatenate the theme stylesheets verbatim; missing files are skipped with a warning."""
    parts = []
    for p in paths:
        path = Path(p)
        if not path.is_file():
            logger.warning("stylesheet_missing", path=str(path))
            continue
        parts.append(path.read_text(encoding="utf-8"))
    return "\n".join(parts)


def render_preview_html(channel: Channel, items: list[FeedItem], stylesheets: str = "") -> str:
    return _environment().get_template("rss-viewer.html.j2").render(
        channel=channel, items=items, theme_css=Markup(stylesheets),
    )


def write_feed(
    posts: list[Post],
    public_dir: Path,
    channel: Channel,
    max_items: int = MAX_RSS_ITEMS,
    stylesheets: str = "",
    now: Optional[datetime] = None,
    ) -> tuple[Path, Path]:
    """Write rss.xml and rss-viewer.html into public_dir. Returns both paths."""
    if not posts:
        logger.warning("feed_empty", message="No blog posts found. RSS feed will be empty.")
    items = feed_items(posts, channel.base_url, max_items)
    public_dir = Path(public_dir)
    public_dir.mkdir(parents=True, exist_ok=True)

    rss_path = public_dir / RSS_FILENAME
    rss_path.write_text(render_rss(channel, items, now), encoding="utf-8")
    html_path = public_dir / PREVIEW_FILENAME
    html_path.write_text(render_preview_html(channel, items, stylesheets), encoding="utf-8")

    logger.info("feed_written", items=len(items), rss=str(rss_path), preview=str(html_path))
    return rss_path, html_path
