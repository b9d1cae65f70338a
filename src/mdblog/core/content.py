"""Post loading: discovery + frontmatter validation + derived metadata"""

import math
from pathlib import Path, PurePosixPath

import structlog

from mdblog.core.discover import MD_EXTENSION, discover_files
from mdblog.core.frontmatter import split_frontmatter, validate_frontmatter
from mdblog.core.models import Post, RawDocument
from mdblog.errors import DuplicatePostError


logger = structlog.get_logger(__name__)

WORDS_PER_MINUTE = 200


def reading_time(body: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Whole minutes to read body, rounded up; 0 for an empty body."""
    words = len(body.split())
    return math.ceil(words / words_per_minute) if words else 0


def slug_and_topic(path: str) -> tuple[str, str]:
    """Return (slug, topic) for a relative post path like 'css/grid.md'."""
    p = PurePosixPath(path.replace("\\", "/"))
    slug = p.name.removesuffix(MD_EXTENSION)
    topic = p.parent.name
    return slug, topic


def read_document(root: Path, path: str) -> RawDocument:
    return RawDocument(path=path, raw_text=(Path(root) / path).read_text(encoding="utf-8"))


def build_post(doc: RawDocument, words_per_minute: int = WORDS_PER_MINUTE) -> Post:
    """Validate one document and derive its metadata. Raises FrontmatterValidationError."""
    fm, body = split_frontmatter(doc.raw_text, doc.path)
    meta = validate_frontmatter(fm, doc.path)
    slug, topic = slug_and_topic(doc.path)
    return Post(
        **meta.model_dump(),
        slug=slug,
        topic=topic,
        reading_time=reading_time(body, words_per_minute),
        content=body,
    )


def load_documents(root: Path) -> list[RawDocument]:
    return [read_document(root, p) for p in discover_files(root)]


def build_posts(docs: list[RawDocument], words_per_minute: int = WORDS_PER_MINUTE) -> list[Post]:
    """Build posts in discovery order, stopping at the first invalid document."""
    posts: list[Post] = []
    seen: dict[tuple[str, str], str] = {}
    for doc in docs:
        post = build_post(doc, words_per_minute)
        key = (post.topic, post.slug)
        if key in seen:
            raise DuplicatePostError(doc.path, seen[key], post.topic, post.slug)
        seen[key] = doc.path
        posts.append(post)
        logger.debug("post_loaded", path=doc.path, topic=post.topic, slug=post.slug)
    return posts


def load_posts(root: Path, words_per_minute: int = WORDS_PER_MINUTE) -> list[Post]:
    """Discover, read and validate every post under root."""
    return build_posts(load_documents(root), words_per_minute)
