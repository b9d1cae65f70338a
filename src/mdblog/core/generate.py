"""Generated content artifact: raw file bindings plus serialized posts"""

import json
from pathlib import Path
from typing import Any

from mdblog.core.content import build_posts, load_documents
from mdblog.core.models import Post, RawDocument


def generate_content_module(posts: list[Post], docs: list[RawDocument]) -> dict[str, Any]:
    """Build the artifact dict: contentModules (path -> raw text) and processedPosts."""
    return {
        "contentModules": {doc.path: doc.raw_text for doc in docs},
        "processedPosts": [
            post.serialize().model_dump(mode="json", by_alias=True) for post in posts
        ],
    }


def build_content_module(content_dir: Path, words_per_minute: int = 200) -> tuple[dict[str, Any], list[Post]]:
    """Discover and validate every post; raises on the first invalid one before anything is written."""
    docs = load_documents(content_dir)
    posts = build_posts(docs, words_per_minute)
    return generate_content_module(posts, docs), posts


def write_content_module(artifact: dict[str, Any], out_path: Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(artifact, indent=2, ensure_ascii=False), encoding="utf-8")
    return out_path
