"""Runtime access to the generated content artifact"""

import json
from pathlib import Path
from typing import Any, Optional

from mdblog.core.models import Post, PostMetadata, SerializedPost


class ContentStore:
    """Posts re-hydrated from a generated artifact, newest first."""

    def __init__(self, artifact: dict[str, Any]) -> None:
        self._modules: dict[str, str] = dict(artifact.get("contentModules") or {})
        posts = [
            SerializedPost.model_validate(p).hydrate()
            for p in artifact.get("processedPosts") or []
        ]
        # sorted() is stable: equal dates keep artifact order.
        self._posts: list[Post] = sorted(posts, key=lambda p: p.date, reverse=True)
        self._index: dict[tuple[str, str], Post] = {(p.topic, p.slug): p for p in self._posts}

    @classmethod
    def from_file(cls, path: Path) -> "ContentStore":
        try:
            artifact = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid content artifact {path}: {e}") from e
        return cls(artifact)

    def __len__(self) -> int:
        return len(self._posts)

    def all_posts(self, limit: Optional[int] = None) -> list[Post]:
        return list(self._posts if limit is None else self._posts[:limit])

    def posts_metadata(self) -> list[PostMetadata]:
        return [p.metadata() for p in self._posts]

    def get_post(self, topic: str, slug: str) -> Optional[Post]:
        return self._index.get((topic, slug))

    def raw_content(self, path: str) -> Optional[str]:
        return self._modules.get(path)

    def topics(self) -> list[str]:
        return sorted({p.topic for p in self._posts})
