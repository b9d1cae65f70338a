"""Cache-guarded rendering service and the latest-request-wins render view"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import structlog

from mdblog.config import Settings
from mdblog.core.cache import RenderCache
from mdblog.core.render import MarkdownRenderer, RenderedContent
from mdblog.core.utils.hashing import fingerprint
from mdblog.errors import CacheError, ErrorHandler, RenderError


logger = structlog.get_logger(__name__)


class MarkdownRenderingService:
    """Renders markdown bodies, memoizing results in an owned RenderCache.

    The cache is an optimization only: a failing get or set is logged and
    the body is rendered uncached.
    """

    def __init__(
        self,
        renderer: Optional[MarkdownRenderer] = None,
        cache: Optional[RenderCache[RenderedContent]] = None,
        ttl: Optional[float] = None,
        ) -> None:
        self.renderer = renderer or MarkdownRenderer()
        self.cache = cache
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> MarkdownRenderingService:
        cache = None
        if settings.cache_enabled:
            cache = RenderCache(max_size=settings.cache_max_size, default_ttl=settings.cache_ttl)
        return cls(cache=cache, ttl=settings.cache_ttl)

    def _cache_get(self, key: str) -> Optional[RenderedContent]:
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning("cache_failure", **_describe(CacheError("get", e)))
            return None

    def _cache_set(self, key: str, content: RenderedContent) -> None:
        try:
            self.cache.set(key, content, self.ttl)
        except Exception as e:
            logger.warning("cache_failure", **_describe(CacheError("set", e)))

    def lookup(self, markdown: str) -> tuple[str, Optional[RenderedContent]]:
        """Return (fingerprint, cached result or None)."""
        key = fingerprint(markdown)
        if self.cache is None:
            return key, None
        cached = self._cache_get(key)
        logger.debug("cache_hit" if cached is not None else "cache_miss", key=key)
        return key, cached

    def store(self, key: str, content: RenderedContent) -> None:
        if self.cache is not None:
            self._cache_set(key, content)

    def render(self, markdown: str) -> RenderedContent:
        """Render markdown, serving unchanged bodies from the cache. Raises RenderError.

        A cache hit returns the same RenderedContent object to every caller;
        treat its nodes as read-only.
        """
        key, cached = self.lookup(markdown)
        if cached is not None:
            return cached
        content = self.renderer.render(markdown)
        self.store(key, content)
        return content

    async def render_async(self, markdown: str) -> RenderedContent:
        """Like render, with the transform offloaded to a worker thread.

        The cache is only touched from the calling event loop thread.
        """
        key, cached = self.lookup(markdown)
        if cached is not None:
            return cached
        content = await asyncio.to_thread(self.renderer.render, markdown)
        self.store(key, content)
        return content

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()


def _describe(error: CacheError) -> dict:
    return {"message": error.message, "code": error.code, **(error.context or {})}


@dataclass
class RenderState:
    content: Optional[RenderedContent] = None
    error:   Optional[str] = None
    loading: bool = False


class RenderView:
    """Holds the render state for one piece of displayed content.

    Each show() call takes a new generation number. When its render
    resolves after a newer show() has started, the result is discarded so
    stale output never overwrites the state. Render errors end up in
    state.error and are not raised.
    """

    def __init__(
        self,
        service: MarkdownRenderingService,
        error_handler: Optional[ErrorHandler] = None,
        ) -> None:
        self.service = service
        self.error_handler = error_handler or ErrorHandler()
        self.state = RenderState()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    async def show(self, markdown: str) -> bool:
        """Render markdown into state; return False when the result was superseded."""
        self._generation += 1
        token = self._generation
        self.state = RenderState(content=self.state.content, loading=True)
        try:
            content = await self.service.render_async(markdown)
        except RenderError as e:
            if not self.is_current(token):
                return False
            app_error = self.error_handler.handle(e, "RenderView.show")
            self.state = RenderState(error=app_error.message)
            return True
        if not self.is_current(token):
            logger.debug("render_discarded", token=token, current=self._generation)
            return False
        self.state = RenderState(content=content)
        return True
