"""Error taxonomy and the normalizing error handler"""

from __future__ import annotations

from typing import Any, Optional

import structlog


logger = structlog.get_logger(__name__)


class ApplicationError(Exception):
    """Normalized error shape: message plus optional code, cause and context."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[dict[str, Any]] = None,
        ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause
        self.context = context
        if cause is not None:
            self.__cause__ = cause


class FrontmatterValidationError(ApplicationError):
    """A content file whose frontmatter is missing, malformed, or incomplete."""

    def __init__(self, source_id: str, reason: str) -> None:
        super().__init__(
            f"Frontmatter validation failed for {source_id}: {reason}",
            code="FRONTMATTER_INVALID",
            context={"source_id": source_id},
        )
        self.source_id = source_id
        self.reason = reason


class DuplicatePostError(FrontmatterValidationError):
    """Two content files resolve to the same (topic, slug) pair."""

    def __init__(self, source_id: str, first_source_id: str, topic: str, slug: str) -> None:
        super().__init__(
            source_id,
            f'Post "{topic}/{slug}" is already defined by {first_source_id}. '
            "Rename one of the files so every topic/slug pair is unique.",
        )
        self.first_source_id = first_source_id


class RenderError(ApplicationError):
    def __init__(self, cause: Optional[BaseException] = None) -> None:
        super().__init__("Failed to render Markdown", code="RENDER_ERROR", cause=cause)


class CacheError(ApplicationError):
    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(
            f"Render cache {operation} failed: {cause}",
            code="CACHE_ERROR",
            cause=cause,
            context={"operation": operation},
        )


def normalize_error(error: object) -> ApplicationError:
    """Convert any raised value (exception, string, anything) into an ApplicationError."""
    if isinstance(error, ApplicationError):
        return error
    if isinstance(error, BaseException):
        return ApplicationError(str(error), code="GENERIC_ERROR", cause=error)
    if isinstance(error, str):
        return ApplicationError(error, code="STRING_ERROR")
    return ApplicationError(
        "An unknown error occurred",
        code="UNKNOWN_ERROR",
        context={"original_error": error},
    )


class ErrorHandler:
    """Logs normalized errors and either returns or re-raises them."""

    def __init__(self, log=None) -> None:
        self.log = log or logger

    def handle(
        self,
        error: object,
        context: Optional[str] = None,
        silent: bool = False,
        rethrow: bool = False,
        ) -> ApplicationError:
        app_error = normalize_error(error)
        if not silent:
            self.log.error(
                "error",
                where=context or "unknown",
                message=app_error.message,
                code=app_error.code,
                error_type=type(app_error.cause or app_error).__name__,
            )
        if rethrow:
            raise app_error
        return app_error

    def handle_sync(self, operation, context: str, fallback=None):
        """Run operation(); on failure log it and return fallback."""
        try:
            return operation()
        except Exception as e:
            self.handle(e, context)
            return fallback
