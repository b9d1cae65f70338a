"""Frontmatter splitting and validation for blog posts"""

import math
import re
from datetime import date
from typing import Any, Optional

import yaml

from mdblog.core.models import FrontmatterRecord, PostFrontmatter
from mdblog.core.utils.dates import parse_date
from mdblog.errors import FrontmatterValidationError


FRONTMATTER_RE = re.compile(r'^---\n(.*?)\n---(?:\n|$)', re.DOTALL)


def split_frontmatter(raw_text: str, source_id: str) -> tuple[FrontmatterRecord, str]:
    """Return (frontmatter_dict, body) for a post file, or raise FrontmatterValidationError."""
    m = FRONTMATTER_RE.match(raw_text)
    if m is None:
        raise FrontmatterValidationError(
            source_id,
            "Frontmatter delimiter not found. File must start with --- followed by "
            "YAML frontmatter and another ---.",
        )
    block = m.group(1)
    if not block.strip():
        raise FrontmatterValidationError(
            source_id,
            "Frontmatter block is empty. Add YAML content between the --- delimiters "
            "with at least title, date, and description.",
        )
    try:
        fm = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise FrontmatterValidationError(
            source_id, f"YAML parsing failed: {e}. Check YAML syntax and indentation."
        ) from e
    if not isinstance(fm, dict):
        raise FrontmatterValidationError(
            source_id, f"YAML parsing failed: expected a mapping, got {type(fm).__name__}."
        )
    return fm, raw_text[m.end():]


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_date_like(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return not math.isnan(value)
    return isinstance(value, (str, int, date))


def validate_frontmatter(frontmatter: Optional[FrontmatterRecord], source_id: str) -> PostFrontmatter:
    """Validate and normalize a decoded frontmatter mapping.

    Fail-closed: any missing or malformed required field raises
    FrontmatterValidationError naming source_id. Only tags is lenient and
    falls back to an empty list; null items in a tag list are dropped.
    """
    if not frontmatter:
        raise FrontmatterValidationError(
            source_id,
            "Missing frontmatter block. Add YAML frontmatter between --- markers at the top "
            "of the file with title, date, and description fields.",
        )

    title = frontmatter.get("title")
    if not _is_text(title):
        raise FrontmatterValidationError(
            source_id, 'Missing or invalid "title" field. Title must be a non-empty string.'
        )

    raw_date = frontmatter.get("date")
    if not _is_date_like(raw_date):
        raise FrontmatterValidationError(
            source_id,
            'Missing or invalid "date" field. Date must be an ISO string (e.g. "2025-12-05"), '
            "an epoch timestamp in milliseconds, or a YAML date.",
        )

    description = frontmatter.get("description")
    if not _is_text(description):
        raise FrontmatterValidationError(
            source_id,
            'Missing or invalid "description" field. Description must be a non-empty string.',
        )

    try:
        parsed_date = parse_date(raw_date)
    except ValueError as e:
        raise FrontmatterValidationError(
            source_id, f'Unparseable date "{raw_date}". Use ISO format (e.g. "2025-12-05").'
        ) from e

    tags = frontmatter.get("tags")
    return PostFrontmatter(
        title=title.strip(),
        date=parsed_date,
        description=description.strip(),
        tags=[str(t) for t in tags if t is not None] if isinstance(tags, list) else [],
    )
