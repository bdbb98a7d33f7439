"""
Semantic-version-aware ordering and trimming of action tag lists.

The remote catalog stores each action in a single property with a size
ceiling, so only the most recent tags are kept. Tags that are not
version-like (run or attempt markers such as "+run2368-attempt1") sort
below every real version and are dropped first.
"""

import re
from collections.abc import Sequence
from enum import Enum
from functools import cmp_to_key
from typing import Any

from .data_models import ParsedVersion

TAG_INFO_FIELD = "tagInfo"
TAG_TEXT_FIELD = "tag"

SEMVER_LIKE_PATTERN = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-(.+))?$")


class TagShape(Enum):
    """How the tags of one list are represented."""

    TEXT = "text"  # "v1.2.0"
    RECORD = "record"  # {"tag": "v1.2.0", ...}

    @classmethod
    def detect(cls, tags: Sequence[Any]) -> "TagShape":
        """Detect the shape of a tag list from its first element."""
        if tags and isinstance(tags[0], dict):
            return cls.RECORD
        return cls.TEXT

    def text_of(self, tag: Any) -> str:
        """Extract the tag text from an element of this shape."""
        if self is TagShape.RECORD:
            value = tag.get(TAG_TEXT_FIELD) if isinstance(tag, dict) else None
        else:
            value = tag
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


def _tag_text(tag: Any) -> str:
    if isinstance(tag, dict):
        return TagShape.RECORD.text_of(tag)
    return TagShape.TEXT.text_of(tag)


def parse_version(tag: Any) -> ParsedVersion | None:
    """
    Parse a tag into its version components.

    Args:
        tag: Tag text, or a tag record holding the text in its "tag" field

    Returns:
        ParsedVersion, or None when the tag is not version-like
    """
    match = SEMVER_LIKE_PATTERN.match(_tag_text(tag).strip())
    if not match:
        return None

    major, minor, patch, prerelease = match.groups()
    return ParsedVersion(
        major=int(major),
        minor=int(minor) if minor else 0,
        patch=int(patch) if patch else 0,
        prerelease=prerelease or "",
    )


def compare_desc(a: Any, b: Any) -> int:
    """
    Compare two tags for a newest-first ordering.

    Returns a negative number when ``a`` sorts before ``b``, a positive number
    when it sorts after, and 0 when they are equivalent.
    """
    text_a, text_b = _tag_text(a), _tag_text(b)
    parsed_a, parsed_b = parse_version(text_a), parse_version(text_b)

    if parsed_a and parsed_b:
        for left, right in (
            (parsed_a.major, parsed_b.major),
            (parsed_a.minor, parsed_b.minor),
            (parsed_a.patch, parsed_b.patch),
        ):
            if left != right:
                return right - left

        # A release outranks its own prereleases
        if parsed_a.prerelease == parsed_b.prerelease:
            return 0
        if not parsed_a.prerelease:
            return -1
        if not parsed_b.prerelease:
            return 1
        return -1 if parsed_a.prerelease > parsed_b.prerelease else 1

    if parsed_a:
        return -1
    if parsed_b:
        return 1

    if text_a == text_b:
        return 0
    return -1 if text_a > text_b else 1


def sort_tags_desc(tags: Sequence[Any]) -> list[Any]:
    """Return a newest-first copy of a tag list."""
    shape = TagShape.detect(tags)
    return sorted(
        tags,
        key=cmp_to_key(lambda a, b: compare_desc(shape.text_of(a), shape.text_of(b))),
    )


def trim_to_latest(
    entry: dict[str, Any], max_count: int, field: str = TAG_INFO_FIELD
) -> bool:
    """
    Keep only the newest ``max_count`` tags of an action entry.

    The entry's tag list is replaced in place by a newest-first, truncated
    copy. Entries without a tag list, or with a list already inside the
    window, are left untouched.

    Args:
        entry: Action record holding the tag list
        max_count: Maximum number of tags to retain
        field: Name of the tag list field

    Returns:
        True if the tag list was trimmed
    """
    tags = entry.get(field)
    if not isinstance(tags, list | tuple) or len(tags) <= max_count:
        return False

    entry[field] = sort_tags_desc(tags)[:max_count]
    return True
