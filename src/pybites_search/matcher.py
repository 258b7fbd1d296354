"""Search term compilation and item filtering.

Matching is boolean and case-insensitive. User input is always treated as
literal text: each term is regex-escaped, and multiple terms are joined
with ``.*`` so that ``fastapi testing`` matches "FastAPI integration
testing" but not "testing FastAPI".

Content types can be given by full name or by single-letter shorthand;
see :data:`CONTENT_TYPES`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from pybites_search.exceptions import InputError
from pybites_search.models import Item

CONTENT_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "a": "article",
        "b": "bite",
        "p": "podcast",
        "v": "video",
        "t": "tip",
    }
)
"""Shorthand letter to canonical content-type name."""

TERM_JOINER = ".*"


def valid_content_types() -> str:
    """Return the accepted content types as ``a: article, b: bite, ...``."""
    return ", ".join(f"{short}: {full}" for short, full in CONTENT_TYPES.items())


def normalize_content_type(value: str) -> str:
    """Resolve a shorthand or full content-type name to its full name.

    Args:
        value: User input, e.g. ``"a"``, ``"Article"`` or ``"bite"``.

    Returns:
        The canonical full name, e.g. ``"article"``.

    Raises:
        InputError: If *value* is neither a known shorthand nor a known
            full name. The message lists every valid option.
    """
    key = value.strip().lower()
    if key in CONTENT_TYPES:
        return CONTENT_TYPES[key]
    if key in CONTENT_TYPES.values():
        return key
    raise InputError(
        f"Invalid content type '{value}'. Valid options: {valid_content_types()}"
    )


def compile_search(terms: Sequence[str], joiner: str = TERM_JOINER) -> re.Pattern[str]:
    """Compile search terms into a case-insensitive pattern.

    Args:
        terms: One or more literal search terms, in the order they must
            appear in the matched text.
        joiner: Regex fragment placed between escaped terms.

    Returns:
        The compiled pattern.

    Raises:
        InputError: If no non-blank term was given.
    """
    words = [term.strip() for term in terms if term.strip()]
    if not words:
        raise InputError("A search term is required")
    return re.compile(joiner.join(re.escape(word) for word in words), re.IGNORECASE)


@dataclass(frozen=True)
class SearchPredicate:
    """A compiled search: pattern, optional content type, title-only flag.

    ``content_type`` must already be normalized with
    :func:`normalize_content_type`; comparison against items is
    case-insensitive.
    """

    pattern: re.Pattern[str]
    content_type: Optional[str] = None
    title_only: bool = False

    @classmethod
    def build(
        cls,
        terms: Sequence[str],
        content_type: Optional[str] = None,
        title_only: bool = False,
    ) -> SearchPredicate:
        """Compile *terms* and normalize *content_type* into a predicate.

        Raises:
            InputError: On blank terms or an unknown content type. An empty
                content type is unknown, not "no filter".
        """
        normalized = (
            normalize_content_type(content_type) if content_type is not None else None
        )
        return cls(compile_search(terms), normalized, title_only)

    @property
    def shows_type(self) -> bool:
        """Whether results should be labelled with their content type."""
        return self.content_type is None

    def matches(self, item: Item) -> bool:
        if self.content_type is not None:
            if self.content_type.lower() != item.content_type.lower():
                return False
        if self.pattern.search(item.title):
            return True
        return not self.title_only and self.pattern.search(item.summary) is not None


def filter_items(items: Iterable[Item], predicate: SearchPredicate) -> list[Item]:
    """Return the items matching *predicate*, preserving input order."""
    return [item for item in items if predicate.matches(item)]
