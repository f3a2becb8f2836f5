"""Normalize list query-string parameters.

Every input here comes straight from the query string and is untrusted.
Nothing in this module raises: malformed values fall back to defaults.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from ..schemas import ListQuery

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Parse the leading integer of `raw`; return `default` unless it is > 0.

    Trailing characters are ignored (`"5abc"` -> 5, `"2.9"` -> 2).
    """
    if raw is None:
        return default
    m = _LEADING_INT.match(str(raw))
    if not m:
        return default
    value = int(m.group(1))
    return value if value > 0 else default


def resolve_sort(raw: Optional[str]) -> str:
    """Only the exact string `asc` sorts ascending."""
    return "ASC" if raw == "asc" else "DESC"


def resolve_populate(raw: Optional[str], allowed: Iterable[str]) -> Optional[str]:
    """Return `raw` if it names an allowed relation, otherwise None."""
    if raw is not None and raw in allowed:
        return raw
    return None


def normalize_list_query(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort: Optional[str] = None,
    populate: Optional[str] = None,
    allowed: Iterable[str] = (),
    max_limit: int = 0,
) -> ListQuery:
    """Build a `ListQuery` from raw query-string values.

    `max_limit` > 0 clamps the page size; 0 leaves it unbounded.
    """
    lim = parse_positive_int(limit, DEFAULT_LIMIT)
    if max_limit > 0:
        lim = min(lim, max_limit)
    pg = parse_positive_int(page, DEFAULT_PAGE)
    return ListQuery(
        page=pg,
        limit=lim,
        offset=(pg - 1) * lim,
        sort_direction=resolve_sort(sort),
        populate=resolve_populate(populate, allowed),
    )
