"""
Listing parameters shared by every paginated endpoint.

page   - 1-based, anything below 1 (or not a number) becomes 1
limit  - anything below 1 (or not a number) becomes 10
sortBy - any stored field, default created_at
order  - "asc", anything else is treated as "desc"
search - case-insensitive substring
"""

from dataclasses import dataclass
from typing import Optional

from alumni_api.schemas.schemas import MetaInfo

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_BY = "created_at"


def _to_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ListQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = DEFAULT_SORT_BY
    order: str = "desc"
    search: str = ""

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def direction(self) -> int:
        """pymongo sort direction."""
        return 1 if self.order == "asc" else -1


def parse_list_query(
    page=None,
    limit=None,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    search: Optional[str] = None,
) -> ListQuery:
    page = _to_int(page, DEFAULT_PAGE)
    if page < 1:
        page = DEFAULT_PAGE
    limit = _to_int(limit, DEFAULT_LIMIT)
    if limit < 1:
        limit = DEFAULT_LIMIT
    order = (order or "desc").lower()
    if order != "asc":
        order = "desc"
    return ListQuery(
        page=page,
        limit=limit,
        sort_by=sort_by or DEFAULT_SORT_BY,
        order=order,
        search=search or "",
    )


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit) without floats."""
    return (total + limit - 1) // limit


def build_meta(query: ListQuery, total: int) -> MetaInfo:
    return MetaInfo(
        page=query.page,
        limit=query.limit,
        total=total,
        pages=total_pages(total, query.limit),
        sort_by=query.sort_by,
        order=query.order,
        search=query.search,
    )
