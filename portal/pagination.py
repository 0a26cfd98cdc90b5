"""Query-string and page-link helpers shared by the hooks and the list view."""

from typing import Any, List, Mapping, Optional, Tuple, Union

import httpx

from portal.models import Meta, PaginationLink, SearchParams

Criteria = Union[SearchParams, Mapping[str, Any]]

# sort request appended to the very first listing call only
PRIORITIZE_AVAILABLE: List[Tuple[str, str]] = [("sort_by", "status"), ("sort_direction", "asc")]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if hasattr(value, "value"):  # Enum members
        return str(value.value)
    return str(value)


def to_query(criteria: Criteria) -> List[Tuple[str, str]]:
    """
    Search criteria -> ordered query items.
    None and "" are dropped; everything else goes out in its string form.
    """
    if isinstance(criteria, SearchParams):
        items = criteria.model_dump().items()
    else:
        items = criteria.items()
    return [
        (key, _stringify(value))
        for key, value in items
        if value is not None and value != ""
    ]


def page_from_url(url: Optional[str]) -> Optional[int]:
    """Page number carried in a prev/next URL's `page` parameter, if any."""
    if not url:
        return None
    try:
        page = httpx.URL(url).params.get("page")
        return int(page) if page else None
    except (httpx.InvalidURL, ValueError):
        return None


def _is_arrow(link: PaginationLink) -> bool:
    return "Previous" in link.label or "Next" in link.label


def page_links(meta: Optional[Meta]) -> List[PaginationLink]:
    """Numbered links of `meta.links`: the Previous/Next arrows and page-less entries are left out."""
    if meta is None:
        return []
    return [link for link in meta.links if link.page and not _is_arrow(link)]


def current_page_count(meta: Optional[Meta]) -> int:
    return meta.total.page_count if meta else 0


def total_count(meta: Optional[Meta]) -> int:
    return meta.total.total_count if meta else 0
