"""Page slicing over Protean querysets and plain lists."""

from dataclasses import dataclass, field
from math import ceil

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.size) if self.size else 0


def parse_sort(sort: str | None, allowed: set[str], default: str) -> str:
    """Turn ``"price,desc"`` into a Protean ``order_by`` key (``"-price"``).

    Unknown fields fall back to ``default`` rather than failing the request.
    """
    if not sort:
        return default
    field_name, _, direction = sort.partition(",")
    field_name = field_name.strip()
    if field_name not in allowed:
        return default
    return f"-{field_name}" if direction.strip().lower() == "desc" else field_name


def fetch_all(queryset) -> list:
    """Evaluate a queryset without the provider's default result limit."""
    result = queryset.all()
    if result.total > len(result.items):
        result = queryset.limit(result.total).all()
    return list(result.items)


def paginate_items(items: list, page: int, size: int) -> Page:
    size = min(max(size, 1), MAX_PAGE_SIZE)
    page = max(page, 0)
    start = page * size
    return Page(items=items[start : start + size], page=page, size=size, total=len(items))
