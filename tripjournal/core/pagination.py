"""
Offset/limit pagination helpers.
"""
from dataclasses import dataclass
from typing import Any, List, Sequence

from sqlalchemy.orm import Query


@dataclass
class Page:
    """One page of results plus the numbers needed by the client."""
    items: List[Any]
    total: int
    has_more: bool

    def as_dict(self) -> dict:
        return {"items": self.items, "total": self.total, "has_more": self.has_more}


def has_more(skip: int, returned: int, total: int) -> bool:
    """True when rows remain after this page."""
    return skip + returned < total


def paginate(items: Sequence[Any], skip: int, take: int, total: int) -> Page:
    """
    Build a page from items that were fetched starting at `skip`.

    `items` may be longer than `take` (e.g. an in-memory list); only the first
    `take` entries are returned.
    """
    page_items = list(items)[:take]
    return Page(items=page_items, total=total, has_more=has_more(skip, len(page_items), total))


def paginate_query(query: Query, skip: int, take: int) -> Page:
    """Run COUNT and OFFSET/LIMIT for an ordered query."""
    total = query.order_by(None).count()
    items = query.offset(skip).limit(take).all()
    return paginate(items, skip, take, total)
