"""Filtering, search and pagination over a catalog snapshot."""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .models import Product

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_int(raw: Optional[str], default: int) -> int:
    """Parse a leading integer ("2abc" -> 2, "1.5" -> 1). Missing, non-numeric or 0 gives default."""
    if raw is None:
        return default
    m = _INT_PREFIX.match(raw)
    if not m:
        return default
    try:
        value = int(m.group(1))
    except ValueError:
        # more digits than int() will convert
        return default
    return value or default


@dataclass(frozen=True)
class ProductQuery:
    category: Optional[str] = None
    search: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(
        cls,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "ProductQuery":
        size = parse_int(limit, DEFAULT_LIMIT)
        if size < 1:
            size = DEFAULT_LIMIT
        return cls(
            category=category or None,
            search=search or None,
            page=parse_int(page, DEFAULT_PAGE),
            limit=min(size, MAX_LIMIT),
        )


@dataclass(frozen=True)
class QueryResult:
    items: List[Product]
    total: int
    page: int
    total_pages: int

    def to_json(self) -> Dict[str, Any]:
        return {
            "products": [p.to_json() for p in self.items],
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
        }


def query_products(snapshot: Sequence[Product], query: ProductQuery) -> QueryResult:
    result = list(snapshot)

    if query.category:
        wanted = query.category.lower()
        result = [p for p in result if p.category.lower() == wanted]

    if query.search:
        term = query.search.lower()
        result = [p for p in result if term in p.name.lower()]

    total = len(result)
    start = (query.page - 1) * query.limit
    # a page below 1 is an empty page, never a slice from the end
    items = result[start:start + query.limit] if start >= 0 else []

    return QueryResult(
        items=items,
        total=total,
        page=query.page,
        total_pages=math.ceil(total / query.limit),
    )


def category_stats(snapshot: Sequence[Product]) -> Dict[str, int]:
    return dict(Counter(p.category for p in snapshot))
