from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from desguace_catalog.domain.errors import ValidationError

T = TypeVar("T")

# Page size the backend uses when a request carries no limit.
BACKEND_DEFAULT_LIMIT = 50


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


@dataclass(frozen=True, slots=True)
class Paging:
    page: int = 1
    limit: int = 15
    count: bool = True

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.limit <= 0:
            raise PagingValidationError("limit must be > 0")

    def to_params(self) -> dict[str, str]:
        return {
            "page": str(self.page),
            "limit": str(self.limit),
            "count": "true" if self.count else "false",
        }


@dataclass(frozen=True, slots=True)
class PageInfo:
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def normalize(
        cls,
        raw: dict[str, Any] | None,
        item_count: int,
        requested: Paging | None = None,
    ) -> PageInfo:
        """
        Build pagination metadata from a backend block that may be partial.

        - Missing block: synthesized from the request and the returned items
        - Missing ``total``: number of returned items
        - Missing ``totalPages``: ``max(1, ceil(total / limit))``
        """
        if raw is None:
            page = requested.page if requested else 1
            limit = requested.limit if requested else BACKEND_DEFAULT_LIMIT
            return cls(
                page=page,
                limit=limit,
                total=item_count,
                total_pages=max(1, math.ceil(item_count / limit)),
            )

        page = _as_int(raw.get("page")) or (requested.page if requested else 1)
        limit = _as_int(raw.get("limit")) or (requested.limit if requested else BACKEND_DEFAULT_LIMIT)
        total = _as_int(raw.get("total"))
        if total is None:
            total = item_count
        total_pages = _as_int(raw.get("totalPages"))
        if total_pages is None:
            total_pages = max(1, math.ceil(total / limit))

        return cls(page=page, limit=limit, total=total, total_pages=total_pages)

    def for_filtered(self, filtered_count: int) -> PageInfo:
        """
        Pagination of the current filtered view.

        ``total`` and ``total_pages`` describe only the filtered subset of the
        page already fetched, never the backend's total.
        """
        return PageInfo(
            page=self.page,
            limit=self.limit,
            total=filtered_count,
            total_pages=math.ceil(filtered_count / self.limit),
        )

    @classmethod
    def empty(cls, page: int, limit: int) -> PageInfo:
        return cls(page=page, limit=limit, total=0, total_pages=0)


@dataclass(frozen=True)
class Page(Generic[T]):
    """A page of entities with its pagination metadata."""

    items: list[T]
    pagination: PageInfo


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
