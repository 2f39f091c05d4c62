# strapi_catalog/models/envelope.py

"""The ``{data, meta}`` wrapper returned by every CMS collection endpoint."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Pagination:
    """Page metadata the CMS attaches to list responses."""

    page: int
    page_size: int
    page_count: int
    total: int

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Pagination":
        return cls(
            page=int(raw["page"]),
            page_size=int(raw["pageSize"]),
            page_count=int(raw["pageCount"]),
            total=int(raw["total"]),
        )


@dataclass
class Meta:
    pagination: Pagination | None = None


@dataclass
class ListResponse(Generic[T]):
    """A page of entities plus its metadata."""

    data: list[T] = field(default_factory=list)
    meta: Meta = field(default_factory=Meta)

    @property
    def first(self) -> T | None:
        """The first entity, or ``None`` for an empty page."""
        return self.data[0] if self.data else None

    @classmethod
    def from_dict(
        cls,
        body: Any,
        item_parser: Callable[[dict[str, Any]], T],
    ) -> "ListResponse[T]":
        """Map a decoded JSON body into a typed envelope.

        A missing or ``null`` ``data`` becomes an empty list. Raises
        ``TypeError`` when the body or ``data`` has the wrong shape, and
        lets *item_parser* errors propagate.
        """
        if not isinstance(body, dict):
            raise TypeError(
                f"expected envelope object, got {type(body).__name__}"
            )

        data = body.get("data")
        if data is None:
            data = []
        elif not isinstance(data, list):
            raise TypeError(
                f"expected 'data' list, got {type(data).__name__}"
            )

        raw_meta = body.get("meta") or {}
        if not isinstance(raw_meta, dict):
            raise TypeError(
                f"expected 'meta' object, got {type(raw_meta).__name__}"
            )
        raw_pagination = raw_meta.get("pagination")
        meta = Meta(
            pagination=(
                None if raw_pagination is None
                else Pagination.from_dict(raw_pagination)
            )
        )

        return cls(data=[item_parser(item) for item in data], meta=meta)
