# comments in English; reST docstrings strict
from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PaginationIn:
    """
    Input pagination contract.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size (1..100).
    :type limit: int
    """

    page: int = 1
    limit: int = 10


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    :param total: Total rows available.
    :type total: int
    :param page: Current page (1-based).
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param total_pages: ``ceil(total / limit)``.
    :type total_pages: int
    """

    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, *, total: int, page: int, limit: int) -> PageMeta:
        return cls(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))


@dataclass(frozen=True, slots=True)
class PageOut(Generic[T]):
    """
    A page of output DTOs.

    :param items: DTOs on this page.
    :type items: Sequence[T]
    :param meta: Pagination metadata.
    :type meta: PageMeta
    """

    items: Sequence[T]
    meta: PageMeta

    def to_dict(self, item_to_dict: Callable[[T], dict[str, Any]]) -> dict[str, Any]:
        return {
            "items": [item_to_dict(i) for i in self.items],
            "meta": {
                "total": self.meta.total,
                "page": self.meta.page,
                "limit": self.meta.limit,
                "total_pages": self.meta.total_pages,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], item_from_dict: Callable[[dict[str, Any]], T]) -> PageOut[T]:
        return cls(
            items=[item_from_dict(i) for i in data["items"]],
            meta=PageMeta(**data["meta"]),
        )
