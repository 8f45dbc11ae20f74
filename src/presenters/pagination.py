"""Pagination capability for collection presenters.

A sequence is paginatable only if it is a PaginatedSequence (subclass or
registered virtual subclass). Having attributes named like page metadata
is not enough.
"""

import logging
import math
import os
from abc import abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any, Optional

from .schemas import PageInfo

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = int(os.environ.get("PRESENTER_PER_PAGE", "25"))


class PaginatedSequence(Sequence):
    """A sequence holding one page of a larger result set."""

    @property
    @abstractmethod
    def page(self) -> int:
        """Current page, 1-based."""

    @property
    @abstractmethod
    def per_page(self) -> int: ...

    @property
    @abstractmethod
    def total(self) -> int:
        """Number of items across all pages."""

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def previous_page(self) -> Optional[int]:
        return self.page - 1 if self.has_previous else None

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next else None

    def page_range(self) -> range:
        return range(1, self.total_pages + 1)

    def page_info(self) -> PageInfo:
        return PageInfo(
            page=self.page,
            per_page=self.per_page,
            total=self.total,
            total_pages=self.total_pages,
        )


class Page(PaginatedSequence):
    """Concrete page of items produced by paginate()."""

    def __init__(self, items: Iterable[Any], page: int, per_page: int, total: int):
        self._items = list(items)
        self._page = page
        self._per_page = per_page
        self._total = total

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"<Page {self._page}/{self.total_pages} ({len(self._items)} of {self._total})>"

    @property
    def page(self) -> int:
        return self._page

    @property
    def per_page(self) -> int:
        return self._per_page

    @property
    def total(self) -> int:
        return self._total


def paginate(items: Iterable[Any], page: int = 1, per_page: Optional[int] = None) -> Page:
    """Slice items into a Page.

    Args:
        items: Full ordered result set
        page: Requested page, clamped to [1, total_pages]
        per_page: Page size (default: PRESENTER_PER_PAGE)

    Raises:
        ValueError: If per_page is not positive
    """
    if per_page is None:
        per_page = DEFAULT_PER_PAGE
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    items = list(items)
    total = len(items)
    total_pages = max(1, math.ceil(total / per_page))
    if not 1 <= page <= total_pages:
        logger.debug(f"Clamping page {page} to [1, {total_pages}]")
    page = min(max(page, 1), total_pages)

    start = (page - 1) * per_page
    return Page(items[start:start + per_page], page, per_page, total)
