"""
Pagination and Filter Domain Service

Viewport-driven page sizing, case-insensitive search, AND-combined
dropdown filters, stable single-key sorting and ellipsis page windows.
One engine serves every list screen.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

ELLIPSIS = "..."

DEFAULT_ITEMS_PER_PAGE = 10
HEADER_HEIGHT = 200
HEADER_HEIGHT_EXTENDED = 300
ROW_HEIGHT = 60
PAGINATION_HEIGHT = 80
MIN_ITEMS_PER_PAGE = 5
MAX_VISIBLE_PAGES = 7

# Value of a dropdown filter that disables it
FILTER_ALL = "all"
DEFAULT_SORT = "default"

PageToken = int | str
FilterPredicate = Callable[[Any, Any], bool]


@dataclass
class PageResult(Generic[T]):
    """One rendered page of a filtered list."""

    items: list[T]
    current_page: int
    total_pages: int
    items_per_page: int
    total_items: int
    page_numbers: list[PageToken] = field(default_factory=list)

    @property
    def start_index(self) -> int:
        return (self.current_page - 1) * self.items_per_page

    @property
    def end_index(self) -> int:
        return min(self.start_index + self.items_per_page, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


class PaginationService:
    """Pure pagination helpers."""

    @staticmethod
    def items_per_page(
        viewport_height: int,
        header_height: int = HEADER_HEIGHT,
        row_height: int = ROW_HEIGHT,
        pagination_height: int = PAGINATION_HEIGHT,
        minimum: int = MIN_ITEMS_PER_PAGE,
    ) -> int:
        """
        Rows that fit in the viewport.

        Returns:
            max(minimum, floor((viewport - header - pagination) / row))
        """
        available = viewport_height - header_height - pagination_height
        return max(minimum, math.floor(available / row_height))

    @staticmethod
    def total_pages(total_items: int, items_per_page: int) -> int:
        if items_per_page <= 0:
            raise ValueError("items_per_page must be positive")
        return math.ceil(total_items / items_per_page)

    @staticmethod
    def clamp_page(page: int, total_pages: int) -> int:
        return min(max(1, page), max(1, total_pages))

    @staticmethod
    def matches_search(texts: Iterable[Any], search_term: str) -> bool:
        """Case-insensitive substring match over any of `texts`."""
        term = search_term.strip().lower()
        if not term:
            return True
        return any(term in str(text).lower() for text in texts if text is not None)

    @classmethod
    def filter_items(
        cls,
        items: Iterable[T],
        search_term: str = "",
        search_fields: Callable[[T], Iterable[Any]] | None = None,
        predicates: Iterable[Callable[[T], bool]] = (),
    ) -> list[T]:
        """
        Apply the search term and every predicate (AND).

        Args:
            items: Source items
            search_term: Free text, matched case-insensitively
            search_fields: Returns the searchable texts of an item
            predicates: Dropdown filters; all must pass
        """
        predicate_list = list(predicates)
        result = []
        for item in items:
            if search_term and search_fields is not None:
                if not cls.matches_search(search_fields(item), search_term):
                    continue
            if all(predicate(item) for predicate in predicate_list):
                result.append(item)
        return result

    @staticmethod
    def sort_items(items: Iterable[T], key: Callable[[T], Any], descending: bool = False) -> list[T]:
        """Stable sort on a single key."""
        return sorted(items, key=key, reverse=descending)

    @staticmethod
    def page_numbers(total_pages: int, current_page: int) -> list[PageToken]:
        """
        Page window with ellipsis markers.

        Examples:
            (5, 1)   -> [1, 2, 3, 4, 5]
            (20, 2)  -> [1, 2, 3, 4, 5, '...', 20]
            (20, 19) -> [1, '...', 16, 17, 18, 19, 20]
            (20, 10) -> [1, '...', 9, 10, 11, '...', 20]
        """
        if total_pages <= MAX_VISIBLE_PAGES:
            return list(range(1, total_pages + 1))
        if current_page <= 4:
            return [1, 2, 3, 4, 5, ELLIPSIS, total_pages]
        if current_page >= total_pages - 3:
            return [1, ELLIPSIS, *range(total_pages - 4, total_pages + 1)]
        return [1, ELLIPSIS, current_page - 1, current_page, current_page + 1, ELLIPSIS, total_pages]

    @classmethod
    def paginate(cls, items: Sequence[T], current_page: int, items_per_page: int) -> PageResult[T]:
        total_pages = cls.total_pages(len(items), items_per_page)
        page = cls.clamp_page(current_page, total_pages)
        start = (page - 1) * items_per_page
        return PageResult(
            items=list(items[start : start + items_per_page]),
            current_page=page,
            total_pages=total_pages,
            items_per_page=items_per_page,
            total_items=len(items),
            page_numbers=cls.page_numbers(total_pages, page),
        )


class PaginationState(Generic[T]):
    """
    Mutable list state of one screen.

    Holds the source items, search term, dropdown filter values, sort key
    and current page. Any search or filter change resets the page to 1.

    Example:
        state = PaginationState(search_fields=lambda m: (m.name,))
        state.set_items(medicines)
        state.set_search("para")
        rows = state.page().items
    """

    def __init__(
        self,
        search_fields: Callable[[T], Iterable[Any]] | None = None,
        filters: dict[str, FilterPredicate] | None = None,
        sort_key: Callable[[T], Any] | None = None,
        descending: bool = False,
        sort_name: str = DEFAULT_SORT,
        sort_keys: dict[str, Callable[[T], Any]] | None = None,
        header_height: int = HEADER_HEIGHT,
        row_height: int = ROW_HEIGHT,
        pagination_height: int = PAGINATION_HEIGHT,
        min_items_per_page: int = MIN_ITEMS_PER_PAGE,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
    ):
        self._search_fields = search_fields
        self._filter_predicates: dict[str, FilterPredicate] = dict(filters or {})
        self.filter_values: dict[str, Any] = {name: FILTER_ALL for name in self._filter_predicates}
        self._sort_keys: dict[str, Callable[[T], Any]] = dict(sort_keys or {})
        if sort_key is not None:
            self._sort_keys[sort_name] = sort_key
        self.sort_name: str | None = sort_name if sort_name in self._sort_keys else None
        self.descending = descending
        self.header_height = header_height
        self.row_height = row_height
        self.pagination_height = pagination_height
        self.min_items_per_page = min_items_per_page
        self.items_per_page = items_per_page
        self.search_term = ""
        self.current_page = 1
        self._items: list[T] = []

    @classmethod
    def from_settings(cls, extended_header: bool = False, **kwargs: Any) -> PaginationState[T]:
        """Build with viewport constants taken from settings."""
        from cura.config.settings import get_settings

        settings = get_settings()
        return cls(
            header_height=(
                settings.VIEWPORT_HEADER_HEIGHT_EXTENDED if extended_header else settings.VIEWPORT_HEADER_HEIGHT
            ),
            row_height=settings.VIEWPORT_ROW_HEIGHT,
            pagination_height=settings.VIEWPORT_PAGINATION_HEIGHT,
            min_items_per_page=settings.MIN_ITEMS_PER_PAGE,
            **kwargs,
        )

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def set_items(self, items: Iterable[T]) -> None:
        """Replace the source list (after a fetch); keeps the page within range."""
        self._items = list(items)
        self.current_page = PaginationService.clamp_page(self.current_page, self.total_pages)

    def set_search(self, term: str) -> None:
        self.search_term = term or ""
        self.current_page = 1

    def set_filter(self, name: str, value: Any) -> None:
        if name not in self._filter_predicates:
            raise KeyError(f"Unknown filter: {name}")
        self.filter_values[name] = value
        self.current_page = 1

    def clear_filters(self) -> None:
        self.search_term = ""
        self.filter_values = {name: FILTER_ALL for name in self._filter_predicates}
        self.current_page = 1

    def set_sort(
        self,
        name: str,
        key: Callable[[T], Any] | None = None,
        descending: bool | None = None,
    ) -> None:
        """
        Select a sort by name; selecting the current name again toggles direction.

        Args:
            name: Sort column name
            key: Key function, registered under `name` (optional once registered)
            descending: Explicit direction instead of toggling

        Raises:
            KeyError: `name` has no registered key function
        """
        if key is not None:
            self._sort_keys[name] = key
        if name not in self._sort_keys:
            raise KeyError(f"Unknown sort: {name}")
        if descending is None:
            descending = not self.descending if name == self.sort_name else False
        self.sort_name = name
        self.descending = descending

    def set_viewport(self, viewport_height: int) -> None:
        self.items_per_page = PaginationService.items_per_page(
            viewport_height,
            header_height=self.header_height,
            row_height=self.row_height,
            pagination_height=self.pagination_height,
            minimum=self.min_items_per_page,
        )
        self.current_page = PaginationService.clamp_page(self.current_page, self.total_pages)

    def _active_predicates(self) -> list[Callable[[T], bool]]:
        active = []
        for name, predicate in self._filter_predicates.items():
            value = self.filter_values.get(name)
            if value is None or value == FILTER_ALL:
                continue
            active.append(lambda item, p=predicate, v=value: p(item, v))
        return active

    @property
    def filtered(self) -> list[T]:
        result = PaginationService.filter_items(
            self._items,
            search_term=self.search_term,
            search_fields=self._search_fields,
            predicates=self._active_predicates(),
        )
        if self.sort_name is not None:
            result = PaginationService.sort_items(result, self._sort_keys[self.sort_name], self.descending)
        return result

    @property
    def total_pages(self) -> int:
        return PaginationService.total_pages(len(self.filtered), self.items_per_page)

    def go_to_page(self, page: int) -> int:
        self.current_page = PaginationService.clamp_page(page, self.total_pages)
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    def page(self) -> PageResult[T]:
        return PaginationService.paginate(self.filtered, self.current_page, self.items_per_page)
