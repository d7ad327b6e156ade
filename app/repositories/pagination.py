"""
==============================================================================
Pagination Module
==============================================================================

Zero-based page requests and the page slices returned by repositories.

Page Metadata:
-------------
    total_pages        ceil(total_elements / size)
    first              number == 0
    last               number + 1 >= total_pages
    number_of_elements len(content)
    empty              no content on this page

==============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, List, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """
    Zero-based page index and page size.

    Raises:
        ValueError: If page is negative or size is not positive
    """

    page: int
    size: int

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def to_dict(self) -> Dict[str, int]:
        return {
            "page_number": self.page,
            "page_size": self.size,
            "offset": self.offset
        }


@dataclass
class Page(Generic[T]):
    """One slice of a larger, ordered result set."""

    content: List[T]
    page_request: PageRequest
    total_elements: int

    @property
    def number(self) -> int:
        return self.page_request.page

    @property
    def size(self) -> int:
        return self.page_request.size

    @property
    def total_pages(self) -> int:
        return (self.total_elements + self.size - 1) // self.size

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def is_last(self) -> bool:
        return self.number + 1 >= self.total_pages

    @property
    def is_empty(self) -> bool:
        return not self.content

    def __iter__(self):
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)
