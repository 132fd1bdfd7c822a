"""Pagination limits for the filtered-rows surface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationConfig:
    default_page_size: int = 25
    max_page_size: int = 100

    def __post_init__(self) -> None:
        if self.default_page_size < 1 or self.max_page_size < 1:
            raise ValueError("Page sizes must be positive")
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
