from dataclasses import dataclass
from typing import Any, Optional, Sequence

from veranstalter.core.config import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


@dataclass(frozen=True)
class Pageable:
    number: int
    size: int

    @property
    def skip(self) -> int:
        return self.number * self.size

    @property
    def take(self) -> int:
        return self.size


@dataclass(frozen=True)
class Slice:
    content: Sequence[Any]
    total_elements: int


def _parse(value: Optional[str | int]) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def create_pageable(number: Optional[str | int] = None, size: Optional[str | int] = None) -> Pageable:
    """Page numbers start at 0; invalid or out-of-range values fall back to the defaults."""
    number_int = _parse(number)
    if number_int is None or number_int < 0:
        number_int = DEFAULT_PAGE_NUMBER

    size_int = _parse(size)
    if size_int is None or size_int <= 0 or size_int > MAX_PAGE_SIZE:
        size_int = DEFAULT_PAGE_SIZE

    return Pageable(number=number_int, size=size_int)
