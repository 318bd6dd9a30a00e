import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

from veranstalter.services.pageable import Pageable, Slice

T = TypeVar("T")


class PageMeta(BaseModel):
    size: int
    number: int
    total_elements: int = Field(serialization_alias="totalElements")
    total_pages: int = Field(serialization_alias="totalPages")


class PageOut(BaseModel, Generic[T]):
    content: List[T]
    page: PageMeta


class CountOut(BaseModel):
    count: int


def create_page(slice_: Slice, pageable: Pageable) -> dict:
    total_pages = math.ceil(slice_.total_elements / pageable.size) if pageable.size else 0
    return {
        "content": list(slice_.content),
        "page": {
            "size": pageable.size,
            "number": pageable.number,
            "total_elements": slice_.total_elements,
            "total_pages": total_pages,
        },
    }
