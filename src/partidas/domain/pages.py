"""Pagination primitives shared by every listing."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageRequest(BaseModel):
    """Zero-based page coordinates."""

    page: int = Field(0, ge=0)
    size: int = Field(10, ge=1)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    """One page of results and the total number of matching rows."""

    items: list[T]
    page: int
    size: int
    total: int
