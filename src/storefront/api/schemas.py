"""Response schemas shared by every area's API."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

from storefront.shared.paging import Page

T = TypeVar("T")


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
    message: str | None = None


class ErrorResponse(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"status_code": 404, "message": "Order abc not found", "error": "Not Found"}]}
    }

    status_code: int
    message: str
    error: str | None = None


class PageResponse(BaseModel, Generic[T]):
    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def of(cls, page: Page, convert) -> PageResponse:
        return cls(
            content=[convert(item) for item in page.items],
            page=page.page,
            size=page.size,
            total_elements=page.total,
            total_pages=page.total_pages,
        )
