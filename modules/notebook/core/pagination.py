"""
Pagination Utilities.

Page-based pagination for list endpoints. Pages are 1-based; the page
size defaults to the configured pagination limit.
"""

import math
from dataclasses import dataclass
from typing import Any

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel

from modules.notebook.core.config import get_app_config
from modules.notebook.core.config_schema import PaginationSchema
from modules.notebook.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata


def _pagination_config() -> PaginationSchema:
    return get_app_config().application.pagination


@dataclass
class PageParams:
    """Pagination parameters extracted from the query string."""

    page: int
    page_size: int

    @property
    def offset(self) -> int:
        """Number of items before the first item of this page."""
        return (self.page - 1) * self.page_size


def get_page_params(
    page: int = Query(
        default=1,
        ge=1,
        description="1-based page number",
    ),
    page_size: int | None = Query(
        default=None,
        ge=1,
        description="Number of items per page (default and maximum from application.yaml)",
    ),
) -> PageParams:
    """
    FastAPI dependency for pagination parameters.

    Usage:
        @router.get("/notes")
        async def list_notes(
            pagination: PageParams = Depends(get_page_params),
        ):
            ...
    """
    config = _pagination_config()
    if page_size is None:
        page_size = config.default_limit
    elif page_size > config.max_limit:
        raise RequestValidationError([
            {
                "loc": ("query", "page_size"),
                "msg": f"Input should be less than or equal to {config.max_limit}",
                "type": "less_than_equal",
                "input": page_size,
            }
        ])
    return PageParams(page=page, page_size=page_size)


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed to show total items."""
    if page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def create_paginated_response(
    items: list[Any],
    item_schema: type[BaseModel],
    total: int,
    page: int = 1,
    page_size: int | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Args:
        items: Items of the current page (model instances or dicts)
        item_schema: Pydantic schema to validate items
        total: Total count of items across all pages
        page: Current 1-based page
        page_size: Page size (configured default when omitted)
        request_id: Request ID for metadata

    Returns:
        Dict matching PaginatedResponse structure
    """
    page_size = page_size or _pagination_config().default_limit
    offset = (page - 1) * page_size
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json")
        for item in items
    ]

    pagination = PaginationInfo(
        total=total,
        limit=page_size,
        offset=offset,
        current_page=page,
        total_pages=total_pages(total, page_size),
        has_more=(offset + len(items)) < total,
    )

    response = PaginatedResponse(
        data=validated_items,
        pagination=pagination,
        metadata=ResponseMetadata(request_id=request_id),
    )
    return response.model_dump(mode="json")
