# This project was developed with assistance from AI tools.
"""Shared schema components."""

import math

from pydantic import BaseModel


class Pagination(BaseModel):
    """Page-based pagination metadata for list responses."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))
