import math

from pydantic import BaseModel


class Pagination(BaseModel):
    """Page metadata; ``current`` echoes the requested page unclamped."""

    current: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, limit=limit, total=total, pages=math.ceil(total / limit))
