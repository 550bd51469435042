"""
Common/Shared Pydantic schemas
"""
from pydantic import BaseModel, ConfigDict


class PaginationMeta(BaseModel):
    """Pagination metadata"""
    current_page: int
    per_page: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


# Config for all schemas
ORMConfig = ConfigDict(from_attributes=True)
