"""
Pagination utilities
"""
from typing import Tuple, List, Any, Sequence
from herohub.core.config import settings


def paginate(
    items: Sequence[Any],
    page: int = 1,
    per_page: int = None
) -> Tuple[List[Any], int]:
    """
    Slice an already ordered sequence into one page
    
    Args:
        items: Ordered items
        page: Page number (1-indexed)
        per_page: Items per page (defaults to DEFAULT_PAGE_SIZE)
        
    Returns:
        Tuple of (page_items, total_count)
    """
    page, per_page = get_pagination_params(page, per_page)
    
    total = len(items)
    offset = (page - 1) * per_page
    
    return list(items[offset:offset + per_page]), total


def get_pagination_params(
    page: int = 1,
    per_page: int = None
) -> Tuple[int, int]:
    """
    Validate and return pagination parameters
    
    Args:
        page: Page number
        per_page: Items per page
        
    Returns:
        Tuple of (validated_page, validated_per_page)
    """
    if per_page is None:
        per_page = settings.DEFAULT_PAGE_SIZE
    
    # Validate and limit
    page = max(1, page)
    per_page = min(max(1, per_page), settings.MAX_PAGE_SIZE)
    
    return page, per_page
