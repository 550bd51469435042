"""
Response envelopes
Every route answers {"ok": ..., "data"/"error": ...}; list routes add "meta"
"""
from typing import Any, Optional, Dict, Sequence
from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from herohub.schemas.common import PaginationMeta
from herohub.utils.pagination import paginate, get_pagination_params


def success_response(data: Any = None, message: Optional[str] = None) -> Dict:
    envelope = {"ok": True}
    if message:
        envelope["message"] = message
    if data is not None:
        envelope["data"] = data
    return envelope


def error_response(
    error: str,
    detail: Optional[str] = None,
    status_code: int = status.HTTP_400_BAD_REQUEST
) -> JSONResponse:
    """Error envelope as a JSONResponse so exception handlers can return it directly"""
    envelope = {"ok": False, "error": error}
    if detail:
        envelope["detail"] = detail
    return JSONResponse(content=envelope, status_code=status_code)


def page_response(
    items: Sequence[BaseModel],
    page: int = 1,
    per_page: Optional[int] = None
) -> Dict:
    """
    Serialize one page of an ordered feed

    Feeds (activity, hero comments, hero images) are ordered newest first
    by the services, so this only slices and dumps.
    """
    page, per_page = get_pagination_params(page, per_page)
    rows, total = paginate(items, page, per_page)
    total_pages = -(-total // per_page)

    meta = PaginationMeta(
        current_page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1
    )
    return {
        "ok": True,
        "data": [row.model_dump(mode="json") for row in rows],
        "meta": meta.model_dump()
    }
