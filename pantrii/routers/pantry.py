from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from pantrii.models import PantryItemCreateRequest, PantryItemView
from pantrii.services.expiration import (
    get_default_expiry_date,
    get_expiry_status,
    parse_expiry,
    summarize_pantry,
)
from pantrii.storage import PantryFullError

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


def _view(item) -> dict:
    return PantryItemView(**dict(item), expiry_status=get_expiry_status(item.expiry)).model_dump()


@router.get("/items")
async def list_items(
    request: Request,
    status: str = Query(default="all"),
) -> dict:
    store = request.app.state.store
    rows = [_view(item) for item in store.list_pantry_items()]
    if status != "all":
        rows = [row for row in rows if row["expiry_status"]["status"] == status]
    return {"data": {"items": rows, "count": len(rows)}}


@router.post("/items")
async def create_item(
    payload: PantryItemCreateRequest,
    request: Request,
) -> dict:
    expiry = (payload.expiry or "").strip() or get_default_expiry_date()
    if parse_expiry(expiry) is None:
        raise HTTPException(status_code=400, detail="expiry must be an ISO date (YYYY-MM-DD).")

    store = request.app.state.store
    try:
        item = store.add_pantry_item(
            name=payload.name,
            expiry=expiry,
            quantity=payload.quantity,
            category_id=payload.category_id,
            notes=payload.notes,
        )
    except PantryFullError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"data": {"item": _view(item)}}


@router.delete("/items/{item_id}")
async def delete_item(item_id: str, request: Request) -> dict:
    store = request.app.state.store
    if not store.remove_pantry_item(item_id):
        raise HTTPException(status_code=404, detail="pantry item not found.")
    return {"data": {"removed": True, "id": item_id}}


@router.get("/summary")
async def summary(request: Request) -> dict:
    store = request.app.state.store
    return {"data": {"summary": summarize_pantry(store.list_pantry_items()).model_dump()}}
