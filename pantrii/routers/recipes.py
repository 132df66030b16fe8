from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, Request

from pantrii.models import MatchRequest, RecipeCatalogPayload
from pantrii.services.suggestions import suggest_recipes

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


def _ranked(rows: list) -> dict:
    items = [row.model_dump() for row in rows]
    return {"data": {"items": items, "count": len(items)}}


@router.get("")
async def list_recipes(request: Request) -> dict:
    store = request.app.state.store
    rows = store.list_recipes()
    return {"data": {"items": rows, "count": len(rows)}}


@router.put("")
async def replace_recipes(payload: RecipeCatalogPayload, request: Request) -> dict:
    store = request.app.state.store
    count = store.replace_recipes(payload.recipes)
    return {"data": {"count": count}}


@router.get("/suggestions")
async def suggestions(
    request: Request,
    limit: Optional[int] = Query(default=None, ge=1),
) -> dict:
    store = request.app.state.store
    ranked = suggest_recipes(
        store.list_recipes(),
        store.list_pantry_items(),
        store.get_preferences(),
        limit=limit,
    )
    return _ranked(ranked)


@router.post("/match")
async def match(payload: MatchRequest) -> dict:
    ranked = suggest_recipes(
        payload.recipes,
        payload.pantry_items,
        payload.preferences,
        limit=payload.limit,
    )
    return _ranked(ranked)
