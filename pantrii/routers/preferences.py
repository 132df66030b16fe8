from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from pantrii.models import FlavorPreferenceSet
from pantrii.services.flavors import FLAVOR_IDS

router = APIRouter(prefix="/api/v1/preferences", tags=["preferences"])


@router.get("")
async def get_preferences(request: Request) -> dict:
    store = request.app.state.store
    return {"data": store.get_preferences().model_dump()}


@router.put("")
async def save_preferences(payload: FlavorPreferenceSet, request: Request) -> dict:
    likes = payload.likes or []
    dislikes = payload.dislikes or []
    unknown = sorted({flavor for flavor in likes + dislikes if flavor not in FLAVOR_IDS})
    if unknown:
        raise HTTPException(status_code=400, detail=f"unknown flavor ids: {', '.join(unknown)}")

    store = request.app.state.store
    saved = store.set_preferences(likes, dislikes)
    return {"data": saved.model_dump()}
