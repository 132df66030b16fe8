from __future__ import annotations

from fastapi import APIRouter

from pantrii.models import FlavorDetectRequest
from pantrii.services.flavors import (
    FLAVOR_CATEGORIES,
    detect_flavors_from_ingredients,
)

router = APIRouter(prefix="/api/v1/flavors", tags=["flavors"])


@router.get("")
async def list_flavors() -> dict:
    items = [category.model_dump() for category in FLAVOR_CATEGORIES]
    return {"data": {"items": items, "count": len(items)}}


@router.post("/detect")
async def detect(payload: FlavorDetectRequest) -> dict:
    detection = detect_flavors_from_ingredients(payload.ingredients)
    return {
        "data": {
            "detection": detection.model_dump(),
            "suggested_tags": detection.detected_flavors[: payload.max_suggestions],
        }
    }
