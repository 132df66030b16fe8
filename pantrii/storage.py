from __future__ import annotations

import threading
from typing import Any, Optional
from uuid import uuid4

from pantrii.config import MAX_PANTRY_ITEMS
from pantrii.models import FlavorPreferenceSet, PantryItem


class PantryFullError(ValueError):
    pass


class InMemoryStore:
    """Pantry, recipe catalog and flavor preferences for a single user."""

    def __init__(
        self,
        recipes: Optional[list[dict[str, Any]]] = None,
        max_pantry_items: int = MAX_PANTRY_ITEMS,
    ) -> None:
        self.lock = threading.Lock()
        self.max_pantry_items = max_pantry_items
        self._pantry: dict[str, PantryItem] = {}
        self._recipes: list[dict[str, Any]] = [dict(r) for r in recipes or []]
        self._preferences = FlavorPreferenceSet(likes=[], dislikes=[])

    def add_pantry_item(
        self,
        name: str,
        expiry: Optional[str],
        quantity: Optional[str] = None,
        category_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> PantryItem:
        with self.lock:
            if len(self._pantry) >= self.max_pantry_items:
                raise PantryFullError(f"pantry holds at most {self.max_pantry_items} items.")
            item = PantryItem(
                id=str(uuid4()),
                name=name.strip(),
                quantity=quantity,
                expiry=expiry,
                category_id=category_id,
                notes=notes,
            )
            self._pantry[item.id] = item
            return item

    def list_pantry_items(self) -> list[PantryItem]:
        with self.lock:
            return list(self._pantry.values())

    def get_pantry_item(self, item_id: str) -> Optional[PantryItem]:
        with self.lock:
            return self._pantry.get(item_id)

    def remove_pantry_item(self, item_id: str) -> bool:
        with self.lock:
            return self._pantry.pop(item_id, None) is not None

    def list_recipes(self) -> list[dict[str, Any]]:
        with self.lock:
            return list(self._recipes)

    def replace_recipes(self, recipes: list[dict[str, Any]]) -> int:
        with self.lock:
            self._recipes = [dict(r) for r in recipes]
            return len(self._recipes)

    def get_preferences(self) -> FlavorPreferenceSet:
        with self.lock:
            return self._preferences

    def set_preferences(self, likes: list[str], dislikes: list[str]) -> FlavorPreferenceSet:
        # A flavor id lives in at most one set; likes win a conflict.
        liked = list(dict.fromkeys(likes))
        disliked = [flavor for flavor in dict.fromkeys(dislikes) if flavor not in liked]
        with self.lock:
            self._preferences = FlavorPreferenceSet(likes=liked, dislikes=disliked)
            return self._preferences
