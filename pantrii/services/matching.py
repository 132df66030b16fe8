from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from pantrii.config import (
    DISLIKED_FLAVOR_PENALTY,
    EXPIRING_ITEM_BOOST,
    EXPIRING_WINDOW_DAYS,
    LIKED_FLAVOR_POINTS,
)
from pantrii.models import (
    FlavorPreferenceSet,
    MatchedRecipe,
    PantryItem,
    PrioritizedRecipe,
    Recipe,
    ScoredRecipe,
    WeightedRecipe,
)
from pantrii.services.expiration import is_expiring


IngredientMatcher = Callable[[Sequence[str], str], bool]
RecipeInput = Union[Recipe, Mapping[str, Any]]
PantryInput = Union[PantryItem, Mapping[str, Any]]

ModelT = TypeVar("ModelT", bound=BaseModel)


def normalize_name(name: str | None) -> str:
    return (name or "").strip().lower()


def substring_matcher(pantry_names: Sequence[str], ingredient_name: str) -> bool:
    """Fuzzy match: either name contained in the other.

    ``pantry_names`` are expected already normalized (see ``pantry_names``).
    "chicken" matches "chicken breast" and "roma tomatoes" matches "tomato".
    """
    ingredient = normalize_name(ingredient_name)
    return any(pantry in ingredient or ingredient in pantry for pantry in pantry_names)


def _coerce(model: type[ModelT], raw: Any) -> ModelT | None:
    if isinstance(raw, model):
        return raw
    if not isinstance(raw, Mapping):
        return None
    try:
        return model.model_validate(raw)
    except ValidationError:
        return None


def coerce_pantry(items: Iterable[PantryInput]) -> list[PantryItem]:
    return [item for item in (_coerce(PantryItem, raw) for raw in items) if item is not None]


def pantry_names(items: Iterable[PantryItem]) -> list[str]:
    names = (normalize_name(item.name) for item in items)
    return list(dict.fromkeys(name for name in names if name))


def _extend(model: type[ModelT], base: BaseModel, **updates: Any) -> ModelT:
    data = dict(base)
    for key in updates:
        data.pop(key, None)
        data.pop(to_camel(key), None)
    data.update(updates)
    return model.model_validate(data)


def _percent(part: int, whole: int) -> int:
    # Half-up, matching how the mobile client rounds percentages.
    return int(math.floor(100 * part / whole + 0.5))


def _is_matchable(recipe: Recipe | None) -> bool:
    return recipe is not None and bool(recipe.ingredients) and bool(recipe.display_title)


def _match_recipe(recipe: Recipe, names: Sequence[str], matcher: IngredientMatcher) -> MatchedRecipe:
    available = []
    missing = []
    for ingredient in recipe.ingredients:
        if matcher(names, ingredient.name):
            available.append(ingredient)
        else:
            missing.append(ingredient)

    required_count = sum(1 for ingredient in recipe.ingredients if ingredient.required)
    available_required = sum(1 for ingredient in available if ingredient.required)
    can_make = available_required == required_count

    if required_count:
        required_match = _percent(available_required, required_count)
        if not can_make:
            required_match = min(required_match, 99)
    else:
        required_match = 100

    return _extend(
        MatchedRecipe,
        recipe,
        match_percentage=_percent(len(available), len(recipe.ingredients)),
        required_match_percentage=required_match,
        available_ingredients=available,
        missing_ingredients=missing,
        can_make=can_make,
    )


def calculate_matches(
    recipes: Iterable[RecipeInput],
    pantry_items: Iterable[PantryInput],
    matcher: IngredientMatcher = substring_matcher,
) -> list[MatchedRecipe]:
    """Score every usable recipe against the pantry.

    Recipes without ingredients, or without both a title and a name, are
    dropped silently; so are records whose ingredient names, flags, titles or
    flavors do not validate. Other fields are carried through untyped.
    Output is ordered makeable-first, then by descending match percentage,
    keeping input order on ties.
    """
    names = pantry_names(coerce_pantry(pantry_items))
    matched: list[MatchedRecipe] = []
    for raw in recipes:
        recipe = _coerce(Recipe, raw)
        if not _is_matchable(recipe):
            continue
        matched.append(_match_recipe(recipe, names, matcher))

    matched.sort(key=lambda r: (not r.can_make, -r.match_percentage))
    return matched


def expiring_names(
    pantry_items: Iterable[PantryInput],
    now: datetime | None = None,
    window: int = EXPIRING_WINDOW_DAYS,
) -> list[str]:
    # The prioritizer checks these with the same fuzzy matcher as pantry matching,
    # not exact name membership, so an expiring "chicken" counts for "chicken breast".
    current = now or datetime.now()
    items = [item for item in coerce_pantry(pantry_items) if is_expiring(item.expiry, current, window)]
    return pantry_names(items)


def prioritize_by_expiration(
    matched_recipes: Iterable[MatchedRecipe],
    pantry_items: Iterable[PantryInput],
    matcher: IngredientMatcher = substring_matcher,
    now: datetime | None = None,
    window: int = EXPIRING_WINDOW_DAYS,
) -> list[PrioritizedRecipe]:
    expiring = expiring_names(pantry_items, now, window)

    prioritized: list[PrioritizedRecipe] = []
    for recipe in matched_recipes:
        used = sum(1 for ingredient in recipe.available_ingredients if matcher(expiring, ingredient.name))
        prioritized.append(
            _extend(
                PrioritizedRecipe,
                recipe,
                uses_expiring_items=used > 0,
                expiring_items_used=used,
                priority_score=recipe.match_percentage + EXPIRING_ITEM_BOOST * used,
            )
        )

    prioritized.sort(key=lambda r: (not r.can_make, -r.priority_score))
    return prioritized


def _base_score(recipe: ScoredRecipe) -> int:
    priority = getattr(recipe, "priority_score", None)
    return priority if priority is not None else recipe.match_percentage


def weight_by_preferences(
    matched_recipes: Iterable[ScoredRecipe],
    preferences: FlavorPreferenceSet | Mapping[str, Any] | None,
) -> list[ScoredRecipe]:
    recipes = list(matched_recipes)
    prefs: Optional[FlavorPreferenceSet] = _coerce(FlavorPreferenceSet, preferences)
    if prefs is None or prefs.likes is None or prefs.dislikes is None:
        return recipes

    likes = set(prefs.likes)
    dislikes = set(prefs.dislikes)

    weighted: list[WeightedRecipe] = []
    for recipe in recipes:
        flavors = recipe.flavors or []
        liked = sum(1 for flavor in flavors if flavor in likes)
        disliked = sum(1 for flavor in flavors if flavor in dislikes)
        preference_score = LIKED_FLAVOR_POINTS * liked - DISLIKED_FLAVOR_PENALTY * disliked
        weighted.append(
            _extend(
                WeightedRecipe,
                recipe,
                preference_score=preference_score,
                final_score=_base_score(recipe) + preference_score,
            )
        )

    weighted.sort(key=lambda r: (not r.can_make, -r.final_score))
    return weighted
