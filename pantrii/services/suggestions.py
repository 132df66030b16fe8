from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pantrii.logging_utils import log_stage
from pantrii.models import FlavorPreferenceSet, ScoredRecipe
from pantrii.services.matching import (
    IngredientMatcher,
    PantryInput,
    RecipeInput,
    calculate_matches,
    prioritize_by_expiration,
    substring_matcher,
    weight_by_preferences,
)


match_stage = log_stage("match")(calculate_matches)
expiration_stage = log_stage("expiration")(prioritize_by_expiration)
preference_stage = log_stage("preferences")(weight_by_preferences)


def suggest_recipes(
    recipes: Iterable[RecipeInput],
    pantry_items: Iterable[PantryInput],
    preferences: FlavorPreferenceSet | Mapping[str, Any] | None = None,
    *,
    matcher: IngredientMatcher = substring_matcher,
    now: datetime | None = None,
    limit: int | None = None,
) -> list[ScoredRecipe]:
    pantry = list(pantry_items)
    matched = match_stage(recipes, pantry, matcher)
    prioritized = expiration_stage(matched, pantry, matcher, now)
    ranked = preference_stage(prioritized, preferences)
    if limit is not None:
        return ranked[:limit]
    return ranked
