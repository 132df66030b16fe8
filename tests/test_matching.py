import copy

import pytest

from conftest import NOW, TODAY, days_from
from pantrii.models import FlavorPreferenceSet, MatchedRecipe, PrioritizedRecipe, WeightedRecipe
from pantrii.services.matching import (
    calculate_matches,
    prioritize_by_expiration,
    substring_matcher,
    weight_by_preferences,
)
from pantrii.services.suggestions import suggest_recipes


def _ing(name: str, required: bool = False) -> dict:
    return {"name": name, "required": required}


def _recipe(rid: str, *ingredients: dict, **extra) -> dict:
    return {"id": rid, "title": f"Recipe {rid}", "ingredients": list(ingredients), **extra}


CHICKEN_RICE_BOWL = {
    "id": "bowl",
    "title": "Chicken Rice Bowl",
    "ingredients": [
        _ing("chicken breast", True),
        _ing("rice", True),
        _ing("garlic"),
    ],
}


@pytest.mark.parametrize(
    "pantry,ingredient,expected",
    [
        ("tomatoes", "tomato", True),
        ("tomato", "roma tomatoes", True),
        ("chicken", "Chicken Breast ", True),
        ("milk", "buttermilk", True),
        ("buttermilk", "milk", True),
        ("rice", "garlic", False),
        ("basil", "black pepper", False),
    ],
)
def test_substring_matcher_truth_table(pantry, ingredient, expected) -> None:
    assert substring_matcher([pantry], ingredient) is expected


def test_end_to_end_chicken_rice_bowl() -> None:
    pantry = [
        {"name": "chicken", "expiry": days_from(TODAY, 0)},
        {"name": "rice", "expiry": days_from(TODAY, 30)},
    ]
    matched = calculate_matches([CHICKEN_RICE_BOWL], pantry)
    assert len(matched) == 1
    bowl = matched[0]
    assert [i.name for i in bowl.available_ingredients] == ["chicken breast", "rice"]
    assert [i.name for i in bowl.missing_ingredients] == ["garlic"]
    assert bowl.required_match_percentage == 100
    assert bowl.can_make is True
    assert bowl.match_percentage == 67

    prioritized = prioritize_by_expiration(matched, pantry, now=NOW)
    assert prioritized[0].uses_expiring_items is True
    assert prioritized[0].expiring_items_used == 1
    assert prioritized[0].priority_score == 77
    assert prioritized[0].id == "bowl"


def test_malformed_recipes_are_dropped() -> None:
    recipes = [
        {"id": "no-ingredients", "title": "Air"},
        {"id": "empty", "title": "Nothing", "ingredients": []},
        {"id": "untitled", "ingredients": [_ing("rice")]},
        {"id": "bad-ingredient", "title": "Broken", "ingredients": [{"amount": "1 cup"}]},
        "not a recipe",
        None,
        {"id": "named", "name": "Plain Rice", "ingredients": [_ing("rice", True)]},
        _recipe("ok", _ing("rice")),
    ]
    ids = [r.id for r in calculate_matches(recipes, [{"name": "rice"}])]
    assert sorted(ids) == ["named", "ok"]


def test_numeric_pantry_fields_still_count_as_available() -> None:
    pantry = [{"id": 7, "name": "rice", "quantity": 2, "expiry": days_from(TODAY, 20)}]
    recipe = {"id": 1, "title": "Rice", "ingredients": [_ing("rice", True)]}
    matched = calculate_matches([recipe], pantry)
    assert [r.id for r in matched] == [1]
    assert matched[0].can_make is True


def test_numeric_pantry_fields_still_feed_the_prioritizer() -> None:
    pantry = [{"id": 7, "name": "chicken", "quantity": 1.5, "expiry": days_from(TODAY, 1)}, {"name": "rice"}]
    matched = calculate_matches([CHICKEN_RICE_BOWL], pantry)
    out = prioritize_by_expiration(matched, pantry, now=NOW)
    assert out[0].uses_expiring_items is True
    assert out[0].expiring_items_used == 1


def test_pantry_item_with_unreadable_expiry_still_matches_by_name() -> None:
    pantry = [{"name": "rice", "expiry": 5}, {"name": "chicken", "expiry": {"when": "soon"}}]
    matched = calculate_matches([CHICKEN_RICE_BOWL], pantry)
    assert matched[0].can_make is True
    out = prioritize_by_expiration(matched, pantry, now=NOW)
    assert out[0].uses_expiring_items is False


def test_recipes_with_untyped_extra_fields_are_kept() -> None:
    recipe = _recipe(
        "r",
        {"name": "rice", "amount": 2, "required": True},
        {"name": "salt", "amount": None},
        servings=2.5,
        prepTime="10 min",
        cookTime=None,
    )
    matched = calculate_matches([recipe], [{"name": "rice"}])
    assert [r.id for r in matched] == ["r"]
    dumped = matched[0].model_dump()
    assert dumped["servings"] == 2.5
    assert dumped["prep_time"] == "10 min"
    assert dumped["available_ingredients"][0]["amount"] == 2


def test_recipe_without_required_ingredients_can_be_made() -> None:
    matched = calculate_matches([_recipe("a", _ing("saffron"), _ing("truffle"))], [{"name": "rice"}])
    assert matched[0].required_match_percentage == 100
    assert matched[0].can_make is True
    assert matched[0].match_percentage == 0


def test_can_make_tracks_required_percentage() -> None:
    recipes = [
        _recipe("full", _ing("rice", True), _ing("beans", True)),
        _recipe("half", _ing("rice", True), _ing("saffron", True)),
    ]
    for recipe in calculate_matches(recipes, [{"name": "rice"}, {"name": "black beans"}]):
        assert recipe.can_make is (recipe.required_match_percentage == 100)


def test_required_percentage_never_rounds_up_to_complete() -> None:
    ingredients = [_ing(f"ing-{i:03d}-x", True) for i in range(200)]
    pantry = [{"name": f"ing-{i:03d}-x"} for i in range(199)]
    matched = calculate_matches([_recipe("big", *ingredients)], pantry)
    assert matched[0].required_match_percentage == 99
    assert matched[0].can_make is False


def test_percentages_round_half_up() -> None:
    ingredients = [_ing("rice")] + [_ing(f"spice {n}") for n in "abcdefg"]
    matched = calculate_matches([_recipe("r", *ingredients)], [{"name": "rice"}])
    assert matched[0].match_percentage == 13


def test_sort_puts_makeable_first_then_match_percentage() -> None:
    recipes = [
        _recipe("blocked-high", _ing("rice"), _ing("beans"), _ing("saffron", True)),
        _recipe("make-low", _ing("rice", True), _ing("x1"), _ing("x2"), _ing("x3")),
        _recipe("make-high", _ing("rice", True), _ing("beans")),
        _recipe("make-low-2", _ing("beans", True), _ing("y1"), _ing("y2"), _ing("y3")),
    ]
    out = calculate_matches(recipes, [{"name": "rice"}, {"name": "beans"}])
    assert [r.id for r in out] == ["make-high", "make-low", "make-low-2", "blocked-high"]
    for earlier, later in zip(out, out[1:]):
        assert (earlier.can_make and not later.can_make) or (
            earlier.can_make == later.can_make and earlier.match_percentage >= later.match_percentage
        )


def test_matching_is_idempotent_and_leaves_input_untouched() -> None:
    recipes = [CHICKEN_RICE_BOWL, _recipe("b", _ing("rice", True), _ing("eggs"))]
    pantry = [{"name": "rice"}, {"name": "Eggs"}]
    snapshot = copy.deepcopy(recipes)
    first = calculate_matches(recipes, pantry)
    second = calculate_matches(recipes, pantry)
    assert [r.model_dump() for r in first] == [r.model_dump() for r in second]
    assert recipes == snapshot


def test_extra_recipe_fields_are_carried_through() -> None:
    recipe = _recipe("c", _ing("rice", True), area="Thai", prepTime=15)
    matched = calculate_matches([recipe], [{"name": "rice"}])[0]
    dumped = matched.model_dump()
    assert dumped["area"] == "Thai"
    assert dumped["prep_time"] == 15


def test_blank_pantry_names_match_nothing() -> None:
    matched = calculate_matches([_recipe("r", _ing("rice"))], [{"name": "   "}])
    assert matched[0].match_percentage == 0


def test_custom_matcher_is_used() -> None:
    def exact(names, ingredient):
        return ingredient.strip().lower() in names

    matched = calculate_matches([CHICKEN_RICE_BOWL], [{"name": "chicken"}, {"name": "rice"}], matcher=exact)
    assert [i.name for i in matched[0].available_ingredients] == ["rice"]
    assert matched[0].can_make is False


def test_prioritizer_window_boundaries() -> None:
    recipes = [_recipe(str(offset), _ing(f"item{offset + 10}")) for offset in (-1, 0, 3, 4)]
    pantry = [{"name": f"item{offset + 10}", "expiry": days_from(TODAY, offset)} for offset in (-1, 0, 3, 4)]
    prioritized = prioritize_by_expiration(calculate_matches(recipes, pantry), pantry, now=NOW)
    used = {r.id: r.uses_expiring_items for r in prioritized}
    assert used == {"-1": False, "0": True, "3": True, "4": False}


def test_prioritizer_skips_missing_or_bad_expiry() -> None:
    recipes = [_recipe("r", _ing("milk"), _ing("bread"))]
    pantry = [{"name": "milk"}, {"name": "bread", "expiry": "next tuesday"}]
    prioritized = prioritize_by_expiration(calculate_matches(recipes, pantry), pantry, now=NOW)
    assert prioritized[0].uses_expiring_items is False
    assert prioritized[0].priority_score == prioritized[0].match_percentage


def test_prioritizer_reorders_by_priority_score() -> None:
    recipes = [
        _recipe("fresh", _ing("rice", True), _ing("beans"), _ing("corn"), _ing("onion"), _ing("salt")),
        _recipe("use-it-up", _ing("spinach", True), _ing("feta"), _ing("dill"), _ing("phyllo")),
    ]
    pantry = [
        {"name": "rice", "expiry": days_from(TODAY, 60)},
        {"name": "beans", "expiry": days_from(TODAY, 60)},
        {"name": "corn", "expiry": days_from(TODAY, 60)},
        {"name": "onion", "expiry": days_from(TODAY, 60)},
        {"name": "spinach", "expiry": days_from(TODAY, 1)},
        {"name": "feta", "expiry": days_from(TODAY, 2)},
        {"name": "dill", "expiry": days_from(TODAY, 60)},
    ]
    matched = calculate_matches(recipes, pantry)
    assert [r.id for r in matched] == ["fresh", "use-it-up"]
    prioritized = prioritize_by_expiration(matched, pantry, now=NOW)
    assert [r.id for r in prioritized] == ["use-it-up", "fresh"]
    assert prioritized[0].priority_score == 75 + 20
    assert isinstance(prioritized[0], PrioritizedRecipe)


def test_preferences_absent_pass_through() -> None:
    matched = calculate_matches([CHICKEN_RICE_BOWL], [{"name": "rice"}])
    assert weight_by_preferences(matched, None) == matched
    assert weight_by_preferences(matched, {"likes": ["umami"]}) == matched
    assert weight_by_preferences(matched, FlavorPreferenceSet(dislikes=["sweet"])) == matched


def test_preferences_weight_likes_and_dislikes() -> None:
    recipes = [
        _recipe("sweet", _ing("rice", True), flavors=["sweet", "creamy"]),
        _recipe("spicy", _ing("rice", True), flavors=["spicy", "umami"]),
        _recipe("plain", _ing("rice", True)),
    ]
    matched = calculate_matches(recipes, [{"name": "rice"}])
    prefs = FlavorPreferenceSet(likes=["umami", "spicy"], dislikes=["sweet"])
    weighted = weight_by_preferences(matched, prefs)
    scores = {r.id: (r.preference_score, r.final_score) for r in weighted}
    assert scores == {"spicy": (20, 120), "plain": (0, 100), "sweet": (-15, 85)}
    assert [r.id for r in weighted] == ["spicy", "plain", "sweet"]
    assert all(isinstance(r, WeightedRecipe) and r.priority_score is None for r in weighted)


def test_preferences_use_priority_score_when_present() -> None:
    pantry = [{"name": "chicken", "expiry": days_from(TODAY, 0)}, {"name": "rice", "expiry": days_from(TODAY, 30)}]
    recipe = dict(CHICKEN_RICE_BOWL, flavors=["umami"])
    prioritized = prioritize_by_expiration(calculate_matches([recipe], pantry), pantry, now=NOW)
    weighted = weight_by_preferences(prioritized, {"likes": ["umami"], "dislikes": []})
    assert weighted[0].final_score == 77 + 10
    assert weighted[0].expiring_items_used == 1


def test_preferences_keep_makeable_recipes_first() -> None:
    recipes = [
        _recipe("blocked", _ing("rice"), _ing("saffron", True), flavors=["umami", "spicy", "smoky"]),
        _recipe("makeable", _ing("rice", True), _ing("saffron"), flavors=["sweet"]),
    ]
    matched = calculate_matches(recipes, [{"name": "rice"}])
    weighted = weight_by_preferences(matched, {"likes": ["umami", "spicy", "smoky"], "dislikes": ["sweet"]})
    assert [r.id for r in weighted] == ["makeable", "blocked"]


def test_suggest_recipes_runs_every_stage() -> None:
    pantry = [{"name": "chicken", "expiry": days_from(TODAY, 0)}, {"name": "rice", "expiry": days_from(TODAY, 30)}]
    ranked = suggest_recipes([CHICKEN_RICE_BOWL], pantry, {"likes": [], "dislikes": []}, now=NOW)
    assert isinstance(ranked[0], WeightedRecipe)
    assert ranked[0].final_score == 77

    unweighted = suggest_recipes([CHICKEN_RICE_BOWL], pantry, now=NOW)
    assert isinstance(unweighted[0], PrioritizedRecipe)


def test_suggest_recipes_limit() -> None:
    recipes = [_recipe(str(n), _ing("rice")) for n in range(5)]
    assert len(suggest_recipes(recipes, [{"name": "rice"}], now=NOW, limit=2)) == 2


def test_stage_outputs_are_new_records() -> None:
    matched = calculate_matches([CHICKEN_RICE_BOWL], [{"name": "rice"}])
    prioritized = prioritize_by_expiration(matched, [], now=NOW)
    assert isinstance(matched[0], MatchedRecipe)
    assert prioritized[0] is not matched[0]
    assert not hasattr(matched[0], "priority_score")
