from __future__ import annotations

from collections.abc import Sequence

from pantrii.config import (
    DEFAULT_FLAVOR_SUGGESTIONS,
    FLAVOR_CONFIDENCE_THRESHOLD,
    FLAVOR_PARTIAL_MATCH_WEIGHT,
)
from pantrii.models import FlavorCategory, FlavorDetection


FLAVOR_CATEGORIES: list[FlavorCategory] = [
    FlavorCategory(id="sweet", name="Sweet", description="Sugar, honey, fruits"),
    FlavorCategory(id="salty", name="Salty", description="Sea salt, soy sauce"),
    FlavorCategory(id="sour", name="Sour", description="Citrus, vinegar, yogurt"),
    FlavorCategory(id="bitter", name="Bitter", description="Coffee, dark chocolate, leafy greens"),
    FlavorCategory(id="umami", name="Umami", description="Mushrooms, aged cheese, soy"),
    FlavorCategory(id="spicy", name="Spicy", description="Chili peppers, ginger, horseradish"),
    FlavorCategory(id="aromatic", name="Aromatic", description="Herbs, spices, vanilla"),
    FlavorCategory(id="creamy", name="Creamy", description="Milk, coconut, avocado"),
    FlavorCategory(id="smoky", name="Smoky", description="Smoked paprika, grilled foods"),
    FlavorCategory(id="tangy", name="Tangy", description="Pickled foods, fermented foods"),
]

FLAVOR_IDS = frozenset(category.id for category in FLAVOR_CATEGORIES)

INGREDIENT_FLAVORS: dict[str, list[str]] = {
    # sweet
    "sugar": ["sweet"],
    "honey": ["sweet", "aromatic"],
    "maple syrup": ["sweet"],
    "banana": ["sweet"],
    "apple": ["sweet", "sour"],
    "orange": ["sweet", "sour", "tangy"],
    "chocolate": ["sweet", "bitter"],
    "cinnamon": ["sweet", "aromatic"],
    "vanilla": ["sweet", "aromatic"],
    # salty
    "salt": ["salty"],
    "soy sauce": ["umami", "salty"],
    "fish sauce": ["salty", "umami"],
    "olives": ["salty", "bitter"],
    "bacon": ["smoky", "salty", "umami"],
    "cheese": ["salty", "umami", "creamy"],
    "parmesan": ["salty", "umami"],
    # sour
    "lemon": ["sour", "tangy"],
    "lime": ["sour", "tangy"],
    "vinegar": ["sour", "tangy"],
    "yogurt": ["sour", "creamy"],
    "buttermilk": ["sour", "creamy"],
    "sour cream": ["sour", "creamy"],
    "tomato": ["umami", "sour"],
    # bitter
    "coffee": ["bitter", "aromatic"],
    "dark chocolate": ["bitter", "sweet"],
    "cocoa": ["bitter"],
    "kale": ["bitter"],
    "arugula": ["bitter"],
    "grapefruit": ["bitter", "sour"],
    # umami
    "mushroom": ["umami"],
    "miso": ["umami", "salty"],
    "beef": ["umami"],
    "pork": ["umami"],
    "chicken": ["umami"],
    "fish": ["umami"],
    "seaweed": ["umami"],
    # spicy
    "chili": ["spicy"],
    "pepper": ["spicy"],
    "hot sauce": ["spicy", "tangy"],
    "jalapeno": ["spicy"],
    "cayenne": ["spicy"],
    "wasabi": ["spicy"],
    "horseradish": ["spicy"],
    "ginger": ["spicy", "aromatic"],
    # aromatic
    "basil": ["aromatic"],
    "rosemary": ["aromatic"],
    "thyme": ["aromatic"],
    "mint": ["aromatic", "cooling"],
    "garlic": ["aromatic", "pungent"],
    "onion": ["aromatic", "pungent"],
    "truffle": ["aromatic", "umami"],
    # creamy
    "milk": ["creamy"],
    "cream": ["creamy"],
    "coconut milk": ["creamy", "sweet"],
    "butter": ["creamy", "rich"],
    "avocado": ["creamy"],
    "cream cheese": ["creamy", "tangy"],
    # smoky
    "smoked paprika": ["smoky"],
    "smoked salt": ["smoky", "salty"],
    "smoked cheese": ["smoky", "umami", "creamy"],
    "chipotle": ["smoky", "spicy"],
    # tangy
    "pickles": ["tangy", "sour"],
    "sauerkraut": ["tangy", "sour"],
    "kimchi": ["tangy", "spicy", "umami"],
    "mustard": ["tangy", "pungent"],
    "tamarind": ["tangy", "sour", "sweet"],
    "balsamic vinegar": ["tangy", "sweet"],
}


def detect_flavors_from_ingredients(ingredients: Sequence[str]) -> FlavorDetection:
    """Guess the flavor profile of a dish from its ingredient names.

    An exact table hit counts 1 per flavor; otherwise every table entry that
    overlaps the ingredient as a substring counts a partial weight. Flavors
    whose share of the ingredient list reaches the confidence threshold are
    reported, strongest first.
    """
    counts: dict[str, float] = {}
    total = 0.0

    for ingredient in ingredients:
        key = ingredient.strip().lower()
        if not key:
            continue

        exact = INGREDIENT_FLAVORS.get(key)
        if exact:
            for flavor in exact:
                counts[flavor] = counts.get(flavor, 0.0) + 1
                total += 1
            continue

        for mapped, flavors in INGREDIENT_FLAVORS.items():
            if mapped in key or key in mapped:
                for flavor in flavors:
                    counts[flavor] = counts.get(flavor, 0.0) + FLAVOR_PARTIAL_MATCH_WEIGHT
                    total += FLAVOR_PARTIAL_MATCH_WEIGHT

    if total == 0:
        return FlavorDetection(detected_flavors=[], confidence=0.0)

    denominator = len(ingredients) or 1
    confidence = {flavor: count / denominator for flavor, count in counts.items()}
    ranked = sorted(confidence, key=lambda flavor: confidence[flavor], reverse=True)
    detected = [flavor for flavor in ranked if confidence[flavor] >= FLAVOR_CONFIDENCE_THRESHOLD]
    average = sum(confidence[flavor] for flavor in detected) / (len(detected) or 1)

    return FlavorDetection(
        detected_flavors=detected,
        flavor_confidence=confidence,
        confidence=average,
    )


def suggest_flavor_tags(ingredients: Sequence[str], max_suggestions: int = DEFAULT_FLAVOR_SUGGESTIONS) -> list[str]:
    return detect_flavors_from_ingredients(ingredients).detected_flavors[:max_suggestions]
