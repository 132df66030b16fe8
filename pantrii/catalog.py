from __future__ import annotations

from typing import Any


SAMPLE_RECIPES: list[dict[str, Any]] = [
    {
        "id": "r1",
        "title": "Chicken Fried Rice",
        "description": "Quick weeknight fried rice with leftover chicken.",
        "ingredients": [
            {"name": "chicken breast", "amount": "1 lb", "required": True},
            {"name": "rice", "amount": "2 cups", "required": True},
            {"name": "eggs", "amount": "2", "required": True},
            {"name": "soy sauce", "amount": "2 tbsp", "required": False},
            {"name": "green onion", "amount": "2 stalks", "required": False},
        ],
        "flavors": ["umami", "salty"],
        "prepTime": 10,
        "cookTime": 15,
        "servings": 4,
    },
    {
        "id": "r2",
        "title": "Tomato Pasta",
        "description": "Penne tossed in a fresh tomato and garlic sauce.",
        "ingredients": [
            {"name": "pasta", "amount": "1 box", "required": True},
            {"name": "tomato", "amount": "4", "required": True},
            {"name": "garlic", "amount": "3 cloves", "required": False},
            {"name": "basil", "amount": "1 handful", "required": False},
            {"name": "black pepper", "amount": "to taste", "required": False},
        ],
        "flavors": ["sour", "aromatic"],
        "prepTime": 10,
        "cookTime": 20,
        "servings": 4,
    },
    {
        "id": "r3",
        "title": "Apple Cinnamon Oatmeal",
        "ingredients": [
            {"name": "oats", "amount": "1 cup", "required": True},
            {"name": "milk", "amount": "2 cups", "required": True},
            {"name": "apple", "amount": "1", "required": False},
            {"name": "cinnamon", "amount": "1 tsp", "required": False},
        ],
        "flavors": ["sweet", "creamy"],
        "prepTime": 5,
        "cookTime": 10,
        "servings": 2,
    },
    {
        "id": "r4",
        "title": "Spicy Scrambled Eggs",
        "ingredients": [
            {"name": "eggs", "amount": "3", "required": True},
            {"name": "butter", "amount": "1 tbsp", "required": False},
            {"name": "chili flakes", "amount": "1 pinch", "required": False},
        ],
        "flavors": ["spicy", "creamy"],
        "prepTime": 2,
        "cookTime": 5,
        "servings": 1,
    },
    {
        "id": "r5",
        "title": "Caprese Salad",
        "ingredients": [
            {"name": "roma tomatoes", "amount": "3", "required": True},
            {"name": "mozzarella", "amount": "8 oz", "required": True},
            {"name": "basil", "amount": "1 handful", "required": True},
            {"name": "balsamic vinegar", "amount": "1 tbsp", "required": False},
        ],
        "flavors": ["tangy", "creamy"],
        "prepTime": 10,
        "cookTime": 0,
        "servings": 2,
    },
]
