from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pantrii.config import DEFAULT_FLAVOR_SUGGESTIONS


ExpiryStatusName = Literal["expired", "expiring", "warning", "good"]
ExpiryValue = Union[str, datetime, date, None]


class _Record(BaseModel):
    # Recipe sources and the mobile client send camelCase; snake_case is accepted as well.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PantryItem(_Record):
    model_config = ConfigDict(frozen=True, extra="allow")

    id: Union[str, int, None] = None
    name: str
    # Only name and expiry are read when matching; the rest is carried as given.
    quantity: Any = None
    expiry: Any = None
    category_id: Any = None
    notes: Any = None


class Ingredient(_Record):
    model_config = ConfigDict(frozen=True)

    name: str
    amount: Any = None
    required: bool = False


class Recipe(_Record):
    model_config = ConfigDict(frozen=True, extra="allow")

    id: Any = None
    title: Optional[str] = None
    name: Optional[str] = None
    description: Any = None
    ingredients: list[Ingredient] = Field(default_factory=list)
    flavors: Optional[list[str]] = None
    prep_time: Any = None
    cook_time: Any = None
    servings: Any = None
    image_url: Any = None

    @property
    def display_title(self) -> str:
        return self.title or self.name or ""


class MatchedRecipe(Recipe):
    match_percentage: int
    required_match_percentage: int
    available_ingredients: list[Ingredient]
    missing_ingredients: list[Ingredient]
    can_make: bool


class PrioritizedRecipe(MatchedRecipe):
    uses_expiring_items: bool
    expiring_items_used: int
    priority_score: int


class WeightedRecipe(MatchedRecipe):
    """Final stage record.

    The prioritizer fields stay ``None`` when preferences were applied directly
    to the match results without an expiration pass.
    """

    uses_expiring_items: Optional[bool] = None
    expiring_items_used: Optional[int] = None
    priority_score: Optional[int] = None
    preference_score: int
    final_score: int


ScoredRecipe = Union[WeightedRecipe, PrioritizedRecipe, MatchedRecipe]


class FlavorPreferenceSet(_Record):
    likes: Optional[list[str]] = None
    dislikes: Optional[list[str]] = None


class ExpiryStatus(BaseModel):
    status: ExpiryStatusName
    label: str
    critical: bool
    days_remaining: Optional[int] = None


class PantrySummary(BaseModel):
    total: int = 0
    expired: int = 0
    expiring: int = 0
    warning: int = 0
    good: int = 0


class FlavorCategory(BaseModel):
    id: str
    name: str
    description: str


class FlavorDetection(BaseModel):
    detected_flavors: list[str]
    flavor_confidence: dict[str, float] = Field(default_factory=dict)
    confidence: float = 0.0


class PantryItemCreateRequest(_Record):
    name: str = Field(..., min_length=1)
    quantity: Optional[str] = None
    expiry: Optional[str] = None
    category_id: Optional[str] = None
    notes: Optional[str] = None


class PantryItemView(PantryItem):
    expiry_status: ExpiryStatus


class MatchRequest(_Record):
    recipes: list[dict[str, Any]] = Field(default_factory=list)
    pantry_items: list[dict[str, Any]] = Field(default_factory=list)
    preferences: Optional[FlavorPreferenceSet] = None
    limit: Optional[int] = Field(default=None, ge=1)


class RecipeCatalogPayload(BaseModel):
    recipes: list[dict[str, Any]]


class FlavorDetectRequest(_Record):
    ingredients: list[str]
    max_suggestions: int = Field(default=DEFAULT_FLAVOR_SUGGESTIONS, ge=1)
