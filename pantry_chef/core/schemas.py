from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
SLOTS = ["breakfast", "lunch", "dinner"]
TIME_CONSTRAINTS = ["15 mins", "30 mins", "45 mins", "1 hour", "1+ hours"]

Category = Literal['grain', 'vegetable', 'spice', 'dairy', 'protein', 'oil', 'other']


# Pydantic Schemas for the rule-based planner and structured output
class PantryItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    quantity: float = 1
    unit: str = "piece"
    category: Category = "other"


class UserPreferences(BaseModel):
    """What the pantry form submits. Accepts the camelCase keys the UI sends."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pantry_text: str = Field(alias="pantryText", min_length=1)
    cuisine: str = "North Indian"
    family_size: int = Field(default=4, alias="familySize", ge=1)
    spice_level: int = Field(default=3, alias="spiceLevel", ge=1, le=5)
    time_constraint: str = Field(default="30 mins", alias="timeConstraint")
    diet_type: str = Field(default="vegetarian", alias="dietType")
    calories: int | None = Field(default=None, gt=0)

    @field_validator('pantry_text')
    @classmethod
    def pantry_not_blank(cls, v):
        if not v.strip():
            raise ValueError("pantry text must not be blank")
        return v

    @field_validator('time_constraint')
    @classmethod
    def known_time_constraint(cls, v):
        if v not in TIME_CONSTRAINTS:
            raise ValueError(f"time constraint must be one of {', '.join(TIME_CONSTRAINTS)}")
        return v


class MealNutrition(BaseModel):
    """Per-meal figures as the AI service reports them, e.g. protein "15g"."""
    calories: float | None = None
    protein: str | None = None
    carbs: str | None = None
    fats: str | None = None


class Meal(BaseModel):
    name: str
    time: str
    spice: int = Field(ge=1, le=5)
    ingredients: list[str] = []
    steps: list[str] = []
    nutrition: MealNutrition | None = None
    tips: list[str] = []


class DayPlan(BaseModel):
    breakfast: Meal
    lunch: Meal
    dinner: Meal

    def meals(self):
        return [self.breakfast, self.lunch, self.dinner]


class FeaturedRecipe(Meal):
    servings: int = Field(ge=1)


class ShoppingCategory(BaseModel):
    category: str
    items: list[str]
    cost: str


class AIInsights(BaseModel):
    nutritional_balance: str
    variety_score: float
    suggestions: list[str] = []


class MealPlan(BaseModel):
    weekly_plan: dict[str, DayPlan]
    featured_recipe: FeaturedRecipe
    shopping_list: list[ShoppingCategory]
    total_cost: str
    pantry_utilization: int = Field(ge=0)
    ai_insights: AIInsights | None = None
    ai_powered: bool = False

    @model_validator(mode='after')
    def full_week_in_order(self):
        if list(self.weekly_plan.keys()) != DAYS:
            raise ValueError(f"weekly plan must contain exactly {', '.join(DAYS)} in order")
        return self

    def all_meals(self):
        """Every meal of the week, days then slots."""
        return [meal for day in DAYS for meal in self.weekly_plan[day].meals()]


# Remote-facing shapes (list of days with a nested meals list)
class PlanRequest(BaseModel):
    ingredients: list[str] = Field(min_length=1)
    dietary: list[str] = []
    calories: int | None = Field(default=None, gt=0)
    days: int = Field(ge=1, le=14)
    mealsPerDay: int = Field(ge=1, le=6)

    @field_validator('ingredients')
    @classmethod
    def ingredients_not_blank(cls, v):
        if any(not item.strip() for item in v):
            raise ValueError("ingredients must not be blank")
        return v


class DayListMeal(BaseModel):
    name: str
    recipe: str
    ingredients: list[str] = Field(min_length=1)
    instructions: list[str] = Field(min_length=1)
    time: str | None = None
    spice: int | None = Field(default=None, ge=1, le=5)


class DayListDay(BaseModel):
    day: str
    meals: list[DayListMeal] = Field(min_length=1)


class GroceryItem(BaseModel):
    item: str
    quantity: float | None = None
    unit: str | None = None
    alternatives: list[str] | None = None
    aisle: str | None = None


class NutritionDaily(BaseModel):
    day: str
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None


class NutritionSummary(BaseModel):
    daily: list[NutritionDaily] | None = None


class DayListPlan(BaseModel):
    days: list[DayListDay] = Field(min_length=1)
    grocery_list: list[GroceryItem]
    nutrition_summary: NutritionSummary | None = None
