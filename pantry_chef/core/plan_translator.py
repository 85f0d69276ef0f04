import re

from pantry_chef.core.pantry_parser import format_quantity
from pantry_chef.core.plan_assembler import pick_featured
from pantry_chef.core.schemas import (
    DAYS, SLOTS, DayListDay, DayListMeal, DayListPlan, DayPlan, FeaturedRecipe,
    GroceryItem, Meal, MealPlan, NutritionDaily, NutritionSummary, ShoppingCategory,
    UserPreferences,
)
from pantry_chef.core.shopping_list import format_rupees

# "toor dal (500g)" -> ("toor dal", "500", "g")
SHOPPING_ENTRY = re.compile(r'^(.*?)\s*\((\d+(?:\.\d+)?)\s*([a-zA-Z]*)\)$')
WEEK_SUFFIX = re.compile(r'\s*\(week \d+\)$')
# "15g" / "15 g" / "15" -> 15
GRAMS = re.compile(r'^\s*(\d+(?:\.\d+)?)')


def preferences_from_request(plan_request):
    """Maps the list-style API request onto the pantry form preferences."""
    return UserPreferences(
        pantry_text=", ".join(plan_request.ingredients),
        diet_type=", ".join(plan_request.dietary) or "no restrictions",
        calories=plan_request.calories,
    )


def _grams(text):
    match = GRAMS.match(text or '')
    return float(match.group(1)) if match else None


def _sum_present(values):
    present = [v for v in values if v is not None]
    return sum(present) if present else None


def _nutrition_for_day(label, meals):
    reported = [meal.nutrition for meal in meals if meal.nutrition is not None]
    if not reported:
        return None
    return NutritionDaily(
        day=label,
        calories=_sum_present(n.calories for n in reported),
        protein_g=_sum_present(_grams(n.protein) for n in reported),
        carbs_g=_sum_present(_grams(n.carbs) for n in reported),
        fat_g=_sum_present(_grams(n.fats) for n in reported),
    )


def _to_day_list_meal(meal):
    return DayListMeal(
        name=meal.name,
        recipe=f"Ready in {meal.time}",
        ingredients=meal.ingredients or [meal.name],
        instructions=meal.steps or [f"Prepare {meal.name}"],
        time=meal.time,
        spice=meal.spice,
    )


def _to_grocery_items(category):
    items = []
    for entry in category.items:
        match = SHOPPING_ENTRY.match(entry)
        if match:
            items.append(GroceryItem(
                item=match.group(1),
                quantity=float(match.group(2)),
                unit=match.group(3) or None,
                aisle=category.category,
            ))
        else:
            items.append(GroceryItem(item=entry, aisle=category.category))
    return items


def to_day_list(plan, days=7, meals_per_day=3):
    """
    Canonical plan -> list-of-days shape. More than 7 days repeats the week,
    labelled "Monday (week 2)" and so on; at most three meals a day exist.
    Daily nutrition is summed from the meals that report it and left out
    entirely when none do.
    """
    slots = SLOTS[:min(meals_per_day, len(SLOTS))]

    day_list = []
    daily = []
    for i in range(days):
        day = DAYS[i % len(DAYS)]
        label = day if i < len(DAYS) else f"{day} (week {i // len(DAYS) + 1})"
        meals = [getattr(plan.weekly_plan[day], slot) for slot in slots]
        day_list.append(DayListDay(day=label, meals=[_to_day_list_meal(meal) for meal in meals]))

        nutrition = _nutrition_for_day(label, meals)
        if nutrition is not None:
            daily.append(nutrition)

    grocery_list = [item for category in plan.shopping_list for item in _to_grocery_items(category)]
    return DayListPlan(
        days=day_list,
        grocery_list=grocery_list,
        nutrition_summary=NutritionSummary(daily=daily) if daily else None,
    )


def _from_day_list_meal(meal):
    return Meal(
        name=meal.name,
        time=meal.time or meal.recipe,
        spice=meal.spice or 1,
        ingredients=list(meal.ingredients),
        steps=list(meal.instructions),
    )


def _shopping_from_grocery(grocery_list):
    categories = {}
    for item in grocery_list:
        label = item.item
        if item.quantity is not None:
            label = f"{item.item} ({format_quantity(item.quantity)}{item.unit or ''})"
        categories.setdefault(item.aisle or "Other", []).append(label)

    # Prices aren't part of the list shape
    return [ShoppingCategory(category=c, items=items, cost=format_rupees(0)) for c, items in categories.items()]


def from_day_list(day_list, family_size=4, pantry_utilization=0, ai_powered=False):
    """
    List-of-days shape -> canonical plan. Each calendar day must appear;
    extra weeks are ignored. Meals fill breakfast, lunch, dinner in order and
    a day with fewer than three meals repeats its last one.
    """
    by_day = {}
    for entry in day_list.days:
        by_day.setdefault(WEEK_SUFFIX.sub('', entry.day), entry)

    missing = [d for d in DAYS if d not in by_day]
    if missing:
        raise ValueError(f"Day list is missing: {', '.join(missing)}")

    weekly_plan = {}
    for day in DAYS:
        meals = by_day[day].meals
        weekly_plan[day] = DayPlan(**{
            slot: _from_day_list_meal(meals[min(i, len(meals) - 1)])
            for i, slot in enumerate(SLOTS)
        })

    all_meals = [meal for day in DAYS for meal in weekly_plan[day].meals()]
    featured = pick_featured(all_meals)

    return MealPlan(
        weekly_plan=weekly_plan,
        featured_recipe=FeaturedRecipe(**featured.model_dump(), servings=family_size),
        shopping_list=_shopping_from_grocery(day_list.grocery_list),
        total_cost=format_rupees(0),
        pantry_utilization=pantry_utilization,
        ai_powered=ai_powered,
    )
