from pantry_chef.core.meal_selector import MealSelector
from pantry_chef.core.pantry_parser import parse_pantry_list
from pantry_chef.core.recipe_catalog import DEFAULT_CATALOG
from pantry_chef.core.schemas import DAYS, SLOTS, DayPlan, FeaturedRecipe, MealPlan
from pantry_chef.core.shopping_list import derive_shopping_list, total_cost


def pick_featured(meals):
    # Strictly longer wins, so ties keep the earliest meal
    best = meals[0]
    for meal in meals[1:]:
        if len(meal.steps) > len(best.steps):
            best = meal
    return best


def pantry_utilization(used_ingredients, pantry_items):
    """
    Percentage of the stated pantry referenced by chosen recipes.
    Not clamped: a short pantry list whose items cover several recipe
    ingredients ("basmati rice" for "rice") can score above 100.
    """
    return round(len(used_ingredients) / max(len(pantry_items), 1) * 100)


class PlanAssembler:
    """Rule-based weekly plan from the pantry text alone. Performs no I/O."""

    def __init__(self, catalog=DEFAULT_CATALOG):
        self.catalog = catalog
        self.selector = MealSelector(catalog)

    def assemble(self, preferences):
        pantry_items = parse_pantry_list(preferences.pantry_text)
        used_ingredients = set()

        weekly_plan = {}
        for day in DAYS:
            slots = {
                slot: self.selector.select_meal(pantry_items, slot, preferences, used_ingredients)
                for slot in SLOTS
            }
            weekly_plan[day] = DayPlan(**slots)

        all_meals = [meal for day in DAYS for meal in weekly_plan[day].meals()]
        featured = pick_featured(all_meals)

        shopping_list = derive_shopping_list(
            pantry_items, used_ingredients, preferences, essentials=self.catalog.essentials
        )

        return MealPlan(
            weekly_plan=weekly_plan,
            featured_recipe=FeaturedRecipe(**featured.model_dump(), servings=preferences.family_size),
            shopping_list=shopping_list,
            total_cost=total_cost(shopping_list),
            pantry_utilization=pantry_utilization(used_ingredients, pantry_items),
            ai_powered=False,
        )
