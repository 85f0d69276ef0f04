from pantry_chef.core.pantry_parser import has_ingredient, get_ingredient_quantity, format_quantity
from pantry_chef.core.recipe_catalog import DEFAULT_CATALOG
from pantry_chef.core.schemas import Meal

# Preferred recipe keywords per slot, checked in order before falling back to catalog order
SLOT_PREFERENCES = {
    "breakfast": ["Paratha", "Roti"],
    "lunch": ["Rice", "Dal"],
    "dinner": ["Sabzi", "Roti"],
}

BASIC_ROTI = Meal(
    name="Basic Roti",
    time="15 mins",
    spice=1,
    ingredients=["Wheat flour", "Salt", "Water"],
    steps=[
        "Mix wheat flour with salt and water to make dough",
        "Knead well and rest for 10 minutes",
        "Roll and cook on hot tawa",
        "Serve hot",
    ],
)

SIMPLE_MEAL = Meal(
    name="Simple Meal",
    time="10 mins",
    spice=1,
    ingredients=["Available pantry items"],
    steps=["Prepare with available ingredients"],
)


def pick_for_slot(recipes, slot):
    for keyword in SLOT_PREFERENCES[slot]:
        match = next((r for r in recipes if keyword in r.name), None)
        if match:
            return match
    return recipes[0]


def ingredient_label(pantry_items, ingredient):
    quantity = get_ingredient_quantity(pantry_items, ingredient)
    if quantity:
        return f"{ingredient} ({format_quantity(quantity['quantity'])}{quantity['unit']})"
    return ingredient


class MealSelector:
    """
    Picks one meal per (day, slot).

    Fallbacks are an ordered list of strategies, each returning a Meal or None:
    a catalog recipe the pantry fully covers, then Basic Roti when there is
    wheat flour, then a placeholder that always succeeds.
    """

    def __init__(self, catalog=DEFAULT_CATALOG):
        self.catalog = catalog
        self.strategies = [self.from_catalog, self.basic_roti, self.placeholder]

    def select_meal(self, pantry_items, slot, preferences, used_ingredients):
        if slot not in SLOT_PREFERENCES:
            raise ValueError(f"Unknown meal slot: {slot}")

        for strategy in self.strategies:
            meal = strategy(pantry_items, slot, preferences, used_ingredients)
            if meal is not None:
                return meal
        raise RuntimeError("No meal strategy produced a meal")

    def from_catalog(self, pantry_items, slot, preferences, used_ingredients):
        available = self.catalog.eligible_recipes(pantry_items)
        if not available:
            return None

        recipe = pick_for_slot(available, slot)

        # Mark ingredients as used
        used_ingredients.update(recipe.required_ingredients)

        return Meal(
            name=recipe.name,
            time=recipe.time,
            spice=min(recipe.spice, preferences.spice_level),
            ingredients=[ingredient_label(pantry_items, ing) for ing in recipe.required_ingredients],
            steps=list(recipe.steps),
        )

    def basic_roti(self, pantry_items, slot, preferences, used_ingredients):
        if has_ingredient(pantry_items, 'wheat flour'):
            return BASIC_ROTI.model_copy(deep=True)
        return None

    def placeholder(self, pantry_items, slot, preferences, used_ingredients):
        return SIMPLE_MEAL.model_copy(deep=True)
