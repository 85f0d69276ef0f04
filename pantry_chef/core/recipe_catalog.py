from pydantic import BaseModel, ConfigDict, Field

from pantry_chef.core.pantry_parser import has_ingredient


class CatalogError(Exception):
    """Raised at startup when a catalog can't be used for planning."""


class RecipeTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    required_ingredients: tuple[str, ...]
    time: str
    spice: int = Field(ge=1, le=5)
    steps: tuple[str, ...]


class EssentialItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    cost: int
    quantity: str = "500g"


# Recipes based on common Indian pantry ingredients. Order matters:
# it breaks ties when a slot has no preferred recipe.
RECIPE_TEMPLATES = (
    RecipeTemplate(
        name="Fresh Roti",
        required_ingredients=('wheat flour', 'salt'),
        time="20 mins",
        spice=1,
        steps=(
            "Mix wheat flour with a pinch of salt",
            "Add water gradually to make soft dough",
            "Knead well and let rest for 15 minutes",
            "Roll into circles and cook on hot tawa",
            "Serve hot with any curry or dal",
        ),
    ),
    RecipeTemplate(
        name="Aloo Paratha",
        required_ingredients=('wheat flour', 'potato', 'green chili', 'salt'),
        time="35 mins",
        spice=2,
        steps=(
            "Boil and mash potatoes with green chili and salt",
            "Make dough with wheat flour and water",
            "Roll dough, add potato filling, seal and roll again",
            "Cook on tawa with a little oil/ghee",
            "Serve hot with curd or pickle",
        ),
    ),
    RecipeTemplate(
        name="Simple Aloo Sabzi",
        required_ingredients=('potato', 'onion', 'turmeric', 'salt'),
        time="25 mins",
        spice=2,
        steps=(
            "Cut potatoes into cubes and onions into slices",
            "Heat oil, add cumin seeds if available",
            "Add onions and cook until golden",
            "Add potatoes, turmeric, salt and mix well",
            "Cover and cook until potatoes are tender",
        ),
    ),
    RecipeTemplate(
        name="Jeera Rice",
        required_ingredients=('rice', 'cumin seeds', 'salt'),
        time="20 mins",
        spice=1,
        steps=(
            "Wash and soak rice for 15 minutes",
            "Heat ghee/oil, add cumin seeds",
            "Add rice and water (1:2 ratio)",
            "Add salt and bring to boil",
            "Simmer covered until rice is cooked",
        ),
    ),
    RecipeTemplate(
        name="Simple Dal",
        required_ingredients=('toor dal', 'turmeric', 'salt'),
        time="30 mins",
        spice=2,
        steps=(
            "Wash dal and pressure cook with turmeric and salt",
            "Heat oil/ghee in pan, add cumin seeds if available",
            "Add cooked dal and simmer",
            "Adjust consistency with water",
            "Garnish with coriander if available",
        ),
    ),
    RecipeTemplate(
        name="Pyaz ki Sabzi",
        required_ingredients=('onion', 'turmeric', 'red chili powder', 'salt'),
        time="15 mins",
        spice=3,
        steps=(
            "Slice onions thinly",
            "Heat oil, add mustard seeds if available",
            "Add onions and cook until golden",
            "Add turmeric, red chili powder, salt",
            "Cook until onions are caramelized",
        ),
    ),
    RecipeTemplate(
        name="Tadka Dal",
        required_ingredients=('toor dal', 'turmeric', 'cumin seeds', 'mustard seeds', 'onion', 'tomato'),
        time="35 mins",
        spice=3,
        steps=(
            "Pressure cook dal with turmeric and salt",
            "Heat oil, add cumin and mustard seeds",
            "Add chopped onions, cook until golden",
            "Add tomatoes and cook until soft",
            "Pour cooked dal and simmer",
            "Garnish with coriander",
        ),
    ),
    RecipeTemplate(
        name="Mixed Vegetable Curry",
        required_ingredients=('potato', 'onion', 'tomato', 'turmeric', 'coriander seeds'),
        time="30 mins",
        spice=3,
        steps=(
            "Chop all vegetables into equal pieces",
            "Heat oil, add cumin seeds",
            "Add onions and cook until translucent",
            "Add tomatoes and spices",
            "Add vegetables and water",
            "Simmer until tender",
        ),
    ),
    RecipeTemplate(
        name="Nutritious Khichdi",
        required_ingredients=('rice', 'moong dal', 'turmeric', 'cumin seeds'),
        time="25 mins",
        spice=1,
        steps=(
            "Wash rice and dal together",
            "Heat ghee, add cumin seeds",
            "Add rice-dal mixture with turmeric",
            "Add water (1:3 ratio) and salt",
            "Pressure cook until soft and mushy",
        ),
    ),
)

# Essential items for Indian cooking, costs in rupees
ESSENTIALS = (
    EssentialItem(name='toor dal', category='Pulses', cost=80),
    EssentialItem(name='rice', category='Grains', cost=60),
    EssentialItem(name='onions', category='Vegetables', cost=40),
    EssentialItem(name='tomatoes', category='Vegetables', cost=50),
    EssentialItem(name='curd', category='Dairy', cost=30),
    EssentialItem(name='cooking oil', category='Oil & Ghee', cost=100),
    EssentialItem(name='green coriander', category='Vegetables', cost=20),
)


class RecipeCatalog:
    """Read-only recipe and essentials tables, shared by every request."""

    def __init__(self, recipes=RECIPE_TEMPLATES, essentials=ESSENTIALS):
        self.recipes = tuple(recipes)
        self.essentials = tuple(essentials)
        self._validate()

    def _validate(self):
        if not self.recipes:
            raise CatalogError("Recipe catalog is empty")

        names = [r.name for r in self.recipes]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise CatalogError(f"Duplicate recipe names: {', '.join(duplicates)}")

        for recipe in self.recipes:
            if not recipe.required_ingredients:
                raise CatalogError(f"Recipe '{recipe.name}' has no required ingredients")
            if not recipe.steps:
                raise CatalogError(f"Recipe '{recipe.name}' has no steps")

        essential_names = [e.name for e in self.essentials]
        if len(set(essential_names)) != len(essential_names):
            raise CatalogError("Duplicate essential items")

    def eligible_recipes(self, pantry_items):
        """Recipes whose required ingredients are ALL in the pantry, in catalog order."""
        return [
            r for r in self.recipes
            if all(has_ingredient(pantry_items, ing) for ing in r.required_ingredients)
        ]

    def get(self, name):
        return next((r for r in self.recipes if r.name == name), None)


DEFAULT_CATALOG = RecipeCatalog()
