from pantry_chef.core.pantry_parser import has_ingredient
from pantry_chef.core.recipe_catalog import ESSENTIALS
from pantry_chef.core.schemas import ShoppingCategory

CURRENCY = "₹"


def format_rupees(amount):
    return f"{CURRENCY}{int(amount)}"


def parse_rupees(text):
    """'₹120' -> 120. Anything without digits counts as 0."""
    digits = "".join(ch for ch in str(text) if ch.isdigit())
    return int(digits) if digits else 0


def derive_shopping_list(pantry_items, used_ingredients, preferences, essentials=ESSENTIALS):
    """
    Essentials the pantry doesn't cover, grouped by category in first-seen order.
    Returns [] when nothing is missing.

    used_ingredients and preferences are accepted but don't affect the result yet.
    """
    categories = {}

    for item in essentials:
        if has_ingredient(pantry_items, item.name):
            continue
        group = categories.setdefault(item.category, {"items": [], "total_cost": 0})
        group["items"].append(f"{item.name} ({item.quantity})")
        group["total_cost"] += item.cost

    return [
        ShoppingCategory(category=category, items=data["items"], cost=format_rupees(data["total_cost"]))
        for category, data in categories.items()
    ]


def total_cost(shopping_list):
    return format_rupees(sum(parse_rupees(c.cost) for c in shopping_list))
