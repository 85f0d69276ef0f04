import re

from pantry_chef.core.schemas import PantryItem

# Regional / colloquial names -> (canonical name, category)
INGREDIENT_MAPPINGS = {
    # Grains & Flours
    'atta': ('wheat flour', 'grain'),
    'wheat flour': ('wheat flour', 'grain'),
    'rice': ('rice', 'grain'),
    'chawal': ('rice', 'grain'),
    'basmati rice': ('basmati rice', 'grain'),
    'jeera rice': ('rice', 'grain'),
    'besan': ('gram flour', 'grain'),
    'rava': ('semolina', 'grain'),
    'sooji': ('semolina', 'grain'),

    # Vegetables
    'aloo': ('potato', 'vegetable'),
    'potato': ('potato', 'vegetable'),
    'onion': ('onion', 'vegetable'),
    'pyaz': ('onion', 'vegetable'),
    'tomato': ('tomato', 'vegetable'),
    'tamatar': ('tomato', 'vegetable'),
    'palak': ('spinach', 'vegetable'),
    'spinach': ('spinach', 'vegetable'),
    'bhindi': ('okra', 'vegetable'),
    'okra': ('okra', 'vegetable'),
    'gobhi': ('cauliflower', 'vegetable'),
    'cauliflower': ('cauliflower', 'vegetable'),
    'green chili': ('green chili', 'vegetable'),
    'hari mirch': ('green chili', 'vegetable'),
    'ginger': ('ginger', 'vegetable'),
    'adrak': ('ginger', 'vegetable'),
    'garlic': ('garlic', 'vegetable'),
    'lehsun': ('garlic', 'vegetable'),
    'green coriander': ('green coriander', 'vegetable'),
    'hara dhania': ('green coriander', 'vegetable'),

    # Proteins/Pulses
    'moong dal': ('moong dal', 'protein'),
    'toor dal': ('toor dal', 'protein'),
    'arhar dal': ('toor dal', 'protein'),
    'chana dal': ('chana dal', 'protein'),
    'masoor dal': ('masoor dal', 'protein'),
    'urad dal': ('urad dal', 'protein'),
    'rajma': ('kidney beans', 'protein'),
    'chole': ('chickpeas', 'protein'),
    'paneer': ('paneer', 'protein'),

    # Dairy
    'curd': ('curd', 'dairy'),
    'dahi': ('curd', 'dairy'),
    'milk': ('milk', 'dairy'),
    'doodh': ('milk', 'dairy'),
    'ghee': ('ghee', 'dairy'),

    # Oils
    'oil': ('cooking oil', 'oil'),
    'cooking oil': ('cooking oil', 'oil'),
    'mustard oil': ('mustard oil', 'oil'),
    'coconut oil': ('coconut oil', 'oil'),

    # Spices
    'turmeric': ('turmeric', 'spice'),
    'haldi': ('turmeric', 'spice'),
    'cumin': ('cumin seeds', 'spice'),
    'cumin seeds': ('cumin seeds', 'spice'),
    'jeera': ('cumin seeds', 'spice'),
    'coriander': ('coriander seeds', 'spice'),
    'coriander seeds': ('coriander seeds', 'spice'),
    'dhania': ('coriander seeds', 'spice'),
    'mustard seeds': ('mustard seeds', 'spice'),
    'rai': ('mustard seeds', 'spice'),
    'red chili powder': ('red chili powder', 'spice'),
    'garam masala': ('garam masala', 'spice'),
    'salt': ('salt', 'spice'),
    'namak': ('salt', 'spice'),
}

# What "spices" / "basic spices" stands for in a pantry list
BASIC_SPICES = ['turmeric', 'cumin seeds', 'coriander seeds', 'red chili powder', 'salt']

_UNITS = r'(?:(kg|g|l|ml|cups|cup|tbsp|tsp|pieces|piece)\b)?'
_NUMBER = r'(\d+(?:\.\d+)?)'
LEADING_QUANTITY = re.compile(rf'^{_NUMBER}\s*{_UNITS}\s*(.*)$')
TRAILING_QUANTITY = re.compile(rf'^(.*?)\s+{_NUMBER}\s*{_UNITS}$')


def _split_quantity(raw_item):
    """Returns (phrase, quantity, unit). Defaults to 1 piece when no quantity is written."""
    match = LEADING_QUANTITY.match(raw_item)
    if match:
        return match.group(3).strip(), float(match.group(1)), match.group(2) or 'piece'

    match = TRAILING_QUANTITY.match(raw_item)
    if match:
        return match.group(1).strip(), float(match.group(2)), match.group(3) or 'piece'

    return raw_item, 1.0, 'piece'


def _guess_category(name):
    if 'dal' in name or 'bean' in name:
        return 'protein'
    if 'flour' in name or 'rice' in name:
        return 'grain'
    return 'other'


def parse_pantry_list(pantry_text):
    """
    Turns free text like "atta 2kg, aloo, basic spices" into PantryItems.
    Input order is kept and duplicates are not merged.
    """
    items = []
    raw_items = [t.strip() for t in re.split(r'[,\n]', (pantry_text or '').lower())]

    for raw_item in raw_items:
        if not raw_item:
            continue

        name, quantity, unit = _split_quantity(raw_item)
        if not name:
            continue

        # "spices" is shorthand for the whole basic spice box
        if 'spices' in name:
            for spice in BASIC_SPICES:
                standard_name, category = INGREDIENT_MAPPINGS[spice]
                items.append(PantryItem(name=standard_name, quantity=1, unit='tsp', category=category))
            continue

        mapping = INGREDIENT_MAPPINGS.get(name)
        if mapping:
            standard_name, category = mapping
            items.append(PantryItem(name=standard_name, quantity=quantity, unit=unit, category=category))
        else:
            items.append(PantryItem(name=name, quantity=quantity, unit=unit, category=_guess_category(name)))

    return items


def get_available_ingredients(pantry_items):
    return [item.name for item in pantry_items]


def names_match(pantry_name, ingredient_name):
    """
    Loose on purpose: either name containing the other counts as a match,
    so "basmati rice" satisfies "rice" and "onion" satisfies "onions".
    Short generic names can collide; swap this function to tighten matching.
    """
    a = pantry_name.lower()
    b = ingredient_name.lower()
    return b in a or a in b


def has_ingredient(pantry_items, ingredient_name):
    return any(names_match(item.name, ingredient_name) for item in pantry_items)


def get_ingredient_quantity(pantry_items, ingredient_name):
    """Quantity and unit of the first matching pantry item, or None."""
    item = next((i for i in pantry_items if names_match(i.name, ingredient_name)), None)
    if item is None:
        return None
    return {"quantity": item.quantity, "unit": item.unit}


def format_quantity(quantity):
    # 2.0 -> "2", 0.5 -> "0.5"
    return str(int(quantity)) if float(quantity).is_integer() else str(quantity)
