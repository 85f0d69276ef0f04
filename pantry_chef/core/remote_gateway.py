import json

from pydantic import ValidationError

from pantry_chef.core.schemas import MealPlan

SYSTEM_INSTRUCTION = (
    "You are an expert Indian chef and nutritionist who creates personalized meal plans. "
    "You understand regional Indian cuisines, traditional cooking methods, and nutritional balance. "
    "Always respond with valid JSON only, no additional text."
)


class RemoteGenerationError(Exception):
    """Any reason the remote plan can't be used. The caller falls back to rule-based planning."""


def build_prompt(preferences):
    return f"""Create a personalized 7-day meal plan based on these preferences:

Pantry Items: {preferences.pantry_text}
Cuisine: {preferences.cuisine}
Family Size: {preferences.family_size}
Spice Level: {preferences.spice_level}/5
Time Constraint: {preferences.time_constraint}
Diet Type: {preferences.diet_type}
Target Calories per day: {preferences.calories or "flexible"}

Requirements:
1. Use available pantry ingredients as much as possible
2. Generate authentic {preferences.cuisine} recipes
3. Consider family size for portions
4. Match spice level preference (1=mild, 5=very spicy); every "spice" is an integer 1-5
5. Respect time constraints ({preferences.time_constraint})
6. Follow {preferences.diet_type} dietary requirements
7. Ensure nutritional balance throughout the week
8. Include cooking tips and nutritional info for every meal

Return ONLY valid JSON in this exact format:
{{
  "weekly_plan": {{
    "Monday": {{
      "breakfast": {{"name": "Recipe Name", "time": "X mins", "spice": 2, "ingredients": ["ingredient1"], "steps": ["step1"],
                    "nutrition": {{"calories": 300, "protein": "15g", "carbs": "45g", "fats": "10g"}}, "tips": ["cooking tip"]}},
      "lunch": {{...}},
      "dinner": {{...}}
    }},
    ... (all 7 days, Monday to Sunday, in order)
  }},
  "featured_recipe": {{"name": "Most complex recipe", "time": "X mins", "spice": 3, "ingredients": ["..."], "steps": ["..."], "servings": {preferences.family_size}}},
  "shopping_list": [{{"category": "Vegetables", "items": ["item1 (quantity)"], "cost": "₹XXX"}}],
  "total_cost": "₹XXX",
  "pantry_utilization": 85,
  "ai_insights": {{"nutritional_balance": "...", "variety_score": 4.5, "suggestions": ["..."]}}
}}"""


def parse_remote_plan(raw):
    """
    Validates a provider reply. Returns a MealPlan or raises
    RemoteGenerationError; a partially valid reply is never used.
    """
    if raw is None or not str(raw).strip():
        raise RemoteGenerationError("Empty response from model")

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise RemoteGenerationError(f"Model did not return valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise RemoteGenerationError("Model output is not a JSON object")

    # Strict: "spice": "3" is a wrong type, not a 3
    try:
        plan = MealPlan.model_validate_json(raw, strict=True)
    except ValidationError as e:
        raise RemoteGenerationError(f"Model output failed validation: {e.error_count()} error(s)") from e

    # Caller sees remote plans flagged as such, whatever the model claimed
    return plan.model_copy(update={"ai_powered": True})


class RemoteGenerationGateway:
    def __init__(self, model_manager):
        self.model_manager = model_manager

    def is_available(self):
        return self.model_manager is not None and self.model_manager.is_configured()

    def generate(self, preferences):
        if not self.is_available():
            raise RemoteGenerationError("No AI service configured")

        try:
            raw = self.model_manager.generate(SYSTEM_INSTRUCTION, build_prompt(preferences))
        except Exception as e:
            # SDK errors: non-2xx status, timeouts, connection failures
            raise RemoteGenerationError(f"AI service error: {e}") from e

        return parse_remote_plan(raw)
