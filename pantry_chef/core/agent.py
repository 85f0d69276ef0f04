from pydantic import ValidationError

from pantry_chef.core.model_manager import ModelManager
from pantry_chef.core.plan_assembler import PlanAssembler
from pantry_chef.core.recipe_catalog import DEFAULT_CATALOG
from pantry_chef.core.remote_gateway import RemoteGenerationError, RemoteGenerationGateway
from pantry_chef.core.schemas import UserPreferences


def validation_details(validation_error):
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in validation_error.errors()
    ]


class InvalidPreferencesError(Exception):
    def __init__(self, validation_error):
        super().__init__(str(validation_error))
        self.validation_error = validation_error

    def details(self):
        return validation_details(self.validation_error)


def validate_preferences(data):
    """Request body -> UserPreferences, or InvalidPreferencesError before any generation runs."""
    if isinstance(data, UserPreferences):
        return data
    try:
        return UserPreferences.model_validate(data or {})
    except ValidationError as e:
        raise InvalidPreferencesError(e) from e


class PantryChefAgent:
    """
    Produces the week's plan. Strategies run in order: the remote model if one
    is configured, then the rule-based assembler, which always succeeds.
    A remote failure never leaks part of its output into the result.
    """

    def __init__(self, model_manager=None, catalog=DEFAULT_CATALOG):
        self.model_manager = model_manager if model_manager is not None else ModelManager()
        self.gateway = RemoteGenerationGateway(self.model_manager)
        self.assembler = PlanAssembler(catalog)
        self.strategies = [("remote", self._generate_remote), ("rule-based", self._generate_rule_based)]

    def _generate_remote(self, preferences):
        if not self.gateway.is_available():
            return None
        try:
            return self.gateway.generate(preferences)
        except RemoteGenerationError as e:
            print(f"Remote generation failed, falling back to rule-based: {e}")
            return None

    def _generate_rule_based(self, preferences):
        return self.assembler.assemble(preferences)

    def generate_meal_plan(self, preferences):
        preferences = validate_preferences(preferences)

        for name, strategy in self.strategies:
            plan = strategy(preferences)
            if plan is not None:
                print(f"Generated meal plan using {name} planner ({self.get_service_status()})")
                return plan
        raise RuntimeError("No planning strategy produced a plan")

    def get_service_status(self):
        return self.model_manager.get_service_status()

    def is_ai_configured(self):
        return self.gateway.is_available()
