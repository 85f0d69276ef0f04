"""
Plan Translator Tests
=====================

Canonical weekly plan <-> list-of-days shape used by /api/ai/plan.
"""

import pytest

from conftest import make_preferences
from pantry_chef.core.plan_assembler import PlanAssembler
from pantry_chef.core.plan_translator import from_day_list, preferences_from_request, to_day_list
from pantry_chef.core.schemas import (
    DAYS, DayListDay, DayListMeal, DayListPlan, MealNutrition, NutritionDaily, PlanRequest,
)


@pytest.fixture
def plan():
    return PlanAssembler().assemble(make_preferences("atta 2kg, aloo 1kg, green chili, salt, pyaz, basic spices"))


class TestToDayList:

    def test_week_of_three_meals(self, plan):
        day_list = to_day_list(plan)

        assert [d.day for d in day_list.days] == DAYS
        monday = day_list.days[0]
        assert [m.name for m in monday.meals] == [
            plan.weekly_plan["Monday"].breakfast.name,
            plan.weekly_plan["Monday"].lunch.name,
            plan.weekly_plan["Monday"].dinner.name,
        ]
        assert monday.meals[0].instructions == plan.weekly_plan["Monday"].breakfast.steps
        assert monday.meals[0].recipe == f"Ready in {plan.weekly_plan['Monday'].breakfast.time}"

    def test_grocery_list_from_shopping_list(self, plan):
        day_list = to_day_list(plan)

        by_item = {g.item: g for g in day_list.grocery_list}
        assert by_item["toor dal"].quantity == 500
        assert by_item["toor dal"].unit == "g"
        assert by_item["toor dal"].aisle == "Pulses"
        assert "onions" not in by_item

    def test_more_than_a_week_repeats(self, plan):
        day_list = to_day_list(plan, days=10)

        labels = [d.day for d in day_list.days]
        assert labels[:7] == DAYS
        assert labels[7:] == ["Monday (week 2)", "Tuesday (week 2)", "Wednesday (week 2)"]
        assert day_list.days[7].meals == day_list.days[0].meals

    def test_fewer_days_and_meals(self, plan):
        day_list = to_day_list(plan, days=2, meals_per_day=1)

        assert [d.day for d in day_list.days] == ["Monday", "Tuesday"]
        assert all(len(d.meals) == 1 for d in day_list.days)

    def test_meals_per_day_capped_at_three(self, plan):
        day_list = to_day_list(plan, meals_per_day=6)

        assert all(len(d.meals) == 3 for d in day_list.days)

    def test_no_nutrition_summary_without_reported_nutrition(self, plan):
        assert to_day_list(plan).nutrition_summary is None

    def test_nutrition_summed_per_day(self, plan):
        monday = plan.weekly_plan["Monday"]
        weekly_plan = dict(plan.weekly_plan)
        weekly_plan["Monday"] = monday.model_copy(update={
            "breakfast": monday.breakfast.model_copy(update={
                "nutrition": MealNutrition(calories=300, protein="15g", carbs="45g", fats="10g"),
            }),
            "lunch": monday.lunch.model_copy(update={
                "nutrition": MealNutrition(calories=500, protein="20 g"),
            }),
        })
        reported = plan.model_copy(update={"weekly_plan": weekly_plan})

        summary = to_day_list(reported, days=2).nutrition_summary

        assert summary.daily == [
            NutritionDaily(day="Monday", calories=800, protein_g=35, carbs_g=45, fat_g=10),
        ]

    def test_nutrition_only_counts_returned_meals(self, plan):
        monday = plan.weekly_plan["Monday"]
        weekly_plan = dict(plan.weekly_plan)
        weekly_plan["Monday"] = monday.model_copy(update={
            "dinner": monday.dinner.model_copy(update={"nutrition": MealNutrition(calories=400)}),
        })
        reported = plan.model_copy(update={"weekly_plan": weekly_plan})

        assert to_day_list(reported, meals_per_day=2).nutrition_summary is None
        assert to_day_list(reported).nutrition_summary.daily[0].calories == 400


class TestRoundTrip:

    def test_day_order_names_and_ingredients_survive(self, plan):
        restored = from_day_list(to_day_list(plan), family_size=4, pantry_utilization=plan.pantry_utilization)

        assert list(restored.weekly_plan.keys()) == list(plan.weekly_plan.keys())
        for day in DAYS:
            original = plan.weekly_plan[day]
            back = restored.weekly_plan[day]
            assert [m.name for m in back.meals()] == [m.name for m in original.meals()]
            assert [m.ingredients for m in back.meals()] == [m.ingredients for m in original.meals()]

    def test_whole_week_is_equal_for_rule_based_plans(self, plan):
        restored = from_day_list(to_day_list(plan))

        assert restored.weekly_plan == plan.weekly_plan
        assert restored.featured_recipe == plan.featured_recipe

    def test_shopping_items_survive_without_prices(self, plan):
        restored = from_day_list(to_day_list(plan))

        assert [c.category for c in restored.shopping_list] == [c.category for c in plan.shopping_list]
        assert [c.items for c in restored.shopping_list] == [c.items for c in plan.shopping_list]
        assert restored.total_cost == "₹0"


class TestFromDayList:

    def meal(self, name):
        return DayListMeal(name=name, recipe="Quick", ingredients=["rice"], instructions=["Cook"])

    def test_missing_day(self):
        day_list = DayListPlan(
            days=[DayListDay(day=d, meals=[self.meal("Poha")]) for d in DAYS[:5]],
            grocery_list=[],
        )

        with pytest.raises(ValueError, match="Saturday, Sunday"):
            from_day_list(day_list)

    def test_short_days_repeat_last_meal(self):
        day_list = DayListPlan(
            days=[DayListDay(day=d, meals=[self.meal("Poha"), self.meal("Rajma Chawal")]) for d in DAYS],
            grocery_list=[],
        )

        plan = from_day_list(day_list)

        thursday = plan.weekly_plan["Thursday"]
        assert [thursday.breakfast.name, thursday.lunch.name, thursday.dinner.name] == [
            "Poha", "Rajma Chawal", "Rajma Chawal"
        ]
        assert thursday.breakfast.time == "Quick"
        assert thursday.breakfast.spice == 1

    def test_days_in_any_order(self):
        day_list = DayListPlan(
            days=[DayListDay(day=d, meals=[self.meal(f"{d} special")]) for d in reversed(DAYS)],
            grocery_list=[],
        )

        plan = from_day_list(day_list)

        assert list(plan.weekly_plan.keys()) == DAYS
        assert plan.weekly_plan["Monday"].dinner.name == "Monday special"


def test_preferences_from_request():
    request = PlanRequest(ingredients=["atta", "aloo 1kg"], dietary=["vegetarian", "no onion"], days=3, mealsPerDay=2)

    prefs = preferences_from_request(request)

    assert prefs.pantry_text == "atta, aloo 1kg"
    assert prefs.diet_type == "vegetarian, no onion"
    assert prefs.calories is None


def test_calorie_target_carried_into_preferences():
    request = PlanRequest(ingredients=["atta"], calories=1800, days=7, mealsPerDay=3)

    assert preferences_from_request(request).calories == 1800


def test_plan_request_limits():
    with pytest.raises(ValueError):
        PlanRequest(ingredients=[], days=3, mealsPerDay=2)
    with pytest.raises(ValueError):
        PlanRequest(ingredients=["atta"], days=15, mealsPerDay=2)
    with pytest.raises(ValueError):
        PlanRequest(ingredients=["atta"], days=3, mealsPerDay=7)
    with pytest.raises(ValueError):
        PlanRequest(ingredients=["atta"], calories=0, days=3, mealsPerDay=2)
    with pytest.raises(ValueError, match="blank"):
        PlanRequest(ingredients=["atta", "  "], days=3, mealsPerDay=2)
