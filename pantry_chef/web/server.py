import os
import sys
from flask import Flask, request, jsonify
from dotenv import load_dotenv
from pydantic import ValidationError

# CAPTURE ORIGINAL SYSTEM ENVIRONMENT before load_dotenv shadows it
original_env = os.environ.copy()

# Ensure app modules are found
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../../')))

from pantry_chef.core.agent import PantryChefAgent, InvalidPreferencesError, validate_preferences, validation_details
from pantry_chef.core.model_manager import ModelManager
from pantry_chef.core.pantry_parser import parse_pantry_list
from pantry_chef.core.plan_translator import preferences_from_request, to_day_list
from pantry_chef.core.schemas import PlanRequest

load_dotenv()

APP_VERSION = "1.0.0"

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET", "dev-secret-key-change-me")
app.json.ensure_ascii = False  # keep "₹" readable
app.json.sort_keys = False  # weekly_plan stays Monday..Sunday

_agent = None


def get_agent():
    global _agent
    if _agent is None:
        _agent = PantryChefAgent(model_manager=ModelManager(original_env=original_env))
    return _agent


@app.route('/health')
def health_check():
    """Simple health check for monitoring scripts."""
    return {"status": "healthy", "version": APP_VERSION}


@app.route('/api/status')
def service_status():
    agent = get_agent()
    return jsonify({
        "ai_configured": agent.is_ai_configured(),
        "service_status": agent.get_service_status()
    })


@app.route('/api/pantry/parse', methods=['POST'])
def parse_pantry():
    """Preview of how the pantry text will be read."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "pantryText must be a string"}), 400
    pantry_text = data.get('pantryText', data.get('pantry_text', ''))
    if not isinstance(pantry_text, str):
        return jsonify({"error": "pantryText must be a string"}), 400

    items = parse_pantry_list(pantry_text)
    return jsonify({"items": [item.model_dump() for item in items]})


@app.route('/api/plan', methods=['POST'])
def generate_plan():
    """Generates the weekly plan for the pantry form."""
    data = request.get_json(silent=True)
    try:
        preferences = validate_preferences(data)
    except InvalidPreferencesError as e:
        return jsonify({"error": "Invalid request", "details": e.details()}), 400

    try:
        plan = get_agent().generate_meal_plan(preferences)
        return jsonify(plan.model_dump(mode='json'))
    except Exception as e:
        print(f"Error generating: {e}")
        return jsonify({"error": "Plan generation failed", "details": str(e)}), 500


@app.route('/api/ai/plan', methods=['POST'])
def generate_day_list_plan():
    """Same plan, in the list-of-days shape with a grocery list."""
    data = request.get_json(silent=True)
    try:
        plan_request = PlanRequest.model_validate(data or {})
    except ValidationError as e:
        return jsonify({"error": "Invalid request", "details": validation_details(e)}), 400

    try:
        plan = get_agent().generate_meal_plan(preferences_from_request(plan_request))
        day_list = to_day_list(plan, days=plan_request.days, meals_per_day=plan_request.mealsPerDay)
        return jsonify(day_list.model_dump(mode='json', exclude_none=True))
    except Exception as e:
        print(f"Error generating: {e}")
        return jsonify({"error": "Plan generation failed", "details": str(e)}), 500


if __name__ == "__main__":
    app.run(host='0.0.0.0', port=int(os.environ.get("PORT", 8787)), debug=True)
