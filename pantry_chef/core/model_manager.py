import os
import re
import json
import google.genai as genai
from pantry_chef.core.schemas import MealPlan

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-haiku-20240307",
    "google": "gemini-2.0-flash",
}

KEY_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GEMINI_API_KEY",
}

DEFAULT_TIMEOUT_SECONDS = 30.0

# --- PROVIDER WRAPPERS ---
# Each generate() returns the raw JSON text of the reply; validation happens in the gateway.

class GeminiProvider:
    def __init__(self, api_key, timeout=DEFAULT_TIMEOUT_SECONDS):
        self.client = genai.Client(
            api_key=api_key,
            http_options=genai.types.HttpOptions(timeout=int(timeout * 1000))
        )

    def generate(self, model_id, system_instruction, user_prompt):
        response = self.client.models.generate_content(
            model=model_id,
            contents=user_prompt,
            config=genai.types.GenerateContentConfig(
                system_instruction=system_instruction,
                response_mime_type="application/json",
                temperature=0.7
            )
        )
        return response.text


class OpenAIProvider:
    def __init__(self, api_key, base_url=None, timeout=DEFAULT_TIMEOUT_SECONDS):
        from openai import OpenAI
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    def generate(self, model_id, system_instruction, user_prompt):
        completion = self.client.chat.completions.create(
            model=model_id,
            temperature=0.7,
            max_tokens=3000,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_prompt},
            ]
        )
        return completion.choices[0].message.content


class AnthropicProvider:
    def __init__(self, api_key, timeout=DEFAULT_TIMEOUT_SECONDS):
        from anthropic import Anthropic
        self.client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)

    def generate(self, model_id, system_instruction, user_prompt):
        # Anthropic Tool Use for structured output
        tool_name = "submit_meal_plan"
        tools = [{
            "name": tool_name,
            "description": "Submit the weekly meal plan matching the requested schema.",
            "input_schema": MealPlan.model_json_schema()
        }]

        message = self.client.messages.create(
            model=model_id,
            max_tokens=4096,
            system=system_instruction,
            tools=tools,
            tool_choice={"type": "tool", "name": tool_name},
            messages=[
                {"role": "user", "content": user_prompt}
            ]
        )

        for content in message.content:
            if content.type == "tool_use" and content.name == tool_name:
                return json.dumps(content.input)

        raise Exception("Anthropic did not use the tool.")


PROVIDER_CLASSES = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "google": GeminiProvider,
}


class ModelManager:
    """
    Reads the AI service settings from the environment and hands out the
    selected provider. With AI_SERVICE=fallback (the default) nothing remote
    is ever called.
    """

    def __init__(self, config=None, original_env=None):
        self.config = config if config is not None else os.environ
        self.original_env = original_env

        self.service = (self.config.get("AI_SERVICE") or "fallback").strip().lower()
        self.keys = {name: self._resolve_key(self.config.get(var)) for name, var in KEY_VARS.items()}
        self.model_id = self.config.get("AI_MODEL") or DEFAULT_MODELS.get(self.service)

        try:
            self.timeout = float(self.config.get("AI_TIMEOUT_SECONDS") or DEFAULT_TIMEOUT_SECONDS)
        except ValueError:
            print(f"DEBUG: Invalid AI_TIMEOUT_SECONDS, using {DEFAULT_TIMEOUT_SECONDS}")
            self.timeout = DEFAULT_TIMEOUT_SECONDS

        self._provider = None

    def _get_env(self, name):
        if self.original_env and name in self.original_env:
            val = self.original_env[name]
            if val:
                return val
        return self.config.get(name)

    def _resolve_key(self, key_string):
        if not key_string:
            return None

        # 1. Check for ${VAR} pattern
        match = re.search(r'\$\{(.+?)\}', key_string)
        if match:
            env_name = match.group(1)
            val = self._get_env(env_name)
            if not val or val == key_string or val == f'${{{env_name}}}':
                print(f"DEBUG: Resolution failed for pointer {key_string}")
                return None
            return val

        # 2. A bare environment variable name (pointer without ${})
        if re.match(r'^[A-Z0-9_]+$', key_string):
            val = self._get_env(key_string)
            if val and val != key_string:
                return val
            print(f"DEBUG: String '{key_string}' looks like a pointer but not found in env.")
            return None

        return key_string

    def is_configured(self):
        return self.service in PROVIDER_CLASSES and bool(self.keys.get(self.service))

    def get_service_status(self):
        if self.service == "fallback":
            return "Using rule-based meal planning"
        if self.service not in PROVIDER_CLASSES:
            return f"Unknown AI service '{self.service}', using rule-based meal planning"
        if self.is_configured():
            return f"Using {self.service.upper()} AI service"
        return "AI service configured but API key missing"

    def get_provider(self):
        if not self.is_configured():
            return None
        if self._provider is None:
            provider_class = PROVIDER_CLASSES[self.service]
            self._provider = provider_class(self.keys[self.service], timeout=self.timeout)
        return self._provider

    def generate(self, system_instruction, user_prompt):
        provider = self.get_provider()
        if provider is None:
            raise ValueError(f"Provider {self.service} is not configured (missing API key).")

        print(f"Generating structured response using {self.model_id} via {self.service}...")
        return provider.generate(self.model_id, system_instruction, user_prompt)
