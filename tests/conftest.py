"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for the test suite. Nothing here talks to a real AI
provider: remote generation is exercised through StubModelManager.
"""

import pytest

from pantry_chef.core.agent import PantryChefAgent
from pantry_chef.core.model_manager import ModelManager
from pantry_chef.core.plan_assembler import PlanAssembler
from pantry_chef.core.schemas import UserPreferences


class StubModelManager:
    """Stands in for ModelManager: returns a canned reply or raises."""

    def __init__(self, reply=None, error=None, configured=True):
        self.reply = reply
        self.error = error
        self.configured = configured
        self.calls = 0

    def is_configured(self):
        return self.configured

    def get_service_status(self):
        return "Using STUB AI service"

    def generate(self, system_instruction, user_prompt):
        self.calls += 1
        if self.error:
            raise self.error
        return self.reply


def make_preferences(pantry_text, **overrides):
    values = {"pantry_text": pantry_text, "spice_level": 3, "family_size": 4}
    values.update(overrides)
    return UserPreferences(**values)


@pytest.fixture
def preferences():
    return make_preferences


@pytest.fixture
def assembler():
    return PlanAssembler()


@pytest.fixture
def offline_agent():
    """Agent with no AI service configured."""
    return PantryChefAgent(model_manager=ModelManager(config={}))


@pytest.fixture
def client(offline_agent):
    from pantry_chef.web import server

    server.app.config['TESTING'] = True
    previous = server._agent
    server._agent = offline_agent
    with server.app.test_client() as test_client:
        yield test_client
    server._agent = previous
