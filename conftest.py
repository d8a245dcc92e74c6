import json
from pathlib import Path

import pytest

from mission_chatbox.messages import DEFAULT_MESSAGE_FACTORIES
from mission_chatbox.service import DialogueScript, ScriptedService
from mission_chatbox.state import ChatboxState, ConversationState

PRESETS_DIR = Path(__file__).parent / "presets"
DEMO_SCRIPT = PRESETS_DIR / "demo-script.json"


@pytest.fixture
def chatbox() -> ChatboxState:
    return ChatboxState(DEFAULT_MESSAGE_FACTORIES)


@pytest.fixture
def conversation() -> ConversationState:
    return ConversationState(DEFAULT_MESSAGE_FACTORIES)


@pytest.fixture
def demo_script() -> DialogueScript:
    return DialogueScript.model_validate(json.loads(DEMO_SCRIPT.read_text()))


@pytest.fixture
def service(demo_script: DialogueScript) -> ScriptedService:
    """Scripted service serving the demo script for actor "riley"."""
    return ScriptedService({"riley": demo_script})
