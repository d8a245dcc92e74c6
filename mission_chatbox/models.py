"""Core data-boundary models.

Every spec handed to the chatbox state, and every event handed back from a
rendered view, passes through these types. Pydantic validates plain dicts on
the way in, so callers may pass either a dict or a model instance.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Sender(IntEnum):
    """Which party a chat bubble is attributed to."""

    USER = 0
    ACTOR = 1


class ChoiceSetting(BaseModel):
    """One entry of a choice spec's ``settings`` mapping."""

    model_config = ConfigDict(extra="allow")

    text: str


class MessageSpec(BaseModel):
    """Data description of a message, used to construct and to amend.

    Only ``type`` is required. Text and input specs carry ``text``; choice
    specs carry ``settings`` (option key -> {"text": label}). Unknown fields
    are kept so externally registered message types can read them.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    sender: Sender | None = None
    text: str | None = None
    settings: dict[str, ChoiceSetting] | None = None


class ChoiceOption(BaseModel):
    """A selectable option in a choice bubble."""

    name: str
    label: str


class RenderEvent(BaseModel):
    """What a view reports back when the user interacts with a bubble.

    ``response`` goes to the dialogue service; ``amendment``, when present, is
    folded back into the bubble that produced the event.
    """

    response: Any = None
    amendment: MessageSpec | None = None


def coerce_spec(spec: MessageSpec | dict[str, Any] | None) -> MessageSpec | None:
    """Validate a dict into a MessageSpec. Model instances pass through."""
    if spec is None or isinstance(spec, MessageSpec):
        return spec
    return MessageSpec.model_validate(spec)
