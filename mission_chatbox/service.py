"""Dialogue service: the collaborator that decides what actors say.

The chatbox only stores and mutates the specs it is handed. Deciding the
content comes from a service matching the protocol:

    fetch(actor, location)             -> list[ServiceMessage]
    respond(actor, location, response) -> list[ServiceMessage]

``location`` is the story position of the actor's newest bubble, or None at
the start of the story. ``respond`` delivers the user's answer to the bubble
at ``location`` and returns whatever the actor says next.

One implementation is provided:

    ScriptedService: replays a DialogueScript held in memory, typically
                     loaded from a JSON file with load_script().

A script is a set of nodes keyed by location. Each node lists the messages
the actor sends on reaching it and maps user responses to the next
location; the "*" key matches any response.
Choice and input prompts are attributed to the user unless a spec sets
"sender" explicitly; everything else comes from the actor.

    {
      "start": "greeting",
      "nodes": {
        "greeting": {
          "messages": [{"type": "text", "text": "Hi!"},
                       {"type": "choice", "settings": {"yes": {"text": "Hello"}}}],
          "next": {"yes": "farewell"}
        },
        "farewell": {"messages": [{"type": "text", "text": "Bye."}]}
      }
    }
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, Field, ValidationError

from mission_chatbox.models import MessageSpec, Sender

logger = logging.getLogger(__name__)

ANY_RESPONSE = "*"

# Prompts the user answers; shown on the user's side of the conversation.
USER_PROMPT_TYPES = frozenset({"choice", "input"})


class ServiceMessage(BaseModel):
    """A message from the service, addressed to one actor's conversation."""

    actor: str
    location: str
    message: MessageSpec
    sender: Sender = Sender.ACTOR


# ---------------------------------------------------------------------------
# Protocol: every dialogue service must match this signature
# ---------------------------------------------------------------------------

class ChatboxService(Protocol):
    def fetch(self, actor: str, location: str | None) -> list[ServiceMessage]: ...

    def respond(self, actor: str, location: str, response: Any) -> list[ServiceMessage]: ...


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------

class ScriptNode(BaseModel):
    messages: list[MessageSpec] = Field(default_factory=list)
    next: dict[str, str] = Field(default_factory=dict)


class DialogueScript(BaseModel):
    start: str
    nodes: dict[str, ScriptNode]


class ScriptError(RuntimeError):
    """Raised when a script cannot be loaded or points at a missing node."""


def load_script(path: Path) -> DialogueScript:
    try:
        return DialogueScript.model_validate_json(Path(path).read_text())
    except OSError as e:
        raise ScriptError(f"Cannot read dialogue script {path}") from e
    except ValidationError as e:
        raise ScriptError(f"Invalid dialogue script {path}: {e}") from e


def _sender_for(spec: MessageSpec) -> Sender:
    if spec.sender is not None:
        return spec.sender
    return Sender.USER if spec.type in USER_PROMPT_TYPES else Sender.ACTOR


# ---------------------------------------------------------------------------
# ScriptedService: replays a script; one script per actor
# ---------------------------------------------------------------------------

class ScriptedService:
    """Serves dialogue from in-memory scripts.

    Args:
        scripts: Mapping of actor id to that actor's DialogueScript.
    """

    def __init__(self, scripts: dict[str, DialogueScript]) -> None:
        self._scripts = scripts

    @classmethod
    def from_file(cls, actor: str, path: Path) -> ScriptedService:
        return cls({actor: load_script(path)})

    def _script(self, actor: str) -> DialogueScript:
        try:
            return self._scripts[actor]
        except KeyError as e:
            raise ScriptError(f"No dialogue script for actor {actor!r}") from e

    def _node(self, actor: str, location: str) -> ScriptNode:
        try:
            return self._script(actor).nodes[location]
        except KeyError as e:
            raise ScriptError(f"Actor {actor!r} has no script node {location!r}") from e

    def _messages_at(self, actor: str, location: str) -> list[ServiceMessage]:
        node = self._node(actor, location)
        return [
            ServiceMessage(
                actor=actor,
                location=location,
                message=spec.model_copy(deep=True),
                sender=_sender_for(spec),
            )
            for spec in node.messages
        ]

    def fetch(self, actor: str, location: str | None) -> list[ServiceMessage]:
        """Messages at ``location``, or at the script start when None."""
        if location is None:
            location = self._script(actor).start
        logger.debug("fetch actor=%s location=%s", actor, location)
        return self._messages_at(actor, location)

    def respond(self, actor: str, location: str, response: Any) -> list[ServiceMessage]:
        node = self._node(actor, location)
        key = str(response)
        target = node.next.get(key, node.next.get(ANY_RESPONSE))
        if target is None:
            logger.warning(
                "actor=%s location=%s has no branch for response %r", actor, location, response
            )
            return []
        logger.debug("respond actor=%s %s -> %s", actor, location, target)
        return self._messages_at(actor, target)
