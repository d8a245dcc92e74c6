"""Message variants: the content of a single chat bubble.

Each variant is constructed from a message spec and implements two
operations:

    amend(spec)        fold the spec into this message in place; False means
                       the owning container must replace the message with a
                       new one of type ``spec.type``.
    render(on_event)   return a view description; the view calls on_event
                       with a RenderEvent when the user interacts.

Variants are built through a factory set: a mapping from message-type name
to a constructor taking ``(params, spec)``. The set is injected into the
chatbox state and passed down, never looked up globally, so callers can
register extra message types alongside the built-in ones.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Mapping, Protocol

from mission_chatbox.models import ChoiceOption, MessageSpec
from mission_chatbox.views import ChoiceView, EventCallback, InputView, MessageView, TextView

logger = logging.getLogger(__name__)

# Spec types that extend a running text bubble instead of replacing it.
SCROLL_TYPES = frozenset({"scrolled", "scroll_wait"})


# ---------------------------------------------------------------------------
# Protocol: every message variant must match this shape
# ---------------------------------------------------------------------------

class ChatboxMessage(Protocol):
    type: ClassVar[str]

    def amend(self, spec: MessageSpec) -> bool: ...

    def render(self, on_event: EventCallback) -> Any: ...


MessageFactory = Callable[[dict[str, Any], MessageSpec], ChatboxMessage]
MessageFactories = Mapping[str, MessageFactory]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class UnknownMessageTypeError(LookupError):
    """Raised when a spec names a type that has no registered factory."""


class InvalidMessageSpecError(ValueError):
    """Raised when a spec lacks the data its message type needs."""


# ---------------------------------------------------------------------------
# Built-in variants
# ---------------------------------------------------------------------------

class TextMessage:
    """Narrative text. Scroll output keeps appending to the same bubble."""

    type: ClassVar[str] = "text"

    def __init__(self, params: dict[str, Any], spec: MessageSpec) -> None:
        self.params = params
        self.text = spec.text or ""

    def amend(self, spec: MessageSpec) -> bool:
        if spec.type not in SCROLL_TYPES:
            return False
        self.text = self.text + "\n" + (spec.text or "")
        return True

    def render(self, on_event: EventCallback) -> MessageView:
        return TextView(text=self.text, on_event=on_event)

    def __repr__(self) -> str:
        return f"TextMessage(text={self.text!r})"


class ChoiceMessage:
    """A one-shot prompt offering a fixed set of options."""

    type: ClassVar[str] = "choice"

    def __init__(self, params: dict[str, Any], spec: MessageSpec) -> None:
        if spec.settings is None:
            raise InvalidMessageSpecError("Choice message spec requires 'settings'")
        self.params = params
        self.choices = [
            ChoiceOption(name=key, label=setting.text)
            for key, setting in spec.settings.items()
        ]

    def amend(self, spec: MessageSpec) -> bool:
        return False

    def render(self, on_event: EventCallback) -> MessageView:
        return ChoiceView(choices=list(self.choices), on_event=on_event)

    def __repr__(self) -> str:
        return f"ChoiceMessage(choices={[c.name for c in self.choices]!r})"


class InputMessage:
    """A one-shot free-text prompt; ``text`` is the placeholder."""

    type: ClassVar[str] = "input"

    def __init__(self, params: dict[str, Any], spec: MessageSpec) -> None:
        self.params = params
        self.text = spec.text or ""

    def amend(self, spec: MessageSpec) -> bool:
        return False

    def render(self, on_event: EventCallback) -> MessageView:
        return InputView(text=self.text, on_event=on_event)

    def __repr__(self) -> str:
        return f"InputMessage(text={self.text!r})"


DEFAULT_MESSAGE_FACTORIES: dict[str, MessageFactory] = {
    "text": TextMessage,
    "scrolled": TextMessage,
    "scroll_wait": TextMessage,
    "choice": ChoiceMessage,
    "input": InputMessage,
}


def create_message(
    factories: MessageFactories,
    spec: MessageSpec,
    params: dict[str, Any] | None = None,
) -> ChatboxMessage:
    """Build the variant named by ``spec.type`` from the factory set."""
    try:
        factory = factories[spec.type]
    except KeyError as e:
        raise UnknownMessageTypeError(f"No message factory for type {spec.type!r}") from e
    message = factory(params if params is not None else {}, spec)
    logger.debug("created %r from spec type=%s", message, spec.type)
    return message
