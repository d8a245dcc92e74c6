"""Message container: one chat bubble.

A container wraps a single message variant together with the fixed sender
and story location it was created for. It owns the amend-or-replace
decision and notifies observers every time the wrapped message changes.
"""

from __future__ import annotations

import logging
from itertools import count
from typing import Any, Callable

from mission_chatbox.messages import ChatboxMessage, MessageFactories, create_message
from mission_chatbox.models import MessageSpec, RenderEvent, Sender, coerce_spec

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[ChatboxMessage], None]
Listener = Callable[[Any], None]


class MessageContainer:
    def __init__(
        self,
        sender: Sender,
        location: str,
        message: ChatboxMessage,
        message_factories: MessageFactories,
    ) -> None:
        self._sender = Sender(sender)
        self._location = location
        self._message = message
        self._message_factories = message_factories
        self._observers: dict[int, ChangeCallback] = {}
        self._handles = count(1)

    @property
    def sender(self) -> Sender:
        return self._sender

    @property
    def location(self) -> str:
        return self._location

    @property
    def message(self) -> ChatboxMessage:
        return self._message

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def connect(self, callback: ChangeCallback) -> int:
        """Call ``callback(message)`` whenever the message changes. Returns a handle."""
        handle = next(self._handles)
        self._observers[handle] = callback
        return handle

    def disconnect(self, handle: int) -> None:
        del self._observers[handle]

    def _emit_message_changed(self) -> None:
        for callback in list(self._observers.values()):
            callback(self._message)

    # ------------------------------------------------------------------
    # Amendment
    # ------------------------------------------------------------------

    def amend(self, spec: MessageSpec | dict | None) -> bool:
        """Try to amend this bubble with a message spec.

        Specs attributed to a different sender are rejected so that they
        start a new bubble instead. Otherwise the wrapped message gets a
        chance to absorb the spec; if it refuses, it is replaced by a new
        message of ``spec.type``. Either way observers are notified once.
        """
        spec = coerce_spec(spec)
        if spec is None:
            return False

        if spec.sender != self._sender:
            logger.debug(
                "amend rejected at location=%s: sender %r != %r",
                self._location, spec.sender, self._sender,
            )
            return False

        if self._message.amend(spec):
            logger.debug("amended %r in place at location=%s", self._message, self._location)
        else:
            self._message = create_message(self._message_factories, spec)
            logger.debug("replaced message at location=%s with %r", self._location, self._message)

        self._emit_message_changed()
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def apply_event(self, event: RenderEvent) -> bool:
        """Fold a view event's amendment into this bubble, as this bubble's sender."""
        if event.amendment is None:
            return False
        amendment = event.amendment.model_copy(update={"sender": self._sender})
        return self.amend(amendment)

    def render_view(self, listener: Listener) -> Any:
        """Render the wrapped message.

        ``listener`` receives only the response of each user interaction;
        any amendment the interaction carries is applied here first.
        """
        def on_event(event: RenderEvent) -> None:
            self.apply_event(event)
            listener(event.response)

        return self._message.render(on_event)

    def __repr__(self) -> str:
        return (
            f"MessageContainer(sender={self._sender.name}, "
            f"location={self._location!r}, message={self._message!r})"
        )
