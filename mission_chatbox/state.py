"""Conversation and chatbox state.

    ChatboxState
      conversations: {actor -> ConversationState}   created lazily, never removed
        ConversationState
          [MessageContainer, ...]                   append-only; only the last
                                                    bubble is ever amended

The "location" of a conversation is the story position of its newest bubble.
It tells the dialogue service where to continue from; ``None`` means the
story for that actor has not started yet.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from mission_chatbox.container import MessageContainer
from mission_chatbox.messages import DEFAULT_MESSAGE_FACTORIES, MessageFactories, create_message
from mission_chatbox.models import MessageSpec, Sender, coerce_spec

logger = logging.getLogger(__name__)


class ConversationState:
    """The bubbles exchanged with a single actor, oldest first."""

    def __init__(self, message_factories: MessageFactories) -> None:
        self._conversation: list[MessageContainer] = []
        self._message_factories = message_factories

    def __len__(self) -> int:
        return len(self._conversation)

    def with_each_message_container(self, visitor: Callable[[MessageContainer], Any]) -> None:
        """Pass each container to ``visitor``, front to back.

        Visitors typically build views; they must not change state directly.
        All mutation goes through ``amend_last_message``.
        """
        for container in self._conversation:
            visitor(container)

    def add_from_service(
        self,
        sender: Sender,
        spec: MessageSpec | dict[str, Any],
        location: str,
    ) -> MessageContainer:
        """Append a new bubble built from ``spec``. Never merges with the last one."""
        spec = coerce_spec(spec)
        container = MessageContainer(
            sender=sender,
            location=location,
            message=create_message(self._message_factories, spec),
            message_factories=self._message_factories,
        )
        self._conversation.append(container)
        logger.debug("appended %r", container)
        return container

    def amend_last_message(self, spec: MessageSpec | dict[str, Any] | None) -> bool:
        """Amend the newest bubble. False if there is none or it refused."""
        if not self._conversation:
            return False
        return self._conversation[-1].amend(spec)

    def last_message_container(self) -> MessageContainer | None:
        if not self._conversation:
            return None
        return self._conversation[-1]

    def current_location(self) -> str | None:
        if not self._conversation:
            return None
        return self._conversation[-1].location


class ChatboxState:
    """Every actor's conversation, keyed by actor id."""

    def __init__(self, message_factories: MessageFactories | None = None) -> None:
        self.conversations: dict[str, ConversationState] = {}
        self._message_factories = (
            message_factories if message_factories is not None else DEFAULT_MESSAGE_FACTORIES
        )

    def load_conversations_for_actor(self, actor: str) -> None:
        if actor in self.conversations:
            return
        self.conversations[actor] = ConversationState(self._message_factories)
        logger.debug("created conversation for actor=%s", actor)

    def conversation_for_actor(self, actor: str) -> ConversationState:
        self.load_conversations_for_actor(actor)
        return self.conversations[actor]

    def actors(self) -> list[str]:
        return list(self.conversations)

    def conversation_position_for_actor(self, actor: str) -> str | None:
        return self.conversation_for_actor(actor).current_location()

    def add_message_for_actor(
        self,
        actor: str,
        sender: Sender,
        spec: MessageSpec | dict[str, Any],
        location: str,
    ) -> MessageContainer:
        return self.conversation_for_actor(actor).add_from_service(sender, spec, location)

    def amend_last_message_for_actor(
        self,
        actor: str,
        sender: Sender,
        spec: MessageSpec | dict[str, Any] | None,
    ) -> bool:
        """Amend the actor's newest bubble, attributing ``spec`` to ``sender``.

        Any sender already on ``spec`` is overwritten. The stamped value is a
        copy; the caller's spec is left untouched.
        """
        conversation = self.conversation_for_actor(actor)
        spec = coerce_spec(spec)
        if spec is None:
            return False
        stamped = spec.model_copy(update={"sender": Sender(sender)})
        return conversation.amend_last_message(stamped)
