"""Dispatch: routes dialogue-service output and user responses through the state.

Flow for one actor:
  1. start_conversation() fetches the opening messages when the actor's
     conversation is still empty.
  2. Each service message goes through receive_service_message():
       actor scroll output at the current location -> amend the newest bubble
       anything else                               -> append a new bubble
  3. The view renders each bubble with a listener from make_listener().
     When the user answers, the bubble amends itself (see
     MessageContainer.render_view) and the listener passes the response to
     the service via respond_for_actor(); follow-ups go back to step 2.

The functions return the containers they appended so a view layer can
render them. Amended bubbles report through their own change notification.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from mission_chatbox.container import Listener, MessageContainer
from mission_chatbox.messages import SCROLL_TYPES
from mission_chatbox.models import Sender
from mission_chatbox.service import ChatboxService, ServiceMessage
from mission_chatbox.state import ChatboxState

logger = logging.getLogger(__name__)


def receive_service_message(
    chatbox: ChatboxState, service_message: ServiceMessage
) -> MessageContainer | None:
    """Fold one service message into the actor's conversation.

    Returns the new container, or None when the message amended the
    newest bubble in place.
    """
    actor = service_message.actor
    spec = service_message.message
    location = service_message.location

    if (
        service_message.sender == Sender.ACTOR
        and spec.type in SCROLL_TYPES
        and chatbox.conversation_position_for_actor(actor) == location
        and chatbox.amend_last_message_for_actor(actor, Sender.ACTOR, spec)
    ):
        logger.debug("actor=%s amended bubble at location=%s", actor, location)
        return None

    container = chatbox.add_message_for_actor(actor, service_message.sender, spec, location)
    logger.debug("actor=%s new %s bubble at location=%s", actor, container.sender.name, location)
    return container


def _route(chatbox: ChatboxState, messages: list[ServiceMessage]) -> list[MessageContainer]:
    added: list[MessageContainer] = []
    for service_message in messages:
        container = receive_service_message(chatbox, service_message)
        if container is not None:
            added.append(container)
    return added


def start_conversation(
    chatbox: ChatboxState, service: ChatboxService, actor: str
) -> list[MessageContainer]:
    """Fetch the actor's opening messages. No-op once the story has started."""
    if chatbox.conversation_position_for_actor(actor) is not None:
        return []
    return _route(chatbox, service.fetch(actor, None))


def respond_for_actor(
    chatbox: ChatboxState,
    service: ChatboxService,
    actor: str,
    location: str,
    response: Any,
) -> list[MessageContainer]:
    """Send a user response for the bubble at ``location`` and route the reply."""
    logger.debug("actor=%s response %r at location=%s", actor, response, location)
    return _route(chatbox, service.respond(actor, location, response))


def make_listener(
    chatbox: ChatboxState,
    service: ChatboxService,
    actor: str,
    location: str,
    on_added: Callable[[MessageContainer], Any] | None = None,
) -> Listener:
    """Build the listener a view passes to ``MessageContainer.render_view``.

    ``on_added`` is called with every bubble the service's reply appends.
    A None response (e.g. plain acknowledgement of text) is not forwarded.
    """
    def listener(response: Any) -> None:
        if response is None:
            return
        for container in respond_for_actor(chatbox, service, actor, location, response):
            if on_added is not None:
                on_added(container)

    return listener
