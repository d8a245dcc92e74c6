"""Chat-style dialogue state for narrative actors.

    ChatboxState        actor id -> ConversationState (created lazily)
    ConversationState   ordered MessageContainers; only the newest is amended
    MessageContainer    one bubble: fixed sender + location, swappable message
    TextMessage, ChoiceMessage, InputMessage
                        the built-in message variants

Amend protocol: a spec offered to the newest bubble is rejected when its
sender differs from the bubble's; otherwise the message absorbs it in place
(text + "scrolled"/"scroll_wait") or is replaced by a new message of
``spec.type``. Every accepted amendment notifies the bubble's observers once.
"""

# Re-export the public API so `import mission_chatbox` is enough for callers.

from .models import (  # noqa: F401
    ChoiceOption,
    ChoiceSetting,
    MessageSpec,
    RenderEvent,
    Sender,
)

from .messages import (  # noqa: F401
    DEFAULT_MESSAGE_FACTORIES,
    ChatboxMessage,
    ChoiceMessage,
    InputMessage,
    InvalidMessageSpecError,
    MessageFactories,
    TextMessage,
    UnknownMessageTypeError,
    create_message,
)

from .views import (  # noqa: F401
    ChoiceView,
    InputView,
    TextView,
)

from .container import MessageContainer  # noqa: F401

from .state import (  # noqa: F401
    ChatboxState,
    ConversationState,
)

from .service import (  # noqa: F401
    ChatboxService,
    DialogueScript,
    ScriptedService,
    ScriptError,
    ScriptNode,
    ServiceMessage,
    load_script,
)

from .dispatch import (  # noqa: F401
    make_listener,
    receive_service_message,
    respond_for_actor,
    start_conversation,
)
