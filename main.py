"""Mission Chatbox: console launcher. Replays a dialogue script in the terminal."""

import argparse
import sys
from collections import deque
from pathlib import Path

from mission_chatbox.config import configure_logging, get_config
from mission_chatbox.container import MessageContainer
from mission_chatbox.dispatch import make_listener, start_conversation
from mission_chatbox.messages import ChatboxMessage
from mission_chatbox.models import Sender
from mission_chatbox.service import ScriptedService, ScriptError
from mission_chatbox.state import ChatboxState
from mission_chatbox.views import ChoiceView, InputView, TextView


def _speaker(container: MessageContainer, actor: str) -> str:
    return "You" if container.sender == Sender.USER else actor


def _print_text(speaker: str, text: str) -> None:
    for line in text.splitlines() or [""]:
        print(f"{speaker}: {line}")


def _present(view, speaker: str) -> None:
    if isinstance(view, TextView):
        _print_text(speaker, view.text)
        view.acknowledge()
    elif isinstance(view, ChoiceView):
        for i, option in enumerate(view.choices, start=1):
            print(f"  {i}. {option.label}")
        while True:
            raw = input("> ").strip()
            if raw.isdigit() and 1 <= int(raw) <= len(view.choices):
                view.select(view.choices[int(raw) - 1].name)
                return
            print(f"Pick a number between 1 and {len(view.choices)}.")
    elif isinstance(view, InputView):
        view.submit(input(f"{view.text} > " if view.text else "> "))
    else:
        print(f"[unsupported bubble {view!r}]")


def run(chatbox: ChatboxState, service: ScriptedService, actor: str) -> None:
    pending: deque[MessageContainer] = deque(start_conversation(chatbox, service, actor))

    while pending:
        container = pending.popleft()
        speaker = _speaker(container, actor)

        def on_changed(message: ChatboxMessage, speaker: str = speaker) -> None:
            view = message.render(lambda event: None)
            if isinstance(view, TextView):
                _print_text(speaker, view.text)

        handle = container.connect(on_changed)
        listener = make_listener(
            chatbox, service, actor, container.location, on_added=pending.append,
        )
        _present(container.render_view(listener), speaker)
        container.disconnect(handle)


def main():
    config = get_config()
    parser = argparse.ArgumentParser(description="Mission Chatbox console")
    parser.add_argument("--script", type=Path, default=config["script"],
                        help="Dialogue script (JSON); default: $CHATBOX_SCRIPT")
    parser.add_argument("--actor", default=config["actor"],
                        help="Actor the script belongs to (default: %(default)s)")
    parser.add_argument("--log-level", default=config["log_level"],
                        help="Logging level (default: %(default)s)")
    args = parser.parse_args()

    if args.script is None:
        parser.error("no dialogue script given (use --script or CHATBOX_SCRIPT)")

    configure_logging(args.log_level)

    try:
        service = ScriptedService.from_file(args.actor, args.script)
        run(ChatboxState(), service, args.actor)
    except ScriptError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (EOFError, KeyboardInterrupt):
        print("\nBye.")


if __name__ == "__main__":
    main()
