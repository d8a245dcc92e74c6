"""View descriptions produced by message variants.

A view is a plain description of what to draw plus the interactions the
view layer may trigger. Widget construction lives outside this package; a
toolkit binding reads the fields and calls the interaction methods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from mission_chatbox.models import ChoiceOption, MessageSpec, RenderEvent

EventCallback = Callable[[RenderEvent], None]


@dataclass
class TextView:
    text: str
    on_event: EventCallback = field(repr=False)
    kind: str = "text"

    def acknowledge(self, response: Any = None) -> None:
        """Report that the user has read the text (e.g. clicked to continue)."""
        self.on_event(RenderEvent(response=response))


@dataclass
class ChoiceView:
    choices: list[ChoiceOption]
    on_event: EventCallback = field(repr=False)
    kind: str = "choice"

    def select(self, name: str) -> None:
        """Pick an option by name.

        The bubble collapses into a text bubble holding the chosen label, and
        the option name is sent on as the response.
        """
        for option in self.choices:
            if option.name == name:
                break
        else:
            raise ValueError(f"Unknown choice {name!r}")
        self.on_event(RenderEvent(
            response=option.name,
            amendment=MessageSpec(type="text", text=option.label),
        ))


@dataclass
class InputView:
    text: str
    on_event: EventCallback = field(repr=False)
    kind: str = "input"

    def submit(self, value: str) -> None:
        self.on_event(RenderEvent(
            response=value,
            amendment=MessageSpec(type="text", text=value),
        ))


MessageView = TextView | ChoiceView | InputView
