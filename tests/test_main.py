"""Tests for the console launcher replaying the demo script."""

import sys
from unittest.mock import patch

import pytest

import main
from conftest import DEMO_SCRIPT
from mission_chatbox.messages import TextMessage
from mission_chatbox.models import Sender
from mission_chatbox.service import ScriptedService
from mission_chatbox.state import ChatboxState


def _feed(*answers: str):
    return patch("builtins.input", side_effect=list(answers))


def test_run_choice_branch(chatbox: ChatboxState, service: ScriptedService, capsys) -> None:
    with _feed("2"):
        main.run(chatbox, service, "riley")
    out = capsys.readouterr().out
    assert "riley: Hey! Over here." in out
    assert "riley: I could use a hand with something." in out
    assert "You: Not now." in out
    assert "riley: Fine, I'll ask someone else." in out
    assert chatbox.conversation_position_for_actor("riley") == "goodbye"


def test_run_input_branch(chatbox: ChatboxState, service: ScriptedService, capsys) -> None:
    with _feed("1", "4711"):
        main.run(chatbox, service, "riley")
    out = capsys.readouterr().out
    assert "You: 4711" in out
    assert "riley: That did it. Thanks!" in out

    seen = []
    chatbox.conversation_for_actor("riley").with_each_message_container(seen.append)
    assert all(isinstance(c.message, TextMessage) for c in seen)
    assert [c.location for c in seen] == ["intro", "intro", "task", "task", "thanks"]


def test_run_retries_invalid_choice(chatbox: ChatboxState, service: ScriptedService, capsys) -> None:
    with _feed("9", "x", "2"):
        main.run(chatbox, service, "riley")
    assert "Pick a number between 1 and 2." in capsys.readouterr().out


def test_main_requires_script(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHATBOX_SCRIPT", raising=False)
    monkeypatch.setattr(sys, "argv", ["main.py"])
    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 2


def test_main_missing_script_file(monkeypatch: pytest.MonkeyPatch, tmp_path, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["main.py", "--script", str(tmp_path / "nope.json")])
    monkeypatch.setattr(main, "configure_logging", lambda level: None)
    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 1
    assert "Cannot read dialogue script" in capsys.readouterr().err


def test_main_replays_script(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(
        sys, "argv", ["main.py", "--script", str(DEMO_SCRIPT), "--actor", "riley"],
    )
    monkeypatch.setattr(main, "configure_logging", lambda level: None)
    with _feed("2"):
        main.main()
    assert "riley: Fine, I'll ask someone else." in capsys.readouterr().out


def test_run_stops_echoing_bubbles_after_they_are_shown(
    chatbox: ChatboxState, service: ScriptedService, capsys,
) -> None:
    with _feed("2"):
        main.run(chatbox, service, "riley")
    capsys.readouterr()

    assert chatbox.amend_last_message_for_actor(
        "riley", Sender.ACTOR, {"type": "scrolled", "text": "Later."}
    ) is True
    assert capsys.readouterr().out == ""
