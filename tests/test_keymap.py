"""Mode/menu layer tests."""

from __future__ import annotations

import pytest

from otp_tui.events import AddAccount, Quit, RemoveSelected, SelectNext, SelectPrev
from otp_tui.keymap import Field, InputController, Tab


def _feed(controller: InputController, keys) -> list:
    return [controller.handle(k) for k in keys]


def test_menu_keys() -> None:
    ctl = InputController()
    assert ctl.handle("c") is None
    assert ctl.tab is Tab.CODES
    assert ctl.handle("down") == SelectNext()
    assert ctl.handle("up") == SelectPrev()
    assert ctl.handle("d") == RemoveSelected()
    assert ctl.handle("h") is None
    assert ctl.tab is Tab.HOME
    assert ctl.handle("q") == Quit()


def test_add_flow_builds_intent_and_clears_buffers() -> None:
    ctl = InputController()
    ctl.handle("a")
    assert ctl.tab is Tab.ADD
    assert ctl.editing

    _feed(ctl, list("Alice"))
    ctl.handle("tab")
    _feed(ctl, list("secretA"))
    intent = ctl.handle("enter")

    assert intent == AddAccount(secret="secretA", label="Alice")
    assert ctl.account == ""
    assert ctl.key == ""
    assert ctl.field is Field.ACCOUNT


def test_menu_letters_are_text_while_editing() -> None:
    ctl = InputController()
    ctl.handle("a")
    results = _feed(ctl, list("qhcad"))
    assert results == [None] * 5
    assert ctl.account == "qhcad"


def test_backspace_edits_focused_buffer() -> None:
    ctl = InputController()
    ctl.handle("a")
    _feed(ctl, list("ab"))
    ctl.handle("tab")
    _feed(ctl, list("xyz"))
    ctl.handle("backspace")
    assert (ctl.account, ctl.key) == ("ab", "xy")


def test_other_char_in_menu_starts_editing() -> None:
    ctl = InputController()
    assert ctl.handle("z") is None
    assert ctl.editing
    assert ctl.account == "z"


def test_esc_returns_to_menu() -> None:
    ctl = InputController()
    ctl.handle("a")
    ctl.handle("esc")
    assert not ctl.editing
    assert ctl.handle("q") == Quit()


@pytest.mark.parametrize("key", ["up", "down", "left", "right"])
def test_arrows_ignored_while_editing(key: str) -> None:
    ctl = InputController()
    ctl.handle("a")
    assert ctl.handle(key) is None
