"""
Mode/menu layer: turns key names into core intents.

UI state only (tab, menu vs. edit mode, focused field, text buffers).
The registry and countdown never live here.
"""

from enum import Enum
from typing import Optional

from .events import AddAccount, Intent, Quit, RemoveSelected, SelectNext, SelectPrev


class Tab(Enum):
    HOME = 0
    CODES = 1
    ADD = 2


class Field(Enum):
    ACCOUNT = "account"
    KEY = "key"


MENU_TITLES = ("Home", "Codes", "Add", "Delete", "Quit")


class InputController:
    def __init__(self):
        self.tab = Tab.HOME
        self.menu_keys = True
        self.field = Field.ACCOUNT
        self.account = ""
        self.key = ""

    @property
    def editing(self) -> bool:
        return not self.menu_keys

    def handle(self, key: str) -> Optional[Intent]:
        if key == "esc":
            self.menu_keys = True
            return None
        if key == "tab":
            self.field = Field.KEY if self.field is Field.ACCOUNT else Field.ACCOUNT
            return None
        if key == "enter":
            return self._submit()
        if key == "backspace":
            self._set_buffer(self._buffer()[:-1])
            return None
        if key in ("up", "down"):
            if not self.menu_keys:
                return None
            return SelectPrev() if key == "up" else SelectNext()
        if len(key) != 1:
            return None
        if self.menu_keys:
            return self._menu(key)
        self._type(key)
        return None

    def _menu(self, key: str) -> Optional[Intent]:
        if key == "q":
            return Quit()
        if key == "h":
            self.tab = Tab.HOME
        elif key == "c":
            self.tab = Tab.CODES
        elif key == "a":
            self.tab = Tab.ADD
            self.menu_keys = False
        elif key == "d":
            return RemoveSelected()
        else:
            # typing anything else starts editing
            self.menu_keys = False
            self._type(key)
        return None

    def _submit(self) -> AddAccount:
        intent = AddAccount(secret=self.key, label=self.account)
        self.account = ""
        self.key = ""
        self.field = Field.ACCOUNT
        return intent

    def _type(self, char: str) -> None:
        self._set_buffer(self._buffer() + char)

    def _buffer(self) -> str:
        return self.key if self.field is Field.KEY else self.account

    def _set_buffer(self, value: str) -> None:
        if self.field is Field.KEY:
            self.key = value
        else:
            self.account = value
