"""
Account registry: the ordered list of (secret, label) entries and the
selected index.

Invariant kept by every mutating call: `selected` is a valid index whenever
the registry is non-empty and None when it is empty. Stale indices from the
input layer are absorbed as no-ops.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional
import logging

from .otp_core import SecretLike, secret_bytes

log = logging.getLogger(__name__)


@dataclass
class Account:
    secret: bytes = field(repr=False)
    label: str
    cached_code: Optional[int] = None


class AccountRegistry:
    def __init__(self):
        self._accounts: List[Account] = []
        self.selected: Optional[int] = None

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __getitem__(self, index: int) -> Account:
        return self._accounts[index]

    def add(self, secret: SecretLike, label: str) -> Optional[int]:
        """
        Append a new account and return its index.

        An empty secret is rejected: nothing changes and None is returned.
        """
        key = secret_bytes(secret)
        if not key:
            log.debug("rejected account %r: empty secret", label)
            return None
        self._accounts.append(Account(secret=key, label=label))
        if self.selected is None:
            self.selected = 0
        log.debug("added account %r at %d", label, len(self._accounts) - 1)
        return len(self._accounts) - 1

    def remove(self, index: int) -> bool:
        if not 0 <= index < len(self._accounts):
            return False
        account = self._accounts.pop(index)
        log.debug("removed account %r", account.label)
        if not self._accounts:
            self.selected = None
        else:
            self.selected = max(0, min(self.selected, len(self._accounts) - 1))
        return True

    def remove_selected(self) -> bool:
        if self.selected is None:
            return False
        return self.remove(self.selected)

    def select(self, index: int) -> bool:
        if not 0 <= index < len(self._accounts):
            return False
        self.selected = index
        return True

    def select_next(self) -> None:
        if self._accounts:
            self.selected = (self.selected + 1) % len(self._accounts)

    def select_prev(self) -> None:
        if self._accounts:
            self.selected = (self.selected - 1) % len(self._accounts)

    def get_selected(self) -> Optional[Account]:
        if self.selected is None:
            return None
        return self._accounts[self.selected]
