"""In-memory user store indexed by name and by code."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

SEED_TIME = datetime(2021, 8, 1, 10, 8, 41, tzinfo=timezone.utc)

_ZERO_TIME = "0001-01-01T00:00:00Z"


def _format_time(when: datetime | None) -> str:
    """Render a timestamp as RFC 3339 text, with trailing fraction zeros dropped."""
    if when is None:
        return _ZERO_TIME
    text = when.strftime("%Y-%m-%dT%H:%M:%S")
    if when.microsecond:
        text += "." + f"{when.microsecond:06d}".rstrip("0")
    offset = when.utcoffset()
    if offset is None or offset == timedelta(0):
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass
class User:
    """A user record as served by the sample providers."""

    id: str = ""
    code: int = 0
    name: str = ""
    age: int = 0
    time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty id, code, name and age."""
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        if self.code:
            data["code"] = self.code
        if self.name:
            data["name"] = self.name
        if self.age:
            data["age"] = self.age
        data["time"] = _format_time(self.time)
        return data


class UserDB:
    """Thread-safe store of users, unique by name and by positive code."""

    def __init__(self) -> None:
        self._by_name: dict[str, User] = {}
        self._by_code: dict[int, User] = {}
        self._lock = threading.RLock()

    def add(self, user: User) -> bool:
        """Store the user if its name and code are valid and both unused."""
        with self._lock:
            if not user.name or user.code <= 0:
                return False
            if user.name in self._by_name or user.code in self._by_code:
                return False
            return self.add_for_name(user) and self.add_for_code(user)

    def add_for_name(self, user: User) -> bool:
        """Index the user by name only; refuse an empty or taken name."""
        with self._lock:
            if not user.name or user.name in self._by_name:
                return False
            self._by_name[user.name] = user
            return True

    def add_for_code(self, user: User) -> bool:
        """Index the user by code only; refuse a non-positive or taken code."""
        with self._lock:
            if user.code <= 0 or user.code in self._by_code:
                return False
            self._by_code[user.code] = user
            return True

    def get_by_name(self, name: str) -> User | None:
        """Return the user with this name, or None."""
        with self._lock:
            return self._by_name.get(name)

    def get_by_code(self, code: int) -> User | None:
        """Return the user with this code, or None."""
        with self._lock:
            return self._by_code.get(code)


def seed_users(db: UserDB, when: datetime | None = SEED_TIME) -> list[User]:
    """Add the two sample users to the store and return those that were added."""
    users = [
        User(id="0001", code=1, name="tc", age=18, time=when),
        User(id="0002", code=2, name="ic", age=88, time=when),
    ]
    return [user for user in users if db.add(user)]