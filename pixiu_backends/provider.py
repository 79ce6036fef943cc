"""User service exposed by the sample RPC providers."""

from __future__ import annotations

import time

from pixiu_backends.userdb import User, UserDB, seed_users

_GREEN_ON_BLACK = "\033[32;40m"
_RESET = "\033[0m"


class ProviderError(Exception):
    """Base class for errors reported by the user provider."""


class UserNotFoundError(ProviderError, LookupError):
    """The user asked for is not in the store."""

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)


class UserExistsError(ProviderError):
    """A user with the same name is already stored."""

    def __init__(self, message: str = "data is exist") -> None:
        super().__init__(message)


class AddUserError(ProviderError):
    """The store refused the new user."""

    def __init__(self, message: str = "add error") -> None:
        super().__init__(message)


def highlight(message: str) -> str:
    """Wrap a message in the terminal colour codes used for request logs."""
    return f"{_GREEN_ON_BLACK}{message}{_RESET}"


def _log(message: str) -> None:
    print(highlight(message))


class UserProvider:
    """Answers user queries and updates against a UserDB."""

    def __init__(
        self,
        db: UserDB | None = None,
        reference: str = "UserProvider",
        java_class_name: str = "com.dubbogo.pixiu.User",
        timeout_delay: float = 10.0,
    ) -> None:
        if db is None:
            db = UserDB()
            seed_users(db)
        self.db = db
        self.reference = reference
        self.java_class_name = java_class_name
        self.timeout_delay = timeout_delay

    def create_user(self, user: User | None) -> User:
        """Store a new user and return it."""
        _log(f"Req CreateUser data:{user!r}")
        if user is None:
            raise UserNotFoundError()
        if self.db.get_by_name(user.name) is not None:
            raise UserExistsError()
        if not self.db.add(user):
            raise AddUserError()
        return user

    def get_user_by_name(self, name: str) -> User | None:
        """Return the user with this name, or None."""
        _log(f"Req GetUserByName name:{name!r}")
        found = self.db.get_by_name(name)
        if found is not None:
            _log(f"Req GetUserByName result:{found!r}")
        return found

    def get_user_by_code(self, code: int) -> User | None:
        """Return the user with this code, or None."""
        _log(f"Req GetUserByCode name:{code!r}")
        found = self.db.get_by_code(code)
        if found is not None:
            _log(f"Req GetUserByCode result:{found!r}")
        return found

    def get_user_timeout(self, name: str) -> User | None:
        """Look a user up by name after a deliberate delay."""
        _log(f"Req GetUserByName name:{name!r}")
        time.sleep(self.timeout_delay)
        found = self.db.get_by_name(name)
        if found is not None:
            _log(f"Req GetUserByName result:{found!r}")
        return found

    def get_user_by_name_and_age(self, name: str, age: int) -> User | None:
        """Return the user with this name; the age is only checked for logging."""
        _log(f"Req GetUserByNameAndAge name:{name}, age:{age}")
        found = self.db.get_by_name(name)
        if found is not None and found.age == age:
            _log(f"Req GetUserByNameAndAge result:{found!r}")
        return found

    def update_user(self, user: User) -> bool:
        """Update the stored user that has the same name."""
        _log(f"Req UpdateUser data:{user!r}")
        return self._apply_update(user.name, user)

    def update_user_by_name(self, name: str, user: User) -> bool:
        """Update the stored user with the given name from the given fields."""
        _log(f"Req UpdateUserByName data:{user!r}")
        return self._apply_update(name, user)

    def _apply_update(self, name: str, changes: User) -> bool:
        stored = self.db.get_by_name(name)
        if stored is None:
            raise UserNotFoundError()
        if changes.id:
            stored.id = changes.id
        if changes.age >= 0:
            stored.age = changes.age
        return True