from unittest import mock

import pytest

from pixiu_backends.provider import (
    AddUserError,
    ProviderError,
    UserExistsError,
    UserNotFoundError,
    UserProvider,
    highlight,
)
from pixiu_backends.userdb import User, UserDB, seed_users


@pytest.fixture
def provider():
    db = UserDB()
    seed_users(db)
    return UserProvider(db, "UserProvider", "com.dubbogo.pixiu.User", 0)


def test_get_user_by_name(provider):
    user = provider.get_user_by_name("tc")
    assert user.id == "0001"
    assert user.age == 18


def test_get_user_by_name_missing(provider):
    assert provider.get_user_by_name("nobody") is None


def test_get_user_by_code(provider):
    assert provider.get_user_by_code(1).id == "0001"
    assert provider.get_user_by_code(2).name == "ic"


def test_get_user_by_code_missing(provider):
    assert provider.get_user_by_code(42) is None


def test_get_user_by_name_and_age_ignores_mismatched_age(provider):
    user = provider.get_user_by_name_and_age("tc", 99)
    assert user.id == "0001"
    assert user.age == 18


def test_get_user_by_name_and_age_missing(provider):
    assert provider.get_user_by_name_and_age("nobody", 1) is None


def test_update_user_by_name(provider):
    changes = User(id="0001", code=1, name="tc", age=15)
    assert provider.update_user_by_name("tc", changes) is True
    stored = provider.get_user_by_name("tc")
    assert stored.age == 15
    assert provider.get_user_by_code(1).age == 15


def test_update_user_keeps_id_when_empty(provider):
    assert provider.update_user(User(name="ic", age=40)) is True
    stored = provider.get_user_by_name("ic")
    assert stored.id == "0002"
    assert stored.age == 40


def test_update_user_changes_id(provider):
    provider.update_user(User(id="9999", name="tc", age=18))
    assert provider.get_user_by_name("tc").id == "9999"


def test_update_missing_user_raises(provider):
    with pytest.raises(UserNotFoundError, match="not found"):
        provider.update_user(User(name="ghost", age=3))
    with pytest.raises(UserNotFoundError):
        provider.update_user_by_name("ghost", User(age=3))


def test_create_user(provider):
    new = User(id="0003", code=3, name="px", age=5)
    assert provider.create_user(new) is new
    assert provider.get_user_by_code(3) is new


def test_create_user_none(provider):
    with pytest.raises(UserNotFoundError):
        provider.create_user(None)


def test_create_existing_name(provider):
    with pytest.raises(UserExistsError, match="data is exist"):
        provider.create_user(User(id="x", code=7, name="tc"))


def test_create_duplicate_code(provider):
    with pytest.raises(AddUserError, match="add error"):
        provider.create_user(User(id="x", code=1, name="fresh"))
    assert provider.get_user_by_name("fresh") is None


def test_create_invalid_user(provider):
    with pytest.raises(ProviderError):
        provider.create_user(User(id="x", code=0, name="zero"))


def test_get_user_timeout_sleeps_then_answers():
    db = UserDB()
    seed_users(db)
    slow = UserProvider(db, "UserProvider", "com.dubbogo.pixiu.User", 2.5)
    with mock.patch("time.sleep") as sleep:
        user = slow.get_user_timeout("tc")
    sleep.assert_called_once_with(2.5)
    assert user.id == "0001"


def test_defaults():
    default = UserProvider()
    assert default.reference == "UserProvider"
    assert default.java_class_name == "com.dubbogo.pixiu.User"
    assert default.timeout_delay == 10.0
    assert default.get_user_by_name("tc").id == "0001"


def test_triple_and_dubbo_names():
    triple = UserProvider(None, "TripleUserProvider", "com.dubbogo.pixiu.TripleUserService", 0)
    dubbo = UserProvider(None, "DubboUserProvider", "com.dubbogo.pixiu.DubboUserService", 0)
    assert triple.get_user_by_name("tc").id == "0001"
    assert dubbo.get_user_by_name("tc").id == "0001"
    assert triple.reference == "TripleUserProvider"
    assert dubbo.java_class_name == "com.dubbogo.pixiu.DubboUserService"


def test_highlight():
    assert highlight("hi") == "\033[32;40mhi\033[0m"


def test_requests_are_logged(provider, capsys):
    provider.get_user_by_code(1)
    out = capsys.readouterr().out
    assert "\033[32;40mReq GetUserByCode name:1\033[0m" in out
    assert "Req GetUserByCode result:" in out