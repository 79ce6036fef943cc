from datetime import datetime, timedelta, timezone

import pytest

from pixiu_backends.apps import APPS, DUBBO_VERSION, ProviderApp, build_provider, main
from pixiu_backends.userdb import SEED_TIME


@pytest.mark.parametrize("name", ["query", "uri", "proxy", "resolve"])
def test_get_user_by_name(name):
    provider = build_provider(name)
    assert provider.get_user_by_name("tc").id == "0001"


@pytest.mark.parametrize("name", ["query", "uri", "proxy", "resolve"])
def test_get_user_by_code(name):
    provider = build_provider(name)
    assert provider.get_user_by_code(1).id == "0001"


@pytest.mark.parametrize("name", ["query", "uri"])
def test_get_user_by_name_and_age_ignores_age(name):
    provider = build_provider(name)
    assert provider.get_user_by_name_and_age("tc", 99).id == "0001"


def test_triple_apps_service_names():
    dubbo = build_provider("triple-proxy-dubbo")
    triple = build_provider("triple-proxy-triple")
    assert dubbo.reference == "DubboUserProvider"
    assert dubbo.java_class_name == "com.dubbogo.pixiu.DubboUserService"
    assert triple.reference == "TripleUserProvider"
    assert triple.java_class_name == "com.dubbogo.pixiu.TripleUserService"


def test_default_service_names():
    provider = build_provider("uri")
    assert provider.reference == "UserProvider"
    assert provider.java_class_name == "com.dubbogo.pixiu.User"


def test_versions():
    assert build_provider("query").get_user_by_name("tc").id == "0001"
    assert build_provider("zookeeper").get_user_by_code(2).name == "ic"
    assert APPS["query"].version == "2.7.5"
    assert APPS["zookeeper"].version is None
    assert APPS["proxy"].version == DUBBO_VERSION


def test_seed_time_fixed():
    provider = build_provider("resolve")
    assert provider.get_user_by_name("ic").time == SEED_TIME


def test_zookeeper_seeds_current_time():
    before = datetime.now(timezone.utc)
    provider = build_provider("zookeeper")
    seeded = provider.get_user_by_name("tc").time
    assert before - timedelta(seconds=1) <= seeded <= datetime.now(timezone.utc)


def test_builds_are_independent():
    first = build_provider("query")
    second = build_provider("query")
    first.update_user_by_name("tc", first.get_user_by_name("tc").__class__(id="9", age=15))
    assert first.get_user_by_name("tc").age == 15
    assert second.get_user_by_name("tc").age == 18


def test_custom_app_build():
    app = ProviderApp("custom", reference="Custom")
    provider = app.build()
    assert provider.reference == "Custom"
    assert provider.get_user_by_code(2).name == "ic"


def test_unknown_app():
    with pytest.raises(KeyError):
        build_provider("missing")


def test_main_list(capsys):
    assert main(["--list"]) == 0
    lines = capsys.readouterr().out.split()
    assert lines == sorted(APPS)


def test_main_rejects_unknown_app():
    with pytest.raises(SystemExit) as info:
        main(["missing"])
    assert info.value.code == 2


def test_main_requires_app():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2