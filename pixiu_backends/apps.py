"""The sample provider applications and the command that starts one."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType

from pixiu_backends.lifecycle import SURVIVAL_TIMEOUT, signal_stream, wait_for_shutdown
from pixiu_backends.provider import UserProvider
from pixiu_backends.userdb import SEED_TIME, UserDB, seed_users

logger = logging.getLogger(__name__)

DUBBO_VERSION = "2.7.5"


@dataclass(frozen=True)
class ProviderApp:
    """Settings of one sample provider: its service names and seed data."""

    name: str
    reference: str = "UserProvider"
    java_class_name: str = "com.dubbogo.pixiu.User"
    version: str | None = None
    seed_now: bool = False

    def build(self) -> UserProvider:
        """Create a provider backed by a fresh store holding the sample users."""
        db = UserDB()
        when = datetime.now(timezone.utc) if self.seed_now else SEED_TIME
        seed_users(db, when)
        return UserProvider(db, self.reference, self.java_class_name)


APPS = MappingProxyType(
    {
        app.name: app
        for app in (
            ProviderApp("http-dubbo", version=DUBBO_VERSION),
            ProviderApp(
                "triple-proxy-dubbo",
                reference="DubboUserProvider",
                java_class_name="com.dubbogo.pixiu.DubboUserService",
            ),
            ProviderApp(
                "triple-proxy-triple",
                reference="TripleUserProvider",
                java_class_name="com.dubbogo.pixiu.TripleUserService",
            ),
            ProviderApp("proxy", version=DUBBO_VERSION),
            ProviderApp("query", version=DUBBO_VERSION),
            ProviderApp("resolve", version=DUBBO_VERSION),
            ProviderApp("uri", version=DUBBO_VERSION),
            ProviderApp("zookeeper", seed_now=True),
        )
    }
)


def build_provider(app_name: str) -> UserProvider:
    """Build the provider of the named sample application."""
    try:
        app = APPS[app_name]
    except KeyError:
        raise KeyError(f"unknown provider app: {app_name!r}") from None
    return app.build()


def main(argv: Sequence[str] | None = None) -> int:
    """Start a sample provider and run until a shutdown signal arrives."""
    parser = argparse.ArgumentParser(description="Run a sample user provider.")
    parser.add_argument("app", nargs="?", choices=sorted(APPS), help="provider to run")
    parser.add_argument("--list", action="store_true", help="list the providers and exit")
    parser.add_argument(
        "--survival-timeout",
        type=float,
        default=SURVIVAL_TIMEOUT,
        help="seconds before a forced exit after shutdown starts",
    )
    args = parser.parse_args(argv)

    if args.list:
        for name in sorted(APPS):
            print(name)
        return 0
    if args.app is None:
        parser.error("an app name is required")

    logging.basicConfig(level=logging.INFO)
    app = APPS[args.app]
    provider = app.build()
    logger.info("provider %s serving %s", provider.reference, provider.java_class_name)
    if app.version is not None:
        logger.info("dubbo version is: %s", app.version)
    with signal_stream() as signals:
        wait_for_shutdown(signals, args.survival_timeout)
    return 0