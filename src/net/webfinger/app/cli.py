import os
import sys
import logging
from logging.config import dictConfig
import json

from aiohttp import ClientSession, ClientTimeout, hdrs
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from net.webfinger.app.config import Settings


def configure_logging(verbose: bool = False) -> None:
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig(stream=sys.stderr, format="%(message)s")
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.WARNING)


def configure_sentry(settings: Settings) -> None:
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            integrations=[AioHttpIntegration()],
        )


def create_session(settings: Settings) -> ClientSession:
    """Create the HTTP session used for lookups, applying the configured timeout."""
    return ClientSession(
        timeout=ClientTimeout(total=settings.request_timeout),
        headers={hdrs.USER_AGENT: settings.user_agent},
    )
