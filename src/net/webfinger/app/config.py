"""
Configuration Module for the WebFinger client

Settings are loaded from environment variables through Pydantic, with defaults suitable for
running the command-line tool interactively.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Settings for the WebFinger command-line tool.

    Environment variables are mapped to settings fields by name, for example the request
    timeout can be set with the REQUEST_TIMEOUT environment variable.
    """

    debug: bool = False
    """
    Enable debug logging regardless of the -v flag.
    Set with DEBUG=true environment variable.
    """

    allow_http: bool = True
    """
    Retry over plain HTTP when the HTTPS endpoint refuses the connection.
    Set with ALLOW_HTTP environment variable.
    """

    request_timeout: float = 30.0
    """
    Total timeout in seconds for each HTTP request.
    Set with REQUEST_TIMEOUT environment variable.
    """

    user_agent: str = "webfinger-python"
    """
    User-Agent header sent with lookups.
    Set with USER_AGENT environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """
