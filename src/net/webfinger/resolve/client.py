"""WebFinger lookup client.

Resolves identifiers to JRD documents by querying the well-known WebFinger endpoint of the
identifier's host over an aiohttp ClientSession.
"""

from abc import abstractmethod
import asyncio
import errno
import logging
from typing import Any, Optional, Protocol, Sequence, Union

from aiohttp import (
    ClientConnectorError,
    ClientError,
    ClientSession,
    ClientSSLError,
    hdrs,
)
import sentry_sdk
from yarl import URL

from net.webfinger.errors import HTTPStatusError, TransportError
from net.webfinger.model.jrd import JRD, JRD_MEDIA_TYPE, parse_jrd
from net.webfinger.resolve.resource import Resource, jrd_url, parse

class _LoggerStub(Protocol):
    """_Logger defines which methods logger object should have."""

    @abstractmethod
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        pass


_LoggerType = Union[_LoggerStub, logging.Logger]


def insecure_fallback_candidate(error: BaseException) -> bool:
    """Check if a failed HTTPS request may be retried over plain HTTP.

    Only refused connections and TLS negotiation failures qualify. Some hosting
    environments report an unreachable HTTPS port as "ssl_certificate_error", so that
    text is accepted as well.

    Args:
        error: Exception raised by the HTTPS attempt

    Returns:
        True if the error is a connection refusal or a TLS failure
    """
    if isinstance(error, ClientSSLError):
        return True
    if not isinstance(error, ClientConnectorError):
        return False
    if error.errno == errno.ECONNREFUSED:
        return True
    message = str(error).lower()
    return "connection refused" in message or "ssl_certificate_error" in message


class Client:
    """A WebFinger client.

    Holds no per-lookup state, so one instance can serve concurrent lookups as long as
    the session it was given can.

    Args:
        session: HTTP session used for lookups. When omitted, every lookup opens and
            closes its own session.
        allow_http: Allow retrying over plain HTTP when the HTTPS endpoint refuses the
            connection. WebFinger requires HTTPS, so this should only be enabled for
            development.
        logger: Logger used while fetching. Defaults to this module's logger.
    """

    def __init__(
        self,
        session: Optional[ClientSession] = None,
        allow_http: bool = False,
        logger: Optional[_LoggerType] = None,
    ) -> None:
        self._session = session
        self.allow_http = allow_http
        self._logger: _LoggerType = (
            logger if logger is not None else logging.getLogger(__name__)
        )

    async def lookup(self, identifier: str, rels: Optional[Sequence[str]] = None) -> JRD:
        """Return the JRD for an identifier.

        If rels are provided only those link relations are requested, though servers
        are not obligated to honor that.

        Raises:
            MalformedIdentifier: If the identifier cannot be parsed
            TransportError: If the request could not be completed
            HTTPStatusError: If the server answered with a non-2xx status
            DecodeError: If the response is not a valid JRD
        """
        resource = parse(identifier)
        return await self.lookup_resource(resource, rels)

    async def lookup_resource(
        self, resource: Resource, rels: Optional[Sequence[str]] = None
    ) -> JRD:
        """Return the JRD for an already parsed Resource."""
        self._logger.debug("Looking up WebFinger data for %s", resource)

        url = jrd_url(resource, rels)
        if self._session is not None:
            return await self._fetch_jrd(self._session, url)

        async with ClientSession() as session:
            return await self._fetch_jrd(session, url)

    async def _fetch_jrd(self, session: ClientSession, url: URL) -> JRD:
        try:
            return await self._get_jrd(session, url)
        except (ClientError, asyncio.TimeoutError) as e:
            if not (self.allow_http and insecure_fallback_candidate(e)):
                raise TransportError.from_client_error(url, e) from e
            sentry_sdk.capture_exception(e)
            self._logger.warning("HTTPS lookup failed, retrying over HTTP: %s", e)

        url = url.with_scheme("http")
        try:
            return await self._get_jrd(session, url)
        except (ClientError, asyncio.TimeoutError) as e:
            raise TransportError.from_client_error(url, e) from e

    async def _get_jrd(self, session: ClientSession, url: URL) -> JRD:
        self._logger.debug("GET %s", url)
        # Redirects are followed by the session.
        async with session.get(url, headers={hdrs.ACCEPT: JRD_MEDIA_TYPE}) as resp:
            if not (200 <= resp.status < 300):
                raise HTTPStatusError(resp.status, resp.reason or "")
            content = await resp.read()
        return parse_jrd(content)


DEFAULT_CLIENT = Client()
"""The default Client, used by lookup"""


async def lookup(identifier: str, rels: Optional[Sequence[str]] = None) -> JRD:
    """Return the JRD for an identifier using DEFAULT_CLIENT."""
    return await DEFAULT_CLIENT.lookup(identifier, rels)
