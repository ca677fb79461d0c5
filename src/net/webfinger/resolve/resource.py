"""WebFinger resource parsing and query URL construction.

Normalizes URLs and email-like account identifiers into Resource values, derives the host
that answers WebFinger queries for a Resource, and builds the well-known query URL.
"""

import re
from enum import IntEnum
from typing import Optional, Sequence
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict
from yarl import URL

from net.webfinger.errors import MalformedIdentifier

WELL_KNOWN_PATH = "/.well-known/webfinger"

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_INVALID_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_HOST_INVALID_RE = re.compile(r"[\s<>\"{}|\\^`]")
_HOST_PORT_RE = re.compile(r"(\[[^\]]*\]|[^:\[\]]*)(:[0-9]*)?")
_AUTHORITY_DELIM_RE = re.compile(r"[@/?#]")


class SchemeType(IntEnum):
    """URI schemes with their own WebFinger host derivation rules.

    Every other scheme falls into `other` and only yields a host when the URI has an
    explicit authority.
    """

    acct = 1
    mailto = 2
    other = 3

    @staticmethod
    def from_scheme(scheme: str) -> "SchemeType":
        if scheme == "acct":
            return SchemeType.acct
        elif scheme == "mailto":
            return SchemeType.mailto
        return SchemeType.other


class Resource(BaseModel):
    """A resource for which a WebFinger query can be issued.

    Components are stored exactly as they appeared in the parsed text (escapes included),
    so the string form reproduces the original identifier.
    """

    model_config = ConfigDict(frozen=True)

    scheme: str
    opaque: str = ""
    user: str = ""
    host: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""
    has_authority: bool = False

    @property
    def scheme_type(self) -> SchemeType:
        return SchemeType.from_scheme(self.scheme)

    def __str__(self) -> str:
        parts = [self.scheme, ":"]
        if self.opaque:
            parts.append(self.opaque)
        else:
            if self.has_authority:
                parts.append("//")
                if self.user:
                    parts.append(f"{self.user}@")
                parts.append(self.host)
            parts.append(self.path)
        if self.query:
            parts.append(f"?{self.query}")
        if self.fragment:
            parts.append(f"#{self.fragment}")
        return "".join(parts)


def _check_escapes(raw: str, component: str) -> None:
    if _INVALID_ESCAPE_RE.search(component):
        raise MalformedIdentifier.invalid_escape(raw)


def _check_host(raw: str, host: str) -> None:
    _check_escapes(raw, host)
    if _HOST_INVALID_RE.search(host):
        raise MalformedIdentifier.invalid_character(raw)
    if _HOST_PORT_RE.fullmatch(host) is None:
        raise MalformedIdentifier.invalid_port(raw)


def parse(raw: str) -> Resource:
    """Parse an identifier into a WebFinger Resource.

    The identifier should be an absolute URI, or an email-like identifier such as
    "bob@example.com", which is treated as "acct:bob@example.com".

    Args:
        raw: Identifier text

    Returns:
        Resource with a non-empty scheme

    Raises:
        MalformedIdentifier: If the text is not an absolute URI or an email-like identifier
    """
    if _CONTROL_RE.search(raw):
        raise MalformedIdentifier.invalid_character(raw)

    rest, _, fragment = raw.partition("#")
    _check_escapes(raw, fragment)

    match = _SCHEME_RE.match(rest)
    if match is None:
        path, _, _ = rest.partition("?")
        _check_escapes(raw, path)
        if ":" in path.split("/", 1)[0]:
            raise MalformedIdentifier.colon_in_first_segment(raw)

        _, at, _ = raw.partition("@")
        if not at:
            raise MalformedIdentifier.not_absolute(raw)
        return parse(f"acct:{raw}")

    scheme = rest[: match.end() - 1].lower()
    rest, _, query = rest[match.end() :].partition("?")

    # Rootless remainders are opaque and kept verbatim.
    if not rest.startswith("/"):
        return Resource(scheme=scheme, opaque=rest, query=query, fragment=fragment)

    user = ""
    host = ""
    has_authority = rest.startswith("//")
    if has_authority:
        authority, slash, path = rest[2:].partition("/")
        path = slash + path
        user, _, host = authority.rpartition("@")
        _check_host(raw, host)
    else:
        path = rest
    _check_escapes(raw, path)

    return Resource(
        scheme=scheme,
        user=user,
        host=host,
        path=path,
        query=query,
        fragment=fragment,
        has_authority=has_authority,
    )


def webfinger_host(resource: Resource) -> str:
    """Return the host that answers WebFinger queries for a resource.

    An explicit authority is used as-is. For acct and mailto resources the host is the
    part of the address after the first "@". Otherwise the host cannot be determined and
    an empty string is returned.
    """
    if resource.host:
        return resource.host

    scheme_type = resource.scheme_type
    if scheme_type == SchemeType.acct or scheme_type == SchemeType.mailto:
        _, at, domain = resource.opaque.partition("@")
        if at:
            return domain
    return ""


def jrd_url(resource: Resource, rels: Optional[Sequence[str]] = None) -> URL:
    """Build the WebFinger query URL for a resource.

    Each rel is added as its own "rel" parameter in the order given. Servers are not
    obligated to honor the filter.

    Raises:
        MalformedIdentifier: If the derived host would not be read back as the URL's
            authority, for example an acct host that still contains "@"
    """
    host = webfinger_host(resource)
    if host and (
        _AUTHORITY_DELIM_RE.search(host)
        or _INVALID_ESCAPE_RE.search(host)
        or _HOST_INVALID_RE.search(host)
        or _HOST_PORT_RE.fullmatch(host) is None
    ):
        raise MalformedIdentifier.invalid_host(str(resource), host)

    # Keys in sorted order: rel, resource.
    params = [("rel", rel) for rel in rels or []]
    params.append(("resource", str(resource)))
    return URL(
        f"https://{host}{WELL_KNOWN_PATH}?{urlencode(params)}",
        encoded=True,
    )
