"""Exception types raised while resolving WebFinger resources."""


class WebFingerError(Exception):
    """Base class for every failure surfaced by a WebFinger lookup."""


class MalformedIdentifier(WebFingerError):
    """
    Raised when an identifier is neither an absolute URI nor an email-like address.
    """

    @staticmethod
    def invalid_escape(raw: str) -> "MalformedIdentifier":
        """A component contains a '%' that does not start a valid escape."""
        return MalformedIdentifier(
            f"error-webfinger-1000 invalid URL escape in {raw!r}"
        )

    @staticmethod
    def invalid_character(raw: str) -> "MalformedIdentifier":
        """The identifier contains a control character or a malformed host."""
        return MalformedIdentifier(
            f"error-webfinger-1001 invalid character in {raw!r}"
        )

    @staticmethod
    def invalid_port(raw: str) -> "MalformedIdentifier":
        return MalformedIdentifier(f"error-webfinger-1002 invalid port in {raw!r}")

    @staticmethod
    def colon_in_first_segment(raw: str) -> "MalformedIdentifier":
        return MalformedIdentifier(
            f"error-webfinger-1003 first path segment cannot contain colon: {raw!r}"
        )

    @staticmethod
    def invalid_host(raw: str, host: str) -> "MalformedIdentifier":
        """The host derived for a query is not a plain host and optional port."""
        return MalformedIdentifier(
            f"error-webfinger-1005 invalid WebFinger host {host!r} for {raw!r}"
        )

    @staticmethod
    def not_absolute(raw: str) -> "MalformedIdentifier":
        """The identifier has no scheme and is not of the form local@domain."""
        return MalformedIdentifier(
            f"error-webfinger-1004 URL must be absolute, or an email address: {raw}"
        )


class TransportError(WebFingerError):
    """Raised when the HTTP request could not be completed."""

    @staticmethod
    def from_client_error(url: object, error: BaseException) -> "TransportError":
        detail = f"{type(error).__name__}: {error}" if str(error) else type(error).__name__
        return TransportError(f"error-webfinger-1100 GET {url} failed: {detail}")


class HTTPStatusError(WebFingerError):
    """Raised when the server answers with a status outside 200-299."""

    def __init__(self, status: int, reason: str) -> None:
        super().__init__(f"{status} {reason}".strip())
        self.status = status
        self.reason = reason


class DecodeError(WebFingerError):
    """Raised when a response body is not a valid JRD document."""

    @staticmethod
    def invalid_document(error: BaseException) -> "DecodeError":
        return DecodeError(f"error-webfinger-1200 invalid JRD document: {error}")
