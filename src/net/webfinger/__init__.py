"""
WebFinger Client

This package implements a client for the WebFinger discovery protocol (RFC 7033). Given a URL
or an email-like account identifier, it locates the authoritative host, queries its well-known
endpoint and decodes the JSON Resource Descriptor (JRD) that comes back.

Key Components:
- resolve: Identifier parsing, host derivation, query URL building and the lookup client
- model: Pydantic models for the JRD document and its links
- app: Settings, logging setup and the command-line front end
- errors: Exception types raised by parsing, transport and decoding

Lookup Flow:
1. Parse the identifier into a Resource, rewriting "bob@example.com" to "acct:bob@example.com"
2. Derive the host to query from the Resource (authority, or the domain of an acct/mailto address)
3. Build https://{host}/.well-known/webfinger?resource=...&rel=...
4. GET the document, optionally retrying once over plain HTTP when allowed
5. Decode the response body into a JRD

The transport is an aiohttp ClientSession supplied by the caller, so connection pooling,
timeouts and TLS settings remain under the caller's control.
"""
