"""
Resource Resolution

This package resolves WebFinger identifiers (URLs and email-like account identifiers) to
their JRD documents.

Key Components:
- resource.py: Identifier parsing, host derivation and query URL construction
- client.py: Lookup client that fetches and decodes JRD documents
- __main__.py: CLI interface for lookups

The resolution flow follows these steps:
1. Parse the input into a Resource; bare "user@host" becomes "acct:user@host"
2. Take the host from the Resource's authority, or from the address of acct/mailto URIs
3. GET https://{host}/.well-known/webfinger?resource={resource}&rel={rel}...
4. If the HTTPS connection is refused and plain HTTP is allowed, retry once over HTTP
5. Reject non-2xx responses, then decode the body as a JRD
"""
