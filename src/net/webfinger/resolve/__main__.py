from typing import Optional, Sequence
import argparse
import asyncio
import sys

from net.webfinger.app.cli import configure_logging, configure_sentry, create_session
from net.webfinger.app.config import Settings
from net.webfinger.errors import WebFingerError
from net.webfinger.resolve.client import Client


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webfinger",
        description="Look up the WebFinger JRD for a resource.",
        epilog="example: webfinger -v bob@example.com",
    )
    parser.add_argument("resource", nargs="?", help="The resource URI to look up.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print details about the resolution.",
    )
    return parser


async def realMain(resource: str, settings: Settings) -> int:
    async with create_session(settings) as session:
        client = Client(session, allow_http=settings.allow_http)
        try:
            jrd = await client.lookup(resource)
        except WebFingerError as e:
            print(e)
            return 1

    print(jrd.to_json(indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.resource:
        parser.print_help()
        return 1

    settings = Settings()
    configure_logging(args.verbose or settings.debug)
    configure_sentry(settings)

    return asyncio.run(realMain(args.resource, settings))


if __name__ == "__main__":
    sys.exit(main())
