"""queueboard CLI.

Usage:
    queueboard serve [--host HOST] [--port PORT]
    queueboard discover
    queueboard reset --yes
"""

import argparse
import asyncio
import json
import sys

from queueboard_api import __version__
from queueboard_api.config import settings
from queueboard_api.dependencies import build_bulk_reset_executor, build_discovery_service
from queueboard_api.domain.models import DiscoveryFailed, DiscoveryStatus
from queueboard_api.observability.logging import bind_queue_context, configure_logging
from queueboard_api.services.discovery import DiscoveryService
from queueboard_api.services.queue_registry import QueueRegistry


def _build_discovery() -> DiscoveryService:
    return build_discovery_service(settings, QueueRegistry())


async def _discover() -> int:
    discovery = _build_discovery()
    try:
        result = await discovery.run()
    finally:
        await discovery.close()

    print(json.dumps(DiscoveryStatus.from_result(result).model_dump(mode="json"), indent=2))
    return 1 if isinstance(result, DiscoveryFailed) else 0


async def _reset() -> int:
    discovery = _build_discovery()
    try:
        result = await discovery.run()
        if isinstance(result, DiscoveryFailed):
            print(f"Error: discovery failed: {result.reason}", file=sys.stderr)
            return 1
        executor = build_bulk_reset_executor(settings, discovery.registry)
        outcome = await executor.reset_all()
    finally:
        await discovery.close()

    print(json.dumps(outcome.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2))
    if not outcome.overall_attempted or outcome.failed:
        return 1
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "queueboard_api.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=settings.debug,
    )
    return 0


def cmd_discover(args: argparse.Namespace) -> int:
    return asyncio.run(_discover())


def cmd_reset(args: argparse.Namespace) -> int:
    if not args.yes:
        print("Refusing to clear every queue without --yes", file=sys.stderr)
        return 2
    return asyncio.run(_reset())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="queueboard", description="queueboard control CLI")
    parser.add_argument("--version", action="version", version=f"queueboard {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP control surface")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    discover = subparsers.add_parser("discover", help="Run one discovery pass and print it")
    discover.set_defaults(func=cmd_discover)

    reset = subparsers.add_parser("reset", help="Obliterate every discovered queue")
    reset.add_argument("--yes", action="store_true", help="Confirm the destructive reset")
    reset.set_defaults(func=cmd_reset)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings)
    bind_queue_context(prefix=settings.bull_prefix, engine=settings.engine_version())
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
