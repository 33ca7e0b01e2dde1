"""Command line interface for envoverlay.

Usage:
    # Host environment with a PATH contribution, as KEY=VALUE lines
    envoverlay show -o PATH+TOOLS=/opt/tools/bin -o LANG=C.UTF-8

    # Start from an empty environment
    envoverlay show --empty -o JAVA_HOME=/opt/jdk

    # Environment of a peer server
    envoverlay show --peer http://build-01:8765

    # Serve this host's environment to peers
    envoverlay serve --host 0.0.0.0 --port 8765

Defaults come from ENVOVERLAY_* variables (see envoverlay.config).
"""

import argparse
import sys
from typing import List, Optional, Tuple

from envoverlay.config import OverlaySettings, get_settings
from envoverlay.exceptions import ChannelInterruptedError, EnvOverlayError
from envoverlay.host import get_host_environment
from envoverlay.logger import create_logger
from envoverlay.overlay import EnvironmentOverlay
from envoverlay.remote import fetch_remote_environment
from envoverlay.transport import HttpExecutor

EXIT_INTERRUPTED = 130


def parse_assignment(text: str) -> Tuple[str, str]:
    """Split ``KEY=VALUE``; ``KEY=`` yields an empty value (a removal)."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{text}'")
    return key, value


def build_parser(settings: OverlaySettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envoverlay",
        description="Build and inspect environment overlays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--json-logs", action="store_true", default=settings.log_json)
    parser.add_argument("--log-level", default=settings.log_level)
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Print a merged environment")
    base = show.add_mutually_exclusive_group()
    base.add_argument(
        "--peer",
        default=settings.peer_url,
        help="Peer server URL to take the base environment from (default: ENVOVERLAY_PEER_URL)",
    )
    base.add_argument("--empty", action="store_true", help="Start from an empty environment")
    show.add_argument("--timeout", type=float, default=settings.peer_timeout)
    show.add_argument(
        "-o",
        "--override",
        dest="overrides",
        action="append",
        type=parse_assignment,
        default=[],
        metavar="KEY=VALUE",
        help="Override to apply; NAME+SUFFIX prepends to NAME (repeatable)",
    )

    serve = commands.add_parser("serve", help="Serve this host's environment to peers")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    return parser


def show(args: argparse.Namespace) -> EnvironmentOverlay:
    if args.empty:
        env = EnvironmentOverlay()
    elif args.peer:
        with HttpExecutor(args.peer, timeout=args.timeout) as peer:
            env = fetch_remote_environment(peer)
    else:
        env = get_host_environment().copy()

    env.override_all(args.overrides)
    for key, value in env.items():
        print(f"{key}={value}")
    return env


def serve(args: argparse.Namespace) -> None:
    import uvicorn

    from envoverlay.web import create_peer_app

    uvicorn.run(create_peer_app(), host=args.host, port=args.port)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = get_settings()
    except EnvOverlayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    args = build_parser(settings).parse_args(argv)

    try:
        level = OverlaySettings(log_level=args.log_level).log_level_number
        create_logger("envoverlay", level=level, json_format=args.json_logs)
        if args.command == "show":
            show(args)
        else:
            serve(args)
    except ChannelInterruptedError as e:
        print(f"Interrupted: {e}", file=sys.stderr)
        return EXIT_INTERRUPTED
    except EnvOverlayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
