"""
ytdl-api CLI - Thin entrypoint for operator commands.

Commands:
- serve: run the HTTP service
- provision: download the tool and cookie file if missing
- extract: run one extraction and print the JSON result

Exit Codes:
===========
- 0: Success
- 1: Configuration error
- 2: Provisioning or extraction error
"""

import argparse
import json
import logging
import sys
from typing import List, NoReturn, Optional

from .assets import AssetError, AssetProvisioner
from .config import ConfigError, Settings
from .extraction import ExtractionError, ExtractionInvoker

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def configure_logging(level: str) -> None:
    """Configure root logging for CLI and server processes."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def cmd_serve(args: argparse.Namespace, settings: Settings) -> NoReturn:
    """
    Run the HTTP service with uvicorn.

    --host and --port override HOST and PORT.
    """
    import uvicorn

    from .main import create_app

    host = args.host or settings.host
    port = args.port or settings.port
    settings = settings.model_copy(update={"host": host, "port": port})

    app = create_app(settings)
    logger.info("Server is running on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
    sys.exit(0)


def cmd_provision(args: argparse.Namespace, settings: Settings) -> NoReturn:
    """
    Download missing assets.

    Exit codes:
        0: All assets present
        2: Download failed
    """
    provisioner = AssetProvisioner(
        settings.assets,
        timeout_seconds=settings.download_timeout_seconds,
    )

    try:
        provisioner.ensure_assets()
    except AssetError as e:
        print(f"✗ Provisioning failed: {e}", file=sys.stderr)
        sys.exit(2)

    status = provisioner.status()
    print(f"✓ Assets ready in {settings.assets.directory}")
    print(f"  Binary:  {'present' if status['binary'] else 'missing'}")
    print(f"  Cookies: {'present' if status['cookies'] else 'not configured'}")
    sys.exit(0)


def cmd_extract(args: argparse.Namespace, settings: Settings) -> NoReturn:
    """
    Extract metadata for one URL and print it as JSON.

    Exit codes:
        0: Success
        2: Provisioning or extraction error
    """
    provisioner = AssetProvisioner(
        settings.assets,
        timeout_seconds=settings.download_timeout_seconds,
    )
    invoker = ExtractionInvoker(provisioner, timeout_seconds=settings.tool_timeout_seconds)

    try:
        result = invoker.extract(args.url)
    except (AssetError, ExtractionError) as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(2)

    print(json.dumps(result, indent=2 if args.pretty else None, ensure_ascii=False))
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ytdl-api",
        description="ytdl-api - yt-dlp metadata over HTTP",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to execute")

    # Serve command
    parser_serve = subparsers.add_parser("serve", help="Run the HTTP service")
    parser_serve.add_argument("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
    parser_serve.add_argument("--port", type=int, default=None, help="Listen port (default: $PORT or 3000)")
    parser_serve.set_defaults(func=cmd_serve)

    # Provision command
    parser_provision = subparsers.add_parser(
        "provision",
        help="Download yt-dlp and the cookie file if they are missing",
    )
    parser_provision.set_defaults(func=cmd_provision)

    # Extract command
    parser_extract = subparsers.add_parser("extract", help="Print yt-dlp JSON for a URL")
    parser_extract.add_argument("url", help="Target media URL")
    parser_extract.add_argument("--pretty", action="store_true", help="Indent JSON output")
    parser_extract.set_defaults(func=cmd_extract)

    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    Main CLI entrypoint.

    Parses arguments, loads settings and dispatches to subcommands.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    args.func(args, settings)


if __name__ == "__main__":
    main()
