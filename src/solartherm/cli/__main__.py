"""Solar-thermal controller status tool - Main Entry Point."""

import argparse
import logging
import sys

from pydantic import ValidationError

from solartherm import __version__
from solartherm.exceptions import (
    DecodeError,
    SolarthermError,
    TransportError,
)
from solartherm.server import DEFAULT_HOST, DEFAULT_PORT
from solartherm.transport import SerialSettings, source_from_settings

from . import commands as cmds
from .rich_output import get_formatter

_logger = logging.getLogger(__name__)


def _settings_from_args(args: argparse.Namespace) -> SerialSettings:
    """Environment settings, overridden by any command-line options."""
    settings = SerialSettings.from_env()
    overrides = {
        "port": args.port,
        "baudrate": args.baudrate,
        "timeout": args.timeout,
    }
    update = {k: v for k, v in overrides.items() if v is not None}
    if args.sample:
        update["use_sample"] = True
    return settings.model_validate({**settings.model_dump(), **update})


def run_command(args: argparse.Namespace) -> int:
    """Dispatch the parsed command. Returns the process exit code."""
    formatter = get_formatter()
    try:
        source = source_from_settings(_settings_from_args(args))
        _logger.info(f"Using frame source: {source.describe()}")

        cmd = args.command
        if cmd == "status":
            cmds.handle_status_request(source, args.raw, args.json)
        elif cmd == "serve":
            cmds.handle_serve_request(source, args.host, args.http_port)
        return 0

    except ValidationError as e:
        _logger.error(f"Invalid settings: {e}")
        formatter.print_error(str(e), title="Invalid Settings")
    except TransportError as e:
        _logger.error(f"Transport error: {e}")
        formatter.print_error(str(e), title="Device Communication Failed")
    except DecodeError as e:
        _logger.error(f"Decode error: {e}")
        formatter.print_error(str(e), title="Invalid Status Frame")
    except SolarthermError as e:
        _logger.error(f"Library error: {e}")
        formatter.print_error(str(e), title="Library Error")
    return 1


def parse_args(args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="solartherm",
        description="Read and display solar-thermal controller status",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"solartherm-python {__version__}",
    )
    parser.add_argument(
        "--port", help="Serial port (env: SOLARTHERM_SERIAL_PORT)"
    )
    parser.add_argument(
        "--baudrate", type=int, help="Baud rate (env: SOLARTHERM_BAUDRATE)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Read timeout in seconds (env: SOLARTHERM_TIMEOUT)",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use built-in sample data instead of the serial port "
        "(env: SOLARTHERM_SAMPLE=1)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="loglevel",
        action="store_const",
        const=logging.INFO,
    )
    parser.add_argument(
        "-vv",
        "--very-verbose",
        dest="loglevel",
        action="store_const",
        const=logging.DEBUG,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser(
        "status", help="Poll the controller once and show its status"
    )
    status_mode = status.add_mutually_exclusive_group()
    status_mode.add_argument(
        "--raw",
        action="store_true",
        help="Show raw frame tokens with their slot names",
    )
    status_mode.add_argument(
        "--json", action="store_true", help="Output JSON"
    )

    serve = subparsers.add_parser(
        "serve", help="Serve the status page over HTTP"
    )
    serve.add_argument("--host", default=DEFAULT_HOST)
    serve.add_argument("--http-port", type=int, default=DEFAULT_PORT)

    return parser.parse_args(args)


def main(args_list: list[str]) -> None:
    args = parse_args(args_list)
    logging.basicConfig(
        level=logging.WARNING,
        stream=sys.stdout,
        format="[%(asctime)s] %(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger("solartherm").setLevel(args.loglevel or logging.WARNING)
    logging.getLogger("aiohttp.access").setLevel(
        logging.INFO if args.loglevel else logging.WARNING
    )
    try:
        sys.exit(run_command(args))
    except KeyboardInterrupt:
        _logger.info("Interrupted.")


def run() -> None:
    main(sys.argv[1:])


if __name__ == "__main__":
    run()
