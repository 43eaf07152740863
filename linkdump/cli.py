"""Command-line entry point: parse flags, build the app, serve until a termination signal.

    linkdump -b 0.0.0.0 -p 1234 -m 10 -e me@example.org
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from werkzeug.serving import make_server

from linkdump import create_app
from linkdump.managers.signal_listener import SignalListener


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkdump",
        description="Queue links over HTTP and mail them out in batches.",
    )
    parser.add_argument("-b", dest="host", help="bind host (default: localhost)")
    parser.add_argument("-p", dest="port", type=int, help="bind port (default: 1234)")
    parser.add_argument("-e", dest="email_addr", help="destination email address (default: <user>@localhost)")
    parser.add_argument("-m", dest="link_min", type=int, help="minimum links before a dump (default: 10)")
    parser.add_argument("--mailer", dest="mailer_command", help="mail transport command (default: msmtp)")
    parser.add_argument("--timeout", dest="mailer_timeout", type=float, help="mailer timeout in seconds (default: 60)")
    parser.add_argument("--log-file", dest="log_file", help="rotating log file; empty string disables it")
    parser.add_argument("--log-level", dest="log_level", help="DEBUG, INFO, WARNING, ...")
    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Map the flags that were given onto Flask config keys."""
    return {name.upper(): value for name, value in vars(args).items() if value is not None}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app = create_app(overrides=overrides_from_args(args))
    except ValidationError as e:
        parser.error(f"invalid settings:\n{e}")

    logger = app.logger
    host, port = app.config["HOST"], app.config["PORT"]

    logger.info("Binding to %s:%d", host, port)
    try:
        server = make_server(host, port, app, threaded=True)
    except (OSError, SystemExit) as e:
        logger.error("Failed to bind %s:%d: %s", host, port, e)
        return 1

    listener = SignalListener(
        flush_ctl=app.extensions["flush_ctl"],
        on_exit=server.shutdown,
        logger=logger,
    )
    listener.install()

    try:
        server.serve_forever()
    finally:
        listener.stop(timeout=5)
        server.server_close()

    logger.info("linkdump stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
