"""Command line handling for the relcal server runner.

Parses the runner options and prints the default server configuration
template. Storage and app composition are left to `relcal_lib.main`.
"""
from __future__ import annotations
import argparse
from typing import Iterable, Optional

from relcal_lib.config.config import DEFAULT_SERVER_CONFIG
from relcal_lib.storage.serializer import YAMLSerializer

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="relcal", add_help=False)
    p.add_argument("--host", default=DEFAULT_HOST, help="Interface to bind")
    p.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to listen on")
    p.add_argument("--data-dir", default="data", help="Directory holding documents and backups")
    p.add_argument("--static-dir", default="static", help="Directory with the calendar UI")
    p.add_argument("--log-file", default="server.log", help="Append log records to this file ('' disables)")
    p.add_argument("--print-template", action="store_true", help="Print the default server_config.yml and exit")
    p.add_argument("--help", action="store_true", help="Show this help")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """Parse runner args from argv, ignoring options meant for other tools."""
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    args, _ = parser.parse_known_args(argv)
    return args


def render_template() -> str:
    return YAMLSerializer().dump(dict(DEFAULT_SERVER_CONFIG)).decode("utf-8")
