"""Command-line flags of the server."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from kieserver import config

DEFAULT_CONFIG_FILE = "/etc/servicecomb-kie/kie-conf.yaml"

# (flag, Config attribute, environment variable, help)
_FLAGS = (
    ("config", "config_file", None, "config file, example: --config=kie-conf.yaml"),
    ("name", "node_name", "NODE_NAME", "node name, example: --name=kie0"),
    (
        "peer-addr",
        "peer_addr",
        "PEER_ADDR",
        "kie use this ip port to join a kie cluster, "
        "example: --peer-addr=10.1.1.10:5000",
    ),
    (
        "listen-peer-addr",
        "listen_peer_addr",
        "LISTEN_PEER_ADDR",
        "listen on ip port, kie receive events "
        "example: --listen-peer-addr=10.1.1.10:5000",
    ),
    (
        "advertise-addr",
        "advertise_addr",
        "ADVERTISE_ADDR",
        "advertise host port to other members, "
        "example: --advertise-addr=kie.svc.cluster.local:5000",
    ),
)


class CommandError(ValueError):
    """Raised for bad command-line arguments."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise CommandError(message)


def _build_parser(prog: str) -> _Parser:
    parser = _Parser(
        prog=prog,
        description="kie server cmd line.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="show help")
    for flag, attr, env, text in _FLAGS:
        if env is None:
            default = DEFAULT_CONFIG_FILE
        else:
            default = os.environ.get(env, "")
            text = f"{text} [${env}]"
        parser.add_argument(f"-{flag}", f"--{flag}", dest=attr, default=default, help=text)
    parser.add_argument("args", nargs="*", help=argparse.SUPPRESS)
    return parser


def parse_config(args: Sequence[str] | None = None) -> config.Config:
    """Parse ``args`` (program name first) into the global configuration."""
    argv = list(sys.argv if args is None else args)
    prog = argv[0] if argv else "kieserver"
    parser = _build_parser(prog)
    namespace = parser.parse_args(argv[1:])
    if namespace.help:
        parser.print_help()
        return config.CONFIGURATIONS
    for _, attr, _, _ in _FLAGS:
        setattr(config.CONFIGURATIONS, attr, getattr(namespace, attr))
    return config.CONFIGURATIONS