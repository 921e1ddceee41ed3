# PYTHON_ARGCOMPLETE_OK
"""Entry point for the dscpctl command-line tool."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

import argcomplete

from dscp_gateway import DscpGateway, GrpcDscpGateway
from dscp_marking import DscpController, DscpError, OutputFormat
from dscp_marking.fanout import TRACE
from dscp_marking.validation import parse_prefix, parse_uint32

from .config import CliConfig, load_config

LOG = logging.getLogger(__name__)

GatewayFactory = Callable[[str], DscpGateway]


def _setup_logging(verbose: int) -> None:
    if verbose >= 2:
        level = TRACE
    elif verbose == 1:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def _uint32(value: str) -> int:
    try:
        return parse_uint32(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _prefix(value: str) -> str:
    try:
        return parse_prefix(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _global_options(verbose_dest: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    parser.add_argument(
        "--endpoint",
        help="Gateway endpoint (default: grpc://[::1]:8080)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to the dscpctl configuration file",
    )
    parser.add_argument(
        "-v",
        dest=verbose_dest,
        action="count",
        help="Increase log verbosity (repeat for trace output)",
    )
    return parser


def _add_target_options(parser: argparse.ArgumentParser, *, required: bool) -> None:
    parser.add_argument(
        "-c",
        "--cfg",
        dest="config_name",
        required=required,
        help="DSCP module configuration name to operate on",
    )
    parser.add_argument(
        "-i",
        "--instances",
        type=_uint32,
        nargs="+",
        action="extend",
        required=required,
        default=[],
        help="Dataplane instance indices",
    )


def build_parser() -> argparse.ArgumentParser:
    common = _global_options("verbose")
    sub_common = _global_options("sub_verbose")
    parser = argparse.ArgumentParser(
        prog="dscpctl",
        description="DSCP module for packet marking",
        parents=[common],
    )
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser(
        "show", parents=[sub_common], help="Show DSCP configurations"
    )
    _add_target_options(show, required=False)
    show.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output format (default: tree)",
    )

    for name, verb in (("prefix-add", "added to"), ("prefix-remove", "removed from")):
        sub = commands.add_parser(
            name, parents=[sub_common], help=f"Prefixes {verb} the input filter"
        )
        _add_target_options(sub, required=True)
        sub.add_argument(
            "-p",
            "--prefix",
            dest="prefixes",
            type=_prefix,
            nargs="+",
            action="extend",
            required=True,
            help=f"Prefix to be {verb} the input filter of the DSCP module",
        )

    marking = commands.add_parser(
        "set-marking", parents=[sub_common], help="Set the DSCP marking policy"
    )
    _add_target_options(marking, required=True)
    marking.add_argument(
        "--flag",
        type=_uint32,
        required=True,
        help="DSCP marking flag: 0 - Never, 1 - Default (only if original DSCP is 0), 2 - Always",
    )
    marking.add_argument(
        "--mark",
        type=_uint32,
        required=True,
        help="DSCP mark value (0-63)",
    )
    return parser


async def run(
    args: argparse.Namespace,
    gateway: DscpGateway,
    fmt: OutputFormat,
    *,
    color: bool = False,
) -> Optional[str]:
    async with gateway:
        controller = DscpController(gateway)
        if args.command == "show":
            return await controller.show(
                args.config_name, args.instances, fmt, color=color
            )
        if args.command == "prefix-add":
            await controller.add_prefixes(args.config_name, args.instances, args.prefixes)
        elif args.command == "prefix-remove":
            await controller.remove_prefixes(args.config_name, args.instances, args.prefixes)
        elif args.command == "set-marking":
            await controller.set_marking(args.config_name, args.instances, args.flag, args.mark)
        else:  # pragma: no cover - argparse restricts choices
            raise ValueError(f"unsupported command '{args.command}'")
    return None


def main(
    argv: List[str] | None = None,
    gateway_factory: GatewayFactory = GrpcDscpGateway.connect,
) -> int:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    try:
        config = load_config(getattr(args, "config", None))
    except DscpError as exc:
        _setup_logging(_verbosity(args) or 0)
        LOG.error("ERROR: %s", exc)
        return 1
    config = _merge_overrides(config, args)
    _setup_logging(config.verbose)

    async def _invoke() -> Optional[str]:
        return await run(
            args,
            gateway_factory(config.endpoint),
            config.format,
            color=sys.stdout.isatty(),
        )

    try:
        output = asyncio.run(_invoke())
    except DscpError as exc:
        LOG.error("ERROR: %s", exc)
        return 1
    except KeyboardInterrupt:  # pragma: no cover - interactive interruption
        LOG.warning("interrupted")
        return 130

    if output is not None:
        print(output)
    return 0


def _verbosity(args: argparse.Namespace) -> Optional[int]:
    """Sum of -v given before and after the subcommand, None if absent."""

    counts = [getattr(args, dest, None) for dest in ("verbose", "sub_verbose")]
    given = [count for count in counts if count is not None]
    return sum(given) if given else None


def _merge_overrides(config: CliConfig, args: argparse.Namespace) -> CliConfig:
    endpoint = getattr(args, "endpoint", None)
    verbose = _verbosity(args)
    fmt = getattr(args, "format", None)
    return CliConfig(
        endpoint=endpoint if endpoint is not None else config.endpoint,
        format=OutputFormat(fmt) if fmt is not None else config.format,
        verbose=verbose if verbose is not None else config.verbose,
    )


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
