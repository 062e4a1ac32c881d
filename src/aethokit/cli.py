import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .client import Aethokit
from .config import ClientConfig, NetworkTable
from .errors import ApiError, ConfigError
from .log import new_logger

GAS_KEY_ENV = "AETHOKIT_GAS_KEY"
NETWORK_ENV = "AETHOKIT_NETWORK"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aethokit", description="Aethokit gas sponsorship client")
    parser.add_argument("--gas-key", default=None, help=f"GAS KEY (default: ${GAS_KEY_ENV})")
    parser.add_argument("--network", default=None, help=f"Network name or relay URL (default: ${NETWORK_ENV} or devnet)")
    parser.add_argument("--networks-file", type=Path, default=None, help="YAML network table overriding the bundled one")
    parser.add_argument("--timeout", type=float, default=30.0, help="Read timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("gas-address", help="Print the sponsor (fee payer) address")
    sponsor = sub.add_parser("sponsor", help="Submit a serialized transaction for sponsorship")
    sponsor.add_argument("tx", help="Serialized transaction, or '-' to read it from stdin")
    return parser


async def run(args: argparse.Namespace) -> str:
    networks = NetworkTable.load(args.networks_file) if args.networks_file else None
    client = Aethokit(
        args.gas_key if args.gas_key is not None else os.environ.get(GAS_KEY_ENV, ""),
        args.network or os.environ.get(NETWORK_ENV) or None,
        networks=networks,
        config=ClientConfig(read_timeout=args.timeout),
    )
    async with client:
        if args.command == "gas-address":
            return await client.get_gas_address()
        tx = sys.stdin.read().strip() if args.tx == "-" else args.tx
        return await client.sponsor_tx(tx)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log = new_logger(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        print(asyncio.run(run(args)))
    except (ConfigError, ValueError, OSError, yaml.YAMLError) as exc:
        log.error("configuration error: %s", exc)
        return 2
    except ApiError as exc:
        log.error("%s: %s", exc.__class__.__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
