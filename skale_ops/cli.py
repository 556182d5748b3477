"""
skale-ops command line interface.

    skale-ops [options] <command> <arg>

Commands:
    grant-role <address>                 grant SkaleManager ADMIN_ROLE (signer: ACCOUNT/PRIVATE_KEY)
    delete-schain <name>                 delete an schain (signer: ACCOUNT_ADMIN/PRIVATE_KEY_ADMIN)
    calculate-normal-bounty <node-index> show the normal bounty for a node
"""
import argparse
import logging
import os
import sys
from typing import Callable, Dict, List, Mapping, Optional

from web3 import Web3

from .client import ManagerClient
from .commands import (
    GRANT_ROLE, DELETE_SCHAIN, CALCULATE_NORMAL_BOUNTY,
    grant_role, delete_schain, calculate_normal_bounty,
)
from .config import Settings
from .exceptions import SkaleOpsError
from .models import CommandResult
from .signer import Signer, signer_from_env
from .version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# camelCase names kept for existing operator runbooks
ALIASES = {
    "grantRole": GRANT_ROLE,
    "deleteSchain": DELETE_SCHAIN,
    "calculateNormalBounty": CALCULATE_NORMAL_BOUNTY,
}


class UsageError(Exception):
    """Bad command name or argument; reported with the usage text"""
    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skale-ops",
        description="Sign and submit SKALE Manager operator transactions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__[__doc__.index("Commands:"):],
    )
    parser.add_argument("command", help="grant-role, delete-schain or calculate-normal-bounty")
    parser.add_argument("argument", help="address, schain name or node index")
    parser.add_argument("--endpoint", help="JSON-RPC URL of the node (default: $ENDPOINT)")
    parser.add_argument("--abi", dest="abi_filepath", help="deployment ABI file (default: $ABI_FILEPATH)")
    parser.add_argument("--network", help="network name from the bundled table (default: rinkeby)")
    parser.add_argument("--chain-id", type=int, help="chain id to sign for (default: from network)")
    parser.add_argument("--gas-price", type=int, help="gas price in wei (default: 10000000000)")
    parser.add_argument("--gas-limit", type=int, help="gas limit (default: 8000000)")
    parser.add_argument(
        "--skip-chain-check",
        help="do not compare the node's chain id with the configured one",
        action="store_true"
    )
    parser.add_argument("--debug", help="Enable debug output", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _settings(args: argparse.Namespace, env: Mapping[str, str]) -> Settings:
    return Settings.from_env(
        env,
        endpoint=args.endpoint,
        abi_filepath=args.abi_filepath,
        network=args.network,
        chain_id=args.chain_id,
        gas_price=args.gas_price,
        gas_limit=args.gas_limit,
    )


def _connect(args: argparse.Namespace, env: Mapping[str, str], signer: Optional[Signer] = None) -> ManagerClient:
    client = ManagerClient.from_settings(_settings(args, env), signer=signer)
    if not args.skip_chain_check:
        client.assert_chain_id()
    return client


def run_grant_role(args: argparse.Namespace, env: Mapping[str, str]) -> CommandResult:
    if not Web3.is_address(args.argument):
        raise UsageError(f"grant-role expects an address, got: {args.argument}")
    signer = signer_from_env("ACCOUNT", "PRIVATE_KEY", env)
    client = _connect(args, env, signer)
    return grant_role(client, args.argument)


def run_delete_schain(args: argparse.Namespace, env: Mapping[str, str]) -> CommandResult:
    signer = signer_from_env("ACCOUNT_ADMIN", "PRIVATE_KEY_ADMIN", env)
    client = _connect(args, env)
    return delete_schain(client, args.argument, signer=signer)


def run_calculate_normal_bounty(args: argparse.Namespace, env: Mapping[str, str]) -> CommandResult:
    try:
        node_index = int(args.argument)
    except ValueError:
        raise UsageError(f"calculate-normal-bounty expects a node index, got: {args.argument}")
    if node_index < 0:
        raise UsageError(f"Node index must not be negative, got: {node_index}")
    client = _connect(args, env)
    return calculate_normal_bounty(client, node_index)


COMMANDS: Dict[str, Callable[[argparse.Namespace, Mapping[str, str]], CommandResult]] = {
    GRANT_ROLE: run_grant_role,
    DELETE_SCHAIN: run_delete_schain,
    CALCULATE_NORMAL_BOUNTY: run_calculate_normal_bounty,
}


def print_result(result: CommandResult) -> None:
    print()
    if result.command == CALCULATE_NORMAL_BOUNTY:
        print(f"Normal bounty for node {result.target}: {result.after}")
        return
    print(f"Before: {result.before}")
    print(f"After:  {result.after}")
    if result.receipt is not None:
        print(f"Transaction: {result.receipt.tx_hash} (block {result.receipt.block_number})")
    print(f"Transaction was successful: {result.success}")


def main(argv: Optional[List[str]] = None, env: Optional[Mapping[str, str]] = None) -> int:
    """
    Run one command and map its outcome to an exit code.

    Returns:
        0 on success, 1 on failure, 2 on usage errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    env = os.environ if env is None else env

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    command = ALIASES.get(args.command, args.command)
    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Unknown command '{args.command}'. Recheck name of function.", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    try:
        result = handler(args, env)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE
    except SkaleOpsError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print_result(result)
    return EXIT_OK if result.success else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
